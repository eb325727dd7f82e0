"""Annotated output tree produced by the evaluation engine.

The input tree is never modified. Instead the engine returns a parallel
tree of ``EvaluatedNode`` objects carrying the computed value, the prune
mark and the bounds each node was entered with. This enables:
- Evaluating the same input in several directions side by side
- Rendering without a separate "reset" step between runs
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from minimaxviz._direction import Direction, Role, StrEnumWithDoc

if TYPE_CHECKING:
    from collections.abc import Generator

    from minimaxviz._node import Node, Number


def format_value(value: Number) -> str:
    """Format a utility for display, dropping a redundant ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True, slots=True)
class EvaluatedNode:
    """A node of the annotated output tree.

    Attributes:
        source: The input node this annotation belongs to.
        role: Whether this node maximizes or minimizes.
        value: Leaf value (known from construction, visited or not) or the
            computed minimax value. None for an internal node that was never
            visited.
        visited: Whether the search reached this node.
        pruned: True for a child skipped because a cutoff fired at its parent.
            Descendants of a pruned child are unvisited but not marked.
        alpha: Lower bound on entry (None when not visited).
        beta: Upper bound on entry (None when not visited).
        children: Annotated children, in input order.

    """

    source: Node
    role: Role
    value: Number | None
    visited: bool
    pruned: bool = False
    alpha: float | None = None
    beta: float | None = None
    children: tuple[EvaluatedNode, ...] = ()

    @property
    def id(self) -> str:
        return self.source.id

    @property
    def label(self) -> str:
        return self.source.label

    @property
    def is_leaf(self) -> bool:
        return self.source.is_leaf

    @property
    def display_label(self) -> str:
        """Label with the value appended in parentheses, when a value is known."""
        if self.value is None:
            return self.label
        return f"{self.label} ({format_value(self.value)})"

    def iter_nodes(self) -> Generator[EvaluatedNode]:
        """Iterate over this node and all descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def get_child(self, label: str) -> EvaluatedNode | None:
        """Get a direct child by label, or None if there is none."""
        for child in self.children:
            if child.label == label:
                return child
        return None


class StepKind(StrEnumWithDoc):
    """Kind of event recorded while evaluating."""

    LEAF = "leaf", "A leaf value was read."
    RESOLVE = "resolve", "An internal node's value was computed."
    CUTOFF = "cutoff", "beta <= alpha after this child; remaining siblings are skipped."
    PRUNE = "prune", "A child was skipped because of an earlier cutoff."


@dataclass(frozen=True, slots=True)
class EvaluationStep:
    """One event of the search, in the order it happened.

    For ``LEAF`` and ``RESOLVE`` the step refers to the node itself and
    carries the bounds it was entered with. ``CUTOFF`` refers to the parent
    whose bounds crossed, with ``value`` being the child value that caused
    it. ``PRUNE`` refers to the skipped child and carries its parent's bounds.
    """

    kind: StepKind
    node_id: str
    label: str
    value: Number | None
    alpha: float
    beta: float


@dataclass(frozen=True, slots=True)
class Evaluation:
    """Result of evaluating a tree in one direction.

    Attributes:
        root: The annotated root node.
        direction: Direction the tree was evaluated in.
        maximizing_at_root: Whether the root was a maximizing node.
        steps: Trace of the search, in order.

    """

    root: EvaluatedNode
    direction: Direction
    maximizing_at_root: bool
    steps: tuple[EvaluationStep, ...] = ()

    @property
    def value(self) -> Number:
        """Minimax value of the root."""
        if self.root.value is None:  # pragma: no cover - the root is always visited
            msg = "Root has no value"
            raise RuntimeError(msg)
        return self.root.value

    def iter_nodes(self) -> Generator[EvaluatedNode]:
        yield from self.root.iter_nodes()

    def find(self, label: str) -> EvaluatedNode:
        """Get the first node (in pre-order) with the given label.

        Raises:
            KeyError: If no node has that label.

        """
        for evaluated in self.iter_nodes():
            if evaluated.label == label:
                return evaluated
        raise KeyError(label)

    def pruned_nodes(self) -> list[EvaluatedNode]:
        """Nodes carrying a prune mark, in pre-order."""
        return [n for n in self.iter_nodes() if n.pruned]

    @property
    def visited_count(self) -> int:
        return sum(1 for n in self.iter_nodes() if n.visited)

    def values_by_label(self) -> dict[str, Number | None]:
        """Map each label to its value (later duplicates overwrite earlier ones)."""
        return {n.label: n.value for n in self.iter_nodes()}
