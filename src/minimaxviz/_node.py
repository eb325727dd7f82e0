"""Tree model: leaves with utilities and internal nodes with children.

Nodes are immutable. A tree is built once from the outside (see
``minimaxviz._parse`` and ``minimaxviz._io``) and then handed to the
evaluator, which never writes to it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from numbers import Real
from typing import TYPE_CHECKING, Any
from uuid import uuid4

if TYPE_CHECKING:
    from collections.abc import Generator, Sequence

logger = logging.getLogger(__name__)

Number = int | float


class MinimaxVizError(Exception):
    """Base class for errors raised by minimaxviz."""


class InvalidTreeError(MinimaxVizError):
    """The input tree violates the structural contract of the evaluator."""


class AlreadyEvaluatedError(InvalidTreeError):
    """An evaluation result was passed where a fresh input tree was expected."""


def _new_id() -> str:
    return uuid4().hex


@dataclass(frozen=True, slots=True)
class Leaf:
    """A terminal node carrying a fixed utility value.

    Attributes:
        label: Display name of the node.
        value: The utility of this terminal position.
        id: Opaque identity used by renderers to key nodes.

    """

    label: str
    value: Number
    id: str = field(default_factory=_new_id, compare=False)

    @property
    def is_leaf(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Internal:
    """A node whose value is aggregated from its children.

    Children are ordered; the order decides traversal and thus which
    siblings can be pruned.

    Attributes:
        label: Display name of the node.
        children: The child nodes, in input order.
        id: Opaque identity used by renderers to key nodes.

    """

    label: str
    children: tuple[Node, ...]
    id: str = field(default_factory=_new_id, compare=False)

    @property
    def is_leaf(self) -> bool:
        return False


Node = Leaf | Internal


def node(label: str, children_or_value: Number | Sequence[Node] = 0) -> Node:
    """Build a node the way tree definitions are written by hand.

    A number makes a leaf, a sequence of nodes makes an internal node.
    Omitting the second argument gives a leaf with value 0.

    Example:
        >>> tree = node("A", [node("B", 3), node("C", 5)])

    """
    if isinstance(children_or_value, (int, float)) and not isinstance(children_or_value, bool):
        return Leaf(label=label, value=children_or_value)
    if isinstance(children_or_value, (list, tuple)):
        return Internal(label=label, children=tuple(children_or_value))
    msg = f"Node {label!r}: expected a number or a list of children, got {type(children_or_value).__name__}"
    raise InvalidTreeError(msg)


def iter_nodes(root: Node) -> Generator[Node]:
    """Iterate over all nodes in depth-first pre-order."""
    yield root
    if isinstance(root, Internal):
        for child in root.children:
            yield from iter_nodes(child)


def count_leaves(root: Node) -> int:
    return sum(1 for n in iter_nodes(root) if isinstance(n, Leaf))


def tree_depth(root: Node) -> int:
    """Number of edges on the longest root-to-leaf path."""
    if isinstance(root, Leaf) or not root.children:
        return 0
    return 1 + max(tree_depth(child) for child in root.children)


def _check_value(leaf: Leaf) -> None:
    value: Any = leaf.value
    if isinstance(value, bool) or not isinstance(value, Real):
        msg = f"Leaf {leaf.label!r} has a non-numeric value: {value!r}"
        raise InvalidTreeError(msg)
    if isinstance(value, float) and not math.isfinite(value):
        msg = f"Leaf {leaf.label!r} has a non-finite value: {value!r}"
        raise InvalidTreeError(msg)


def validate_tree(root: object) -> None:
    """Check that ``root`` is a well-formed tree that can be evaluated.

    The whole tree is checked before any evaluation starts so that a
    failure never leaves a half-annotated result behind.

    Raises:
        AlreadyEvaluatedError: If ``root`` is the output of a previous evaluation.
        InvalidTreeError: If an internal node has no children, a leaf value is
            not a finite number, or a node object or id appears more than once.

    """
    # Imported here because the engine depends on this module.
    from minimaxviz._eval_engine import EvaluatedNode, Evaluation  # noqa: PLC0415

    if isinstance(root, (Evaluation, EvaluatedNode)):
        msg = "Tree has already been evaluated; build a fresh tree from its source instead"
        raise AlreadyEvaluatedError(msg)

    seen_objects: set[int] = set()
    seen_ids: set[str] = set()
    stack: list[object] = [root]
    while stack:
        current = stack.pop()
        if isinstance(current, (Evaluation, EvaluatedNode)):
            msg = "Tree contains an already evaluated subtree"
            raise AlreadyEvaluatedError(msg)
        if not isinstance(current, (Leaf, Internal)):
            msg = f"Expected a Leaf or Internal node, got {type(current).__name__}"
            raise InvalidTreeError(msg)
        if id(current) in seen_objects:
            msg = f"Node {current.label!r} appears more than once in the tree"
            raise InvalidTreeError(msg)
        if current.id in seen_ids:
            msg = f"Duplicate node id {current.id!r} (node {current.label!r})"
            raise InvalidTreeError(msg)
        seen_objects.add(id(current))
        seen_ids.add(current.id)

        if isinstance(current, Leaf):
            _check_value(current)
            continue
        if not current.children:
            msg = f"Internal node {current.label!r} has no children"
            raise InvalidTreeError(msg)
        stack.extend(current.children)

    logger.debug("Validated tree rooted at %r (%d nodes)", getattr(root, "label", root), len(seen_ids))
