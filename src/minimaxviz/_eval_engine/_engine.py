"""Core minimax evaluation with optional alpha-beta pruning."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from minimaxviz._direction import Direction, Role
from minimaxviz._node import Leaf, validate_tree

from ._tree import EvaluatedNode, Evaluation, EvaluationStep, StepKind

if TYPE_CHECKING:
    from minimaxviz._node import Node, Number

logger = logging.getLogger(__name__)

# Sentinels for "no bound yet". The root is normally entered with these.
UNBOUNDED_LOW: float = -math.inf
UNBOUNDED_HIGH: float = math.inf


def _unvisited(node: Node, role: Role, *, pruned: bool) -> EvaluatedNode:
    """Annotate a subtree the search never entered."""
    if isinstance(node, Leaf):
        return EvaluatedNode(source=node, role=role, value=node.value, visited=False, pruned=pruned)
    return EvaluatedNode(
        source=node,
        role=role,
        value=None,
        visited=False,
        pruned=pruned,
        children=tuple(_unvisited(child, role.opposite, pruned=False) for child in node.children),
    )


def _evaluate_node(  # noqa: PLR0913
    node: Node,
    role: Role,
    direction: Direction,
    alpha: float,
    beta: float,
    steps: list[EvaluationStep],
) -> tuple[EvaluatedNode, Number]:
    """Evaluate ``node`` with the given bounds.

    Returns the annotated subtree together with its value.
    """
    if isinstance(node, Leaf):
        steps.append(EvaluationStep(StepKind.LEAF, node.id, node.label, node.value, alpha, beta))
        evaluated = EvaluatedNode(source=node, role=role, value=node.value, visited=True, alpha=alpha, beta=beta)
        return evaluated, node.value

    entry_alpha, entry_beta = alpha, beta
    # Keyed by position in the input so the output keeps input order
    annotated: dict[int, EvaluatedNode] = {}
    values: list[Number] = []
    pruning = False

    for index, child in direction.visit_order(list(enumerate(node.children))):
        if pruning:
            logger.debug("Pruned %s under %s", child.label, node.label)
            steps.append(EvaluationStep(StepKind.PRUNE, child.id, child.label, None, alpha, beta))
            annotated[index] = _unvisited(child, role.opposite, pruned=True)
            continue

        evaluated_child, child_value = _evaluate_node(child, role.opposite, direction, alpha, beta, steps)
        annotated[index] = evaluated_child
        values.append(child_value)

        if role is Role.MAX:
            alpha = max(alpha, child_value)
        else:
            beta = min(beta, child_value)

        if direction.prunes and beta <= alpha:
            logger.debug("Cutoff at %s after %s (alpha=%s, beta=%s)", node.label, child.label, alpha, beta)
            steps.append(EvaluationStep(StepKind.CUTOFF, node.id, node.label, child_value, alpha, beta))
            pruning = True

    value = max(values) if role is Role.MAX else min(values)
    steps.append(EvaluationStep(StepKind.RESOLVE, node.id, node.label, value, entry_alpha, entry_beta))
    logger.debug("Resolved %s (%s) = %s", node.label, role, value)

    evaluated = EvaluatedNode(
        source=node,
        role=role,
        value=value,
        visited=True,
        alpha=entry_alpha,
        beta=entry_beta,
        children=tuple(annotated[i] for i in range(len(node.children))),
    )
    return evaluated, value


def evaluate(
    root: Node,
    direction: Direction | str = Direction.NONE,
    *,
    maximizing_at_root: bool = True,
    alpha: float = UNBOUNDED_LOW,
    beta: float = UNBOUNDED_HIGH,
) -> Evaluation:
    """Evaluate a tree with minimax, pruning according to ``direction``.

    This is a pure function: ``root`` is validated first and never modified.
    The result is a separate annotated tree, so the same input can be
    evaluated repeatedly and in different directions.

    Args:
        root: Root of the input tree.
        direction: Pruning mode and visit order (a ``Direction`` or its value).
        maximizing_at_root: Whether the root maximizes. Roles alternate by depth.
        alpha: Initial lower bound. Defaults to unbounded.
        beta: Initial upper bound. Defaults to unbounded.

    Returns:
        Evaluation holding the annotated tree and the search trace.

    Raises:
        AlreadyEvaluatedError: If ``root`` is itself an evaluation result.
        InvalidTreeError: If the tree is malformed.
        ValueError: If ``direction`` is unknown or a bound is NaN.

    Example:
        >>> tree = node("A", [node("B", 3), node("C", 5)])
        >>> evaluate(tree, Direction.RIGHT_TO_LEFT).value
        5

    """
    validate_tree(root)
    direction = Direction(direction)
    if math.isnan(alpha) or math.isnan(beta):
        msg = f"Bounds must not be NaN (alpha={alpha}, beta={beta})"
        raise ValueError(msg)

    role = Role.for_root(maximizing=maximizing_at_root)
    steps: list[EvaluationStep] = []

    logger.debug("Evaluating %s as %s, direction=%s", root.label, role, direction)
    evaluated_root, value = _evaluate_node(root, role, direction, alpha, beta, steps)
    logger.debug("Root %s = %s after %d steps", root.label, value, len(steps))

    return Evaluation(
        root=evaluated_root,
        direction=direction,
        maximizing_at_root=maximizing_at_root,
        steps=tuple(steps),
    )


def evaluate_all_directions(root: Node, *, maximizing_at_root: bool = True) -> dict[Direction, Evaluation]:
    """Evaluate the same tree once per direction."""
    return {
        direction: evaluate(root, direction, maximizing_at_root=maximizing_at_root)
        for direction in Direction
    }


def _plain_minimax(node: Node, role: Role) -> Number:
    if isinstance(node, Leaf):
        return node.value
    values = [_plain_minimax(child, role.opposite) for child in node.children]
    return max(values) if role is Role.MAX else min(values)


def minimax_value(root: Node, *, maximizing_at_root: bool = True) -> Number:
    """Compute the root value with plain minimax, without bounds or tracing.

    Pruning must never change the root value, so this is the reference
    that ``evaluate`` can be checked against.
    """
    validate_tree(root)
    return _plain_minimax(root, Role.for_root(maximizing=maximizing_at_root))
