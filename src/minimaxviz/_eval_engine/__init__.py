"""Evaluation engine module for minimaxviz.

This module provides pure functions for evaluating game trees with minimax
and alpha-beta pruning. The input tree is never modified; results come back
as a separate annotated tree.

Key types:
- Evaluation: Annotated tree, direction, and search trace of one run
- EvaluatedNode: A node of the annotated tree (value, prune mark, bounds)
- EvaluationStep: One event of the search trace
- evaluate: Evaluate a tree in one direction
"""

from ._engine import (
    UNBOUNDED_HIGH,
    UNBOUNDED_LOW,
    evaluate,
    evaluate_all_directions,
    minimax_value,
)
from ._tree import EvaluatedNode, Evaluation, EvaluationStep, StepKind, format_value

__all__ = [
    "UNBOUNDED_HIGH",
    "UNBOUNDED_LOW",
    "EvaluatedNode",
    "Evaluation",
    "EvaluationStep",
    "StepKind",
    "evaluate",
    "evaluate_all_directions",
    "format_value",
    "minimax_value",
]
