"""Minimax and alpha-beta pruning visualizer."""

__all__ = [
    "UNBOUNDED_HIGH",
    "UNBOUNDED_LOW",
    "DEFAULT_TREE",
    "AlreadyEvaluatedError",
    "Direction",
    "EvaluatedNode",
    "Evaluation",
    "EvaluationStep",
    "Internal",
    "InvalidTreeError",
    "Leaf",
    "MinimaxVizError",
    "Node",
    "Role",
    "StepKind",
    "TreeSession",
    "TreeSyntaxError",
    "dump_tree",
    "evaluate",
    "evaluate_all_directions",
    "evaluation_to_dict",
    "export_evaluation",
    "format_tree_expression",
    "load_tree",
    "minimax_value",
    "node",
    "parse_tree_expression",
    "render_html",
    "to_graph_data",
    "tree_from_dict",
    "tree_to_dict",
    "validate_tree",
]

from ._direction import Direction, Role
from ._eval_engine import (
    UNBOUNDED_HIGH,
    UNBOUNDED_LOW,
    EvaluatedNode,
    Evaluation,
    EvaluationStep,
    StepKind,
    evaluate,
    evaluate_all_directions,
    minimax_value,
)
from ._export import render_html, to_graph_data
from ._io import dump_tree, evaluation_to_dict, export_evaluation, load_tree, tree_from_dict, tree_to_dict
from ._node import (
    AlreadyEvaluatedError,
    Internal,
    InvalidTreeError,
    Leaf,
    MinimaxVizError,
    Node,
    node,
    validate_tree,
)
from ._parse import DEFAULT_TREE, TreeSyntaxError, format_tree_expression, parse_tree_expression
from ._session import TreeSession
