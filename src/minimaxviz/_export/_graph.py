"""Graph-library data for an evaluated tree.

Produces the nested ``{name, id, children, gProps}`` shape consumed by
tree-graph rendering libraries (keyed by ``id``). A pruned node and
everything below it get the ``node-red`` class; all other nodes are
``node-black``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from minimaxviz._eval_engine import EvaluatedNode, Evaluation

PRUNED_COLOR = "red"
DEFAULT_COLOR = "black"


def _graph_node(evaluated: EvaluatedNode, color: str) -> dict[str, Any]:
    # Prune color is inherited by the whole skipped subtree
    if evaluated.pruned:
        color = PRUNED_COLOR
    return {
        "name": evaluated.display_label,
        "id": evaluated.id,
        "role": str(evaluated.role),
        "value": evaluated.value,
        "visited": evaluated.visited,
        "pruned": evaluated.pruned,
        "gProps": {"className": f"node-{color}"},
        "children": [_graph_node(child, color) for child in evaluated.children],
    }


def to_graph_data(evaluation: Evaluation) -> dict[str, Any]:
    """Convert an evaluation to graph-library data.

    The root name is prefixed with its role, e.g. ``"Max: A (4)"``.

    Returns:
        Nested dictionary rooted at the tree root. Each node has ``name``,
        ``id``, ``role``, ``value``, ``visited``, ``pruned``, ``gProps`` and
        ``children``; the root additionally has ``keyProp`` set to ``"id"``.

    """
    data = _graph_node(evaluation.root, DEFAULT_COLOR)
    data["name"] = evaluation.root.role.caption + data["name"]
    data["keyProp"] = "id"
    return data
