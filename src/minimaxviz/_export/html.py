"""HTML rendering for minimaxviz export."""

from __future__ import annotations

from typing import TYPE_CHECKING

from htpy import Element, aside, code, dd, dl, dt, h2, li, main, section, span, table, tbody, td, th, thead, tr, ul

from minimaxviz._eval_engine import format_value

from ._layout import base_page

if TYPE_CHECKING:
    from minimaxviz._eval_engine import EvaluatedNode, Evaluation, EvaluationStep


def render_html(evaluation: Evaluation, *, title: str = "Minimax evaluation") -> str:
    """Render an evaluation as a standalone HTML document.

    Args:
        evaluation: The evaluation to render.
        title: Page title.

    Returns:
        Complete HTML document as a string.

    """
    start = "max" if evaluation.maximizing_at_root else "min"
    return base_page(
        page_title=title,
        subtitle=f"direction: {evaluation.direction} / start: {start}",
        sidebar=_render_sidebar(evaluation),
        content=main(".content")[
            section(id="tree")[
                h2["Tree"],
                ul(".game-tree")[_render_node(evaluation.root, in_pruned_subtree=False, is_root=True)],
            ],
            section(id="trace")[
                h2["Search trace"],
                _render_steps(evaluation.steps),
            ],
        ],
    )


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------


def _render_sidebar(evaluation: Evaluation) -> Element:
    pruned = evaluation.pruned_nodes()
    return aside(".sidebar")[
        h2["Summary"],
        dl[
            dt["Root value"],
            dd[format_value(evaluation.value)],
            dt["Direction"],
            dd[code[str(evaluation.direction)]],
            dt["Visited nodes"],
            dd[str(evaluation.visited_count)],
            dt["Pruned"],
            dd[", ".join(n.label for n in pruned) if pruned else "none"],
        ],
    ]


# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------


def _format_bound(bound: float | None) -> str:
    if bound is None:
        return ""
    if bound == float("inf"):
        return "+∞"
    if bound == float("-inf"):
        return "-∞"
    return format_value(bound)


def _node_classes(evaluated: EvaluatedNode, *, in_pruned_subtree: bool) -> str:
    classes = [".tree-node", f".{evaluated.role}"]
    if evaluated.pruned:
        classes.append(".pruned")
    elif in_pruned_subtree or not evaluated.visited:
        classes.append(".unvisited")
    return "".join(classes)


def _render_node(evaluated: EvaluatedNode, *, in_pruned_subtree: bool, is_root: bool = False) -> Element:
    """Render one node and its subtree as a nested list item."""
    in_pruned_subtree = in_pruned_subtree or evaluated.pruned
    label = evaluated.display_label
    if is_root:
        label = evaluated.role.caption + label

    bounds = None
    if evaluated.visited and not evaluated.is_leaf:
        bounds = span(".bounds")[f"α={_format_bound(evaluated.alpha)} β={_format_bound(evaluated.beta)}"]

    return li(_node_classes(evaluated, in_pruned_subtree=in_pruned_subtree), id=f"node-{evaluated.id}")[
        span(".node-label")[span(".role")[str(evaluated.role)], label, bounds],
        ul[(_render_node(child, in_pruned_subtree=in_pruned_subtree) for child in evaluated.children)]
        if evaluated.children
        else None,
    ]


# ---------------------------------------------------------------------------
# Trace
# ---------------------------------------------------------------------------


def _render_steps(steps: tuple[EvaluationStep, ...]) -> Element:
    return table[
        thead[tr[th["#"], th["Event"], th["Node"], th["Value"], th["α"], th["β"]]],
        tbody[
            (
                tr(class_=f"step-{step.kind}")[
                    td[str(index)],
                    td[str(step.kind)],
                    td[step.label],
                    td["" if step.value is None else format_value(step.value)],
                    td[_format_bound(step.alpha)],
                    td[_format_bound(step.beta)],
                ]
                for index, step in enumerate(steps, start=1)
            )
        ],
    ]
