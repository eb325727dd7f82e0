"""Rich rendering utilities for evaluated trees."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from minimaxviz._direction import Role
from minimaxviz._eval_engine import StepKind, format_value

if TYPE_CHECKING:
    from rich.console import Console

    from minimaxviz._direction import Direction
    from minimaxviz._eval_engine import EvaluatedNode, Evaluation
    from minimaxviz._node import Node


def render_evaluation_tree(evaluation: Evaluation, console: Console) -> None:
    """Render an evaluated tree using Rich Tree.

    Pruned nodes are struck through in red, the rest of a skipped
    subtree is dimmed red.

    Args:
        evaluation: Evaluation to render.
        console: Rich Console to output to.

    """
    root = evaluation.root
    rich_tree = Tree(f"[bold]{escape(root.role.caption)}{_node_text(root)}[/bold]")
    _add_tree_children(rich_tree, root.children, in_pruned_subtree=False)
    console.print(rich_tree)


def _add_tree_children(parent: Tree, children: tuple[EvaluatedNode, ...], *, in_pruned_subtree: bool) -> None:
    """Recursively add children to a Rich Tree.

    Args:
        parent: Parent Tree node to add children to.
        children: Evaluated children.
        in_pruned_subtree: Whether an ancestor was pruned.

    """
    for child in children:
        text = _node_text(child)
        if child.pruned:
            text = f"[red strike]{text}[/red strike] [red](pruned)[/red]"
        elif in_pruned_subtree:
            text = f"[dim red]{text}[/dim red]"
        child_tree = parent.add(text)
        _add_tree_children(child_tree, child.children, in_pruned_subtree=in_pruned_subtree or child.pruned)


def _node_text(evaluated: EvaluatedNode) -> str:
    style = _get_role_style(evaluated.role)
    return f"[{style}]{evaluated.role.upper()}[/{style}] {escape(evaluated.display_label)}"


def render_comparison_table(evaluations: dict[Direction, Evaluation], console: Console) -> None:
    """Render one row per direction: root value, visited count and pruned nodes.

    Args:
        evaluations: Evaluations keyed by direction.
        console: Rich Console to output to.

    """
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Direction", style="bold")
    table.add_column("Root value", justify="right")
    table.add_column("Visited", justify="right")
    table.add_column("Pruned")

    for direction, evaluation in evaluations.items():
        pruned = evaluation.pruned_nodes()
        table.add_row(
            str(direction),
            format_value(evaluation.value),
            str(evaluation.visited_count),
            escape(", ".join(n.label for n in pruned)) if pruned else "[dim]none[/dim]",
        )

    console.print(table)


def render_trace_table(evaluation: Evaluation, console: Console) -> None:
    """Render the search trace of an evaluation.

    Args:
        evaluation: Evaluation whose steps to render.
        console: Rich Console to output to.

    """
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Event")
    table.add_column("Node")
    table.add_column("Value", justify="right")
    table.add_column("Alpha", justify="right")
    table.add_column("Beta", justify="right")

    for index, step in enumerate(evaluation.steps, start=1):
        style = _get_step_style(step.kind)
        table.add_row(
            str(index),
            f"[{style}]{step.kind}[/{style}]",
            escape(step.label),
            "" if step.value is None else format_value(step.value),
            _format_bound(step.alpha),
            _format_bound(step.beta),
        )

    console.print(table)


def render_tree_summary(root: Node, *, node_count: int, leaf_count: int, depth: int, console: Console) -> None:
    """Render structural facts about an input tree."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Root", escape(root.label))
    table.add_row("Nodes", str(node_count))
    table.add_row("Leaves", str(leaf_count))
    table.add_row("Depth", str(depth))
    console.print(table)


def _format_bound(bound: float) -> str:
    if bound == float("inf"):
        return "+inf"
    if bound == float("-inf"):
        return "-inf"
    return format_value(bound)


def _get_role_style(role: Role) -> str:
    """Get Rich style string for a role.

    Args:
        role: The Role.

    Returns:
        Rich style string.

    """
    match role:
        case Role.MAX:
            return "green"
        case Role.MIN:
            return "blue"


def _get_step_style(kind: StepKind) -> str:
    match kind:
        case StepKind.LEAF:
            return "dim"
        case StepKind.RESOLVE:
            return "green"
        case StepKind.CUTOFF:
            return "yellow"
        case StepKind.PRUNE:
            return "red"
