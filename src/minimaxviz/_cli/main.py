import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from minimaxviz._direction import Direction, Role
from minimaxviz._eval_engine import evaluate, evaluate_all_directions, format_value, minimax_value
from minimaxviz._export import render_html, to_graph_data
from minimaxviz._io import dump_tree, export_evaluation, load_tree
from minimaxviz._node import MinimaxVizError, Node, count_leaves, iter_nodes, tree_depth, validate_tree
from minimaxviz._parse import DEFAULT_TREE, parse_tree_expression

from .config import ConfigError, MinimaxVizConfig, get_config
from .tree_render import render_comparison_table, render_evaluation_tree, render_trace_table, render_tree_summary

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

TreeArgument = Annotated[
    Path | None,
    typer.Argument(
        exists=True,
        dir_okay=False,
        help="Tree file (.json, .toml, or node(...) expression text). Defaults to the configured input",
    ),
]
DirectionOption = Annotated[
    Direction | None,
    typer.Option("-d", "--direction", help="Pruning direction (defaults to the configured direction or none)"),
]
StartOption = Annotated[
    Role | None,
    typer.Option("--start", help="Role of the root node (defaults to the configured start or max)"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Minimax and alpha-beta pruning visualizer."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> MinimaxVizConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _load_tree(path: Path | None, config: MinimaxVizConfig) -> Node:
    """Load the tree from the CLI path or the configured input."""
    effective_path = path if path is not None else config.input
    if effective_path is None:
        err_console.print(
            f"[red]Error: Tree file required. Pass a path or set input in {escape('[tool.minimaxviz]')}[/red]",
        )
        raise typer.Exit(code=1)

    err_console.print(f"[cyan]Loading tree from:[/cyan] {escape(str(effective_path))}")
    try:
        root = load_tree(effective_path)
        validate_tree(root)
    except FileNotFoundError as e:
        err_console.print(f"[red]Error: Tree file not found: {escape(str(effective_path))}[/red]")
        raise typer.Exit(code=1) from e
    except MinimaxVizError as e:
        err_console.print(f"[red]✗ Invalid tree: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    return root


def _resolve_options(
    direction: Direction | None,
    start: Role | None,
    config: MinimaxVizConfig,
) -> tuple[Direction, bool]:
    """Combine CLI options with configuration; CLI wins."""
    effective_direction = direction or config.direction or Direction.NONE
    if start is not None:
        maximizing = start is Role.MAX
    elif config.maximizing_at_root is not None:
        maximizing = config.maximizing_at_root
    else:
        maximizing = True
    return effective_direction, maximizing


@app.command("eval")
def eval_command(
    path: TreeArgument = None,
    *,
    direction: DirectionOption = None,
    start: StartOption = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Write the annotated tree to a .json or .toml file"),
    ] = None,
) -> None:
    """Evaluate a tree and show the annotated result."""
    err_console.print()
    config = _load_config()
    root = _load_tree(path, config)
    effective_direction, maximizing = _resolve_options(direction, start, config)

    role = Role.for_root(maximizing=maximizing)
    err_console.print(f"[cyan]Evaluating[/cyan] (direction: {effective_direction}, start: {role})")
    evaluation = evaluate(root, effective_direction, maximizing_at_root=maximizing)
    err_console.print()

    render_evaluation_tree(evaluation, out_console)
    out_console.print()
    out_console.print(f"[bold]Root value:[/bold] {format_value(evaluation.value)}")

    pruned = evaluation.pruned_nodes()
    if pruned:
        out_console.print(f"[bold]Pruned:[/bold] {escape(', '.join(n.label for n in pruned))}")

    if output is not None:
        err_console.print()
        err_console.print(f"[cyan]Exporting results to:[/cyan] {output}")
        output.parent.mkdir(parents=True, exist_ok=True)
        export_evaluation(evaluation, output)

    err_console.print()
    err_console.print("[green]✓ Evaluation complete[/green]")
    err_console.print()


@app.command()
def compare(
    path: TreeArgument = None,
    *,
    start: StartOption = None,
) -> None:
    """Evaluate a tree in every direction and compare the prune patterns."""
    err_console.print()
    config = _load_config()
    root = _load_tree(path, config)
    _, maximizing = _resolve_options(None, start, config)

    evaluations = evaluate_all_directions(root, maximizing_at_root=maximizing)
    reference = minimax_value(root, maximizing_at_root=maximizing)
    err_console.print()

    render_comparison_table(evaluations, out_console)
    out_console.print()

    if all(e.value == reference for e in evaluations.values()):
        err_console.print(f"[green]✓ All directions agree with plain minimax ({format_value(reference)})[/green]")
    else:
        err_console.print("[red]✗ Directions disagree with plain minimax[/red]")
        raise typer.Exit(code=1)
    err_console.print()


@app.command()
def trace(
    path: TreeArgument = None,
    *,
    direction: DirectionOption = None,
    start: StartOption = None,
) -> None:
    """Show every step of the search: leaves read, values resolved, cutoffs and prunes."""
    err_console.print()
    config = _load_config()
    root = _load_tree(path, config)
    effective_direction, maximizing = _resolve_options(direction, start, config)

    evaluation = evaluate(root, effective_direction, maximizing_at_root=maximizing)
    err_console.print()

    render_trace_table(evaluation, out_console)
    out_console.print()
    out_console.print(f"[bold]Root value:[/bold] {format_value(evaluation.value)}")


@app.command()
def check(
    path: TreeArgument = None,
) -> None:
    """Check that a tree is valid without evaluating it."""
    err_console.print()
    config = _load_config()
    root = _load_tree(path, config)
    err_console.print()

    render_tree_summary(
        root,
        node_count=sum(1 for _ in iter_nodes(root)),
        leaf_count=count_leaves(root),
        depth=tree_depth(root),
        console=out_console,
    )

    err_console.print()
    err_console.print("[green]✓ Tree is valid[/green]")
    err_console.print()


@app.command()
def init(
    *,
    output: Annotated[
        Path,
        typer.Option("-o", "--output", help="Path of the tree file to create (.json, .toml, or expression text)"),
    ],
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing file"),
    ] = False,
) -> None:
    """Write the default example tree to a file."""
    err_console.print()
    if output.exists() and not force:
        err_console.print(
            f"[red]Error: Output file already exists: {escape(str(output))} (use --force to overwrite)[/red]",
        )
        raise typer.Exit(code=1)

    err_console.print(f"[cyan]Writing example tree to:[/cyan] {output}")
    output.parent.mkdir(parents=True, exist_ok=True)
    dump_tree(parse_tree_expression(DEFAULT_TREE), output)

    err_console.print()
    err_console.print("[green]✓ Example tree written[/green]")
    err_console.print()


@app.command()
def export(
    path: TreeArgument = None,
    *,
    output: Annotated[
        Path,
        typer.Option("-o", "--output", help="Path to output file"),
    ] = Path("tree.html"),
    export_format: Annotated[
        str,
        typer.Option("--format", help="Output format: html (standalone page) or json (tree-graph data)"),
    ] = "html",
    direction: DirectionOption = None,
    start: StartOption = None,
    title: Annotated[
        str,
        typer.Option("--title", help="Page title (html only)"),
    ] = "Minimax evaluation",
) -> None:
    """Export an evaluated tree for display."""
    if export_format not in ("html", "json"):
        err_console.print(f"[red]Error: Unknown format {escape(export_format)!r} (expected html or json)[/red]")
        raise typer.Exit(code=1)

    err_console.print()
    config = _load_config()
    root = _load_tree(path, config)
    effective_direction, maximizing = _resolve_options(direction, start, config)

    evaluation = evaluate(root, effective_direction, maximizing_at_root=maximizing)

    output.parent.mkdir(parents=True, exist_ok=True)
    if export_format == "html":
        err_console.print("[cyan]Generating HTML page...[/cyan]")
        output.write_text(render_html(evaluation, title=title), encoding="utf-8")
    else:
        err_console.print("[cyan]Generating tree-graph data...[/cyan]")
        output.write_text(json.dumps(to_graph_data(evaluation), indent=2) + "\n", encoding="utf-8")
    err_console.print(f"[cyan]Written to:[/cyan] {output}")

    err_console.print()
    err_console.print("[green]✓ Export complete[/green]")
    err_console.print()


def main() -> None:
    app()
