"""
famtree CLI

Command-line interface for the family-tree graph generator.
Generates a random tree from Gaussian width and branching parameters,
validates its structure and prints it as DOT or Mermaid text.

Commands:
    famtree generate    Generate, validate and render a graph

Usage:
    $ famtree generate --depth-max 4 --seed 42
    $ famtree generate --format mermaid -o tree.mmd
    $ famtree --version

Rendered text goes to stdout (or --output); the seed, the validation
summary and errors go to stderr.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

from famtree import __version__
from famtree.errors import DistributionError
from famtree.generator import generate as generate_tree
from famtree.models import GenerationResult, GeneratorConfig, ValidationReport
from famtree.render import OutputFormat, render
from famtree.validator import validate

# Initialize Typer app and Rich console
app = typer.Typer(
    name="famtree",
    help="famtree: generate random family-tree graphs as DOT or Mermaid",
    add_completion=False,
)
console = Console(stderr=True)

EXIT_VALIDATION_FAILED = 1
EXIT_CONFIG_ERROR = 2


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def generate(
    depth_max: int = typer.Option(
        3,
        "--depth-max",
        min=1,
        help="Number of levels, root level included",
    ),
    width_mean: float = typer.Option(10.0, "--width-mean", help="Mean number of nodes per level"),
    width_std: float = typer.Option(5.0, "--width-std", help="Standard deviation of nodes per level"),
    child_mean: float = typer.Option(3.0, "--child-mean", help="Mean number of children per node"),
    child_std: float = typer.Option(
        2.0,
        "--child-std",
        "--child-dev",
        help="Standard deviation of children per node",
    ),
    fmt: OutputFormat = typer.Option(
        OutputFormat.DOT,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        min=0,
        max=2**64 - 1,
        help="Seed for reproducible output (random if omitted)",
    ),
    name: str = typer.Option("output", "--name", "-n", help="Name of the graph"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        dir_okay=False,
        writable=True,
        resolve_path=True,
        help="Write the rendered graph to a file instead of stdout",
    ),
    check: bool = typer.Option(
        True,
        "--validate/--no-validate",
        help="Check the generated graph for the tree property",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """
    Generate a random family-tree graph.

    This command:
    1. Samples a tree level by level from the Gaussian parameters
    2. Validates that it has one root and one path to every node
    3. Renders it as DOT or Mermaid text
    """
    _configure_logging(verbose)

    try:
        config = GeneratorConfig(
            depth=depth_max,
            width_mean=width_mean,
            width_std=width_std,
            child_mean=child_mean,
            child_std=child_std,
            seed=seed,
            name=name,
        )
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(EXIT_CONFIG_ERROR)

    try:
        result = generate_tree(config)
    except DistributionError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(EXIT_CONFIG_ERROR)

    console.print(f"[bold blue]Seed:[/bold blue] {result.seed}")

    text = render(result.graph, fmt)
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        console.print(f"[dim]Wrote {fmt.value} output to {output}[/dim]")
    else:
        typer.echo(text, nl=False)

    if not check:
        return

    report = validate(result.graph, config)
    _print_report(report, result, config)
    if not report.passed:
        raise typer.Exit(EXIT_VALIDATION_FAILED)


# Helper functions for output formatting

def _print_report(report: ValidationReport, result: GenerationResult, config: GeneratorConfig) -> None:
    """Print the validation summary panel."""
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Check", style="dim")

    for line in report.summary_lines(config):
        table.add_row(line)

    table.add_row(f"Nodes: {result.node_count}, edges: {result.edge_count}")

    if report.passed:
        title = "[bold green]✓ Validation passed[/bold green]"
        border = "green"
    else:
        title = "[bold red]✗ Validation failed[/bold red]"
        border = "red"

    console.print(Panel(table, title=title, border_style=border))


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]famtree[/bold] version {__version__}")
        raise typer.Exit()


# Version command
@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    famtree: generate random family-tree graphs.
    """


if __name__ == "__main__":
    app()
