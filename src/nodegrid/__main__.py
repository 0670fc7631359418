"""CLI entry point for nodegrid."""

import logging
import sys

import click

from nodegrid.analysis import analyze
from nodegrid.config import LayoutConfig
from nodegrid.errors import DocumentError
from nodegrid.layout.engine import engine_names, layout_graph
from nodegrid.parsers import parse
from nodegrid.renderers import render_analysis, render_document, render_positions


def _read_input(input: str | None) -> str:
    if not input:
        return sys.stdin.read()
    try:
        with open(input) as f:
            return f.read()
    except OSError as e:
        click.echo(f"error: cannot read '{input}': {e}", err=True)
        sys.exit(1)


def _parse(text: str):
    try:
        return parse(text)
    except DocumentError as e:
        click.echo(f"parse error:\n{e}", err=True)
        sys.exit(1)


def _write_output(rendered: str, output: str | None) -> None:
    if not output:
        click.echo(rendered, nl=False)
        return
    try:
        with open(output, "w") as f:
            f.write(rendered)
    except OSError as e:
        click.echo(f"error: cannot write '{output}': {e}", err=True)
        sys.exit(1)


@click.group()
def main() -> None:
    """Automatic layered layout for node-graph documents."""


@main.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["positions", "document"]),
    default="positions",
    help="Print the position map or the document with updated pivots",
)
@click.option("--engine", "-e", type=click.Choice(engine_names()), default="sugiyama", help="Layout engine")
@click.option("--spacing-x", type=float, default=50.0, help="Horizontal gap between columns")
@click.option("--spacing-y", type=float, default=80.0, help="Vertical gap between rows")
@click.option(
    "--island-spacing",
    type=float,
    default=None,
    help="Vertical gap between disconnected islands [default: 80, grid engine 150]",
)
@click.option("--force", is_flag=True, help="Recompute even when every component already has a pivot")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", is_flag=True, help="Log layout phases to stderr")
def layout(
    input: str | None,
    fmt: str,
    engine: str,
    spacing_x: float,
    spacing_y: float,
    island_spacing: float | None,
    force: bool,
    output: str | None,
    verbose: bool,
) -> None:
    """Compute component positions for a JSON graph document."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    document, gir = _parse(_read_input(input))
    config = LayoutConfig(spacing_x=spacing_x, spacing_y=spacing_y, force=force, engine=engine)
    if island_spacing is not None:
        config.island_spacing = island_spacing
        config.grid_island_spacing = island_spacing
    result = layout_graph(gir, config)
    for warning in result.warnings:
        click.echo(f"warning: {warning}", err=True)

    if fmt == "document":
        rendered = render_document(document, result)
    else:
        rendered = render_positions(result)
    _write_output(rendered, output)


@main.command(name="analyze")
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
def analyze_command(input: str | None, output: str | None) -> None:
    """Report sources, sinks, depths and islands of a JSON graph document."""
    _, gir = _parse(_read_input(input))
    _write_output(render_analysis(analyze(gir)), output)


if __name__ == "__main__":
    main()
