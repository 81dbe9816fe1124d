"""CLI interface for refviz using Typer framework."""

import importlib
import json as jsonlib
import logging
import sys
from pathlib import Path
from typing import Annotated, Any, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from refviz import __description__, __version__
from refviz.config import Direction, LogLevel, OutputFormat, RefvizConfig, load_config
from refviz.graph.export import render_dot
from refviz.visualizer import Visualizer

app = typer.Typer(
    name="refviz",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

# Diagram text goes to stdout, everything else to stderr
console = Console(stderr=True)

LOG_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
}


def setup_logging(level: str = LogLevel.WARN.value) -> None:
    """Setup logging configuration."""
    logging.basicConfig(
        level=LOG_LEVELS.get(level, logging.WARNING),
        format="%(message)s",
        handlers=[
            RichHandler(console=console, rich_tracebacks=True, show_time=False, show_path=False)
        ],
        force=True,
    )


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"refviz version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """refviz - Draw live Python object graphs as Graphviz diagrams."""


def resolve_target(target: str) -> Any:
    """Import the object named by ``module:attribute``.

    The attribute part may be dotted (``pkg.mod:Holder.instance``). The
    current directory is importable, as it is for ``python -m``.

    Raises:
        ValueError: If the target is malformed or cannot be imported
    """
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise ValueError(f"Target must look like 'module:attribute', got: '{target}'")

    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import module '{module_name}': {e}")

    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise ValueError(f"'{module_name}' has no attribute '{attribute}'")
    return obj


def build_config(
    config: Optional[Path],
    direction: Optional[Direction],
    primitive: Optional[List[str]],
    ignore: Optional[List[str]],
    hide_field_names: bool,
    ignore_private: bool,
    ignore_null: bool,
) -> RefvizConfig:
    """Load the configuration file and apply command line overrides."""
    refviz_config = load_config(config)
    draw = refviz_config.draw

    if direction is not None:
        draw.direction = direction
    if primitive:
        draw.treat_as_primitive.extend(primitive)
    if ignore:
        draw.ignore_fields.extend(ignore)
    if hide_field_names:
        draw.show_field_names_in_labels = False
    if ignore_private:
        draw.ignore_private_fields = True
    if ignore_null:
        draw.ignore_null_valued_fields = True
    return refviz_config


@app.command()
def draw(
    target: Annotated[
        str,
        typer.Argument(help="Object to draw, as 'module:attribute'")
    ],
    call: Annotated[
        bool,
        typer.Option("--call", help="Call the target without arguments and draw the result")
    ] = False,
    direction: Annotated[
        Optional[Direction],
        typer.Option("--direction", "-d", help="Layout direction (default: from config, TB)")
    ] = None,
    primitive: Annotated[
        Optional[List[str]],
        typer.Option("--primitive", "-p", help="Class or module to render inline (repeatable)")
    ] = None,
    ignore: Annotated[
        Optional[List[str]],
        typer.Option("--ignore", "-i", help="Field name to leave out (repeatable)")
    ] = None,
    hide_field_names: Annotated[
        bool,
        typer.Option("--hide-field-names", help="Show only values in primitive field rows")
    ] = False,
    ignore_private: Annotated[
        bool,
        typer.Option("--ignore-private", help="Leave out attributes starting with an underscore")
    ] = False,
    ignore_null: Annotated[
        bool,
        typer.Option("--ignore-null", help="Leave out fields whose value is None")
    ] = False,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output file path (default: stdout)")
    ] = None,
    output_format_opt: Annotated[
        Optional[OutputFormat],
        typer.Option("--format", "-f", help="Output format: dot, svg, png, pdf (default: from config, dot)")
    ] = None,
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Configuration file path (default: search for .refviz.json)")
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log traversal details")
    ] = False,
) -> None:
    """Draw the object graph reachable from TARGET."""
    try:
        refviz_config = build_config(
            config, direction, primitive, ignore, hide_field_names, ignore_private, ignore_null
        )
        setup_logging(LogLevel.DEBUG.value if verbose else refviz_config.logging.level)

        obj = resolve_target(target)
        if call:
            obj = obj()

        dot_text = Visualizer.from_config(refviz_config).draw_graph(obj)

        output_format = OutputFormat(output_format_opt or refviz_config.output.format)
        if output_format == OutputFormat.DOT:
            if output:
                output.write_text(dot_text, encoding="utf-8")
                console.print(f"[green]Diagram written:[/green] {output}")
            else:
                typer.echo(dot_text, nl=False)
            return

        if not output:
            console.print(f"[red]Error:[/red] --output is required for format '{output_format.value}'")
            raise typer.Exit(1)

        image = render_dot(dot_text, output_format.value, refviz_config.output.dot_executable)
        output.write_bytes(image)
        console.print(f"[green]Diagram written:[/green] {output}")

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command("config")
def show_config(
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Configuration file path (default: search for .refviz.json)")
    ] = None,
) -> None:
    """Print the effective configuration as JSON."""
    try:
        refviz_config = load_config(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    typer.echo(jsonlib.dumps(refviz_config.model_dump(mode="json", by_alias=True), indent=2))


if __name__ == "__main__":
    app()
