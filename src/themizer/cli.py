"""
themizer CLI.

Commands:
- theme: compile the themes of a config module into theme.css / theme.json
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from enum import StrEnum
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from .config import DEFAULT_CONFIG_NAME, load_themes
from .css_generator import get_jss
from .errors import ThemizerError
from .theme import Theme, combine_themes, merge_vars, warn_collisions
from .validators import validate_file_path

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


class OutputFormat(StrEnum):
    CSS = "css"
    JSON = "json"


app = typer.Typer(
    help="Generate CSS custom properties from Python design tokens with responsive media query support",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.getenv("THEMIZER_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def version_callback(value: bool) -> None:
    """Print the version and exit."""
    if value:
        from . import __version__

        typer.echo(f"themizer {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """themizer CLI main callback for global options."""
    pass


def render_themes(themes: list[Theme], output_format: OutputFormat) -> str:
    """Render loaded themes in the requested output format."""
    if output_format is OutputFormat.JSON:
        # Colliding names are merged last-write-wins
        warn_collisions(themes)
        merged = merge_vars(*(theme.vars for theme in themes))
        metadata: dict[str, Any] = {}
        for theme in themes:
            metadata.update(theme.metadata)
        return json.dumps(get_jss(merged, metadata), indent=2)
    return combine_themes(themes)


def write_output(path: Path, content: str) -> bool:
    """Atomically write ``content`` to ``path``.

    Returns:
        False if the file already held the same content and was left untouched.
    """
    if path.exists() and path.read_text(encoding="utf-8") == content:
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return True


@app.command(name="theme")
def theme_command(
    out_dir: Annotated[
        str,
        typer.Option("--out-dir", "-o", help="Output directory for the generated file"),
    ],
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Python module defining the themes"),
    ] = Path(DEFAULT_CONFIG_NAME),
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format (css or json)"),
    ] = OutputFormat.CSS,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Enable debug logging"),
    ] = False,
) -> None:
    """
    Generate theme.css from your themizer configuration.

    Executes the config module, compiles every theme it defines and writes
    the result into the output directory.

    Examples:
        themizer theme --out-dir ./static/css
        themizer theme -c design/tokens.py -o ./build -f json
    """
    _configure_logging(verbose)

    try:
        validate_file_path(out_dir)
    except ValueError as e:
        err_console.print(f"[red]themizer: Invalid output directory - {e}[/red]")
        raise typer.Exit(code=1)

    try:
        themes = [theme for _, theme in load_themes(config)]
        content = render_themes(themes, output_format)
    except ThemizerError as e:
        err_console.print(f"[red]themizer: Failed to compile themes - {e}[/red]")
        raise typer.Exit(code=1)

    target = Path(out_dir) / f"theme.{output_format.value}"
    try:
        written = write_output(target, content)
    except OSError as e:
        err_console.print(f"[red]themizer: Failed to write {target.name} - {e}[/red]")
        raise typer.Exit(code=1)

    if written:
        console.print(f"[green]themizer:[/green] {target.name} written to {out_dir} directory")
    else:
        console.print(f"themizer: {target.name} in {out_dir} is up to date")


def main() -> None:
    """Console script entry point."""
    app()
