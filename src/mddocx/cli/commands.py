"""CLI command implementations"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mddocx.config import Settings, load_config
from mddocx.core.logs import STDLIB_LEVELS, LogBuffer, LogLevel, Sink
from mddocx.core.pipeline import run_docx2md, run_md2docx
from mddocx.core.polish import make_polisher
from mddocx.core.styles import DOCX_STYLE_MAP


LEVEL_COLORS = {
    LogLevel.info:    typer.colors.BLUE,
    LogLevel.success: typer.colors.GREEN,
    LogLevel.warning: typer.colors.YELLOW,
    LogLevel.error:   typer.colors.RED,
}


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def echo_sink(threshold: str = "INFO") -> Sink:
    """Sink printing entries at or above the stdlib level name `threshold`."""
    minimum = logging.getLevelName(threshold.upper())

    def sink(message: str, level: LogLevel) -> None:
        if STDLIB_LEVELS[level] < minimum:
            return
        label = typer.style(f"[{level.value}]", fg=LEVEL_COLORS[level])
        typer.echo(f"{label} {message}", err=level == LogLevel.error)

    return sink


def md2docx_cmd(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, help="Markdown file to convert")],
    assets: Annotated[Optional[Path], typer.Option("--assets", exists=True, file_okay=False, help="Directory of images referenced by the markdown")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    polish: Annotated[Optional[bool], typer.Option("--polish/--no-polish", help="Polish markdown with Gemini first")] = None,
    ):
    """Convert a markdown file (and its images) to a Word document."""
    settings = _settings(overrides={"output_dir": out, "polish": polish})
    log = LogBuffer(forward=echo_sink(settings.log_level))
    try:
        out_path = asyncio.run(run_md2docx(
            path, assets, Path(settings.output_dir), settings, log, make_polisher(settings),
        ))
    except Exception as e:
        _fail("Conversion failed", e)
    typer.echo(f"  {path} -> {out_path}")


def docx2md_cmd(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, help="Word document to convert")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    polish: Annotated[Optional[bool], typer.Option("--polish/--no-polish", help="Polish extracted markdown with Gemini")] = None,
    ):
    """Extract markdown from a Word document; images become images/figure_<n>.png references."""
    settings = _settings(overrides={"output_dir": out, "polish": polish})
    log = LogBuffer(forward=echo_sink(settings.log_level))
    try:
        out_path = asyncio.run(run_docx2md(
            path, Path(settings.output_dir), log, make_polisher(settings),
        ))
    except Exception as e:
        _fail("Conversion failed", e)
    typer.echo(f"  {path} -> {out_path}")


def styles_cmd():
    """Print the Word style map used when extracting markdown."""
    for rule in DOCX_STYLE_MAP:
        typer.echo(rule)
