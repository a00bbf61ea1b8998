"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from .. import __version__
from ..config import AnalysisConfig, load_config

console = Console(stderr=True)


def resolve_config(
    config: Optional[Path] = None,
    language: Optional[str] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
    **extra,
) -> AnalysisConfig:
    """Build configuration from CLI options."""
    overrides = dict(extra)
    if language is not None:
        overrides["language"] = language
    if workers is not None:
        overrides["workers"] = workers
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)


def version_callback(value: bool) -> None:
    if value:
        console.print(
            f"[bold cyan]Code Complexity Analyzer[/bold cyan] version [green]{__version__}[/green]"
        )
        raise typer.Exit(0)
