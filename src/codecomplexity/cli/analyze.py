"""Analyze command: report metrics for a directory, archive or file."""

from pathlib import Path
from typing import Optional

import click
import typer

from ..analysis.engine import AnalysisEngine
from ..exceptions import CodeComplexityError
from ..formatters import FORMATTERS, get_formatter
from ..logging_config import configure_logging, setup_logging
from ..models import AnalysisResult
from ..scanning.intake import collect_sources
from . import app
from ._common import console, resolve_config


@app.command()
def analyze(
    target: Path = typer.Argument(
        Path("."),
        help="Directory, .zip archive or single source file (default: current directory)",
        exists=True,
        readable=True,
    ),
    output_format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format",
        click_type=click.Choice(sorted(FORMATTERS), case_sensitive=False),
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the report to a file instead of stdout",
        dir_okay=False,
    ),
    language: Optional[str] = typer.Option(
        None,
        "--language",
        "-l",
        help="Source language (default: java)",
    ),
    fail_under: Optional[float] = typer.Option(
        None,
        "--fail-under",
        help="Exit 1 if average maintainability is below this score",
        min=0.0,
        max=100.0,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel workers (default: auto-detect)",
        min=1,
        max=32,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
):
    """
    Report cyclomatic complexity, Halstead volume, maintainability and duplication.

    [bold cyan]Examples:[/bold cyan]

      codecomplexity analyze src/

      codecomplexity analyze project.zip --format json

      codecomplexity analyze . --language python --fail-under 40
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(
            config=config,
            language=language,
            workers=workers,
            verbose=verbose,
            quiet=quiet,
        )
        logger = configure_logging(settings.verbosity)

        sources = collect_sources(target, settings)
        if not sources:
            console.print(f"[yellow]No {settings.language} sources found in {target}[/yellow]")

        engine = AnalysisEngine.from_config(settings)
        result = engine.analyze(sources)

        _emit(result, output_format.lower(), output)

        if fail_under is not None and result.total_files and (
            result.average_maintainability < fail_under
        ):
            console.print(
                f"[red]--fail-under {fail_under}:[/red] average maintainability "
                f"{result.average_maintainability:.2f}"
            )
            raise typer.Exit(1)

    except typer.Exit:
        raise

    except CodeComplexityError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error during analysis")
        console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


def _emit(result: AnalysisResult, output_format: str, output: Optional[Path]) -> None:
    formatter = get_formatter(output_format)
    if output is None:
        formatter.render(result)
        return
    output.write_text(formatter.format(result), encoding="utf-8")
    console.print(f"[green]Report written to[/green] {output}")
