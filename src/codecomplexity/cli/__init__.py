"""CLI entry point: registers all subcommands."""

import typer

from ._common import version_callback

app = typer.Typer(
    name="codecomplexity",
    help="Code Complexity Analyzer - complexity, maintainability and duplication report",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.callback()
def root(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Measure cyclomatic complexity, Halstead volume, maintainability and duplication."""


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .serve import serve as _serve  # noqa: F401, E402


def main() -> None:
    """Console script entry point."""
    app()


__all__ = ["app", "main"]
