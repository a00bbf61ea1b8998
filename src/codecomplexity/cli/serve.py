"""Serve command: run the HTTP upload API with uvicorn."""

from pathlib import Path
from typing import Optional

import typer

from ..exceptions import CodeComplexityError
from ..logging_config import configure_logging, setup_logging
from . import app
from ._common import console, resolve_config


@app.command()
def serve(
    host: Optional[str] = typer.Option(
        None,
        "--host",
        help="Interface to bind (default: 127.0.0.1)",
    ),
    port: Optional[int] = typer.Option(
        None,
        "--port",
        "-p",
        help="Port to bind (default: 8080)",
        min=1,
        max=65535,
    ),
    language: Optional[str] = typer.Option(
        None,
        "--language",
        "-l",
        help="Source language of uploads (default: java)",
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
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
):
    """
    Serve POST /api/v1/analyze and GET /api/v1/health.

    [bold cyan]Example:[/bold cyan]

      codecomplexity serve --port 8080

      curl -F file=@project.zip http://127.0.0.1:8080/api/v1/analyze
    """
    import uvicorn

    from ..server import create_app

    logger = setup_logging(verbose=verbose)

    try:
        settings = resolve_config(
            config=config,
            language=language,
            verbose=verbose,
            server_host=host,
            server_port=port,
        )
        logger = configure_logging(settings.verbosity)
        server_app = create_app(settings)
    except CodeComplexityError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        f"[bold cyan]Code Complexity Analyzer[/bold cyan] listening on "
        f"http://{settings.server_host}:{settings.server_port}/api/v1"
    )
    uvicorn.run(
        server_app,
        host=settings.server_host,
        port=settings.server_port,
        log_level="debug" if settings.verbosity == "verbose" else "warning",
    )
