"""
Logging configuration for Code Complexity Analyzer.

Everything is logged to stderr through rich so that JSON and CSV reports on
stdout stay machine-readable. Verbosity comes either from CLI flags
(setup_logging) or from a resolved AnalysisConfig (configure_logging).
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "codecomplexity"

VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

# Dependency loggers that stay at WARNING unless running verbose
_DEPENDENCY_LOGGERS = ("multipart", "python_multipart", "uvicorn.access")

_FILE_FORMAT = "%(asctime)s %(threadName)s %(name)s %(levelname)s %(message)s"


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Configure logging from CLI flags; quiet wins over verbose.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to append logs to

    Returns:
        Configured logger instance for codecomplexity
    """
    if quiet:
        verbosity = "quiet"
    elif verbose:
        verbosity = "verbose"
    else:
        verbosity = "normal"
    return configure_logging(verbosity, log_file)


def configure_logging(
    verbosity: str = "normal", log_file: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Install the rich stderr handler (and optional file handler) on the root logger.

    Calling it again replaces the previous handlers, so a CLI command can
    first honour its flags and later the verbosity of the merged config.
    """
    level = VERBOSITY_LEVELS.get(verbosity, logging.WARNING)
    verbose = level == logging.DEBUG

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    for name in _DEPENDENCY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger namespaced under codecomplexity.

    Args:
        name: Module name (e.g., 'codecomplexity.api' or just 'api');
              None returns the package root logger
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
