"""Public API for Code Complexity Analyzer.

Example:
    >>> from codecomplexity import analyze
    >>>
    >>> result = analyze("/path/to/project")
    >>> result.total_files, result.average_maintainability
    (42, 71.3)
    >>>
    >>> # Python sources, four workers
    >>> result = analyze("/path/to/project", language="python", workers=4)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .analysis.engine import AnalysisEngine
from .config import AnalysisConfig, load_config
from .logging_config import get_logger
from .models import AnalysisResult
from .scanning.intake import collect_sources

logger = get_logger(__name__)


def analyze(
    target: Union[str, Path] = ".",
    config_file: Optional[Path] = None,
    config: Optional[AnalysisConfig] = None,
    **overrides,
) -> AnalysisResult:
    """Analyze a directory, .zip archive or single source file.

    Pipeline:
    1. Load configuration (auto-discover TOML + env + overrides), unless
       a ready AnalysisConfig is given
    2. Collect decoded sources from the target
    3. Run the engine (parse, measure, detect duplicates, summarize)

    Args:
        target: Directory, .zip archive or source file
        config_file: Optional explicit config file path
        config: Pre-built configuration; skips loading when given
        **overrides: Configuration overrides (e.g., language="python", workers=4)

    Returns:
        The fully resolved AnalysisResult

    Raises:
        CodeComplexityError: If configuration or the target is invalid
    """
    if config is None:
        config = load_config(config_file=config_file, **overrides)
    path = Path(target)

    logger.info(f"Starting {config.language} analysis of {path}")
    sources = collect_sources(path, config)
    if not sources:
        logger.warning(f"No {config.language} sources found in {path}")

    engine = AnalysisEngine.from_config(config)
    return engine.analyze(sources)
