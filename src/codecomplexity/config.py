"""Configuration loading and management for Code Complexity Analyzer.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.codecomplexity.toml)
    3. Project config (./codecomplexity.toml)
    4. Explicit config file
    5. Environment variables (CODECOMPLEXITY_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, workers=4)
    >>> config.verbosity
    'verbose'
    >>> config.workers
    4
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_args, get_origin, get_type_hints

from .exceptions import CodeComplexityError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "CODECOMPLEXITY_"
CONFIG_FILE_NAME = "codecomplexity.toml"


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for an analysis run.

    Attributes:
        Source selection:
            language: Grammar used to parse every file of the run
            exclude_patterns: Glob patterns (relative paths) to skip
            max_file_size_mb: Files larger than this are not analyzed
            max_files: Upper bound on files collected from one target
            allow_hidden_files: Include files/directories starting with "."

        Performance:
            workers: Parallel workers (None = CPU count, capped at 8)
            parallel_threshold: Batches smaller than this run sequentially
            timeout_seconds: Deadline for the whole run (None = no deadline)

        Output control:
            verbosity: Logging verbosity level

        HTTP API:
            server_host: Interface the upload endpoint binds to
            server_port: Port the upload endpoint binds to
            max_upload_mb: Largest accepted upload
            max_total_mb: Largest total decoded size of the sources read from one archive
    """

    language: str = "java"
    exclude_patterns: list[str] = field(
        default_factory=lambda: [
            "target/*",
            "build/*",
            "out/*",
            "dist/*",
            "node_modules/*",
            "vendor/*",
            "venv/*",
            ".venv/*",
            "__pycache__/*",
            "*.generated.*",
        ]
    )
    max_file_size_mb: float = 10.0
    max_files: int = 10000
    allow_hidden_files: bool = False

    workers: Optional[int] = None
    parallel_threshold: int = 10
    timeout_seconds: Optional[float] = None

    verbosity: Verbosity = "normal"

    server_host: str = "127.0.0.1"
    server_port: int = 8080
    max_upload_mb: float = 50.0
    max_total_mb: float = 200.0

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.language:
            raise ValueError("language must not be empty")

        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.parallel_threshold < 1:
            raise ValueError("parallel_threshold must be at least 1")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        if self.max_file_size_mb <= 0:
            raise ValueError("max_file_size_mb must be positive")
        if self.max_files < 1:
            raise ValueError("max_files must be at least 1")

        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be one of quiet, normal, verbose")

        if not 0 < self.server_port < 65536:
            raise ValueError("server_port must be between 1 and 65535")
        if self.max_upload_mb <= 0:
            raise ValueError("max_upload_mb must be positive")
        if self.max_total_mb <= 0:
            raise ValueError("max_total_mb must be positive")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)

    @property
    def max_upload_bytes(self) -> int:
        """Get max upload size in bytes."""
        return int(self.max_upload_mb * 1024 * 1024)

    @property
    def max_total_bytes(self) -> int:
        """Get max decoded archive size in bytes."""
        return int(self.max_total_mb * 1024 * 1024)


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options keep file/env values.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        CodeComplexityError: If a config file is invalid or missing
        InvalidConfigError: If a merged value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / f".{CONFIG_FILE_NAME}"
    if global_config.exists():
        merged.update(_load_toml_file(global_config, "global config"))

    project_config = Path.cwd() / CONFIG_FILE_NAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise CodeComplexityError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file, "config file"))

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    unknown = sorted(set(merged) - set(AnalysisConfig.__dataclass_fields__))
    if unknown:
        raise CodeComplexityError(f"Invalid configuration: unknown keys {', '.join(unknown)}")

    try:
        return AnalysisConfig(**merged)
    except ValueError as e:
        key = str(e).split(" ", 1)[0]
        raise InvalidConfigError(key, merged.get(key), str(e))


def _load_env_vars() -> dict[str, Any]:
    """Read CODECOMPLEXITY_<FIELD> variables for every AnalysisConfig field.

    Values are converted by the field's annotation: booleans accept
    true/false/yes/no/on/off/1/0, Optional fields accept an empty string or
    "none" for None, and list fields (exclude_patterns) are comma-separated.
    """
    annotations = get_type_hints(AnalysisConfig)
    found: dict[str, Any] = {}
    for name in AnalysisConfig.__dataclass_fields__:
        env_key = ENV_PREFIX + name.upper()
        raw = os.environ.get(env_key)
        if raw is None:
            continue
        try:
            found[name] = _convert_env_value(raw, annotations[name])
        except ValueError as e:
            raise CodeComplexityError(f"Invalid {env_key}: {e}")
    return found


_TRUE_WORDS = frozenset({"true", "1", "yes", "on"})
_FALSE_WORDS = frozenset({"false", "0", "no", "off"})


def _convert_env_value(raw: str, annotation: Any) -> Any:
    """Convert one environment string according to a field annotation.

    Raises:
        ValueError: If the string does not fit the annotation
    """
    args = get_args(annotation)
    if type(None) in args:
        if raw.strip().lower() in ("", "none"):
            return None
        annotation = next(a for a in args if a is not type(None))

    origin = get_origin(annotation)
    if origin is list:
        return [item.strip() for item in raw.split(",") if item.strip()]
    if origin is Literal:
        return raw.strip()

    if annotation is bool:
        word = raw.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ValueError(f"expected a boolean, got {raw!r}")
    if annotation in (int, float):
        return annotation(raw.strip())
    return raw


def _load_toml_file(path: Path, label: str) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        CodeComplexityError: If the file cannot be read or parsed
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise CodeComplexityError(f"Invalid {label} '{path}': {e}")
