"""Input and settings exceptions: analysis targets, configuration values, unsafe archives."""

from pathlib import Path
from typing import Any, Optional, Union

from .base import CodeComplexityError


class ConfigurationError(CodeComplexityError):
    """Base class for errors in what the caller asked to analyze, or how."""


class InvalidPathError(ConfigurationError):
    """Raised when an analysis target or upload name cannot be analyzed."""

    def __init__(self, target: Union[str, Path], reason: str):
        super().__init__(
            f"Cannot analyze {target}: {reason}",
            details={"target": str(target), "reason": reason},
        )
        self.target = target
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """Raised when a merged configuration value fails AnalysisConfig validation."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration value {key}={value!r}",
            details={"key": key, "value": repr(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class SecurityError(ConfigurationError):
    """Raised when an archive member would resolve outside the archive root.

    Attributes:
        reason: What is wrong with the member name
        filepath: The offending member name as stored in the archive
    """

    def __init__(self, reason: str, filepath: Optional[str] = None):
        details = {"reason": reason}
        if filepath is not None:
            details["member"] = filepath
        super().__init__(f"Security violation: {reason}", details=details)
        self.reason = reason
        self.filepath = filepath
