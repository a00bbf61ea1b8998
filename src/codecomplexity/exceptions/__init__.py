"""Exception hierarchy for Code Complexity Analyzer."""

from .analysis import (
    AnalysisError,
    AnalysisTimeoutError,
    ArchiveError,
    ArchiveTooLargeError,
    FileAccessError,
    HashingError,
    ParsingError,
    UnsupportedLanguageError,
)
from .base import CodeComplexityError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
    SecurityError,
)

__all__ = [
    "CodeComplexityError",
    "AnalysisError",
    "AnalysisTimeoutError",
    "ArchiveError",
    "ArchiveTooLargeError",
    "FileAccessError",
    "HashingError",
    "ParsingError",
    "UnsupportedLanguageError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
    "SecurityError",
]
