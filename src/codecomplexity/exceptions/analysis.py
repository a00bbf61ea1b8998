"""Analysis-related exceptions: file access, parsing, hashing, deadlines."""

from pathlib import Path
from typing import List, Union

from .base import CodeComplexityError

PathLike = Union[str, Path]


class AnalysisError(CodeComplexityError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: PathLike, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when file content cannot be parsed."""

    def __init__(self, filepath: PathLike, language: str, reason: str):
        super().__init__(
            f"Failed to parse {language} file: {filepath}",
            details={"filepath": str(filepath), "language": language, "reason": reason},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason


class HashingError(AnalysisError):
    """Raised when a method body cannot be digested for duplicate detection."""

    def __init__(self, filepath: PathLike, method_name: str, reason: str):
        super().__init__(
            f"Failed to hash method {method_name} in {filepath}",
            details={"filepath": str(filepath), "method": method_name, "reason": reason},
        )
        self.filepath = filepath
        self.method_name = method_name
        self.reason = reason


class UnsupportedLanguageError(AnalysisError):
    """Raised when attempting to analyze an unsupported language."""

    def __init__(self, language: str, supported_languages: List[str]):
        super().__init__(
            f"Unsupported language: {language}",
            details={"language": language, "supported": ", ".join(supported_languages)},
        )
        self.language = language
        self.supported_languages = supported_languages


class AnalysisTimeoutError(AnalysisError):
    """Raised when the caller's deadline expires before every file finished."""

    def __init__(self, timeout_seconds: float, pending: int):
        super().__init__(
            f"Analysis did not finish within {timeout_seconds}s",
            details={"timeout_seconds": str(timeout_seconds), "pending_files": str(pending)},
        )
        self.timeout_seconds = timeout_seconds
        self.pending = pending


class ArchiveError(AnalysisError):
    """Raised when an uploaded or on-disk archive cannot be read."""

    def __init__(self, archive: PathLike, reason: str):
        super().__init__(
            f"Cannot read archive: {archive}",
            details={"archive": str(archive), "reason": reason},
        )
        self.archive = archive
        self.reason = reason


class ArchiveTooLargeError(ArchiveError):
    """Raised when an archive's members would decode past the configured total."""

    def __init__(self, archive: PathLike, limit_bytes: int):
        super().__init__(archive, f"decoded sources exceed {limit_bytes} bytes")
        self.limit_bytes = limit_bytes
