"""Data models for Code Complexity Analyzer"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .metrics.duplication import Occurrence


@dataclass(frozen=True)
class SourceFile:
    """Decoded text of one file handed to the engine."""

    path: str  # relative to the analysis root, forward slashes
    text: str


@dataclass(frozen=True)
class FileMetrics:
    """Metrics for a single successfully parsed file"""

    path: str
    lines: int
    cyclomatic_complexity: int
    halstead_volume: float
    maintainability_index: float
    duplicated_with: tuple[str, ...] = ()
    method_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "lines": self.lines,
            "cyclomaticComplexity": self.cyclomatic_complexity,
            "halsteadVolume": self.halstead_volume,
            "maintainabilityIndex": self.maintainability_index,
            "duplicatedWith": list(self.duplicated_with),
        }


@dataclass(frozen=True)
class SkippedFile:
    """A file left out of the result because it could not be parsed."""

    path: str
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "reason": self.reason}


@dataclass(frozen=True)
class DuplicateGroup:
    """Methods sharing one normalized body."""

    digest: str
    occurrences: tuple[Occurrence, ...]

    @property
    def files(self) -> list[str]:
        return sorted({occ.file_path for occ in self.occurrences})

    def to_dict(self) -> dict[str, Any]:
        return {
            "hash": self.digest,
            "occurrences": [
                {"path": occ.file_path, "method": occ.method_name, "line": occ.line}
                for occ in self.occurrences
            ],
        }


@dataclass(frozen=True)
class FileOutcome:
    """Result of processing one file: metrics on success, a reason on failure.

    ``metrics.duplicated_with`` is always empty here; links are only known
    once every file has been processed.
    """

    path: str
    metrics: Optional[FileMetrics] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.metrics is not None


@dataclass(frozen=True)
class AnalysisResult:
    """Output of one analysis run.

    Attributes:
        files: Metrics of every file that parsed, sorted by path
        total_files: Number of entries in files
        total_lines: Sum of lines over files
        average_cyclomatic: Mean file complexity (0.0 if no files)
        average_maintainability: Mean file maintainability (0.0 if no files)
        skipped_files: Files that failed to parse, with the reason
        duplicate_groups: Method-level duplicate groups behind the file links
    """

    files: tuple[FileMetrics, ...] = ()
    total_files: int = 0
    total_lines: int = 0
    average_cyclomatic: float = 0.0
    average_maintainability: float = 0.0
    skipped_files: tuple[SkippedFile, ...] = ()
    duplicate_groups: tuple[DuplicateGroup, ...] = field(default=())

    def get(self, path: str) -> Optional[FileMetrics]:
        """Metrics for *path*, or None if it is not part of the result."""
        for fm in self.files:
            if fm.path == path:
                return fm
        return None

    def worst_files(self, n: int = 10) -> list[FileMetrics]:
        """The n least maintainable files, ties broken by complexity."""
        ranked = sorted(
            self.files, key=lambda f: (f.maintainability_index, -f.cyclomatic_complexity, f.path)
        )
        return ranked[:n]

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": [f.to_dict() for f in self.files],
            "totalFiles": self.total_files,
            "totalLines": self.total_lines,
            "averageCyclomatic": self.average_cyclomatic,
            "averageMaintainability": self.average_maintainability,
            "skippedFiles": [s.to_dict() for s in self.skipped_files],
            "duplicateGroups": [g.to_dict() for g in self.duplicate_groups],
        }
