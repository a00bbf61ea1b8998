"""AnalysisEngine: per-file metrics, duplicate resolution, project summary.

One pass over the input:

    for each file (in parallel):
        parse → for each method: complexity, volume, body hash
        fold into FileMetrics, record the file's hashes in the DuplicateIndex
    barrier: every file finished, index sealed
    resolve duplicate links → attach to FileMetrics → project averages

A file that fails to parse yields a failed FileOutcome and is left out of
the totals; it never aborts the run.
"""

from __future__ import annotations

import logging
import os
import re
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import replace
from typing import Iterable, Optional, Union

import numpy as np

from ..config import AnalysisConfig
from ..exceptions import AnalysisTimeoutError, HashingError, ParsingError
from ..metrics.complexity import count_decision_points
from ..metrics.duplication import DuplicateIndex, Occurrence
from ..metrics.halstead import lexical_volume
from ..metrics.maintainability import maintainability_index
from ..models import (
    AnalysisResult,
    DuplicateGroup,
    FileMetrics,
    FileOutcome,
    SkippedFile,
    SourceFile,
)
from ..scanning.normalizer import SourceParser, TreeSitterNormalizer

logger = logging.getLogger(__name__)

# Default worker count: use CPU count, capped at 8
_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

SourceLike = Union[SourceFile, tuple[str, str]]


def count_lines(text: str) -> int:
    """Number of lines; a trailing partial line counts, a trailing newline does not add one."""
    if not text:
        return 0
    breaks = len(_LINE_BREAK.findall(text))
    if text.endswith(("\n", "\r")):
        return breaks
    return breaks + 1


def summarize(
    files: Iterable[FileMetrics],
    skipped: Iterable[SkippedFile] = (),
    duplicate_groups: Iterable[DuplicateGroup] = (),
) -> AnalysisResult:
    """Reduce file metrics into the project-level result.

    Averages are 0.0 for an empty set.
    """
    ordered = tuple(sorted(files, key=lambda f: f.path))
    if ordered:
        complexity = np.fromiter((f.cyclomatic_complexity for f in ordered), dtype=float)
        maintainability = np.fromiter((f.maintainability_index for f in ordered), dtype=float)
        average_cyclomatic = float(complexity.mean())
        average_maintainability = float(maintainability.mean())
    else:
        average_cyclomatic = 0.0
        average_maintainability = 0.0

    return AnalysisResult(
        files=ordered,
        total_files=len(ordered),
        total_lines=sum(f.lines for f in ordered),
        average_cyclomatic=average_cyclomatic,
        average_maintainability=average_maintainability,
        skipped_files=tuple(sorted(skipped, key=lambda s: s.path)),
        duplicate_groups=tuple(duplicate_groups),
    )


class AnalysisEngine:
    """Computes an AnalysisResult from decoded source files.

    Usage:
        engine = AnalysisEngine(TreeSitterNormalizer("java"))
        result = engine.analyze([SourceFile("A.java", text_a), ...])

    Attributes:
        parser: Parsing collaborator for the run's language
        max_workers: Thread pool size for parallel processing
        parallel_threshold: Batches smaller than this run sequentially
        timeout_seconds: Optional deadline for the whole run
    """

    def __init__(
        self,
        parser: SourceParser,
        max_workers: Optional[int] = None,
        parallel_threshold: int = 10,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self.parser = parser
        self.max_workers = max_workers or _DEFAULT_WORKERS
        self.parallel_threshold = parallel_threshold
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_config(
        cls, config: AnalysisConfig, parser: Optional[SourceParser] = None
    ) -> AnalysisEngine:
        """Build an engine (and a tree-sitter parser, unless given) from config."""
        return cls(
            parser or TreeSitterNormalizer(config.language),
            max_workers=config.workers,
            parallel_threshold=config.parallel_threshold,
            timeout_seconds=config.timeout_seconds,
        )

    def analyze(self, sources: Iterable[SourceLike]) -> AnalysisResult:
        """Analyze every source and return the resolved result.

        Raises:
            AnalysisTimeoutError: If timeout_seconds elapses first
        """
        files = self._unique(sources)
        index = DuplicateIndex()

        started = time.monotonic()
        outcomes = self._process_all(files, index)

        links = index.resolve_duplicate_groups()
        groups = [
            DuplicateGroup(entry.digest, tuple(entry.occurrences))
            for entry in index.duplicate_groups()
        ]

        metrics: list[FileMetrics] = []
        skipped: list[SkippedFile] = []
        for outcome in outcomes:
            if outcome.metrics is None:
                skipped.append(SkippedFile(outcome.path, outcome.error or "unknown error"))
                continue
            linked = tuple(sorted(links.get(outcome.path, ())))
            metrics.append(replace(outcome.metrics, duplicated_with=linked))

        result = summarize(metrics, skipped, groups)
        logger.info(
            f"Analyzed {result.total_files} files ({len(skipped)} skipped, "
            f"{len(groups)} duplicate groups) in {time.monotonic() - started:.2f}s"
        )
        return result

    def process_file(self, source: SourceFile, index: DuplicateIndex) -> FileOutcome:
        """Parse one file, measure its methods and record their hashes.

        Hashes are recorded in one batch after every method was measured,
        so work abandoned midway never reaches the index.
        """
        try:
            parsed = self.parser.parse(source.text, source.path)
        except ParsingError as e:
            logger.warning(f"Skipping {source.path}: {e.reason}")
            return FileOutcome(source.path, error=e.reason)
        except Exception as e:
            logger.warning(f"Skipping {source.path}: parser failed: {e}")
            return FileOutcome(source.path, error=f"parser failed: {e}")

        complexity = 0
        volume = 0.0
        digests: list[tuple[str, Occurrence]] = []
        for method in parsed.methods:
            method_complexity = count_decision_points(method.tree)
            method_volume = lexical_volume(method.source)
            logger.debug(
                f"{source.path}:{method.start_line}-{method.end_line} {method.name}: "
                f"cc={method_complexity} volume={method_volume:.1f}"
            )
            complexity += method_complexity
            volume += method_volume
            occurrence = Occurrence(source.path, method.name, method.start_line)
            try:
                digests.append((index.digest(method.source, occurrence), occurrence))
            except HashingError as e:
                logger.warning(f"{e}; method contributes no duplication signal")

        lines = count_lines(source.text)
        complexity = max(1, complexity)
        metrics = FileMetrics(
            path=source.path,
            lines=lines,
            cyclomatic_complexity=complexity,
            halstead_volume=volume,
            maintainability_index=maintainability_index(volume, complexity, lines),
            method_count=len(parsed.methods),
        )

        if not index.record_digests(digests):
            return FileOutcome(source.path, error="abandoned after deadline")
        return FileOutcome(source.path, metrics=metrics)

    def _unique(self, sources: Iterable[SourceLike]) -> list[SourceFile]:
        seen: set[str] = set()
        files: list[SourceFile] = []
        for item in sources:
            source = item if isinstance(item, SourceFile) else SourceFile(*item)
            path = source.path.replace("\\", "/")
            if path in seen:
                logger.warning(f"Duplicate path {path} ignored")
                continue
            seen.add(path)
            files.append(source if path == source.path else SourceFile(path, source.text))
        return files

    def _process_all(self, files: list[SourceFile], index: DuplicateIndex) -> list[FileOutcome]:
        if len(files) < self.parallel_threshold or self.max_workers == 1:
            return self._process_sequential(files, index)
        return self._process_parallel(files, index)

    def _process_sequential(
        self, files: list[SourceFile], index: DuplicateIndex
    ) -> list[FileOutcome]:
        deadline = None
        if self.timeout_seconds is not None:
            deadline = time.monotonic() + self.timeout_seconds

        outcomes: list[FileOutcome] = []
        for position, source in enumerate(files):
            if deadline is not None and time.monotonic() > deadline:
                index.seal()
                raise AnalysisTimeoutError(self.timeout_seconds, len(files) - position)
            try:
                outcomes.append(self.process_file(source, index))
            except Exception as e:
                logger.exception(f"Error analyzing {source.path}")
                outcomes.append(FileOutcome(source.path, error=str(e)))
        return outcomes

    def _process_parallel(
        self, files: list[SourceFile], index: DuplicateIndex
    ) -> list[FileOutcome]:
        outcomes: list[FileOutcome] = []
        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        futures = {executor.submit(self.process_file, source, index): source for source in files}
        timed_out = False
        try:
            for future in as_completed(futures, timeout=self.timeout_seconds):
                source = futures[future]
                try:
                    outcomes.append(future.result())
                except Exception as e:
                    logger.exception(f"Error analyzing {source.path}")
                    outcomes.append(FileOutcome(source.path, error=str(e)))
        except TimeoutError:
            timed_out = True
            index.seal()
            pending = sum(1 for future in futures if not future.done())
            raise AnalysisTimeoutError(self.timeout_seconds, pending) from None
        finally:
            executor.shutdown(wait=not timed_out, cancel_futures=timed_out)
        return outcomes
