"""Content-addressed duplicate method detection.

Two-phase use:
    1. record: every file's methods are hashed (whitespace-normalized body,
       SHA-1) and appended to a shared index. Safe under concurrent writers.
    2. resolve: after all writers finished, the index is sealed and each
       hash seen in two or more files links those files pairwise.

Only exact text equality after whitespace normalization counts; renamed
identifiers or reordered statements are not duplicates.
"""

from __future__ import annotations

import hashlib
import logging
import re
from dataclasses import dataclass, field
from itertools import combinations
from threading import Lock
from typing import Iterable

from ..exceptions import HashingError

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_body(text: str) -> str:
    """Collapse every whitespace run to one space and trim the ends."""
    return _WHITESPACE.sub(" ", text).strip()


def content_hash(normalized: str) -> str:
    """SHA-1 hex digest of the UTF-8 encoded text."""
    return hashlib.sha1(normalized.encode("utf-8")).hexdigest()


@dataclass(frozen=True, order=True)
class Occurrence:
    """One method that produced a given normalized body."""

    file_path: str
    method_name: str
    line: int = 0  # first line of the declaration, 0 if unknown


@dataclass
class DuplicateHashEntry:
    """All occurrences sharing one content hash."""

    digest: str
    occurrences: list[Occurrence] = field(default_factory=list)

    @property
    def file_paths(self) -> set[str]:
        return {occ.file_path for occ in self.occurrences}

    @property
    def is_duplicate(self) -> bool:
        return len(self.occurrences) >= 2


class DuplicateIndex:
    """Thread-safe map from normalized-body hash to occurrences.

    Once sealed, further records are ignored; this is how work abandoned
    after a deadline is kept out of the result.
    """

    def __init__(self) -> None:
        self._entries: dict[str, DuplicateHashEntry] = {}
        self._lock = Lock()
        self._sealed = False

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def sealed(self) -> bool:
        return self._sealed

    def digest(self, source: str, occurrence: Occurrence) -> str:
        """Hash a method's raw text.

        Raises:
            HashingError: If the text cannot be encoded
        """
        try:
            return content_hash(normalize_body(source))
        except (UnicodeEncodeError, ValueError) as e:
            raise HashingError(occurrence.file_path, occurrence.method_name, str(e))

    def record(self, source: str, occurrence: Occurrence) -> str | None:
        """Hash *source* and register *occurrence* under it.

        Returns:
            The digest, or None if hashing failed or the index is sealed
        """
        try:
            digest = self.digest(source, occurrence)
        except HashingError as e:
            logger.warning(f"{e}; method contributes no duplication signal")
            return None
        if not self.record_digests([(digest, occurrence)]):
            return None
        return digest

    def record_digests(self, items: Iterable[tuple[str, Occurrence]]) -> bool:
        """Register pre-computed digests atomically.

        All items are added under one lock acquisition, so a file's
        occurrences appear together or not at all.

        Returns:
            False if the index was already sealed and nothing was recorded
        """
        batch = list(items)
        with self._lock:
            if self._sealed:
                return False
            for digest, occurrence in batch:
                entry = self._entries.get(digest)
                if entry is None:
                    entry = DuplicateHashEntry(digest)
                    self._entries[digest] = entry
                entry.occurrences.append(occurrence)
        return True

    def seal(self) -> None:
        """Stop accepting records. Idempotent."""
        with self._lock:
            self._sealed = True

    def entries(self) -> list[DuplicateHashEntry]:
        """Snapshot of all entries."""
        with self._lock:
            return [
                DuplicateHashEntry(e.digest, list(e.occurrences)) for e in self._entries.values()
            ]

    def duplicate_groups(self) -> list[DuplicateHashEntry]:
        """Entries with two or more occurrences, sorted by digest."""
        groups = [e for e in self.entries() if e.is_duplicate]
        for group in groups:
            group.occurrences.sort()
        return sorted(groups, key=lambda e: e.digest)

    def resolve_duplicate_groups(self) -> dict[str, set[str]]:
        """Map each file path to the other files it shares a method body with.

        Seals the index first. Links are symmetric and never include the
        file itself; files without duplicates are absent from the mapping.
        """
        self.seal()
        links: dict[str, set[str]] = {}
        for entry in self.entries():
            if not entry.is_duplicate:
                continue
            for a, b in combinations(sorted(entry.file_paths), 2):
                links.setdefault(a, set()).add(b)
                links.setdefault(b, set()).add(a)
        return links
