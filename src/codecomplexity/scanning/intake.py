"""Source intake: turn a directory, archive or upload into SourceFile pairs.

Accepted targets:
    - a directory, walked for the configured language's extensions
    - a .zip archive, read in memory (nothing is extracted to disk)
    - a single source file

Paths handed to the engine are relative to the target and use forward
slashes. Files that are not valid UTF-8 are skipped with a warning.
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path, PurePosixPath
from typing import Iterable, Optional

from ..config import AnalysisConfig
from ..exceptions import (
    ArchiveError,
    ArchiveTooLargeError,
    FileAccessError,
    InvalidPathError,
    SecurityError,
)
from ..models import SourceFile
from .languages import LanguageConfig, get_language_config

logger = logging.getLogger(__name__)


def collect_sources(target: Path, config: AnalysisConfig) -> list[SourceFile]:
    """Collect decoded source files from *target*.

    Raises:
        InvalidPathError: If target does not exist or is not analyzable
        ArchiveError: If target is a corrupt archive
        ArchiveTooLargeError: If an archive decodes past max_total_mb
        SecurityError: If an archive member escapes the archive root
    """
    language = get_language_config(config.language)
    if not target.exists():
        raise InvalidPathError(target, "path does not exist")

    if target.is_dir():
        return _collect_directory(target, language, config)

    if target.suffix.lower() == ".zip":
        try:
            data = target.read_bytes()
        except OSError as e:
            raise FileAccessError(target, str(e))
        return sources_from_archive(data, target.name, config)

    if language.matches(target.name):
        try:
            data = target.read_bytes()
        except OSError as e:
            raise FileAccessError(target, str(e))
        text = _decode(data, target.name)
        return [SourceFile(target.name, text)] if text is not None else []

    raise InvalidPathError(target, f"not a directory, .zip archive or {language.name} source file")


def sources_from_upload(filename: str, data: bytes, config: AnalysisConfig) -> list[SourceFile]:
    """Collect sources from uploaded bytes: a .zip archive or one source file."""
    name = PurePosixPath(filename.replace("\\", "/")).name
    if not name:
        raise InvalidPathError(Path(filename), "upload has no file name")
    if name.lower().endswith(".zip"):
        return sources_from_archive(data, name, config)

    language = get_language_config(config.language)
    if not language.matches(name):
        logger.info(f"Upload {name} is not a {language.name} source file")
        return []
    text = _decode(data, name)
    return [SourceFile(name, text)] if text is not None else []


def sources_from_archive(data: bytes, archive_name: str, config: AnalysisConfig) -> list[SourceFile]:
    """Read matching members of a zip archive held in memory."""
    language = get_language_config(config.language)
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as e:
        raise ArchiveError(archive_name, str(e))

    sources: list[SourceFile] = []
    # Declared sizes bound what zipfile will inflate for each member
    decoded_total = 0
    with archive:
        for info in archive.infolist():
            if info.is_dir():
                continue
            rel_path = _safe_member_path(info.filename)
            if not _accepted(rel_path, info.file_size, language, config):
                continue
            if len(sources) >= config.max_files:
                logger.warning(f"{archive_name}: stopping at max_files={config.max_files}")
                break
            decoded_total += info.file_size
            if decoded_total > config.max_total_bytes:
                raise ArchiveTooLargeError(archive_name, config.max_total_bytes)
            try:
                raw = archive.read(info)
            except (zipfile.BadZipFile, OSError) as e:
                raise ArchiveError(archive_name, f"{info.filename}: {e}")
            text = _decode(raw, rel_path)
            if text is not None:
                sources.append(SourceFile(rel_path, text))

    logger.info(f"{archive_name}: {len(sources)} {language.name} files")
    return sources


def _collect_directory(
    root: Path, language: LanguageConfig, config: AnalysisConfig
) -> list[SourceFile]:
    sources: list[SourceFile] = []
    for path in sorted(root.rglob("*")):
        if not path.is_file() or path.is_symlink():
            continue
        rel_path = path.relative_to(root).as_posix()
        try:
            size = path.stat().st_size
        except OSError as e:
            logger.warning(f"Cannot stat {rel_path}: {e}")
            continue
        if not _accepted(rel_path, size, language, config):
            continue
        if len(sources) >= config.max_files:
            logger.warning(f"{root}: stopping at max_files={config.max_files}")
            break
        try:
            data = path.read_bytes()
        except OSError as e:
            logger.warning(f"Cannot read {rel_path}: {e}")
            continue
        text = _decode(data, rel_path)
        if text is not None:
            sources.append(SourceFile(rel_path, text))

    logger.info(f"{root}: {len(sources)} {language.name} files")
    return sources


def _safe_member_path(name: str) -> str:
    """Normalize an archive member name, rejecting absolute or escaping paths."""
    normalized = name.replace("\\", "/")
    pure = PurePosixPath(normalized)
    if not pure.parts:
        raise SecurityError("empty member name in archive", filepath=name)
    if pure.is_absolute() or ":" in pure.parts[0]:
        raise SecurityError("absolute path in archive", filepath=name)
    if ".." in pure.parts:
        raise SecurityError("path traversal in archive", filepath=name)
    return pure.as_posix()


def _accepted(
    rel_path: str, size: int, language: LanguageConfig, config: AnalysisConfig
) -> bool:
    if not language.matches(rel_path):
        return False
    pure = PurePosixPath(rel_path)
    directories = pure.parts[:-1]
    if any(part in language.skip_dirs for part in directories):
        return False
    if not config.allow_hidden_files and any(part.startswith(".") for part in pure.parts):
        return False
    if _excluded(pure, config.exclude_patterns):
        return False
    if size > config.max_file_size_bytes:
        logger.debug(f"Skipping {rel_path}: {size} bytes exceeds max_file_size_mb")
        return False
    return True


def _excluded(path: PurePosixPath, patterns: Iterable[str]) -> bool:
    return any(path.match(pattern) for pattern in patterns)


def _decode(data: bytes, path: str) -> Optional[str]:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning(f"Skipping {path}: not valid UTF-8 ({e.reason} at byte {e.start})")
        return None
