"""
High-level orchestrator for outline extraction.

This module discovers Rust source files in a crate or Cargo workspace,
feeds each file through a fresh ``OutlineScanner`` and collects the
resulting outlines.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

from core.cargo_workspace import read_workspace_members
from core.outline_config import OutlineConfig
from core.structured_logging import file_scope
from outline.config import CARGO_MANIFEST, DEFAULT_SOURCE_DIR
from outline.models import FileOutline, OutlineEntry, SourceLine
from outline.scanner import extract_outline

logger = logging.getLogger(__name__)


@dataclass
class DiscoveryResult:
    """Files selected for outlining.

    Attributes:
        root: Absolute project root
        files: Sorted absolute paths of source files
        is_workspace: Whether files came from Cargo workspace members
    """

    root: str
    files: List[str] = field(default_factory=list)
    is_workspace: bool = False


class ExtractionStats:
    """Statistics for an outline run."""

    def __init__(self):
        self.files_processed = 0
        self.files_failed = 0
        self.entries_extracted = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "files_processed": self.files_processed,
            "files_failed": self.files_failed,
            "entries_extracted": self.entries_extracted,
        }

    def __str__(self) -> str:
        return (
            f"ExtractionStats(processed={self.files_processed}, "
            f"failed={self.files_failed}, entries={self.entries_extracted})"
        )


def _walk_source_files(directory: str, config: OutlineConfig) -> List[str]:
    found = []
    for root, dirs, files in os.walk(directory):
        # Skip hidden directories and build output
        dirs[:] = [
            d for d in dirs if not d.startswith(".") and d not in config.exclude_dirs
        ]
        for name in files:
            if os.path.splitext(name)[1] in config.extensions:
                found.append(os.path.join(root, name))
    return found


def discover_source_files(
    root: str, config: Optional[OutlineConfig] = None
) -> DiscoveryResult:
    """Discover the source files to outline under ``root``.

    When ``root/Cargo.toml`` declares workspace members, every member
    directory is searched recursively. Otherwise only the top level of
    ``root/src`` is used.

    Args:
        root: Project root directory.
        config: Discovery settings; defaults apply when None.

    Returns:
        A ``DiscoveryResult`` with sorted absolute file paths.

    Raises:
        FileNotFoundError: If ``root`` is not a directory.
    """
    config = config or OutlineConfig()
    root = os.path.abspath(root)
    if not os.path.isdir(root):
        raise FileNotFoundError(f"Directory not found: {root}")

    members = read_workspace_members(os.path.join(root, CARGO_MANIFEST))
    if members:
        logger.info("Discovering sources in %d workspace members", len(members))
        files = []
        for member in members:
            member_dir = os.path.join(root, member)
            if not os.path.isdir(member_dir):
                logger.warning("Workspace member directory not found: %s", member_dir)
                continue
            files.extend(_walk_source_files(member_dir, config))
        result = DiscoveryResult(root=root, files=sorted(files), is_workspace=True)
    else:
        src_dir = os.path.join(root, DEFAULT_SOURCE_DIR)
        files = []
        if os.path.isdir(src_dir):
            for name in os.listdir(src_dir):
                path = os.path.join(src_dir, name)
                if os.path.isfile(path) and os.path.splitext(name)[1] in config.extensions:
                    files.append(path)
        else:
            logger.warning(
                "No workspace members and no %s directory in %s",
                DEFAULT_SOURCE_DIR,
                root,
            )
        result = DiscoveryResult(root=root, files=sorted(files), is_workspace=False)

    logger.info("Found %d source files", len(result.files))
    return result


def iter_source_lines(file_path: str) -> Iterator[SourceLine]:
    """Yield the 1-indexed lines of a file without line terminators.

    Undecodable bytes are replaced rather than rejected.
    """
    with open(file_path, "r", encoding="utf-8", errors="replace", newline="\n") as f:
        for number, raw in enumerate(f, start=1):
            if raw.endswith("\n"):
                raw = raw[:-1]
            if raw.endswith("\r"):
                raw = raw[:-1]
            yield SourceLine(number=number, text=raw)


def extract_file(file_path: str) -> List[OutlineEntry]:
    """Extract all outline entries from a single source file.

    Args:
        file_path: Absolute or relative path to the file.

    Returns:
        Entries in ascending start-line order; empty when nothing is
        recognizable.

    Raises:
        FileNotFoundError: If the file does not exist.

    Example:
        >>> for entry in extract_file("src/lib.rs"):
        ...     print(entry.render())
    """
    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    with file_scope(file_path):
        entries = list(extract_outline(iter_source_lines(file_path)))
        logger.debug("Extracted %d entries", len(entries))
    return entries


def _record(stats: ExtractionStats, outline: FileOutline) -> None:
    stats.files_processed += 1
    stats.entries_extracted += len(outline.entries)


def _record_failure(
    stats: ExtractionStats, file_path: str, exc: Exception, continue_on_error: bool
) -> None:
    logger.error("Cannot outline %s: %s", file_path, exc)
    stats.files_failed += 1
    if not continue_on_error:
        raise exc


def iter_file_outlines(
    file_paths: Iterable[str],
    continue_on_error: bool = True,
    stats: Optional[ExtractionStats] = None,
) -> Iterator[FileOutline]:
    """Lazily outline files one at a time, in the given order.

    Files that cannot be read are logged, counted in ``stats`` and skipped
    unless ``continue_on_error`` is False.
    """
    stats = stats if stats is not None else ExtractionStats()
    for file_path in file_paths:
        try:
            outline = FileOutline(path=file_path, entries=extract_file(file_path))
        except OSError as e:
            _record_failure(stats, file_path, e, continue_on_error)
            continue
        _record(stats, outline)
        yield outline


def extract_files(
    file_paths: Iterable[str],
    workers: int = 1,
    continue_on_error: bool = True,
) -> tuple[List[FileOutline], ExtractionStats]:
    """Outline many files, optionally in parallel.

    Each file is scanned independently, so files can be handed to a thread
    pool; results are always returned in input order.

    Args:
        file_paths: Files to outline.
        workers: Number of worker threads; 1 scans sequentially.
        continue_on_error: If False, re-raise the first file error.

    Returns:
        A tuple of (outlines, stats).
    """
    paths = list(file_paths)
    stats = ExtractionStats()

    if workers <= 1 or len(paths) <= 1:
        outlines = list(iter_file_outlines(paths, continue_on_error, stats))
        logger.info("Outline complete: %s", stats)
        return outlines, stats

    outlines: List[FileOutline] = []
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [(path, executor.submit(extract_file, path)) for path in paths]
        for path, future in futures:
            try:
                outline = FileOutline(path=path, entries=future.result())
            except OSError as e:
                _record_failure(stats, path, e, continue_on_error)
                continue
            _record(stats, outline)
            outlines.append(outline)

    logger.info("Outline complete: %s", stats)
    return outlines, stats


def outline_project(
    root: str,
    config: Optional[OutlineConfig] = None,
    continue_on_error: bool = True,
) -> tuple[DiscoveryResult, List[FileOutline], ExtractionStats]:
    """Discover and outline every source file of a crate or workspace."""
    config = config or OutlineConfig()
    discovery = discover_source_files(root, config)
    if not discovery.files:
        logger.warning("No source files found in %s", discovery.root)
    outlines, stats = extract_files(
        discovery.files,
        workers=config.workers,
        continue_on_error=continue_on_error,
    )
    return discovery, outlines, stats
