"""
Text rendering for outlines.

Produces the Markdown-like workspace listing, paginated single-file
listings, and the "content or outline" view used for large files.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from core.outline_config import AUTO_OUTLINE_SIZE
from outline.config import FALLBACK_PREVIEW_BYTES, SRC_HEADER, WORKSPACE_HEADER
from outline.extractor import extract_file
from outline.models import FileOutline, OutlineEntry

logger = logging.getLogger(__name__)


@dataclass
class FileContent:
    """Either the full text of a file or its outline."""

    text: str
    is_outline: bool


def _display_path(path: str, root: Optional[str]) -> str:
    if root is None:
        return path
    try:
        return os.path.relpath(path, root)
    except ValueError:
        return path


def render_file_outline(outline: FileOutline, root: Optional[str] = None) -> str:
    """Render one file section: header, entry bullets, separating blank line."""
    lines = [f"## {_display_path(outline.path, root)}"]
    lines.extend(f"- {entry.render()}" for entry in outline.entries)
    lines.append("")
    return "\n".join(lines) + "\n"


def render_workspace_outline(
    outlines: Iterable[FileOutline],
    is_workspace: bool,
    root: Optional[str] = None,
) -> str:
    """Render the full outline document.

    Args:
        outlines: Per-file outlines in display order.
        is_workspace: Selects the workspace or src header.
        root: If given, file headers show paths relative to it.

    Returns:
        The document text, ending with a newline.
    """
    header = WORKSPACE_HEADER if is_workspace else SRC_HEADER
    parts = [f"{header}\n\n"]
    parts.extend(render_file_outline(outline, root) for outline in outlines)
    return "".join(parts)


def render_entries(
    entries: Iterable[OutlineEntry],
    pattern: Optional[str] = None,
    offset: int = 0,
    limit: Optional[int] = None,
) -> str:
    """Render a page of entries followed by a pagination footer.

    Args:
        entries: Entries of one file.
        pattern: Optional regex; only entries whose summary matches are kept.
        offset: Number of matching entries to skip.
        limit: Maximum entries on this page; None means no limit.

    Returns:
        One ``[Ls:Le]summary`` line per entry and a ``Showing symbols``
        footer.

    Raises:
        ValueError: If ``pattern`` is not a valid regex or ``offset``/``limit``
            is negative.
    """
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    regex = None
    if pattern:
        try:
            regex = re.compile(pattern)
        except re.error as e:
            raise ValueError(f"Invalid pattern {pattern!r}: {e}") from e

    matching = [e for e in entries if regex is None or regex.search(e.summary)]
    remaining = matching[offset:]
    page = remaining if limit is None else remaining[:limit]
    has_more = len(remaining) > len(page)

    output = "".join(f"{entry.render()}\n" for entry in page)

    page_start = offset + 1
    page_end = offset + len(page)
    if has_more:
        output += (
            f"\nShowing symbols {page_start}-{page_end} (there were more symbols "
            f"found; use offset: {page_end} to see next page)\n"
        )
    else:
        output += f"\nShowing symbols {page_start}-{page_end} (total symbols: {page_end})\n"
    return output


def _preview(text: str, max_bytes: int) -> str:
    encoded = text.encode("utf-8")
    if len(encoded) <= max_bytes:
        return text
    # Cut on a character boundary.
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


def get_file_content_or_outline(
    file_path: str,
    auto_outline_size: int = AUTO_OUTLINE_SIZE,
    display_path: Optional[str] = None,
    pattern: Optional[str] = None,
    offset: int = 0,
    limit: Optional[int] = None,
) -> FileContent:
    """Return a file's full text, or its outline when the file is large.

    Files of at most ``auto_outline_size`` bytes are returned verbatim.
    Larger files are outlined; if no declarations are found, the first
    1KB of the file is returned instead.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    label = display_path or file_path
    with open(file_path, "r", encoding="utf-8", errors="replace", newline="") as f:
        text = f.read()

    size = os.path.getsize(file_path)
    if size <= auto_outline_size:
        return FileContent(text=text, is_outline=False)

    entries = extract_file(file_path)
    if not entries:
        logger.info("No outline for %s (%d bytes); returning preview", label, size)
        preview = _preview(text, FALLBACK_PREVIEW_BYTES)
        return FileContent(
            text=(
                f"# First 1KB of {label} (file too large to show full content, "
                f"and no outline available)\n\n{preview}"
            ),
            is_outline=False,
        )

    outline_text = render_entries(entries, pattern=pattern, offset=offset, limit=limit)
    return FileContent(
        text=f"# File outline for {label}\n\n{outline_text}",
        is_outline=True,
    )


def outlines_to_dicts(
    outlines: Iterable[FileOutline], root: Optional[str] = None
) -> List[Dict[str, Any]]:
    """Convert outlines to JSON-ready records with display paths."""
    records = []
    for outline in outlines:
        record = outline.to_dict()
        record["path"] = _display_path(outline.path, root)
        records.append(record)
    return records
