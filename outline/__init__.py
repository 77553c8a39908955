"""
Outline Engine

Line-based extractor for top-level Rust declarations.
Produces line ranges and normalized signature/body summaries for
functions, structs, enums, statics and other public items.
"""

from outline.models import DeclarationKind, FileOutline, OutlineEntry, SourceLine
from outline.classifier import LineKind, classify_line
from outline.scanner import (
    OutlineScanner,
    extract_outline,
    extract_outline_from_text,
    normalize_summary,
    split_source_lines,
)
from outline.extractor import (
    DiscoveryResult,
    ExtractionStats,
    discover_source_files,
    extract_file,
    extract_files,
    iter_file_outlines,
    iter_source_lines,
    outline_project,
)
from outline.render import (
    FileContent,
    get_file_content_or_outline,
    outlines_to_dicts,
    render_entries,
    render_file_outline,
    render_workspace_outline,
)

__all__ = [
    # Data models
    "DeclarationKind",
    "FileOutline",
    "OutlineEntry",
    "SourceLine",
    "ExtractionStats",
    "DiscoveryResult",
    "FileContent",
    # Line classification
    "LineKind",
    "classify_line",
    # Scanning
    "OutlineScanner",
    "extract_outline",
    "extract_outline_from_text",
    "normalize_summary",
    "split_source_lines",
    # Orchestration
    "discover_source_files",
    "extract_file",
    "extract_files",
    "iter_file_outlines",
    "iter_source_lines",
    "outline_project",
    # Rendering
    "get_file_content_or_outline",
    "outlines_to_dicts",
    "render_entries",
    "render_file_outline",
    "render_workspace_outline",
]
