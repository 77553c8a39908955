"""
Line classification for outline extraction.

Each source line is classified in isolation into exactly one category.
Rules are evaluated in priority order; the first match wins.
"""

import re
from enum import Enum

from outline.config import (
    ATTRIBUTE_MARKER,
    DOC_COMMENT_MARKER,
    FUNCTION_KEYWORD,
    IMPORT_KEYWORD,
    LINE_COMMENT_MARKER,
    STATIC_KEYWORD,
    STRUCT_OR_ENUM_KEYWORDS,
    VISIBILITY_QUALIFIER,
)

_QUALIFIER = re.escape(VISIBILITY_QUALIFIER)
_STRUCT_OR_ENUM = "|".join(STRUCT_OR_ENUM_KEYWORDS)

# Declaration starts are only recognized at column 0 (top level).
_FUNCTION_START_RE = re.compile(rf"^(?:{_QUALIFIER})?{FUNCTION_KEYWORD}\b")
_STRUCT_OR_ENUM_START_RE = re.compile(rf"^(?:{_QUALIFIER})?(?:{_STRUCT_OR_ENUM})\b")
_STATIC_ITEM_RE = re.compile(rf"^{STATIC_KEYWORD}\b")
_HANDLED_PUBLIC_RE = re.compile(
    rf"^{_QUALIFIER}(?:{_STRUCT_OR_ENUM}|{FUNCTION_KEYWORD}|{IMPORT_KEYWORD})\b"
)


class LineKind(str, Enum):
    """Mutually exclusive line categories, in priority order."""

    DOC_COMMENT = "DocComment"
    FUNCTION_START = "FunctionStart"
    STRUCT_OR_ENUM_START = "StructOrEnumStart"
    STATIC_ITEM = "StaticItem"
    PUBLIC_ITEM = "PublicItem"
    BLANK = "Blank"
    LINE_COMMENT = "LineComment"
    OTHER = "Other"


# Lines discarded while a declaration is being captured.
EMBEDDED_ANNOTATION_KINDS = frozenset({LineKind.DOC_COMMENT, LineKind.LINE_COMMENT})


def is_doc_comment(text: str) -> bool:
    """Check if a line is a documentation comment (``///``), indented or not."""
    return text.lstrip().startswith(DOC_COMMENT_MARKER)


def is_line_comment(text: str) -> bool:
    """Check if a line is a plain comment or an attribute marker."""
    stripped = text.lstrip()
    return stripped.startswith(LINE_COMMENT_MARKER) or stripped.startswith(
        ATTRIBUTE_MARKER
    )


def is_public_item(text: str) -> bool:
    """Check if a line is a public item not handled by another rule.

    ``pub fn``, ``pub struct`` and ``pub enum`` are declaration starts;
    ``pub use`` imports are ignored entirely.
    """
    return text.startswith(VISIBILITY_QUALIFIER) and not _HANDLED_PUBLIC_RE.match(text)


def classify_line(text: str) -> LineKind:
    """Classify one line of source text.

    Args:
        text: Raw line text without its line terminator.

    Returns:
        The first matching ``LineKind``.

    Example:
        >>> classify_line("pub fn main() {")
        <LineKind.FUNCTION_START: 'FunctionStart'>
        >>> classify_line("    #[serde(default)]")
        <LineKind.LINE_COMMENT: 'LineComment'>
    """
    if is_doc_comment(text):
        return LineKind.DOC_COMMENT
    if _FUNCTION_START_RE.match(text):
        return LineKind.FUNCTION_START
    if _STRUCT_OR_ENUM_START_RE.match(text):
        return LineKind.STRUCT_OR_ENUM_START
    if _STATIC_ITEM_RE.match(text):
        return LineKind.STATIC_ITEM
    if is_public_item(text):
        return LineKind.PUBLIC_ITEM
    if not text.strip():
        return LineKind.BLANK
    if is_line_comment(text):
        return LineKind.LINE_COMMENT
    return LineKind.OTHER
