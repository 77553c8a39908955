"""
Declaration-extraction state machine.

The scanner walks the lines of one file in order and emits an
``OutlineEntry`` for every top-level declaration it recognizes:

- ``fn`` declarations are accumulated until their braces balance and are
  summarized by their signature only (the body is cut at the first ``{``).
- ``struct``/``enum`` declarations end at a ``;`` or at the ``}`` that
  balances their braces, and keep their full body in the summary.
- ``static`` items and other ``pub`` items are emitted as single lines.

A contiguous block of ``///`` lines preceding a declaration moves the
entry's start line up to the first doc line. Blank lines and plain
comments/attributes between the block and the declaration are tolerated;
any other code clears the association.

Brace counting is purely lexical: braces inside string or char literals
are counted too.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

from outline.classifier import EMBEDDED_ANNOTATION_KINDS, LineKind, classify_line
from outline.config import (
    CLOSE_BRACE,
    OPEN_BRACE,
    STATEMENT_TERMINATOR,
    VISIBILITY_QUALIFIER,
)
from outline.models import DeclarationKind, OutlineEntry, SourceLine

logger = logging.getLogger(__name__)

_INLINE_COMMENT_RE = re.compile(r" //[^\n]*")


def count_braces(text: str) -> int:
    """Return the number of ``{`` minus the number of ``}`` in ``text``."""
    return text.count(OPEN_BRACE) - text.count(CLOSE_BRACE)


def strip_qualifier(text: str) -> str:
    """Strip a single leading visibility qualifier."""
    if text.startswith(VISIBILITY_QUALIFIER):
        return text[len(VISIBILITY_QUALIFIER):]
    return text


def normalize_summary(text: str, kind: Optional[DeclarationKind] = None) -> str:
    """Normalize accumulated declaration text into a summary.

    Args:
        text: Collected lines joined with newlines.
        kind: Declaration kind, or None for single-line items.

    Returns:
        Summary text with the qualifier stripped, function bodies cut,
        struct/enum inline comments removed, trailing whitespace trimmed
        and blank lines dropped.
    """
    text = strip_qualifier(text)
    if kind is DeclarationKind.FUNCTION:
        text = text.split(OPEN_BRACE, 1)[0]
    elif kind is DeclarationKind.STRUCT_OR_ENUM:
        text = _INLINE_COMMENT_RE.sub("", text)

    lines = [line.rstrip() for line in text.split("\n")]
    return "\n".join(line for line in lines if line)


@dataclass
class DeclarationState:
    """In-progress capture of a multi-line declaration."""

    kind: DeclarationKind
    start_line: int
    collected_text: List[str] = field(default_factory=list)
    brace_balance: int = 0
    saw_opening_brace: bool = False

    def append(self, text: str) -> None:
        self.collected_text.append(text)
        self.brace_balance += count_braces(text)
        if OPEN_BRACE in text:
            self.saw_opening_brace = True

    def is_complete(self, text: str) -> bool:
        """Check whether the line just appended completes the declaration."""
        balanced = self.brace_balance == 0 and self.saw_opening_brace
        if self.kind is DeclarationKind.FUNCTION:
            return balanced
        return STATEMENT_TERMINATOR in text or (CLOSE_BRACE in text and balanced)

    def to_entry(self, end_line: int) -> OutlineEntry:
        return OutlineEntry(
            start_line=self.start_line,
            end_line=end_line,
            summary=normalize_summary("\n".join(self.collected_text), self.kind),
        )


class OutlineScanner:
    """Single-file, single-pass declaration scanner.

    Create one scanner per file; no state is shared between instances.

    Example:
        >>> scanner = OutlineScanner()
        >>> scanner.feed(SourceLine(1, "pub fn answer() -> u32 { 42 }"))
        OutlineEntry(start_line=1, end_line=1, summary='fn answer() -> u32')
    """

    def __init__(self) -> None:
        self._doc_start: Optional[int] = None
        self._state: Optional[DeclarationState] = None

    @property
    def capturing(self) -> bool:
        """Whether a declaration is currently being accumulated."""
        return self._state is not None

    @property
    def pending_doc_line(self) -> Optional[int]:
        """Start line of the pending doc block, if any."""
        return self._doc_start

    def feed(self, line: SourceLine) -> Optional[OutlineEntry]:
        """Process one line and return an entry if a declaration completed."""
        if self._state is not None:
            return self._continue_capture(line)

        kind = classify_line(line.text)

        if kind is LineKind.DOC_COMMENT:
            if self._doc_start is None:
                self._doc_start = line.number
            return None

        if kind is LineKind.FUNCTION_START:
            return self._begin_capture(line, DeclarationKind.FUNCTION)

        if kind is LineKind.STRUCT_OR_ENUM_START:
            return self._begin_capture(line, DeclarationKind.STRUCT_OR_ENUM)

        if kind in (LineKind.STATIC_ITEM, LineKind.PUBLIC_ITEM):
            self._doc_start = None
            return OutlineEntry(
                start_line=line.number,
                end_line=line.number,
                summary=normalize_summary(line.text),
            )

        if kind is LineKind.OTHER:
            self._doc_start = None
        return None

    def _begin_capture(
        self, line: SourceLine, kind: DeclarationKind
    ) -> Optional[OutlineEntry]:
        start_line = self._doc_start if self._doc_start is not None else line.number
        self._doc_start = None

        state = DeclarationState(kind=kind, start_line=start_line)
        state.append(line.text)

        if kind is DeclarationKind.FUNCTION:
            single_line = state.brace_balance == 0 and state.saw_opening_brace
        else:
            single_line = (
                STATEMENT_TERMINATOR in line.text or CLOSE_BRACE in line.text
            )

        if single_line:
            return state.to_entry(line.number)

        self._state = state
        return None

    def _continue_capture(self, line: SourceLine) -> Optional[OutlineEntry]:
        state = self._state
        # Embedded docs, comments and attributes never reach the brace count.
        if classify_line(line.text) in EMBEDDED_ANNOTATION_KINDS:
            return None

        state.append(line.text)
        if not state.is_complete(line.text):
            return None

        self._state = None
        self._doc_start = None
        return state.to_entry(line.number)

    def finish(self) -> None:
        """Signal end of input, dropping any unterminated capture."""
        if self._state is not None:
            logger.debug(
                "Dropping unterminated %s declaration starting at line %d",
                self._state.kind.value,
                self._state.start_line,
            )
        self._state = None
        self._doc_start = None


def extract_outline(lines: Iterable[SourceLine]) -> Iterator[OutlineEntry]:
    """Lazily extract outline entries from the ordered lines of one file.

    Args:
        lines: Source lines in original order, 1-indexed.

    Yields:
        Outline entries in ascending ``start_line`` order.
    """
    scanner = OutlineScanner()
    for line in lines:
        entry = scanner.feed(line)
        if entry is not None:
            yield entry
    scanner.finish()


def split_source_lines(source: str) -> List[SourceLine]:
    """Split source text into 1-indexed lines without terminators.

    Args:
        source: Full file text.

    Returns:
        One ``SourceLine`` per ``\\n``-terminated line; ``\\r\\n`` endings
        are handled and a trailing newline does not produce an extra line.
    """
    if not source:
        return []
    raw_lines = source.split("\n")
    if raw_lines[-1] == "":
        raw_lines.pop()
    return [
        SourceLine(number=index, text=text[:-1] if text.endswith("\r") else text)
        for index, text in enumerate(raw_lines, start=1)
    ]


def extract_outline_from_text(source: str) -> List[OutlineEntry]:
    """Extract all outline entries from source text."""
    return list(extract_outline(split_source_lines(source)))
