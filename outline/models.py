"""
Data models for outline extraction.
"""

from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Dict, Any, List


class DeclarationKind(str, Enum):
    """Kinds of declarations captured across multiple lines."""

    FUNCTION = "Function"
    STRUCT_OR_ENUM = "StructOrEnum"


@dataclass(frozen=True)
class SourceLine:
    """One line of a source file.

    Attributes:
        number: 1-indexed line number
        text: Raw line text without its line terminator
    """

    number: int
    text: str


@dataclass(frozen=True)
class OutlineEntry:
    """A recognized declaration with its line range and summary.

    Attributes:
        start_line: First line of the declaration (or of its doc block)
        end_line: Last line of the declaration, inclusive
        summary: Normalized declaration text, never containing blank lines
    """

    start_line: int
    end_line: int
    summary: str

    def render(self) -> str:
        """Render as ``[L<start>:L<end>]<summary>``."""
        return f"[L{self.start_line}:L{self.end_line}]{self.summary}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert the entry to a dictionary suitable for JSON serialization."""
        return asdict(self)


@dataclass
class FileOutline:
    """All outline entries extracted from a single file.

    Attributes:
        path: Path of the source file as supplied by discovery
        entries: Entries in ascending ``start_line`` order
    """

    path: str
    entries: List[OutlineEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the outline to a dictionary suitable for JSON serialization."""
        return {
            "path": self.path,
            "entries": [entry.to_dict() for entry in self.entries],
        }
