"""
Core enum model for code generation.

An EnumModel is the normalized form of a parsed Dart enum declaration that
every generator operation consumes.
"""

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

ENUM_NAME_PATTERN = re.compile(r"[A-Z][A-Za-z0-9_]*")
VALUE_NAME_PATTERN = re.compile(r"[a-zA-Z_][A-Za-z0-9_]*")


def offset_to_position(text: str, offset: int) -> Tuple[int, int]:
    """Convert a character offset into a 0-based (line, column) pair."""
    line = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return line, offset - line_start


@dataclass(frozen=True)
class TextSpan:
    """Span of source text, end offset exclusive. Lines and columns are 0-based."""

    start: int
    end: int
    start_line: int = 0
    start_column: int = 0
    end_line: int = 0
    end_column: int = 0

    @classmethod
    def from_offsets(cls, text: str, start: int, end: int) -> "TextSpan":
        """Build a span with line/column information computed from ``text``."""
        start_line, start_column = offset_to_position(text, start)
        end_line, end_column = offset_to_position(text, end)
        return cls(start, end, start_line, start_column, end_line, end_column)

    def shifted(self, offset: int, text: str) -> "TextSpan":
        """Re-base a span measured in a substring starting at ``offset`` of ``text``."""
        return TextSpan.from_offsets(text, self.start + offset, self.end + offset)

    def slice(self, text: str) -> str:
        """Return the covered text."""
        return text[self.start : self.end]


@dataclass(frozen=True)
class EnumModel:
    """A parsed Dart enum: its type name and ordered value identifiers."""

    name: str
    values: Tuple[str, ...]
    source_range: Optional[TextSpan] = field(default=None, compare=False)

    def __post_init__(self):
        # Accept any sequence but store a tuple so the model stays immutable
        object.__setattr__(self, "values", tuple(self.values))

        if not ENUM_NAME_PATTERN.fullmatch(self.name or ""):
            raise ValueError(f"Invalid enum name: {self.name!r}")

        if not self.values:
            raise ValueError(f"Enum {self.name} must have at least one value")

        for value in self.values:
            if not VALUE_NAME_PATTERN.fullmatch(value):
                raise ValueError(f"Invalid value {value!r} in enum {self.name}")

    def duplicate_values(self) -> List[str]:
        """Values declared more than once, in first-seen order."""
        counts = Counter(self.values)
        seen = []
        for value in self.values:
            if counts[value] > 1 and value not in seen:
                seen.append(value)
        return seen

    @property
    def has_duplicates(self) -> bool:
        return len(set(self.values)) != len(self.values)

