"""Data models for the semantic diff engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DiffKind(Enum):
    """Operation kind of one text diff span."""

    DELETE = -1
    EQUAL = 0
    INSERT = 1


class PositionUnit(Enum):
    """What the integers pulled out of a raw tree line mean."""

    LINE = "line"
    BYTE_OFFSET = "byte_offset"


class RenderStyle(Enum):
    """Report markup style."""

    COLOR = "color"
    DUMBTERM = "dumbterm"
    PLAIN = "plain"


@dataclass(frozen=True, slots=True)
class DiffOp:
    """One span of a text diff."""

    kind: DiffKind
    text: str


@dataclass(frozen=True, slots=True)
class PatchHunk:
    """A patch hunk header, in normalized-tree character coordinates."""

    old_start: int
    old_count: int
    new_start: int
    new_count: int


@dataclass(frozen=True, slots=True)
class LineOffset:
    """One line of a text blob: [start, end) and the line text without its LF."""

    start: int
    end: int
    text: str

    def __contains__(self, pos: int) -> bool:
        return self.start <= pos < self.end


@dataclass(frozen=True, slots=True)
class SourceDiffHunk:
    """A hunk of a unified source diff.

    `header` is the raw @@ line; `body` holds the following context,
    insertion and deletion lines without trailing newlines.
    """

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    header: str
    body: tuple[str, ...] = field(default_factory=tuple)

    def line_span(self) -> range:
        """Inclusive span of line numbers this hunk touches on either side."""
        low = min(self.old_start, self.new_start)
        high = max(self.old_start + self.old_count, self.new_start + self.new_count)
        return range(low, high + 1)
