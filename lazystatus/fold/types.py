"""Row-range and fold-state datatypes shared by the fold layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import FoldRangeError


class FoldState(Enum):
    """Two-state fold tag, used both as stored state and as indicator glyph."""

    EXPANDED = "expanded"
    COLLAPSED = "collapsed"


@dataclass(frozen=True, order=True)
class RowRange:
    """Inclusive ``[start, end]`` span of zero-based document rows."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if isinstance(self.start, bool) or isinstance(self.end, bool):
            raise FoldRangeError(f"row bounds must be integers: {self.start!r}, {self.end!r}")
        if not isinstance(self.start, int) or not isinstance(self.end, int):
            raise FoldRangeError(f"row bounds must be integers: {self.start!r}, {self.end!r}")
        if self.start < 0:
            raise FoldRangeError(f"start row must be non-negative: {self.start}")
        if self.start > self.end:
            raise FoldRangeError(f"start row {self.start} is after end row {self.end}")

    @property
    def row_count(self) -> int:
        return self.end - self.start + 1

    def contains_row(self, row: int) -> bool:
        return self.start <= row <= self.end

    def contains(self, other: RowRange) -> bool:
        """Return whether ``other`` lies within this range (equality counts)."""
        return self.start <= other.start and other.end <= self.end

    def strictly_contains(self, other: RowRange) -> bool:
        """Return whether ``other`` lies within this range and differs from it."""
        return self.contains(other) and self != other

    def disjoint(self, other: RowRange) -> bool:
        return self.end < other.start or other.end < self.start

    def overlaps(self, other: RowRange) -> bool:
        """Return whether the ranges intersect without either containing the other."""
        if self.disjoint(other):
            return False
        return not (self.contains(other) or other.contains(self))

    def __str__(self) -> str:
        return f"[{self.start},{self.end}]"


__all__ = ["FoldState", "RowRange"]
