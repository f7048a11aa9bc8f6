"""Read-only line buffer that hosts a generated report and its folds.

Lines are stored as styled segments (``(style_key, text)`` pairs) so the
renderer can paint them with the active theme. Folds are anchored at their
header row: folding ``[start, end]`` keeps ``start`` visible and hides
``start + 1 .. end``. Unfolding a row removes only the fold anchored there,
so folds nested inside it keep hiding their own rows.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .fold.types import RowRange

Segment = tuple[str, str]


@dataclass(frozen=True)
class ReportLine:
    """One document row split into styled segments."""

    segments: tuple[Segment, ...]

    @property
    def text(self) -> str:
        return "".join(text for _style, text in self.segments)


class ReportDocument:
    """Append-only document with header-anchored folds."""

    def __init__(self) -> None:
        self._lines: list[ReportLine] = []
        self._folds: dict[int, int] = {}

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def last_row(self) -> int:
        return max(0, len(self._lines) - 1)

    def extent(self) -> RowRange:
        """Return the inclusive row span of the whole document (``[0, 0]`` when empty)."""
        return RowRange(0, self.last_row)

    def clear(self) -> None:
        """Drop all text and folds."""
        self._lines = []
        self._folds = {}

    def append_line(self, segments: Iterable[Segment] | str = ()) -> int:
        """Append one row and return its zero-based row number."""
        if isinstance(segments, str):
            normalized: tuple[Segment, ...] = (("subject", segments),) if segments else ()
        else:
            normalized = tuple((style, text) for style, text in segments if text)
        for _style, text in normalized:
            if "\n" in text or "\r" in text:
                raise ValueError("report lines must not contain line breaks")
        self._lines.append(ReportLine(normalized))
        return len(self._lines) - 1

    def line(self, row: int) -> ReportLine:
        return self._lines[row]

    def line_text(self, row: int) -> str:
        return self._lines[row].text

    def line_segments(self, row: int) -> tuple[Segment, ...]:
        return self._lines[row].segments

    def text(self) -> str:
        return "\n".join(line.text for line in self._lines)

    def is_row_folded(self, row: int) -> bool:
        """Return whether a fold is anchored at ``row``."""
        return row in self._folds

    def fold_range(self, row_range: RowRange) -> None:
        self._folds[row_range.start] = row_range.end

    def unfold_row(self, row: int) -> None:
        self._folds.pop(row, None)

    def folded_ranges(self) -> list[RowRange]:
        return [RowRange(start, end) for start, end in sorted(self._folds.items())]

    def is_row_hidden(self, row: int) -> bool:
        """Return whether ``row`` lies inside (but is not the header of) any fold."""
        for start, end in self._folds.items():
            if start < row <= end:
                return True
        return False

    def visible_rows(self) -> list[int]:
        """Return displayed rows in document order, skipping folded bodies."""
        rows: list[int] = []
        hidden_until = -1
        for row in range(len(self._lines)):
            if row <= hidden_until:
                continue
            rows.append(row)
            fold_end = self._folds.get(row)
            if fold_end is not None:
                hidden_until = max(hidden_until, fold_end)
        return rows


__all__ = ["ReportDocument", "ReportLine", "Segment"]
