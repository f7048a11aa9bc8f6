"""Gutter column holding one fold indicator per registered section.

Markers are created by the fold manager, which also sets their glyph and
wires their activation callback. Clicking a gutter cell activates the marker
anchored at that row.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging

from .fold.types import FoldState

LOGGER = logging.getLogger(__name__)

DEFAULT_EXPANDED_SYMBOL = "▼"
DEFAULT_COLLAPSED_SYMBOL = "▶"


class GutterMarkerError(RuntimeError):
    """A marker was used after being destroyed, or belongs to another gutter."""


@dataclass(eq=False)
class GutterMarker:
    """Indicator handle anchored at one document row."""

    row: int
    glyph: FoldState = FoldState.EXPANDED
    callback: Callable[[], bool] | None = None
    destroyed: bool = False


class Gutter:
    """Indicator provider backing the report's fold glyph column."""

    def __init__(
        self,
        expanded_symbol: str = DEFAULT_EXPANDED_SYMBOL,
        collapsed_symbol: str = DEFAULT_COLLAPSED_SYMBOL,
    ) -> None:
        self.expanded_symbol = expanded_symbol
        self.collapsed_symbol = collapsed_symbol
        self._by_row: dict[int, list[GutterMarker]] = {}
        self.created_count = 0
        self.destroyed_count = 0

    def _require_live(self, marker: GutterMarker) -> None:
        if marker.destroyed:
            raise GutterMarkerError(f"gutter marker at row {marker.row} was already destroyed")
        if marker not in self._by_row.get(marker.row, []):
            raise GutterMarkerError(f"gutter marker at row {marker.row} is not owned by this gutter")

    def create_indicator(self, row: int) -> GutterMarker:
        marker = GutterMarker(row=row)
        self._by_row.setdefault(row, []).append(marker)
        self.created_count += 1
        return marker

    def set_indicator_glyph(self, marker: GutterMarker, glyph: FoldState) -> None:
        self._require_live(marker)
        marker.glyph = glyph

    def on_activate(self, marker: GutterMarker, callback: Callable[[], bool]) -> None:
        self._require_live(marker)
        marker.callback = callback

    def destroy_indicator(self, marker: GutterMarker) -> None:
        self._require_live(marker)
        markers = self._by_row[marker.row]
        markers.remove(marker)
        if not markers:
            del self._by_row[marker.row]
        marker.destroyed = True
        marker.callback = None
        self.destroyed_count += 1

    def marker_at(self, row: int) -> GutterMarker | None:
        """Return the most recently created live marker anchored at ``row``."""
        markers = self._by_row.get(row)
        if not markers:
            return None
        return markers[-1]

    def glyph_at(self, row: int) -> FoldState | None:
        marker = self.marker_at(row)
        return marker.glyph if marker is not None else None

    def symbol_for(self, glyph: FoldState) -> str:
        if glyph is FoldState.COLLAPSED:
            return self.collapsed_symbol
        return self.expanded_symbol

    def symbol_at(self, row: int) -> str:
        """Return the gutter cell text for ``row`` (a space when no marker)."""
        glyph = self.glyph_at(row)
        if glyph is None:
            return " "
        return self.symbol_for(glyph)

    def activate_row(self, row: int) -> bool:
        """Invoke the activation callback of the marker at ``row``."""
        marker = self.marker_at(row)
        if marker is None or marker.callback is None:
            return False
        LOGGER.debug("gutter marker activated at row %d", row)
        return bool(marker.callback())

    def live_markers(self) -> list[GutterMarker]:
        return [marker for row in sorted(self._by_row) for marker in self._by_row[row]]


__all__ = [
    "DEFAULT_COLLAPSED_SYMBOL",
    "DEFAULT_EXPANDED_SYMBOL",
    "Gutter",
    "GutterMarker",
    "GutterMarkerError",
]
