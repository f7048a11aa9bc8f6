"""Status report view: document, gutter, fold manager and cursor in one place.

``StatusView`` is what an input loop talks to. It redraws the report from a
``StatusSnapshot``, keeps the cursor on a visible row, forwards fold toggles
and gutter clicks, and paints the current viewport.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .config import load_diff_style, load_fold_glyphs, load_theme_name
from .document import ReportDocument
from .fold.manager import FoldManager
from .fold.types import RowRange
from .gutter import DEFAULT_COLLAPSED_SYMBOL, DEFAULT_EXPANDED_SYMBOL, Gutter
from .highlight import DEFAULT_DIFF_STYLE
from .logs import configure_logging
from .records import StatusSnapshot
from .render import RenderContext, render_help_screen, render_report_screen
from .report import StatusReportWriter
from .ui_theme import DEFAULT_THEME, UITheme, resolve_theme

LOGGER = logging.getLogger(__name__)

NOTHING_TO_FOLD_MESSAGE = "nothing to fold here"


class StatusView:
    """Interactive state for one status report buffer."""

    def __init__(
        self,
        *,
        theme: UITheme = DEFAULT_THEME,
        diff_style: str = DEFAULT_DIFF_STYLE,
        expanded_symbol: str = DEFAULT_EXPANDED_SYMBOL,
        collapsed_symbol: str = DEFAULT_COLLAPSED_SYMBOL,
    ) -> None:
        self.theme = theme
        self.diff_style = diff_style
        self.document = ReportDocument()
        self.gutter = Gutter(expanded_symbol, collapsed_symbol)
        self.folds = FoldManager(self.document, self.gutter)
        self.writer = StatusReportWriter(self.document, self.folds)
        self.cursor_row = 0
        self.start = 0
        self.status_message = ""
        self.sections: list[RowRange] = []
        self.show_help = False
        self.help_entries: list[tuple[str, str]] = []

    @classmethod
    def from_config(cls, *, no_color: bool = False) -> StatusView:
        """Build a view using persisted theme, diff style and fold glyphs.

        Also installs log handlers at the configured ``log_level``.
        """
        configure_logging()
        expanded_symbol, collapsed_symbol = load_fold_glyphs()
        return cls(
            theme=resolve_theme(load_theme_name(), no_color=no_color),
            diff_style=load_diff_style(),
            expanded_symbol=expanded_symbol,
            collapsed_symbol=collapsed_symbol,
        )

    def refresh(self, snapshot: StatusSnapshot) -> None:
        """Rewrite the whole report; all previous fold state is discarded."""
        self.sections = self.writer.write(snapshot)
        self.cursor_row = 0
        self.start = 0
        self.status_message = ""

    def close(self) -> None:
        self.folds.destroy()

    def visible_rows(self) -> list[int]:
        return self.document.visible_rows()

    def _cursor_index(self, rows: list[int]) -> int:
        """Index of the cursor in ``rows``, snapping back onto the nearest visible row."""
        index = 0
        for idx, row in enumerate(rows):
            if row > self.cursor_row:
                break
            index = idx
        return index

    def _snap_cursor(self) -> None:
        rows = self.visible_rows()
        if not rows:
            self.cursor_row = 0
            return
        self.cursor_row = rows[self._cursor_index(rows)]

    def move_cursor(self, delta: int) -> bool:
        """Move the cursor ``delta`` visible rows; return whether it moved."""
        rows = self.visible_rows()
        if not rows:
            return False
        index = self._cursor_index(rows)
        target = max(0, min(len(rows) - 1, index + delta))
        moved = rows[target] != self.cursor_row
        self.cursor_row = rows[target]
        return moved

    def move_cursor_to_edge(self, last: bool) -> None:
        rows = self.visible_rows()
        if rows:
            self.cursor_row = rows[-1] if last else rows[0]

    def toggle_at_cursor(self) -> bool:
        """Toggle the section owning the cursor row."""
        toggled = self.folds.toggle(self.cursor_row)
        if not toggled:
            LOGGER.debug("cursor row %d is outside every section", self.cursor_row)
        self.status_message = "" if toggled else NOTHING_TO_FOLD_MESSAGE
        self._snap_cursor()
        return toggled

    def row_for_screen_line(self, screen_line: int) -> int | None:
        """Map a zero-based viewport line to its document row."""
        rows = self.visible_rows()
        index = self.start + screen_line
        if screen_line < 0 or index >= len(rows):
            return None
        return rows[index]

    def click_gutter(self, screen_line: int) -> bool:
        """Activate the fold indicator shown on ``screen_line``."""
        row = self.row_for_screen_line(screen_line)
        if row is None:
            return False
        self.cursor_row = row
        activated = self.gutter.activate_row(row)
        self._snap_cursor()
        return activated

    def click_text(self, screen_line: int) -> bool:
        row = self.row_for_screen_line(screen_line)
        if row is None:
            return False
        self.cursor_row = row
        return True

    def scroll_to_cursor(self, height: int) -> None:
        """Adjust the scroll offset so the cursor stays inside ``height`` rows."""
        rows = self.visible_rows()
        height = max(1, height)
        index = self._cursor_index(rows) if rows else 0
        if index < self.start:
            self.start = index
        elif index >= self.start + height:
            self.start = index - height + 1
        self.start = max(0, min(self.start, max(0, len(rows) - height)))

    def toggle_help(self, entries: Sequence[tuple[str, str]] = ()) -> None:
        """Open the key help modal listing ``entries``, or close it if open."""
        if self.show_help:
            self.show_help = False
            return
        self.show_help = True
        self.help_entries = list(entries)

    def render(self, height: int, width: int) -> list[str]:
        if self.show_help:
            return render_help_screen(self.help_entries, width, height, self.theme)
        content_height = height - 1 if self.status_message else height
        self.scroll_to_cursor(content_height)
        return render_report_screen(
            RenderContext(
                document=self.document,
                gutter=self.gutter,
                visible_rows=self.visible_rows(),
                start=self.start,
                height=height,
                width=width,
                cursor_row=self.cursor_row,
                status_message=self.status_message,
                theme=self.theme,
                diff_style=self.diff_style,
            )
        )


__all__ = ["NOTHING_TO_FOLD_MESSAGE", "StatusView"]
