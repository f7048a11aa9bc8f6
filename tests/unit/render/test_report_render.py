"""Rendering tests for gutter cells, styling, clipping and the status line."""

from __future__ import annotations

import unittest

from lazystatus.ansi import ANSI_ESCAPE_RE, display_width
from lazystatus.document import ReportDocument
from lazystatus.fold import FoldManager, RowRange
from lazystatus.gutter import Gutter
from lazystatus.render import (
    HELP_FOOTER,
    RenderContext,
    render_help_screen,
    render_report_screen,
    render_row,
)
from lazystatus.ui_theme import DEFAULT_THEME, PLAIN_THEME


class ReportRenderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.document = ReportDocument()
        self.document.append_line([("section", "Section")])
        self.document.append_line([("hunk", "@@ -1 +1 @@")])
        self.document.append_line([("diff", "+new")])
        self.gutter = Gutter()
        self.folds = FoldManager(self.document, self.gutter)
        self.folds.add(RowRange(1, 2))
        self.folds.add(RowRange(0, 2))

    def _context(self, **overrides) -> RenderContext:
        values = dict(
            document=self.document,
            gutter=self.gutter,
            visible_rows=self.document.visible_rows(),
            start=0,
            height=3,
            width=40,
            theme=PLAIN_THEME,
        )
        values.update(overrides)
        return RenderContext(**values)

    def test_plain_rows_show_gutter_glyph_column(self) -> None:
        self.assertEqual(
            render_report_screen(self._context()),
            ["▼ Section", "▼ @@ -1 +1 @@", "  +new"],
        )

    def test_collapsed_glyphs_and_hidden_rows(self) -> None:
        self.folds.toggle(0)
        lines = render_report_screen(self._context(visible_rows=self.document.visible_rows()))
        self.assertEqual(lines, ["▶ Section", "", ""])

    def test_status_message_takes_last_line(self) -> None:
        lines = render_report_screen(self._context(status_message="nothing to fold here"))
        self.assertEqual(lines, ["▼ Section", "▼ @@ -1 +1 @@", "nothing to fold here"])

    def test_lines_are_clipped_to_width(self) -> None:
        lines = render_report_screen(self._context(width=4))
        self.assertEqual(lines[0], "▼ Se")

    def test_scroll_offset_selects_window(self) -> None:
        lines = render_report_screen(self._context(start=1, height=2))
        self.assertEqual(lines, ["▼ @@ -1 +1 @@", "  +new"])

    def test_themed_row_colors_gutter_and_segments(self) -> None:
        rendered = render_row(self.document, self.gutter, 0, DEFAULT_THEME)
        self.assertTrue(
            rendered.startswith(f"{DEFAULT_THEME.gutter_marker}▼{DEFAULT_THEME.reset} ")
        )
        self.assertIn(f"{DEFAULT_THEME.section}Section{DEFAULT_THEME.reset}", rendered)

    def test_diff_rows_are_highlighted_only_with_color(self) -> None:
        colored = render_row(self.document, self.gutter, 2, DEFAULT_THEME)
        self.assertIn("\x1b[", colored)
        self.assertEqual(ANSI_ESCAPE_RE.sub("", colored), "  +new")
        self.assertEqual(render_row(self.document, self.gutter, 2, PLAIN_THEME), "  +new")

    def test_cursor_row_is_reverse_video(self) -> None:
        lines = render_report_screen(self._context(theme=DEFAULT_THEME, cursor_row=0))
        self.assertEqual(lines[0], f"{DEFAULT_THEME.reverse}▼ Section{DEFAULT_THEME.reset}")


class HelpScreenRenderTests(unittest.TestCase):
    ENTRIES = [("Tab/Enter", "fold"), ("q/Esc", "close")]

    def test_plain_help_modal_layout(self) -> None:
        lines = render_help_screen(self.ENTRIES, 40, 8, PLAIN_THEME)

        self.assertEqual(
            lines,
            [
                "╭─ lazystatus help " + "─" * 20 + "╮",
                "│" + " " * 38 + "│",
                "│" + "  Tab/Enter  fold".ljust(38) + "│",
                "│" + "  q/Esc      close".ljust(38) + "│",
                "│" + " " * 38 + "│",
                "│" + f"  {HELP_FOOTER}".ljust(38) + "│",
                "╰" + "─" * 38 + "╯",
                "",
            ],
        )

    def test_short_screen_drops_body_rows_but_closes_frame(self) -> None:
        lines = render_help_screen(self.ENTRIES, 40, 4, PLAIN_THEME)
        self.assertEqual(len(lines), 4)
        self.assertTrue(lines[-1].startswith("╰"))
        self.assertIn("Tab/Enter", lines[2])

    def test_themed_modal_keeps_width(self) -> None:
        for line in render_help_screen(self.ENTRIES, 30, 7, DEFAULT_THEME):
            self.assertEqual(display_width(line), 30)
            self.assertIn(DEFAULT_THEME.help_border, line)


if __name__ == "__main__":
    unittest.main()
