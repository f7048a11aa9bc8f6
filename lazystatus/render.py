"""Screen rendering for the status report.

Each visible document row becomes one screen line: the gutter glyph cell, a
space, then the row's styled segments. Hunk bodies are colored with Pygments,
everything else with the active UI theme. The key help modal replaces the
whole screen while it is open.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .ansi import clip_ansi_line, display_width
from .document import ReportDocument
from .gutter import Gutter
from .highlight import DEFAULT_DIFF_STYLE, colorize_diff_line
from .ui_theme import DEFAULT_THEME, PLAIN_THEME, UITheme

GUTTER_WIDTH = 2
HELP_TITLE = "lazystatus help"
HELP_FOOTER = "Press ? / Esc / q to close"
HELP_MODAL_MAX_WIDTH = 72


@dataclass(frozen=True)
class RenderContext:
    """Inputs required to paint one screen of the report."""

    document: ReportDocument
    gutter: Gutter
    visible_rows: list[int]
    start: int
    height: int
    width: int
    cursor_row: int | None = None
    status_message: str = ""
    theme: UITheme = DEFAULT_THEME
    diff_style: str = DEFAULT_DIFF_STYLE


def render_row(
    document: ReportDocument,
    gutter: Gutter,
    row: int,
    theme: UITheme = DEFAULT_THEME,
    diff_style: str = DEFAULT_DIFF_STYLE,
) -> str:
    """Render one document row with its gutter cell and styled text."""
    symbol = gutter.symbol_at(row)
    if symbol.strip():
        parts = [f"{theme.gutter_marker}{symbol}{theme.reset} "]
    else:
        parts = [" " * GUTTER_WIDTH]

    for style, text in document.line_segments(row):
        if style == "diff":
            if theme.reset:
                parts.append(colorize_diff_line(text, diff_style))
            else:
                parts.append(text)
            continue
        color = theme.color_for(style)
        parts.append(f"{color}{text}{theme.reset}" if color else text)
    return "".join(parts)


def render_report_screen(context: RenderContext) -> list[str]:
    """Return exactly ``height`` screen lines for the current viewport.

    The last line is reserved for the status message when one is set.
    """
    theme = context.theme
    content_height = context.height
    if context.status_message:
        content_height = max(0, content_height - 1)

    lines: list[str] = []
    window = context.visible_rows[context.start : context.start + content_height]
    for row in window:
        if row == context.cursor_row and theme.reverse:
            # Segment resets would cancel reverse video, so the cursor row is drawn unstyled.
            plain = render_row(context.document, context.gutter, row, PLAIN_THEME)
            lines.append(f"{theme.reverse}{clip_ansi_line(plain, context.width)}{theme.reset}")
            continue
        lines.append(
            clip_ansi_line(
                render_row(context.document, context.gutter, row, theme, context.diff_style),
                context.width,
            )
        )

    while len(lines) < content_height:
        lines.append("")

    if context.status_message:
        status = clip_ansi_line(context.status_message, context.width)
        lines.append(f"{theme.status}{status}{theme.reset}" if theme.status else status)
    return lines


def _framed_row(text: str, inner_width: int, theme: UITheme) -> str:
    clipped = clip_ansi_line(text, inner_width)
    pad = " " * max(0, inner_width - display_width(clipped))
    return f"{theme.help_border}│{theme.reset}{clipped}{pad}{theme.help_border}│{theme.reset}"


def render_help_screen(
    entries: Sequence[tuple[str, str]],
    width: int,
    height: int,
    theme: UITheme = DEFAULT_THEME,
) -> list[str]:
    """Return exactly ``height`` lines drawing the key help modal.

    Each binding becomes a ``keys  description`` row inside a rounded frame,
    in ``entries`` order. Body rows that do not fit are dropped before the
    bottom edge.
    """
    if height <= 0:
        return []
    inner_width = max(2, min(HELP_MODAL_MAX_WIDTH, width) - 2)
    key_width = max((display_width(label) for label, _description in entries), default=0)

    body = [""]
    for label, description in entries:
        pad = " " * (key_width - display_width(label))
        body.append(f"  {theme.help_key}{label}{theme.reset}{pad}  {description}")
    body.extend(["", f"  {theme.status}{HELP_FOOTER}{theme.reset}"])

    title = clip_ansi_line(f"─ {HELP_TITLE} ", inner_width)
    filler = "─" * (inner_width - display_width(title))
    lines = [f"{theme.help_border}╭{title}{filler}╮{theme.reset}"]
    lines.extend(_framed_row(row, inner_width, theme) for row in body[: max(0, height - 2)])
    lines.append(f"{theme.help_border}╰{'─' * inner_width}╯{theme.reset}")

    lines = [clip_ansi_line(line, width) for line in lines[:height]]
    while len(lines) < height:
        lines.append("")
    return lines


__all__ = [
    "GUTTER_WIDTH",
    "HELP_FOOTER",
    "HELP_TITLE",
    "RenderContext",
    "render_help_screen",
    "render_report_screen",
    "render_row",
]
