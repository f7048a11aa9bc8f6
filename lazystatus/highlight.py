"""Terminal-safe text and Pygments coloring for diff hunk bodies.

Report text comes from repository data, so control bytes are escaped before
it reaches the document. Diff body lines are colored one at a time with the
Pygments diff lexer and a cached terminal formatter per style.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import DiffLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_DIFF_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_DIFF_LEXER = DiffLexer()


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


@lru_cache(maxsize=None)
def normalize_style(style: str) -> str:
    """Return ``style`` when Pygments knows it, else the default diff style."""
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_DIFF_STYLE
    return style


@lru_cache(maxsize=16)
def _formatter_for_style(style: str) -> TerminalFormatter:
    return TerminalFormatter(style=style)


def colorize_diff_line(line: str, style: str = DEFAULT_DIFF_STYLE) -> str:
    """Color one diff body line, returning it unchanged when nothing applies."""
    if not line:
        return line
    formatter = _formatter_for_style(normalize_style(style))
    rendered = pygments_highlight(line, _DIFF_LEXER, formatter)
    # Pygments always terminates its output with a newline.
    rendered = rendered.rstrip("\n")
    return rendered if rendered else line


__all__ = ["DEFAULT_DIFF_STYLE", "colorize_diff_line", "normalize_style", "sanitize_terminal_text"]
