"""UI theme definitions and selection helpers.

Themes map report style keys (``head``, ``hash``, ``section``...) to ANSI
fragments. Diff body coloring goes through Pygments and is configured by a
separate style name.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the report renderer."""

    name: str
    reset: str
    reverse: str
    head: str
    subject: str
    local: str
    remote: str
    tag: str
    hash: str
    section: str
    hunk: str
    gutter_marker: str
    status: str
    help_border: str
    help_key: str

    def color_for(self, style_key: str) -> str:
        """Return the ANSI fragment for a document segment style key."""
        if style_key in _STYLE_KEYS:
            return getattr(self, style_key)
        return ""


_STYLE_KEYS = frozenset({"head", "subject", "local", "remote", "tag", "hash", "section", "hunk"})

DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    head="\033[1;37m",
    subject="\033[37m",
    local="\033[36m",
    remote="\033[32m",
    tag="\033[33m",
    hash="\033[90m",
    section="\033[1;33m",
    hunk="\033[38;5;141m",
    gutter_marker="\033[38;5;44m",
    status="\033[2;38;5;250m",
    help_border="\033[38;5;45m",
    help_key="\033[38;5;229m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    head="\033[1;38;5;153m",
    subject="\033[38;5;252m",
    local="\033[38;5;45m",
    remote="\033[38;5;84m",
    tag="\033[38;5;215m",
    hash="\033[38;5;73m",
    section="\033[1;38;5;39m",
    hunk="\033[38;5;117m",
    gutter_marker="\033[38;5;39m",
    status="\033[2;38;5;110m",
    help_border="\033[38;5;39m",
    help_key="\033[38;5;215m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    head="",
    subject="",
    local="",
    remote="",
    tag="",
    hash="",
    section="",
    hunk="",
    gutter_marker="",
    status="",
    help_border="",
    help_key="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
