"""Persistent JSON config helpers.

Stores theme, diff highlighting style, fold glyphs and log level. Fold state
itself is never persisted. Malformed or missing config falls back to
defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .ansi import display_width
from .gutter import DEFAULT_COLLAPSED_SYMBOL, DEFAULT_EXPANDED_SYMBOL
from .highlight import DEFAULT_DIFF_STYLE

APP_NAME = "lazystatus"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored so an unwritable config never breaks the viewer.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except OSError:
        pass


def _single_cell_symbol(value: object, default: str) -> str:
    if not isinstance(value, str) or display_width(value) != 1:
        return default
    return value


def load_fold_glyphs() -> tuple[str, str]:
    """Return ``(expanded, collapsed)`` gutter symbols.

    Each symbol must occupy exactly one terminal cell; anything else falls
    back to the default arrow.
    """
    value = load_config().get("fold_glyphs")
    if not isinstance(value, dict):
        return DEFAULT_EXPANDED_SYMBOL, DEFAULT_COLLAPSED_SYMBOL
    return (
        _single_cell_symbol(value.get("expanded"), DEFAULT_EXPANDED_SYMBOL),
        _single_cell_symbol(value.get("collapsed"), DEFAULT_COLLAPSED_SYMBOL),
    )


def save_fold_glyphs(expanded: str, collapsed: str) -> None:
    """Persist gutter symbols, ignoring values that are not one cell wide."""
    config = load_config()
    config["fold_glyphs"] = {
        "expanded": _single_cell_symbol(expanded, DEFAULT_EXPANDED_SYMBOL),
        "collapsed": _single_cell_symbol(collapsed, DEFAULT_COLLAPSED_SYMBOL),
    }
    save_config(config)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def load_diff_style() -> str:
    """Return the Pygments style name used for hunk bodies."""
    value = load_config().get("diff_style")
    if not isinstance(value, str) or not value.strip():
        return DEFAULT_DIFF_STYLE
    return value.strip()


def load_log_level() -> int:
    """Return the configured logging level, defaulting to ``WARNING``."""
    value = load_config().get("log_level")
    if not isinstance(value, str):
        return logging.WARNING
    return _LOG_LEVELS.get(value.strip().lower(), logging.WARNING)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "load_config",
    "save_config",
    "load_fold_glyphs",
    "save_fold_glyphs",
    "load_theme_name",
    "save_theme_name",
    "load_diff_style",
    "load_log_level",
]
