"""Key and mouse handling for the status report view."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..render import GUTTER_WIDTH
from ..view import StatusView
from .key_common import MOUSE_LEFT_DOWN, is_mouse_key, parse_mouse_col_row
from .key_registry import KeyBinding, KeyBindingRegistry, canonical_key

MOUSE_WHEEL_STEP = 3
HELP_CLOSE_KEYS = frozenset({"?", "q", "ESC"})


@dataclass(frozen=True)
class ReportKeyContext:
    """View plus viewport geometry needed to interpret keys."""

    view: StatusView
    visible_content_rows: Callable[[], int]


def _handle_mouse(key: str, context: ReportKeyContext) -> bool:
    if key.startswith("MOUSE_WHEEL_UP"):
        return context.view.move_cursor(-MOUSE_WHEEL_STEP)
    if key.startswith("MOUSE_WHEEL_DOWN"):
        return context.view.move_cursor(MOUSE_WHEEL_STEP)
    if not key.startswith(MOUSE_LEFT_DOWN):
        return False
    col, row = parse_mouse_col_row(key)
    if col is None or row is None:
        return False
    if not (1 <= row <= context.visible_content_rows()):
        return False

    screen_line = row - 1
    if col <= GUTTER_WIDTH:
        return context.view.click_gutter(screen_line)
    return context.view.click_text(screen_line)


def build_report_key_registry(context: ReportKeyContext) -> KeyBindingRegistry:
    """Bind report-mode keys to view operations."""
    view = context.view
    registry = KeyBindingRegistry()

    def half_page() -> int:
        return max(1, context.visible_content_rows() // 2)

    def toggle_help() -> None:
        view.toggle_help(registry.help_entries())

    return registry.register(
        KeyBinding(("TAB", "ENTER"), "fold or unfold the section at the cursor", view.toggle_at_cursor),
        KeyBinding(("j", "DOWN"), "next row", lambda: view.move_cursor(1)),
        KeyBinding(("k", "UP"), "previous row", lambda: view.move_cursor(-1)),
        KeyBinding(("CTRL_D",), "half page down (also Space)", lambda: view.move_cursor(half_page())),
        KeyBinding(("CTRL_U",), "half page up", lambda: view.move_cursor(-half_page())),
        KeyBinding(("g", "HOME"), "first row", lambda: view.move_cursor_to_edge(last=False)),
        KeyBinding(("G", "END"), "last row", lambda: view.move_cursor_to_edge(last=True)),
        KeyBinding(("?",), "show or hide this help", toggle_help),
        KeyBinding(("q", "ESC"), "close the status view", closes_view=True),
    )


def handle_report_key(key: str, context: ReportKeyContext) -> bool:
    """Handle one key token and return ``True`` when the view should close."""
    view = context.view
    if view.show_help:
        # The help overlay swallows input until it is dismissed.
        if canonical_key(key) in HELP_CLOSE_KEYS:
            view.toggle_help()
        return False
    if is_mouse_key(key):
        _handle_mouse(key, context)
        return False

    binding = build_report_key_registry(context).lookup(key)
    if binding is None:
        return False
    if binding.closes_view:
        return True
    if binding.handler is not None:
        binding.handler()
    return False


__all__ = ["HELP_CLOSE_KEYS", "ReportKeyContext", "build_report_key_registry", "handle_report_key"]
