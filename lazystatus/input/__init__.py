"""Input handling for the status report view."""

from __future__ import annotations

from .key_common import parse_mouse_col_row
from .key_registry import KeyBinding, KeyBindingRegistry, canonical_key, key_label
from .report_keys import ReportKeyContext, build_report_key_registry, handle_report_key

__all__ = [
    "KeyBinding",
    "KeyBindingRegistry",
    "ReportKeyContext",
    "build_report_key_registry",
    "canonical_key",
    "handle_report_key",
    "key_label",
    "parse_mouse_col_row",
]
