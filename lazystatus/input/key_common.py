"""Shared key-token parsing helpers."""

from __future__ import annotations

MOUSE_LEFT_DOWN = "MOUSE_LEFT_DOWN"


def parse_mouse_col_row(mouse_key: str) -> tuple[int | None, int | None]:
    """Parse ``MOUSE_*:col:row`` key tokens into 1-based integer coordinates."""
    parts = mouse_key.split(":")
    if len(parts) < 3:
        return None, None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None, None


def is_mouse_key(key: str) -> bool:
    return key.startswith("MOUSE_")
