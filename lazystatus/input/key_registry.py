"""Described key bindings for the status report view.

Terminals report some keys under several tokens (Enter arrives as ``ENTER``,
``ENTER_CR`` or ``ENTER_LF``); those are folded onto one canonical token
before lookup. Every binding carries a description so the help overlay can
list exactly what is bound.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

KEY_ALIASES: dict[str, str] = {
    "ENTER_CR": "ENTER",
    "ENTER_LF": "ENTER",
    " ": "CTRL_D",
    "CTRL_QUESTION": "?",
}

KEY_LABELS: dict[str, str] = {
    "TAB": "Tab",
    "ENTER": "Enter",
    "ESC": "Esc",
    "UP": "Up",
    "DOWN": "Down",
    "HOME": "Home",
    "END": "End",
    "CTRL_D": "Ctrl+D",
    "CTRL_U": "Ctrl+U",
}


def canonical_key(key: str) -> str:
    return KEY_ALIASES.get(key, key)


def key_label(key: str) -> str:
    """Return the human-readable name shown for ``key`` in help text."""
    return KEY_LABELS.get(key, key)


@dataclass(frozen=True)
class KeyBinding:
    """One or more keys bound to an action with a help description.

    ``closes_view`` marks bindings that end the report session; their
    ``handler`` is optional.
    """

    keys: tuple[str, ...]
    description: str
    handler: Callable[[], bool | None] | None = None
    closes_view: bool = False

    @property
    def label(self) -> str:
        return "/".join(key_label(key) for key in self.keys)


class KeyBindingRegistry:
    """Ordered binding table; registration order is the help listing order."""

    def __init__(self) -> None:
        self._by_key: dict[str, KeyBinding] = {}
        self._bindings: list[KeyBinding] = []

    def register(self, *bindings: KeyBinding) -> KeyBindingRegistry:
        """Add bindings; a key already bound to another action raises ``ValueError``."""
        for binding in bindings:
            for key in binding.keys:
                canonical = canonical_key(key)
                existing = self._by_key.get(canonical)
                if existing is not None:
                    raise ValueError(f"key {key!r} is already bound to {existing.description!r}")
                self._by_key[canonical] = binding
            self._bindings.append(binding)
        return self

    def lookup(self, key: str) -> KeyBinding | None:
        return self._by_key.get(canonical_key(key))

    def bindings(self) -> tuple[KeyBinding, ...]:
        return tuple(self._bindings)

    def help_entries(self) -> list[tuple[str, str]]:
        """Return ``(keys label, description)`` rows for the help overlay."""
        return [(binding.label, binding.description) for binding in self._bindings]


__all__ = [
    "KEY_ALIASES",
    "KeyBinding",
    "KeyBindingRegistry",
    "canonical_key",
    "key_label",
]
