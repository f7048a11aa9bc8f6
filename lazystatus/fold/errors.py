"""Exception types raised by the fold layer.

Lookup misses are never errors; these cover contract violations only.
"""

from __future__ import annotations


class FoldError(Exception):
    """Base class for fold-layer failures."""


class FoldRangeError(FoldError, ValueError):
    """A row range is malformed or cannot be placed in the fold tree."""


class FoldOverlapError(FoldRangeError):
    """A new range partially overlaps an existing one (neither nested nor disjoint)."""


class DuplicateFoldRangeError(FoldRangeError):
    """A new range is identical to an already registered range."""


class SharedStartRowError(FoldRangeError):
    """A new range nests with a registered range that starts on the same row.

    Both would anchor their indicator and document fold at one row, so only
    one of them could ever be toggled.
    """


class FoldManagerClosedError(FoldError, RuntimeError):
    """The fold manager was used after ``destroy()``."""


class FoldManagerBusyError(FoldError, RuntimeError):
    """The fold manager was re-entered while a reset or destroy was running."""


__all__ = [
    "FoldError",
    "FoldRangeError",
    "FoldOverlapError",
    "DuplicateFoldRangeError",
    "SharedStartRowError",
    "FoldManagerClosedError",
    "FoldManagerBusyError",
]
