"""Hierarchical row-range folding for generated reports.

``FoldManager`` is the public surface; ``range_tree`` holds the containment
forest it maintains.
"""

from __future__ import annotations

from .errors import (
    DuplicateFoldRangeError,
    FoldError,
    FoldManagerBusyError,
    FoldManagerClosedError,
    FoldOverlapError,
    FoldRangeError,
    SharedStartRowError,
)
from .manager import FoldManager, HostDocument, IndicatorProvider
from .range_tree import (
    FoldNode,
    destroy_subtree,
    find_owner,
    insert_node,
    iter_subtree,
    make_root,
    owner_path,
    tree_violations,
)
from .types import FoldState, RowRange

__all__ = [
    "FoldManager",
    "HostDocument",
    "IndicatorProvider",
    "FoldNode",
    "FoldState",
    "RowRange",
    "make_root",
    "insert_node",
    "find_owner",
    "owner_path",
    "iter_subtree",
    "destroy_subtree",
    "tree_violations",
    "FoldError",
    "FoldRangeError",
    "FoldOverlapError",
    "DuplicateFoldRangeError",
    "SharedStartRowError",
    "FoldManagerClosedError",
    "FoldManagerBusyError",
]
