"""Containment forest of row ranges used to track foldable report sections.

Every node owns an inclusive row range. Children are strictly contained in
their parent, start on a later row than it, are pairwise disjoint, and are
kept sorted by start row. A single synthetic root anchors the forest and is
treated as containing every row, so insertion and lookup never consult the
root's own range.

Nodes may be inserted in any order: a range that encloses existing siblings
adopts them as children (reparenting) before being attached itself.
"""

from __future__ import annotations

import bisect
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from .errors import DuplicateFoldRangeError, FoldOverlapError, SharedStartRowError
from .types import FoldState, RowRange


@dataclass(eq=False)
class FoldNode:
    """One foldable section of the document."""

    range: RowRange
    indicator: Any = None
    children: list[FoldNode] = field(default_factory=list)
    fold_state: FoldState = FoldState.EXPANDED
    is_root: bool = False

    @property
    def start(self) -> int:
        return self.range.start

    @property
    def end(self) -> int:
        return self.range.end

    def __repr__(self) -> str:
        kind = "root" if self.is_root else self.fold_state.value
        return f"FoldNode({self.range}, {kind}, children={len(self.children)})"


def make_root(extent: RowRange) -> FoldNode:
    """Create the synthetic root node for a document extent."""
    return FoldNode(range=extent, is_root=True)


def _start_key(node: FoldNode) -> int:
    return node.range.start


def insert_node(parent: FoldNode, node: FoldNode) -> FoldNode:
    """Insert ``node`` somewhere below ``parent`` and return its new parent.

    Raises ``DuplicateFoldRangeError`` for a range already present,
    ``SharedStartRowError`` when it would nest with a range starting on the
    same row, and ``FoldOverlapError`` for a partial overlap. All are detected
    before any child list is touched, so a rejected insert leaves the tree
    unchanged.
    """
    new_range = node.range
    while True:
        enclosing: FoldNode | None = None
        adopted: list[FoldNode] = []
        for child in parent.children:
            child_range = child.range
            if child_range == new_range:
                raise DuplicateFoldRangeError(f"range {new_range} is already registered")
            if child_range.start == new_range.start:
                raise SharedStartRowError(f"range {new_range} shares its start row with {child_range}")
            if child_range.strictly_contains(new_range):
                enclosing = child
                break
            if new_range.strictly_contains(child_range):
                adopted.append(child)
                continue
            if not child_range.disjoint(new_range):
                raise FoldOverlapError(f"range {new_range} partially overlaps {child_range}")

        if enclosing is None:
            break
        # Siblings are disjoint, so no other child can touch the new range.
        parent = enclosing

    if adopted:
        adopted_ids = {id(child) for child in adopted}
        parent.children = [child for child in parent.children if id(child) not in adopted_ids]
        # Adopted children were taken from a sorted list, so order is preserved.
        node.children.extend(adopted)
        node.children.sort(key=_start_key)

    bisect.insort(parent.children, node, key=_start_key)
    return parent


def owner_path(node: FoldNode, row: int) -> list[FoldNode]:
    """Return the chain of nodes from ``node`` down to the innermost one containing ``row``.

    The chain is empty when a non-root ``node`` does not contain ``row``.
    """
    if not node.is_root and not node.range.contains_row(row):
        return []

    path = [node]
    while True:
        children = path[-1].children
        index = bisect.bisect_right(children, row, key=_start_key) - 1
        if index < 0 or not children[index].range.contains_row(row):
            return path
        path.append(children[index])


def find_owner(node: FoldNode, row: int) -> FoldNode | None:
    """Return the innermost node below ``node`` whose range contains ``row``.

    Returns ``node`` itself when none of its children contain ``row``, and
    ``None`` when a non-root ``node`` does not contain ``row`` at all.
    """
    path = owner_path(node, row)
    return path[-1] if path else None


def iter_subtree(node: FoldNode) -> Iterator[FoldNode]:
    """Yield ``node`` and all its descendants in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def destroy_subtree(node: FoldNode, release: Callable[[Any], None]) -> int:
    """Tear down ``node`` post-order, releasing each indicator exactly once.

    Returns the number of indicators released.
    """
    released = 0
    for child in node.children:
        released += destroy_subtree(child, release)
    node.children = []
    if node.indicator is not None:
        indicator = node.indicator
        node.indicator = None
        release(indicator)
        released += 1
    return released


def tree_violations(root: FoldNode) -> list[str]:
    """Return human-readable descriptions of broken tree invariants."""
    problems: list[str] = []
    seen: set[int] = set()
    for node in iter_subtree(root):
        if id(node) in seen:
            problems.append(f"{node.range} is reachable more than once")
            continue
        seen.add(id(node))

        previous: FoldNode | None = None
        for child in node.children:
            if child.is_root:
                problems.append(f"root node nested under {node.range}")
            if not node.is_root and not node.range.strictly_contains(child.range):
                problems.append(f"{child.range} is not strictly inside {node.range}")
            if not node.is_root and child.range.start == node.range.start:
                problems.append(f"{child.range} shares its start row with {node.range}")
            if previous is not None:
                if previous.range.start > child.range.start:
                    problems.append(f"{previous.range} is ordered before {child.range}")
                if not previous.range.disjoint(child.range):
                    problems.append(f"siblings {previous.range} and {child.range} intersect")
            previous = child
    return problems


__all__ = [
    "FoldNode",
    "make_root",
    "insert_node",
    "find_owner",
    "owner_path",
    "iter_subtree",
    "destroy_subtree",
    "tree_violations",
]
