"""Fold controller binding the range tree to a host document and gutter.

The report writer registers each section's rows with ``add`` right after
writing them; the input layer resolves a cursor or click row with ``toggle``.
Collapsing a section folds its rows in the document and shows the collapsed
glyph on every descendant indicator without touching their stored state, so
expanding it again restores each descendant exactly as the user left it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
import logging
from typing import Any, Protocol

from .errors import FoldManagerBusyError, FoldManagerClosedError
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

LOGGER = logging.getLogger(__name__)


class HostDocument(Protocol):
    """Line surface that can fold row ranges anchored at their first row."""

    def extent(self) -> RowRange: ...

    def is_row_folded(self, row: int) -> bool: ...

    def fold_range(self, row_range: RowRange) -> None: ...

    def unfold_row(self, row: int) -> None: ...


class IndicatorProvider(Protocol):
    """Factory for per-section fold indicators (gutter glyphs)."""

    def create_indicator(self, row: int) -> Any: ...

    def set_indicator_glyph(self, handle: Any, glyph: FoldState) -> None: ...

    def destroy_indicator(self, handle: Any) -> None: ...

    def on_activate(self, handle: Any, callback: Callable[[], bool]) -> None: ...


class FoldManager:
    """Own one fold tree for one document instance."""

    def __init__(self, document: HostDocument, indicators: IndicatorProvider) -> None:
        self.document = document
        self.indicators = indicators
        self._root = make_root(document.extent())
        self._busy = False
        self._closed = False

    @property
    def root(self) -> FoldNode:
        return self._root

    @property
    def closed(self) -> bool:
        return self._closed

    @contextmanager
    def _teardown(self) -> Iterator[None]:
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    def _check_usable(self, operation: str) -> None:
        if self._busy:
            raise FoldManagerBusyError(f"{operation}() called while the fold tree is being torn down")
        if self._closed:
            raise FoldManagerClosedError(f"{operation}() called on a destroyed fold manager")

    def _release_tree(self) -> int:
        with self._teardown():
            return destroy_subtree(self._root, self.indicators.destroy_indicator)

    def destroy(self) -> None:
        """Release every indicator; the manager cannot be used afterwards."""
        if self._closed:
            return
        self._check_usable("destroy")
        released = self._release_tree()
        self._closed = True
        LOGGER.debug("fold manager destroyed, released %d indicators", released)

    def reset(self) -> None:
        """Drop all sections and re-anchor the root to the current document extent.

        Call this whenever the document text is replaced wholesale, before any
        new section is added.
        """
        self._check_usable("reset")
        released = self._release_tree()
        self._root = make_root(self.document.extent())
        LOGGER.debug("fold tree reset to %s, released %d indicators", self._root.range, released)

    def add(self, row_range: RowRange) -> None:
        """Register one section and give it an expanded indicator at its first row."""
        self._check_usable("add")
        node = FoldNode(range=row_range)
        parent = insert_node(self._root, node)

        indicator = self.indicators.create_indicator(row_range.start)
        node.indicator = indicator
        self.indicators.set_indicator_glyph(indicator, FoldState.EXPANDED)
        start_row = row_range.start
        self.indicators.on_activate(indicator, lambda: self.toggle(start_row))
        LOGGER.debug("registered fold %s under %s", row_range, parent.range)

    def find_owner(self, row: int) -> FoldNode | None:
        """Return the innermost registered section containing ``row``."""
        owner = find_owner(self._root, row)
        if owner is None or owner.is_root:
            return None
        return owner

    def iter_nodes(self) -> Iterator[FoldNode]:
        """Yield registered sections in document pre-order."""
        for node in iter_subtree(self._root):
            if not node.is_root:
                yield node

    def violations(self) -> list[str]:
        return tree_violations(self._root)

    def toggle(self, row: int) -> bool:
        """Collapse or expand the innermost section owning ``row``.

        Returns ``False`` when ``row`` lies outside every registered section.
        """
        self._check_usable("toggle")
        path = owner_path(self._root, row)
        node = path[-1]
        if node.is_root:
            LOGGER.debug("toggle(%d): no section owns this row", row)
            return False

        if self.document.is_row_folded(node.start):
            self.document.unfold_row(node.start)
            node.fold_state = FoldState.EXPANDED
            # Rows under a folded ancestor stay hidden, so their glyphs stay collapsed.
            if not any(self.document.is_row_folded(ancestor.start) for ancestor in path[1:-1]):
                self._set_glyph(node, FoldState.EXPANDED)
                self._show_children(node)
        else:
            self.document.fold_range(node.range)
            node.fold_state = FoldState.COLLAPSED
            self._set_glyph(node, FoldState.COLLAPSED)
            self._hide_children(node)
        LOGGER.debug("toggle(%d): %s is now %s", row, node.range, node.fold_state.value)
        return True

    def _set_glyph(self, node: FoldNode, glyph: FoldState) -> None:
        if node.indicator is not None:
            self.indicators.set_indicator_glyph(node.indicator, glyph)

    def _hide_children(self, node: FoldNode) -> None:
        for child in node.children:
            # Individually folded subtrees already show collapsed glyphs.
            if self.document.is_row_folded(child.start):
                continue
            self._set_glyph(child, FoldState.COLLAPSED)
            self._hide_children(child)

    def _show_children(self, node: FoldNode) -> None:
        for child in node.children:
            self._set_glyph(child, child.fold_state)
            if child.fold_state is FoldState.EXPANDED:
                self._show_children(child)


__all__ = ["FoldManager", "HostDocument", "IndicatorProvider"]
