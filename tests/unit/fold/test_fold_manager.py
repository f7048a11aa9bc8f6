"""Behavior tests for ``FoldManager`` toggling, cascades and lifecycle.

Uses the real ``ReportDocument`` and ``Gutter`` collaborators so fold flags,
hidden rows and indicator glyphs are all observable, plus a recording
indicator provider for exact create/destroy accounting.
"""

from __future__ import annotations

import unittest

from lazystatus.document import ReportDocument
from lazystatus.fold import (
    FoldManager,
    FoldManagerBusyError,
    FoldManagerClosedError,
    FoldOverlapError,
    FoldState,
    RowRange,
    SharedStartRowError,
)
from lazystatus.gutter import Gutter

EXPANDED = FoldState.EXPANDED
COLLAPSED = FoldState.COLLAPSED


class _RecordingIndicators:
    """Indicator provider that records every call it receives."""

    def __init__(self) -> None:
        self.created: list[int] = []
        self.destroyed: list[int] = []
        self.glyphs: dict[int, FoldState] = {}
        self.callbacks: dict[int, object] = {}
        self.on_destroy = None

    def create_indicator(self, row: int) -> int:
        handle = len(self.created)
        self.created.append(row)
        return handle

    def set_indicator_glyph(self, handle: int, glyph: FoldState) -> None:
        self.glyphs[handle] = glyph

    def destroy_indicator(self, handle: int) -> None:
        self.destroyed.append(handle)
        if self.on_destroy is not None:
            self.on_destroy()

    def on_activate(self, handle: int, callback) -> None:
        self.callbacks[handle] = callback


def _document(line_count: int) -> ReportDocument:
    document = ReportDocument()
    for row in range(line_count):
        document.append_line(f"line {row}")
    return document


class FoldManagerScenarioTests(unittest.TestCase):
    def setUp(self) -> None:
        self.document = _document(12)
        self.gutter = Gutter()
        self.folds = FoldManager(self.document, self.gutter)
        # Untracked files, then an unstaged section whose hunks arrive after it.
        for start, end in ((0, 2), (4, 9), (5, 6), (7, 9)):
            self.folds.add(RowRange(start, end))

    def _state(self, row: int) -> FoldState:
        node = self.folds.find_owner(row)
        assert node is not None
        return node.fold_state

    def test_add_creates_expanded_indicator_at_first_row(self) -> None:
        self.assertEqual([marker.row for marker in self.gutter.live_markers()], [0, 4, 5, 7])
        for row in (0, 4, 5, 7):
            self.assertIs(self.gutter.glyph_at(row), EXPANDED)
        self.assertIsNone(self.gutter.glyph_at(1))
        self.assertEqual(self.folds.violations(), [])

    def test_toggle_hunk_collapses_only_that_hunk(self) -> None:
        self.assertTrue(self.folds.toggle(5))

        self.assertEqual(self.document.folded_ranges(), [RowRange(5, 6)])
        self.assertIs(self._state(5), COLLAPSED)
        self.assertIs(self._state(7), EXPANDED)
        self.assertIs(self._state(4), EXPANDED)
        self.assertIs(self.gutter.glyph_at(5), COLLAPSED)
        self.assertIs(self.gutter.glyph_at(7), EXPANDED)
        self.assertIs(self.gutter.glyph_at(4), EXPANDED)
        self.assertEqual(self.document.visible_rows(), [0, 1, 2, 3, 4, 5, 7, 8, 9, 10, 11])

    def test_collapsing_parent_hides_all_descendants_and_expanding_restores_them(self) -> None:
        self.folds.toggle(5)
        self.assertTrue(self.folds.toggle(4))

        self.assertIs(self._state(4), COLLAPSED)
        self.assertIs(self.gutter.glyph_at(4), COLLAPSED)
        self.assertIs(self.gutter.glyph_at(5), COLLAPSED)
        self.assertIs(self.gutter.glyph_at(7), COLLAPSED)
        # Display glyph changed, stored state did not.
        node_7 = self.folds.find_owner(8)
        assert node_7 is not None
        self.assertIs(node_7.fold_state, EXPANDED)
        self.assertEqual(self.document.visible_rows(), [0, 1, 2, 3, 4, 10, 11])

        self.assertTrue(self.folds.toggle(4))

        self.assertIs(self._state(4), EXPANDED)
        self.assertIs(self.gutter.glyph_at(4), EXPANDED)
        self.assertIs(self.gutter.glyph_at(7), EXPANDED)
        self.assertIs(self.gutter.glyph_at(5), COLLAPSED)
        self.assertIs(self._state(5), COLLAPSED)
        self.assertTrue(self.document.is_row_hidden(6))
        self.assertEqual(self.document.visible_rows(), [0, 1, 2, 3, 4, 5, 7, 8, 9, 10, 11])

    def test_collapsed_child_only_reopens_through_its_own_toggle(self) -> None:
        self.folds.toggle(5)
        self.folds.toggle(4)
        self.folds.toggle(4)

        self.assertTrue(self.folds.toggle(6))

        self.assertIs(self._state(5), EXPANDED)
        self.assertIs(self.gutter.glyph_at(5), EXPANDED)
        self.assertFalse(self.document.is_row_hidden(6))
        self.assertEqual(self.document.folded_ranges(), [])

    def test_double_toggle_restores_fold_flags_and_states(self) -> None:
        self.folds.toggle(7)
        before_folds = self.document.folded_ranges()
        before_states = [node.fold_state for node in self.folds.iter_nodes()]

        for row in (0, 4, 5, 8):
            self.assertTrue(self.folds.toggle(row))
            self.assertTrue(self.folds.toggle(row))
            self.assertEqual(self.document.folded_ranges(), before_folds)
            self.assertEqual([node.fold_state for node in self.folds.iter_nodes()], before_states)

    def test_toggle_outside_every_section_reports_miss(self) -> None:
        self.assertFalse(self.folds.toggle(3))
        self.assertFalse(self.folds.toggle(11))
        self.assertEqual(self.document.folded_ranges(), [])

    def test_gutter_activation_toggles_its_own_section(self) -> None:
        self.assertTrue(self.gutter.activate_row(4))
        self.assertIs(self._state(4), COLLAPSED)
        self.assertTrue(self.gutter.activate_row(4))
        self.assertIs(self._state(4), EXPANDED)
        self.assertFalse(self.gutter.activate_row(3))

    def test_overlapping_add_is_rejected_without_new_indicator(self) -> None:
        with self.assertRaises(FoldOverlapError):
            self.folds.add(RowRange(8, 10))
        self.assertEqual(self.gutter.created_count, 4)
        self.assertEqual(self.folds.violations(), [])

    def test_shared_start_row_add_keeps_gutter_in_sync(self) -> None:
        with self.assertRaises(SharedStartRowError):
            self.folds.add(RowRange(4, 11))
        self.assertEqual(self.gutter.created_count, 4)

        self.assertTrue(self.gutter.activate_row(4))

        self.assertEqual(self.document.folded_ranges(), [RowRange(4, 9)])
        self.assertIs(self.gutter.glyph_at(4), COLLAPSED)

    def test_expanding_under_collapsed_ancestor_keeps_glyphs_collapsed(self) -> None:
        document = _document(12)
        gutter = Gutter()
        folds = FoldManager(document, gutter)
        for start, end in ((3, 5), (2, 9), (1, 10)):
            folds.add(RowRange(start, end))

        folds.toggle(2)
        folds.toggle(1)
        self.assertTrue(folds.toggle(2))

        self.assertEqual([gutter.glyph_at(row) for row in (1, 2, 3)], [COLLAPSED, COLLAPSED, COLLAPSED])
        self.assertEqual(document.visible_rows(), [0, 1, 11])
        middle = folds.find_owner(2)
        assert middle is not None
        self.assertIs(middle.fold_state, EXPANDED)

        self.assertTrue(folds.toggle(1))

        self.assertEqual([gutter.glyph_at(row) for row in (1, 2, 3)], [EXPANDED, EXPANDED, EXPANDED])
        self.assertEqual(document.visible_rows(), list(range(12)))


class FoldManagerLifecycleTests(unittest.TestCase):
    def test_reset_forgets_sections_and_destroys_each_indicator_once(self) -> None:
        document = _document(12)
        indicators = _RecordingIndicators()
        folds = FoldManager(document, indicators)
        for start, end in ((0, 2), (4, 9), (5, 6), (7, 9)):
            folds.add(RowRange(start, end))
        self.assertEqual(indicators.created, [0, 4, 5, 7])

        document.clear()
        document.append_line("fresh")
        folds.reset()

        self.assertEqual(sorted(indicators.destroyed), [0, 1, 2, 3])
        for row in range(12):
            self.assertIsNone(folds.find_owner(row))
            self.assertFalse(folds.toggle(row))
        self.assertEqual(folds.root.range, RowRange(0, 0))
        self.assertEqual(list(folds.iter_nodes()), [])

        folds.destroy()
        self.assertEqual(sorted(indicators.destroyed), [0, 1, 2, 3])

    def test_reset_with_real_gutter_leaves_no_live_markers(self) -> None:
        document = _document(10)
        gutter = Gutter()
        folds = FoldManager(document, gutter)
        folds.add(RowRange(1, 8))
        folds.add(RowRange(2, 3))
        folds.reset()

        self.assertEqual(gutter.live_markers(), [])
        self.assertEqual(gutter.created_count, 2)
        self.assertEqual(gutter.destroyed_count, 2)

    def test_destroyed_manager_rejects_further_use(self) -> None:
        document = _document(5)
        folds = FoldManager(document, _RecordingIndicators())
        folds.add(RowRange(0, 3))
        folds.destroy()
        folds.destroy()

        self.assertTrue(folds.closed)
        with self.assertRaises(FoldManagerClosedError):
            folds.add(RowRange(0, 1))
        with self.assertRaises(FoldManagerClosedError):
            folds.toggle(0)
        with self.assertRaises(FoldManagerClosedError):
            folds.reset()

    def test_reentrant_call_during_teardown_is_rejected(self) -> None:
        document = _document(5)
        indicators = _RecordingIndicators()
        folds = FoldManager(document, indicators)
        folds.add(RowRange(0, 3))
        errors: list[Exception] = []

        def reenter() -> None:
            try:
                folds.toggle(0)
            except FoldManagerBusyError as exc:
                errors.append(exc)

        indicators.on_destroy = reenter
        folds.reset()

        self.assertEqual(len(errors), 1)
        indicators.on_destroy = None
        folds.add(RowRange(1, 2))
        self.assertTrue(folds.toggle(1))


if __name__ == "__main__":
    unittest.main()
