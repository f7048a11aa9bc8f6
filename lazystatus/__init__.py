"""Public package surface for lazystatus.

A magit-style git status report with collapsible sections. The fold tree
lives in ``lazystatus.fold``; the report writer, document, gutter, renderer
and view are thin collaborators around it.
"""

from __future__ import annotations

from .document import ReportDocument
from .fold import FoldManager, FoldNode, FoldState, RowRange
from .gutter import Gutter
from .report import StatusReportWriter
from .view import StatusView

__all__ = [
    "FoldManager",
    "FoldNode",
    "FoldState",
    "RowRange",
    "Gutter",
    "ReportDocument",
    "StatusReportWriter",
    "StatusView",
]
