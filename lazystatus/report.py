"""Status report generation with fold registration.

``StatusReportWriter`` streams a magit-style status report into a
``ReportDocument`` and registers every collapsible section with the fold
manager right after writing it. Nested sections are registered innermost
first (hunks, then their file, then the enclosing section), so the fold tree
adopts already registered children as each outer range arrives.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
import logging

from .document import ReportDocument, Segment
from .fold.manager import FoldManager
from .fold.types import RowRange
from .highlight import sanitize_terminal_text
from .records import FileChange, LogEntry, StatusSnapshot

LOGGER = logging.getLogger(__name__)

HEADER_LABEL_WIDTH = 10
NO_COMMIT_MESSAGE = "(no commit message)"


def _single_line(text: str) -> str:
    return text.replace("\r", "\\r").replace("\n", "\\n")


def _subject_or_placeholder(entry: LogEntry | None) -> str:
    subject = entry.subject if entry is not None else ""
    return subject if subject else NO_COMMIT_MESSAGE


class StatusReportWriter:
    """Write one status report per ``write`` call into a document."""

    def __init__(self, document: ReportDocument, folds: FoldManager) -> None:
        self.document = document
        self.folds = folds
        self._sections: list[RowRange] = []

    def _line(self, *segments: Segment) -> int:
        return self.document.append_line(
            (style, sanitize_terminal_text(_single_line(text))) for style, text in segments
        )

    def _register(self, start_row: int) -> RowRange:
        row_range = RowRange(start_row, self.document.last_row)
        self.folds.add(row_range)
        self._sections.append(row_range)
        return row_range

    @contextmanager
    def _section(self, *title: Segment) -> Iterator[int]:
        """Write a blank separator and a section title, then register the body."""
        self._line()
        header_row = self._line(*title)
        yield header_row
        self._register(header_row)

    def write(self, snapshot: StatusSnapshot) -> list[RowRange]:
        """Replace the document with a fresh report and return registered ranges."""
        self.document.clear()
        self.folds.reset()
        self._sections = []

        self._write_headers(snapshot)
        self._write_merge_log(snapshot)
        self._write_rebase_sequence(snapshot)
        self._write_untracked(snapshot.untracked)
        self._write_changes("Unstaged changes", snapshot.unstaged)
        self._write_changes("Staged changes", snapshot.staged)
        self._write_stashes(snapshot)
        self._write_commits(snapshot)

        LOGGER.debug(
            "status report written: %d rows, %d foldable sections",
            self.document.line_count,
            len(self._sections),
        )
        return list(self._sections)

    def _write_headers(self, snapshot: StatusSnapshot) -> None:
        self._write_head_header(snapshot)
        self._write_upstream_header(snapshot)
        self._write_push_header(snapshot)
        self._write_tags_header(snapshot)

    def _write_head_header(self, snapshot: StatusSnapshot) -> None:
        head = snapshot.head
        if snapshot.branch:
            ref: Segment = ("local", f" {snapshot.branch}")
        else:
            ref = ("hash", f" {head.hash if head is not None else 'HEAD'}")
        self._line(
            ("head", "Head:".ljust(HEADER_LABEL_WIDTH)),
            ref,
            ("subject", f" {_subject_or_placeholder(head)}"),
        )

    def _write_upstream_header(self, snapshot: StatusSnapshot) -> None:
        upstream = snapshot.upstream
        if upstream is None or not (upstream.remote or upstream.merge):
            return

        label = "Rebase:" if upstream.rebase else "Merge:"
        segments: list[Segment] = [("head", label.ljust(HEADER_LABEL_WIDTH))]
        if upstream.branch:
            segments.append(("remote", f" {upstream.branch}"))
            segments.append(("subject", f" {_subject_or_placeholder(upstream.head)}"))
        elif not upstream.merge:
            segments.append(("subject", " invalid upstream configuration"))
        elif not upstream.remote:
            segments.append(("remote", f" {upstream.merge}"))
            segments.append(("subject", " does not exist"))
        else:
            segments.append(("remote", f" {upstream.merge}"))
            segments.append(("head", " from"))
            segments.append(("remote", f" {upstream.remote}"))
        self._line(*segments)

    def _write_push_header(self, snapshot: StatusSnapshot) -> None:
        push = snapshot.push
        if push is None or not push.branch:
            return
        self._line(
            ("head", "Push:".ljust(HEADER_LABEL_WIDTH)),
            ("remote", f" {push.branch}"),
            ("subject", f" {_subject_or_placeholder(push.head)}"),
        )

    def _write_tags_header(self, snapshot: StatusSnapshot) -> None:
        current = snapshot.current_tag
        upcoming = snapshot.next_tag
        next_name = "" if upcoming.name == current.name else upcoming.name
        if not current.name and not next_name:
            return

        both = bool(current.name and next_name)
        segments: list[Segment] = [("head", ("Tags:" if both else "Tag:").ljust(HEADER_LABEL_WIDTH))]
        if current.name:
            segments.append(("tag", f" {current.name}"))
            if current.distance > 0:
                segments.extend([("subject", " ("), ("local", str(current.distance)), ("subject", ")")])
        if both:
            segments.append(("subject", ","))
        if next_name:
            segments.append(("tag", f" {next_name}"))
            if upcoming.distance > 0:
                segments.extend([("subject", " ("), ("tag", str(upcoming.distance)), ("subject", ")")])
        self._line(*segments)

    def _write_log_lines(self, entries: Sequence[LogEntry]) -> None:
        for entry in entries:
            segments: list[Segment] = [("hash", entry.hash)]
            for name in entry.locals:
                segments.append(("subject", " "))
                segments.append(("local", name))
            for name in entry.remotes:
                segments.append(("remote", f" {name}"))
            for name in entry.tags:
                segments.append(("tag", f" {name}"))
            segments.append(("subject", f" {entry.subject}"))
            self._line(*segments)

    def _write_merge_log(self, snapshot: StatusSnapshot) -> None:
        merge = snapshot.merge
        if merge is None or not merge.commits:
            return
        with self._section(
            ("section", f"Merging {merge.head_name}"),
            ("subject", f" ({len(merge.commits)})"),
        ):
            self._write_log_lines(merge.commits)

    def _write_rebase_sequence(self, snapshot: StatusSnapshot) -> None:
        rebase = snapshot.rebase
        if rebase is None:
            return
        with self._section(("section", f"Rebasing {rebase.head_name} onto {rebase.onto_name}")):
            for step in reversed(rebase.todo):
                if rebase.stopped_at and step.hash == rebase.stopped_at:
                    action: Segment = ("tag", "join")
                else:
                    action = ("subject", step.action)
                self._line(action, ("hash", f" {step.hash}"), ("subject", f" {step.subject}"))
            for step in reversed(rebase.done):
                if rebase.stopped_at and step.hash == rebase.stopped_at:
                    action = ("tag", "join")
                else:
                    action = ("local", "done")
                subject = step.subject if step.subject else NO_COMMIT_MESSAGE
                self._line(action, ("hash", f" {step.hash}"), ("subject", f" {subject}"))
            self._line(
                ("hash", "onto"),
                ("hash", f" {rebase.onto.hash}"),
                ("subject", f" {_subject_or_placeholder(rebase.onto)}"),
            )

    def _write_untracked(self, paths: Sequence[str]) -> None:
        if not paths:
            return
        with self._section(("section", "Untracked files"), ("subject", f" ({len(paths)})")):
            for path in paths:
                self._line(("subject", path))

    def _write_file_change(self, change: FileChange) -> None:
        file_row = self._line(("subject", f"{change.status}   {change.path}"))
        for hunk in change.hunks:
            hunk_row = self._line(("hunk", hunk.header))
            for body_line in hunk.body:
                self._line(("diff", body_line))
            self._register(hunk_row)
        if change.hunks:
            self._register(file_row)

    def _write_changes(self, title: str, changes: Sequence[FileChange]) -> None:
        if not changes:
            return
        with self._section(("section", title), ("subject", f" ({len(changes)})")):
            for change in changes:
                self._write_file_change(change)

    def _write_stashes(self, snapshot: StatusSnapshot) -> None:
        if not snapshot.stashes:
            return
        with self._section(("section", "Stashes"), ("subject", f" ({len(snapshot.stashes)})")):
            for stash in snapshot.stashes:
                self._line(("hash", f"stash@{{{stash.index}}}"), ("subject", f" {stash.subject}"))

    def _write_commits(self, snapshot: StatusSnapshot) -> None:
        upstream_branch = snapshot.upstream.branch if snapshot.upstream is not None else ""
        if snapshot.branch and upstream_branch and (snapshot.ahead > 0 or snapshot.behind > 0):
            if snapshot.unmerged:
                with self._section(
                    ("section", "Unmerged into"),
                    ("remote", f" {upstream_branch}"),
                    ("subject", f" ({len(snapshot.unmerged)})"),
                ):
                    self._write_log_lines(snapshot.unmerged)
            if snapshot.unpulled:
                with self._section(
                    ("section", "Unpulled from"),
                    ("remote", f" {upstream_branch}"),
                    ("subject", f" ({len(snapshot.unpulled)})"),
                ):
                    self._write_log_lines(snapshot.unpulled)
            return

        if snapshot.recent:
            with self._section(("section", "Recent commits")):
                self._write_log_lines(snapshot.recent)


__all__ = ["HEADER_LABEL_WIDTH", "NO_COMMIT_MESSAGE", "StatusReportWriter"]
