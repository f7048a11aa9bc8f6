"""Parsed repository records consumed by the status report writer.

These are plain value types; producing them from git output is the caller's
job. ``StatusSnapshot`` bundles everything one report redraw needs.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LogEntry:
    """One commit line: abbreviated hash, ref labels and subject."""

    hash: str
    subject: str = ""
    locals: tuple[str, ...] = ()
    remotes: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class DiffHunk:
    """One ``@@`` hunk: header line plus raw body lines (with +/-/space markers)."""

    header: str
    body: tuple[str, ...] = ()


@dataclass(frozen=True)
class FileChange:
    """A tracked file with a change status such as ``modified`` or ``new file``."""

    status: str
    path: str
    hunks: tuple[DiffHunk, ...] = ()


@dataclass(frozen=True)
class StashEntry:
    index: int
    subject: str = ""


@dataclass(frozen=True)
class TagInfo:
    """Nearest tag and its commit distance from HEAD."""

    name: str = ""
    distance: int = 0


@dataclass(frozen=True)
class UpstreamInfo:
    """Upstream tracking configuration for the current branch.

    ``branch`` is the resolved upstream (empty when it cannot be resolved);
    ``merge``/``remote`` are the raw branch config values used to explain why.
    """

    branch: str = ""
    merge: str = ""
    remote: str = ""
    rebase: bool = False
    head: LogEntry | None = None


@dataclass(frozen=True)
class PushInfo:
    branch: str
    head: LogEntry | None = None


@dataclass(frozen=True)
class SequenceStep:
    """One rebase step; ``action`` is e.g. ``pick``/``squash``."""

    action: str
    hash: str
    subject: str = ""


@dataclass(frozen=True)
class RebaseInfo:
    head_name: str
    onto_name: str
    onto: LogEntry
    todo: tuple[SequenceStep, ...] = ()
    done: tuple[SequenceStep, ...] = ()
    stopped_at: str = ""


@dataclass(frozen=True)
class MergeInfo:
    head_name: str
    commits: tuple[LogEntry, ...] = ()


@dataclass(frozen=True)
class StatusSnapshot:
    """Everything shown in one status report redraw."""

    branch: str = ""
    head: LogEntry | None = None
    upstream: UpstreamInfo | None = None
    push: PushInfo | None = None
    current_tag: TagInfo = field(default_factory=TagInfo)
    next_tag: TagInfo = field(default_factory=TagInfo)
    merge: MergeInfo | None = None
    rebase: RebaseInfo | None = None
    untracked: tuple[str, ...] = ()
    unstaged: tuple[FileChange, ...] = ()
    staged: tuple[FileChange, ...] = ()
    stashes: tuple[StashEntry, ...] = ()
    ahead: int = 0
    behind: int = 0
    unmerged: tuple[LogEntry, ...] = ()
    unpulled: tuple[LogEntry, ...] = ()
    recent: tuple[LogEntry, ...] = ()


__all__ = [
    "DiffHunk",
    "FileChange",
    "LogEntry",
    "MergeInfo",
    "PushInfo",
    "RebaseInfo",
    "SequenceStep",
    "StashEntry",
    "StatusSnapshot",
    "TagInfo",
    "UpstreamInfo",
]
