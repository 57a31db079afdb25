"""Domain models for the removal pipeline.

This module defines the data structures flowing between the selector,
the removal engine and the history log: selected entries, selection
criteria, history records and per-item removal results.
"""

import os
import stat
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from saferm.engine.errors import SafermError

HISTORY_SEPARATOR = "----------------------------"


def has_line_break(path: str) -> bool:
    """Check whether a path would split a line of the history log."""
    return "\n" in path or "\r" in path


class EntryKind(str, Enum):
    """Type of filesystem entry.

    Attributes:
        FILE: Regular file (or any non-directory, non-symlink node).
        DIRECTORY: Regular directory.
        SYMLINK: Symbolic link with a valid target.
        DEAD_SYMLINK: Symbolic link whose target does not exist.
        MISSING: Nothing exists at the path.
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    DEAD_SYMLINK = "dead_symlink"
    MISSING = "missing"


@dataclass(frozen=True, slots=True)
class Entry:
    """A filesystem path selected for removal.

    Attributes:
        path: Absolute filesystem path.
        kind: Type of entry, captured at selection time.
        exists: Whether anything (including a dangling link) exists at the path.
    """

    path: str
    kind: EntryKind
    exists: bool

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not os.path.isabs(self.path):
            msg = f"Entry path must be absolute, got {self.path!r}"
            raise ValueError(msg)

    @classmethod
    def from_path(cls, path: str | Path) -> "Entry":
        """Build an Entry by inspecting the path without following symlinks.

        The path is made absolute but not resolved, so a symlink is
        trashed as a link rather than its target.
        """
        absolute = os.path.abspath(os.fspath(path))
        try:
            st = os.lstat(absolute)
        except FileNotFoundError:
            return cls(path=absolute, kind=EntryKind.MISSING, exists=False)

        if stat.S_ISLNK(st.st_mode):
            kind = EntryKind.SYMLINK if os.path.exists(absolute) else EntryKind.DEAD_SYMLINK
        elif stat.S_ISDIR(st.st_mode):
            kind = EntryKind.DIRECTORY
        else:
            kind = EntryKind.FILE
        return cls(path=absolute, kind=kind, exists=True)

    @property
    def name(self) -> str:
        """Bare file name of the entry."""
        return os.path.basename(self.path.rstrip(os.sep)) or self.path

    @property
    def is_dir(self) -> bool:
        """True for real directories (not links to directories)."""
        return self.kind == EntryKind.DIRECTORY


@dataclass(frozen=True, slots=True)
class SelectionCriteria:
    """Selection flags supplied once per invocation.

    Attributes:
        recursive: Select directories (whole trees) and walk them for patterns.
        pattern: Substring a file name must contain to be selected.
        treat_empty_dir_as_removable: Admit directories without ``recursive``
            (used by the empty-directory removal mode).
    """

    recursive: bool = False
    pattern: str | None = None
    treat_empty_dir_as_removable: bool = False


@dataclass(slots=True)
class Selection:
    """Outcome of path selection.

    Attributes:
        entries: Entries admitted for removal, in input order.
        problems: Per-path diagnostics for excluded paths.
    """

    entries: list[Entry] = field(default_factory=list)
    problems: list[SafermError] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class HistoryRecord:
    """Record of a single successful trash move.

    Attributes:
        id: 14-digit timestamp id (YYYYMMDDHHMMSS).
        original_path: Absolute path the item was moved from.
        trash_path: Absolute path inside the trash directory.
    """

    id: str
    original_path: str
    trash_path: str

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.id.isdigit():
            msg = f"History id must be numeric, got {self.id!r}"
            raise ValueError(msg)
        if not self.original_path or not self.trash_path:
            msg = "History record paths cannot be empty"
            raise ValueError(msg)
        if has_line_break(self.original_path) or has_line_break(self.trash_path):
            msg = "History record paths cannot contain line breaks"
            raise ValueError(msg)

    def to_lines(self) -> list[str]:
        """Serialize to the four-line block stored in the history log."""
        return [self.id, self.original_path, self.trash_path, HISTORY_SEPARATOR]

    @classmethod
    def from_lines(cls, lines: list[str]) -> "HistoryRecord":
        """Deserialize from a four-line block.

        Raises:
            ValueError: If the block is malformed.
        """
        if len(lines) != 4 or lines[3] != HISTORY_SEPARATOR:
            msg = f"Malformed history block: {lines!r}"
            raise ValueError(msg)
        return cls(id=lines[0].strip(), original_path=lines[1], trash_path=lines[2])


class OutcomeKind(str, Enum):
    """What happened to a single item.

    Attributes:
        TRASHED: Moved into the trash directory.
        PERMANENTLY_DELETED: Deleted without a trash copy.
        SKIPPED: Left untouched on purpose (declined, dry-run, filtered).
        FAILED: Left untouched because of an error.
    """

    TRASHED = "trashed"
    PERMANENTLY_DELETED = "permanently_deleted"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class RemovalResult:
    """Result of processing a single item.

    Attributes:
        path: Absolute path that was operated on.
        outcome: What happened to the item.
        trash_path: Destination inside the trash, for trashed items.
        reason: Human-readable note (skip reason, deletion cause).
        error: Error for failed items, None otherwise.
        dry_run: Whether this was a dry-run (no actual change).
    """

    path: str
    outcome: OutcomeKind
    trash_path: str | None = None
    reason: str | None = None
    error: SafermError | None = None
    dry_run: bool = False

    @property
    def success(self) -> bool:
        """True when the item is gone from its original location."""
        return self.outcome in (OutcomeKind.TRASHED, OutcomeKind.PERMANENTLY_DELETED)

    @property
    def failed(self) -> bool:
        """True when an error prevented the removal."""
        return self.outcome == OutcomeKind.FAILED


@dataclass(slots=True)
class BatchReport:
    """Aggregate result of one engine run.

    Attributes:
        results: One result per processed item, in processing order.
        problems: Selection-time diagnostics for excluded paths.
        aborted: True if the user declined the up-front batch confirmation.
    """

    results: list[RemovalResult] = field(default_factory=list)
    problems: list[SafermError] = field(default_factory=list)
    aborted: bool = False

    @property
    def has_failures(self) -> bool:
        """True if any item failed or any path was rejected at selection."""
        return bool(self.problems) or any(r.failed for r in self.results)
