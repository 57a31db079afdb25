"""Removal engine: moves selected items to the trash.

Each item goes through the same steps:

1. compute a timestamp id and a collision-free trash path;
2. guard checks: filesystem root, an item holding the trash directory
   and names the history log cannot store abort the item; superuser and
   cross-device both fall back to confirmed permanent deletion;
3. optional content check: a digest-identical copy already in the trash
   lets the source be deleted instead of trashed again;
4. atomic rename into the trash, then a history record.

A failed rename is classified: permission problems leave the item
untouched, anything else falls back to confirmed permanent deletion.
"""

import errno
import logging
import os
import shutil
from collections.abc import Iterable
from pathlib import Path

from saferm.engine.dedup import ContentDeduplicator
from saferm.engine.errors import (
    CrossesDevicesError,
    DirectoryNotEmptyError,
    HistoryIOError,
    IsRootError,
    LineBreakInPathError,
    NoSuchFileError,
    NotADirectoryPathError,
    PermissionDeniedError,
    PrivilegedUserError,
    SafermError,
    TrashInsidePathError,
    TrashIOError,
)
from saferm.engine.guards import is_cross_device, is_privileged, is_root_path
from saferm.engine.history import HistoryLog
from saferm.engine.interaction import InteractionPolicy, InteractiveMode, never_confirm
from saferm.engine.models import (
    BatchReport,
    Entry,
    HistoryRecord,
    OutcomeKind,
    RemovalResult,
    SelectionCriteria,
    has_line_break,
)
from saferm.engine.naming import TimestampClock, TrashNamer
from saferm.engine.selector import PathSelector

logger = logging.getLogger(__name__)


def delete_path(path: str) -> None:
    """Permanently delete a path.

    Directories (but not symlinks to directories) are removed recursively
    with shutil.rmtree. Files, symlinks and dead symlinks are unlinked.

    Raises:
        FileNotFoundError: If nothing exists at the path.
        OSError: If the deletion fails.
    """
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    elif os.path.lexists(path):
        os.unlink(path)
    else:
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)


def _failed(path: str, error: SafermError) -> RemovalResult:
    return RemovalResult(path=path, outcome=OutcomeKind.FAILED, error=error)


def _os_error(path: str, error: OSError) -> SafermError:
    """Map an OSError raised while removing ``path`` to the error taxonomy."""
    if isinstance(error, FileNotFoundError):
        return NoSuchFileError(path)
    if isinstance(error, PermissionError):
        return PermissionDeniedError(path)
    if error.errno == errno.EXDEV:
        return CrossesDevicesError(path)
    return TrashIOError(path, error)


class RemovalEngine:
    """Moves items to the trash and records what it did.

    The trash directory and history log are injected; nothing is
    resolved from the environment here.

    Args:
        trash_dir: Trash directory. Created on first use.
        history: History log receiving one record per trash move.
        policy: Prompt policy. Defaults to never prompting and declining
            permanent deletion.
        check_sha256: Compare digests with a same-named trash entry first.
        silent_dedup_delete: Delete digest-identical sources without asking.
        dry_run: Report what would be removed without touching anything.
        clock: Timestamp id source. Injected by tests.
    """

    def __init__(
        self,
        trash_dir: Path,
        history: HistoryLog,
        policy: InteractionPolicy | None = None,
        *,
        check_sha256: bool = False,
        silent_dedup_delete: bool = False,
        dry_run: bool = False,
        clock: TimestampClock | None = None,
    ) -> None:
        self._trash_dir = os.path.abspath(trash_dir)
        self._history = history
        self._policy = policy or InteractionPolicy(InteractiveMode.NEVER, never_confirm)
        self._check_sha256 = check_sha256
        self._silent_dedup_delete = silent_dedup_delete
        self._dry_run = dry_run
        self._clock = clock or TimestampClock()
        self._dedup = ContentDeduplicator(self._trash_dir)

    @property
    def trash_dir(self) -> str:
        """Absolute trash directory path."""
        return self._trash_dir

    def run(
        self,
        paths: Iterable[str | Path],
        criteria: SelectionCriteria,
        *,
        empty_dir_mode: bool = False,
    ) -> BatchReport:
        """Select and remove a batch of paths.

        Args:
            paths: Requested paths in user order.
            criteria: Selection flags.
            empty_dir_mode: Remove directories only if empty, never trash.

        Returns:
            BatchReport with one result per selected entry.

        Raises:
            PatternNoMatchError: If a pattern was given and matched nothing.
                Raised before any filesystem change.
        """
        requested = list(paths)
        selection = PathSelector(criteria).select(requested)
        report = BatchReport(problems=list(selection.problems))

        if self._dry_run:
            report.results = [
                RemovalResult(
                    path=entry.path,
                    outcome=OutcomeKind.SKIPPED,
                    reason="dry-run",
                    dry_run=True,
                )
                for entry in selection.entries
            ]
            return report

        if not selection.entries:
            return report

        if not self._policy.confirm_batch(len(requested), criteria.recursive):
            logger.debug("Batch declined by user")
            report.aborted = True
            return report

        namer = TrashNamer(self._trash_dir)
        # Pattern batches are not revertible one item at a time
        record_history = criteria.pattern is None

        for entry in selection.entries:
            if not self._policy.confirm_item(entry.path, empty_dir=empty_dir_mode):
                report.results.append(
                    RemovalResult(path=entry.path, outcome=OutcomeKind.SKIPPED, reason="declined")
                )
                continue
            if empty_dir_mode:
                report.results.append(self.remove_empty_dir(entry.path))
            else:
                report.results.append(self.trash(entry, namer, record_history=record_history))

        return report

    def trash(
        self,
        entry: Entry,
        namer: TrashNamer | None = None,
        *,
        record_history: bool = True,
    ) -> RemovalResult:
        """Move a single entry to the trash.

        Args:
            entry: Entry to remove.
            namer: Namer shared across a batch. A fresh one is used if None.
            record_history: Append a history record on success.

        Returns:
            RemovalResult describing what happened.
        """
        path = entry.path
        if is_root_path(path):
            return _failed(path, IsRootError(path))
        if not os.path.lexists(path):
            return _failed(path, NoSuchFileError(path))
        if self._contains_trash(path):
            return _failed(path, TrashInsidePathError(path))
        if record_history and (has_line_break(path) or has_line_break(self._trash_dir)):
            return _failed(path, LineBreakInPathError(path))

        if self._dry_run:
            return RemovalResult(
                path=path, outcome=OutcomeKind.SKIPPED, reason="dry-run", dry_run=True
            )

        namer = namer or TrashNamer(self._trash_dir)
        id_ = self._clock.next_id()

        try:
            os.makedirs(self._trash_dir, exist_ok=True)
        except OSError as e:
            return self._permanent_delete_fallback(path, TrashIOError(self._trash_dir, e))

        trash_path = namer.trash_path(path, id_)

        if is_privileged():
            namer.release(trash_path)
            return self._permanent_delete_fallback(path, PrivilegedUserError(path))

        try:
            crosses = is_cross_device(path, self._trash_dir)
        except OSError as e:
            namer.release(trash_path)
            return _failed(path, _os_error(path, e))
        if crosses:
            namer.release(trash_path)
            return self._permanent_delete_fallback(path, CrossesDevicesError(path))

        if self._check_sha256 and self._dedup.already_trashed_identical(path):
            result = self._dedup_delete(path)
            if result is not None:
                namer.release(trash_path)
                return result

        try:
            os.rename(path, trash_path)
        except OSError as e:
            namer.release(trash_path)
            error = _os_error(path, e)
            if isinstance(error, (PermissionDeniedError, NoSuchFileError)):
                return _failed(path, error)
            return self._permanent_delete_fallback(path, error)

        logger.debug("Trashed %s to %s", path, trash_path)
        reason = None
        if record_history:
            try:
                self._history.append(
                    HistoryRecord(id=id_, original_path=path, trash_path=trash_path)
                )
            except HistoryIOError as e:
                logger.warning("Trashed %s but could not record it: %s", path, e)
                reason = f"not recorded in history: {e}"

        return RemovalResult(
            path=path,
            outcome=OutcomeKind.TRASHED,
            trash_path=trash_path,
            reason=reason,
        )

    def remove_empty_dir(self, path: str) -> RemovalResult:
        """Remove a directory only if it is empty.

        Never falls back to the trash or to recursive deletion.

        Args:
            path: Absolute path of the directory.

        Returns:
            PERMANENTLY_DELETED on success, FAILED with NoSuchFileError,
            NotADirectoryPathError or DirectoryNotEmptyError otherwise.
        """
        if is_root_path(path):
            return _failed(path, IsRootError(path))
        if not os.path.lexists(path):
            return _failed(path, NoSuchFileError(path))
        if os.path.islink(path) or not os.path.isdir(path):
            return _failed(path, NotADirectoryPathError(path))
        if self._dry_run:
            return RemovalResult(
                path=path, outcome=OutcomeKind.SKIPPED, reason="dry-run", dry_run=True
            )

        try:
            os.rmdir(path)
        except OSError as e:
            if e.errno in (errno.ENOTEMPTY, errno.EEXIST):
                return _failed(path, DirectoryNotEmptyError(path))
            return _failed(path, _os_error(path, e))

        return RemovalResult(
            path=path,
            outcome=OutcomeKind.PERMANENTLY_DELETED,
            reason="removed empty directory",
        )

    def force_remove(self, paths: Iterable[str | Path]) -> list[RemovalResult]:
        """Permanently delete paths without going through the trash.

        Nothing is recorded in history. The root guard still applies,
        and ALWAYS mode still prompts per path.

        Args:
            paths: Paths to delete.

        Returns:
            One RemovalResult per path.
        """
        results: list[RemovalResult] = []
        for raw in paths:
            path = os.path.abspath(os.fspath(raw))
            if is_root_path(path):
                results.append(_failed(path, IsRootError(path)))
                continue
            if not os.path.lexists(path):
                results.append(_failed(path, NoSuchFileError(os.fspath(raw))))
                continue
            if self._dry_run:
                results.append(
                    RemovalResult(
                        path=path, outcome=OutcomeKind.SKIPPED, reason="dry-run", dry_run=True
                    )
                )
                continue
            if not self._policy.confirm_item(path):
                results.append(
                    RemovalResult(path=path, outcome=OutcomeKind.SKIPPED, reason="declined")
                )
                continue
            try:
                delete_path(path)
            except OSError as e:
                results.append(_failed(path, _os_error(path, e)))
                continue
            results.append(
                RemovalResult(
                    path=path,
                    outcome=OutcomeKind.PERMANENTLY_DELETED,
                    reason="forced",
                )
            )
        return results

    def _contains_trash(self, path: str) -> bool:
        """Check whether the trash directory is the path or lies beneath it."""
        return os.path.commonpath([path, self._trash_dir]) == path

    def _dedup_delete(self, path: str) -> RemovalResult | None:
        """Delete a source whose identical copy is already trashed.

        Returns:
            The result, or None if the user declined and the item should
            be trashed normally.
        """
        if not self._silent_dedup_delete and not self._policy.confirm_dedup_delete(path):
            logger.debug("Dedup deletion declined for %s, trashing instead", path)
            return None
        try:
            os.unlink(path)
        except OSError as e:
            return _failed(path, _os_error(path, e))
        return RemovalResult(
            path=path,
            outcome=OutcomeKind.PERMANENTLY_DELETED,
            reason="identical copy already in trash",
        )

    def _permanent_delete_fallback(self, path: str, cause: SafermError) -> RemovalResult:
        """Offer permanent deletion when the trash cannot be used.

        Args:
            path: Item that could not be trashed.
            cause: Why the trash could not be used; shown in the prompt.

        Returns:
            PERMANENTLY_DELETED if confirmed and deleted, SKIPPED if
            declined, FAILED if the deletion itself failed.
        """
        logger.debug("Trash unusable for %s: %s", path, cause)
        if not self._policy.confirm_permanent_delete(path, str(cause)):
            return RemovalResult(
                path=path,
                outcome=OutcomeKind.SKIPPED,
                reason=f"{cause} (kept, permanent deletion declined)",
                error=cause,
            )
        try:
            delete_path(path)
        except OSError as e:
            return _failed(path, _os_error(path, e))
        return RemovalResult(
            path=path,
            outcome=OutcomeKind.PERMANENTLY_DELETED,
            reason=str(cause),
        )
