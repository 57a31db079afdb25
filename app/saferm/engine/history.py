"""Append-only log of trash moves, with single-step revert.

The log is plain text, four lines per record:

    20261019143005
    /home/alice/notes/report.pdf
    /home/alice/.local/share/Trash/files/report.pdf
    ----------------------------

Records are appended as items are trashed. Revert consumes the most
recent record, moves the trashed item back, and rewrites the log
without it. The log is capped at ``max_records`` records, oldest first.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from tempfile import NamedTemporaryFile

from saferm.core.config import DEFAULT_HISTORY_LIMIT
from saferm.engine.errors import (
    HistoryCorruptError,
    HistoryEmptyError,
    HistoryIOError,
    OriginalPathOccupiedError,
    RevertError,
)
from saferm.engine.models import HISTORY_SEPARATOR, HistoryRecord

logger = logging.getLogger(__name__)

# Non-UTF-8 file names round-trip through the log unchanged
LOG_ERRORS = "surrogateescape"


@dataclass(frozen=True, slots=True)
class RevertResult:
    """Outcome of a revert.

    Attributes:
        record: The history record that was consumed.
        restored: False if the trashed copy had already disappeared.
    """

    record: HistoryRecord
    restored: bool


class HistoryLog:
    """Manages the history log file.

    Storage location: ~/.local/share/saferm/history.log

    Args:
        path: Path of the log file. Created lazily on first append.
        max_records: Maximum number of records kept.
    """

    def __init__(self, path: Path, max_records: int = DEFAULT_HISTORY_LIMIT) -> None:
        if max_records < 1:
            msg = f"max_records must be positive, got {max_records}"
            raise ValueError(msg)
        self._path = path
        self._max_records = max_records

    @property
    def path(self) -> Path:
        """Path to the history log file."""
        return self._path

    def append(self, record: HistoryRecord) -> None:
        """Append a record to the log.

        Creates the file and parent directories if they don't exist. If
        the log has grown past the cap, it is rewritten without the
        oldest records.

        Args:
            record: The record to append.

        Raises:
            HistoryIOError: If the log cannot be written.
        """
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open(mode="a", encoding="utf-8", errors=LOG_ERRORS) as f:
                f.write("\n".join(record.to_lines()) + "\n")
                f.flush()
        except OSError as e:
            raise HistoryIOError(str(self._path), e) from e

        records = self._read_records()
        if len(records) > self._max_records:
            logger.debug("History over cap (%d > %d), truncating", len(records), self._max_records)
            self._rewrite(records)

    def records(self, limit: int | None = None) -> list[HistoryRecord]:
        """Read records, newest first.

        Malformed blocks are skipped with a warning.

        Args:
            limit: Maximum number of records to return. None returns all.

        Returns:
            List of HistoryRecord, newest first. Empty if the log doesn't exist.
        """
        records = self._read_records()
        records.reverse()
        if limit is not None:
            return records[:limit]
        return records

    def last(self) -> HistoryRecord | None:
        """Return the most recent record, or None if the log is empty."""
        records = self.records(limit=1)
        return records[0] if records else None

    def revert_last(self) -> RevertResult:
        """Restore the most recently trashed item and drop its record.

        If the trashed copy is gone, the record is still consumed and
        ``restored`` is False. Nothing is changed if the log cannot be
        read, its last block is malformed, or the original location is
        occupied.

        Returns:
            RevertResult for the consumed record.

        Raises:
            HistoryEmptyError: If there is nothing to revert.
            HistoryCorruptError: If the last record cannot be parsed.
            OriginalPathOccupiedError: If something exists at the original path.
            HistoryIOError: If the log cannot be read or rewritten.
            RevertError: If the item cannot be moved back.
        """
        blocks = self._read_blocks()
        record = self._last_block_record(blocks)

        original = record.original_path
        if os.path.lexists(original):
            raise OriginalPathOccupiedError(original)

        restored = False
        if not os.path.lexists(record.trash_path):
            logger.warning("Trashed copy %s no longer exists", record.trash_path)
        else:
            try:
                os.makedirs(os.path.dirname(original), exist_ok=True)
                os.rename(record.trash_path, original)
            except OSError as e:
                raise RevertError(
                    f"cannot move '{record.trash_path}' back to '{original}': {e}",
                    original,
                ) from e
            restored = True

        remaining = self._parse_blocks(blocks[:-1])
        self._rewrite(remaining)
        return RevertResult(record=record, restored=restored)

    def peek_last(self) -> HistoryRecord:
        """Return the record the next revert would consume, without changing anything.

        Unlike ``last()``, a malformed trailing block is not skipped.

        Raises:
            HistoryEmptyError: If there is nothing to revert.
            HistoryCorruptError: If the last record cannot be parsed.
            HistoryIOError: If the log cannot be read.
        """
        return self._last_block_record(self._read_blocks())

    def drop_last(self) -> list[str]:
        """Discard the last block of the log without restoring anything.

        Used to get past a malformed trailing block that revert refuses.

        Returns:
            The raw lines of the dropped block.

        Raises:
            HistoryEmptyError: If the log has no blocks.
            HistoryIOError: If the log cannot be read or rewritten.
        """
        blocks = self._read_blocks()
        if not blocks:
            raise HistoryEmptyError()
        logger.warning("Dropping last history block: %r", blocks[-1])
        self._rewrite(self._parse_blocks(blocks[:-1]))
        return blocks[-1]

    @staticmethod
    def _last_block_record(blocks: list[list[str]]) -> HistoryRecord:
        if not blocks:
            raise HistoryEmptyError()
        try:
            return HistoryRecord.from_lines([*blocks[-1], HISTORY_SEPARATOR])
        except ValueError as e:
            raise HistoryCorruptError(f"last history record is malformed: {e}") from e

    def _read_lines(self) -> list[str]:
        """Read all lines of the log. Missing log reads as empty."""
        try:
            with self._path.open(encoding="utf-8", errors=LOG_ERRORS, newline="") as f:
                return f.read().split("\n")
        except FileNotFoundError:
            return []
        except OSError as e:
            raise HistoryIOError(str(self._path), e) from e

    def _read_blocks(self) -> list[list[str]]:
        """Split the log into record blocks (without separators).

        Blank lines and runs of separators are ignored. A trailing block
        without separator (interrupted append) is returned as-is and fails
        to parse later.
        """
        blocks: list[list[str]] = []
        current: list[str] = []
        for line in self._read_lines():
            if line == HISTORY_SEPARATOR:
                if current:
                    blocks.append(current)
                    current = []
                continue
            if not line.strip():
                continue
            current.append(line)
        if current:
            blocks.append(current)
        return blocks

    def _parse_blocks(self, blocks: list[list[str]]) -> list[HistoryRecord]:
        """Parse blocks into records, skipping malformed ones."""
        records: list[HistoryRecord] = []
        for index, block in enumerate(blocks, start=1):
            try:
                records.append(HistoryRecord.from_lines([*block, HISTORY_SEPARATOR]))
            except ValueError as e:
                logger.warning("Skipping corrupt history block %d: %s", index, e)
        return records

    def _read_records(self) -> list[HistoryRecord]:
        return self._parse_blocks(self._read_blocks())

    def _rewrite(self, records: list[HistoryRecord]) -> None:
        """Atomically replace the log with the newest ``max_records`` records."""
        kept = records[-self._max_records :]
        content = "".join("\n".join(r.to_lines()) + "\n" for r in kept)

        tmp_path: Path | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                errors=LOG_ERRORS,
                dir=self._path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                f.write(content)
            os.replace(tmp_path, self._path)
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise HistoryIOError(str(self._path), e) from e
