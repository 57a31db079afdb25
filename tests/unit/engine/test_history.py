"""Unit tests for HistoryLog."""

import os
from pathlib import Path

import pytest

from saferm.engine.errors import (
    HistoryCorruptError,
    HistoryEmptyError,
    OriginalPathOccupiedError,
)
from saferm.engine.history import HistoryLog
from saferm.engine.models import HISTORY_SEPARATOR, HistoryRecord


def _record(n: int, original: str = "/work/a", trash: str = "/trash/a") -> HistoryRecord:
    return HistoryRecord(id=f"202610191200{n:02d}", original_path=original, trash_path=trash)


def _trashed(workdir: Path, trash_dir: Path, name: str, content: str = "x") -> HistoryRecord:
    """Put a file into the trash as if removed from workdir."""
    trash_dir.mkdir(exist_ok=True)
    trashed = trash_dir / name
    trashed.write_text(content)
    return HistoryRecord(
        id="20261019120000",
        original_path=str(workdir / name),
        trash_path=str(trashed),
    )


class TestHistoryLogAppend:
    """Tests for appending and reading records."""

    def test_missing_log_is_empty(self, history: HistoryLog) -> None:
        """No log file means no records."""
        assert history.records() == []
        assert history.last() is None

    def test_append_creates_file(self, history: HistoryLog) -> None:
        """First append creates parent directories and the file."""
        history.append(_record(1))
        assert history.path.exists()
        lines = history.path.read_text().splitlines()
        assert lines == ["20261019120001", "/work/a", "/trash/a", HISTORY_SEPARATOR]

    def test_records_newest_first(self, history: HistoryLog) -> None:
        """Records come back newest first."""
        history.append(_record(1))
        history.append(_record(2))
        assert [r.id for r in history.records()] == ["20261019120002", "20261019120001"]
        assert history.records(limit=1)[0].id == "20261019120002"

    def test_cap_drops_oldest(self, tmp_path: Path) -> None:
        """Records beyond the cap are dropped oldest first."""
        log = HistoryLog(tmp_path / "history.log", max_records=2)
        for n in range(1, 4):
            log.append(_record(n))
        assert [r.id for r in log.records()] == ["20261019120003", "20261019120002"]

    def test_invalid_cap(self, tmp_path: Path) -> None:
        """Cap must be positive."""
        with pytest.raises(ValueError, match="positive"):
            HistoryLog(tmp_path / "history.log", max_records=0)

    def test_non_utf8_path_round_trip(self, history: HistoryLog) -> None:
        """Surrogate-escaped names are written and read back unchanged."""
        name = os.fsdecode(b"/work/caf\xe9.txt")
        record = HistoryRecord(id="20261019120000", original_path=name, trash_path="/t/x")
        history.append(record)
        assert history.records() == [record]
        assert os.fsencode(name) in history.path.read_bytes()

    def test_unicode_line_separators_kept(self, history: HistoryLog) -> None:
        """Only newline ends a log line; other separators stay in the path."""
        record = _record(1, original="/work/a\u2028b\x85c")
        history.append(record)
        assert history.records() == [record]

    def test_corrupt_middle_block_skipped(self, history: HistoryLog) -> None:
        """Malformed blocks are skipped on read."""
        history.path.parent.mkdir(parents=True)
        history.path.write_text(
            f"garbage\n{HISTORY_SEPARATOR}\n"
            + "\n".join(_record(2).to_lines())
            + "\n"
        )
        assert [r.id for r in history.records()] == ["20261019120002"]


class TestHistoryLogRevert:
    """Tests for revert_last."""

    def test_revert_empty(self, history: HistoryLog) -> None:
        """Reverting with no history fails cleanly."""
        with pytest.raises(HistoryEmptyError):
            history.revert_last()

    def test_revert_restores_item(
        self, history: HistoryLog, workdir: Path, trash_dir: Path
    ) -> None:
        """Revert moves the item back and removes its record."""
        record = _trashed(workdir, trash_dir, "a.txt", "hello")
        history.append(record)

        result = history.revert_last()

        assert result.restored is True
        assert result.record == record
        assert (workdir / "a.txt").read_text() == "hello"
        assert not (trash_dir / "a.txt").exists()
        assert history.records() == []

    def test_revert_recreates_parent(
        self, history: HistoryLog, workdir: Path, trash_dir: Path
    ) -> None:
        """A vanished parent directory is recreated."""
        trash_dir.mkdir()
        (trash_dir / "a.txt").write_text("x")
        original = workdir / "gone" / "a.txt"
        history.append(
            HistoryRecord(
                id="20261019120000",
                original_path=str(original),
                trash_path=str(trash_dir / "a.txt"),
            )
        )
        history.revert_last()
        assert original.exists()

    def test_revert_occupied_leaves_log(
        self, history: HistoryLog, workdir: Path, trash_dir: Path
    ) -> None:
        """An occupied original location aborts without touching the log."""
        record = _trashed(workdir, trash_dir, "a.txt")
        history.append(record)
        (workdir / "a.txt").write_text("new")

        with pytest.raises(OriginalPathOccupiedError):
            history.revert_last()

        assert history.records() == [record]
        assert (trash_dir / "a.txt").exists()

    def test_revert_missing_trash_copy_consumes_record(
        self, history: HistoryLog, workdir: Path
    ) -> None:
        """A vanished trash copy is reported and the record dropped."""
        history.append(
            HistoryRecord(
                id="20261019120000",
                original_path=str(workdir / "a.txt"),
                trash_path=str(workdir / "nowhere" / "a.txt"),
            )
        )
        result = history.revert_last()
        assert result.restored is False
        assert history.records() == []

    def test_revert_corrupt_last_block(self, history: HistoryLog) -> None:
        """A malformed trailing block is rejected without rewriting."""
        history.append(_record(1))
        with history.path.open("a") as f:
            f.write("20261019120002\n/work/b\n")
        before = history.path.read_text()

        with pytest.raises(HistoryCorruptError):
            history.revert_last()

        assert history.path.read_text() == before

    def test_revert_ignores_leading_separators(
        self, history: HistoryLog, workdir: Path, trash_dir: Path
    ) -> None:
        """Separator-only noise before the first record is ignored."""
        record = _trashed(workdir, trash_dir, "a.txt")
        history.path.parent.mkdir(parents=True)
        history.path.write_text(
            f"{HISTORY_SEPARATOR}\n\n" + "\n".join(record.to_lines()) + "\n"
        )
        assert history.revert_last().restored is True

    def test_two_reverts_walk_back(
        self, history: HistoryLog, workdir: Path, trash_dir: Path
    ) -> None:
        """Successive reverts restore items newest first."""
        trash_dir.mkdir()
        (trash_dir / "a.txt").write_text("first")
        (trash_dir / "a.20261019120001.txt").write_text("second")
        original = str(workdir / "a.txt")
        history.append(
            HistoryRecord(
                id="20261019120000",
                original_path=original,
                trash_path=str(trash_dir / "a.txt"),
            )
        )
        history.append(
            HistoryRecord(
                id="20261019120001",
                original_path=original,
                trash_path=str(trash_dir / "a.20261019120001.txt"),
            )
        )

        history.revert_last()
        assert (workdir / "a.txt").read_text() == "second"

        # The restored file occupies the original location now
        with pytest.raises(OriginalPathOccupiedError):
            history.revert_last()

        (workdir / "a.txt").rename(workdir / "kept.txt")
        history.revert_last()
        assert (workdir / "a.txt").read_text() == "first"
        assert history.records() == []


class TestHistoryLogCorruptTail:
    """Tests for inspecting and discarding a malformed last block."""

    def _corrupt_tail(self, history: HistoryLog) -> None:
        history.append(_record(1))
        with history.path.open("a") as f:
            f.write("20261019120002\n/work/b\n")

    def test_peek_last_matches_revert(self, history: HistoryLog) -> None:
        """peek_last does not skip a malformed last block."""
        self._corrupt_tail(history)
        assert history.last() == _record(1)
        with pytest.raises(HistoryCorruptError):
            history.peek_last()

    def test_peek_last_empty(self, history: HistoryLog) -> None:
        """peek_last on an empty log fails cleanly."""
        with pytest.raises(HistoryEmptyError):
            history.peek_last()

    def test_drop_last_unblocks_revert(
        self, history: HistoryLog, workdir: Path, trash_dir: Path
    ) -> None:
        """Dropping the malformed block lets the older record be reverted."""
        record = _trashed(workdir, trash_dir, "a.txt")
        history.append(record)
        with history.path.open("a") as f:
            f.write("20261019120002\n/work/b\n")

        dropped = history.drop_last()

        assert dropped == ["20261019120002", "/work/b"]
        assert history.peek_last() == record
        assert history.revert_last().restored is True

    def test_drop_last_empty(self, history: HistoryLog) -> None:
        """Nothing to drop in an empty log."""
        with pytest.raises(HistoryEmptyError):
            history.drop_last()
