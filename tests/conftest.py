"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest

from saferm.engine.history import HistoryLog
from saferm.engine.naming import TimestampClock


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG directories into tmp_path so no test touches the real home."""
    home = tmp_path / "home"
    monkeypatch.setenv("XDG_DATA_HOME", str(home / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / "config"))
    return home


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Directory holding files to remove."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def trash_dir(tmp_path: Path) -> Path:
    """Trash directory on the same device as workdir."""
    return tmp_path / "trash"


@pytest.fixture
def history(tmp_path: Path) -> HistoryLog:
    """Empty history log."""
    return HistoryLog(tmp_path / "state" / "history.log")


@pytest.fixture
def fixed_clock() -> TimestampClock:
    """Clock frozen at 2026-10-19 12:00:00."""
    return TimestampClock(now=lambda: datetime(2026, 10, 19, 12, 0, 0))


@pytest.fixture
def answers() -> Callable[..., Callable[[str], bool]]:
    """Build a scripted confirm function that records the prompts it saw.

    Usage: ``confirm = answers(True, False)``; ``confirm.prompts`` lists prompts.
    """

    def factory(*replies: bool) -> Callable[[str], bool]:
        queue = list(replies)
        prompts: list[str] = []

        def confirm(prompt: str) -> bool:
            prompts.append(prompt)
            return queue.pop(0) if queue else False

        confirm.prompts = prompts  # type: ignore[attr-defined]
        return confirm

    return factory
