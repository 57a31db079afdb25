"""Unit tests for the rm command."""

from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from saferm.cli.main import app
from saferm.core.paths import get_config_path, get_history_path, get_trash_dir

runner = CliRunner()


@pytest.fixture(autouse=True)
def single_device():
    """Treat the test tree as one device and the user as unprivileged."""
    with (
        patch("saferm.engine.remover.is_privileged", return_value=False),
        patch("saferm.engine.remover.is_cross_device", return_value=False),
    ):
        yield


class TestRmCommand:
    """Tests for saferm rm."""

    def test_help(self) -> None:
        """rm shows help with its options."""
        result = runner.invoke(app, ["rm", "--help"])
        assert result.exit_code == 0
        for option in ("--recursive", "--pattern", "--list", "--interactive", "--force"):
            assert option in result.stdout

    def test_missing_operand(self) -> None:
        """rm without paths fails."""
        result = runner.invoke(app, ["rm"])
        assert result.exit_code == 1
        assert "missing operand" in result.output

    def test_trash_file(self, workdir: Path) -> None:
        """A file is moved to the XDG trash and recorded."""
        f = workdir / "a.txt"
        f.write_text("x")

        result = runner.invoke(app, ["rm", str(f)])

        assert result.exit_code == 0
        assert not f.exists()
        assert (get_trash_dir() / "a.txt").exists()
        assert str(f) in get_history_path().read_text()

    def test_verbose(self, workdir: Path) -> None:
        """-v reports each trash move."""
        f = workdir / "a.txt"
        f.write_text("x")
        result = runner.invoke(app, ["rm", "-v", str(f)])
        assert result.exit_code == 0
        assert "Trashed" in result.stdout

    def test_directory_without_recursive(self, workdir: Path) -> None:
        """Directories need -r and the failure sets the exit code."""
        d = workdir / "d"
        d.mkdir()
        result = runner.invoke(app, ["rm", str(d)])
        assert result.exit_code == 1
        assert "Is a directory" in result.output
        assert d.exists()

    def test_missing_path(self, workdir: Path) -> None:
        """Missing paths are reported with the saferm prefix."""
        result = runner.invoke(app, ["rm", str(workdir / "nope")])
        assert result.exit_code == 1
        assert "saferm:" in result.output
        assert "No such file or directory" in result.output

    def test_pattern_no_match(self, workdir: Path) -> None:
        """An unmatched pattern fails before anything moves."""
        (workdir / "a.txt").write_text("x")
        result = runner.invoke(app, ["rm", "-r", "-p", "zzz", str(workdir)])
        assert result.exit_code == 1
        assert "matching the pattern 'zzz'" in result.output
        assert (workdir / "a.txt").exists()

    def test_list_mode(self, workdir: Path) -> None:
        """-l prints the selection and leaves files alone."""
        f = workdir / "a.txt"
        f.write_text("x")
        result = runner.invoke(app, ["rm", "-l", str(f)])
        assert result.exit_code == 0
        assert "a.txt" in result.stdout
        assert f.exists()

    def test_empty_dir_mode(self, workdir: Path) -> None:
        """-d removes an empty directory."""
        d = workdir / "empty"
        d.mkdir()
        result = runner.invoke(app, ["rm", "-d", str(d)])
        assert result.exit_code == 0
        assert not d.exists()

    def test_empty_dir_mode_not_empty(self, workdir: Path) -> None:
        """-d on a non-empty directory fails."""
        d = workdir / "full"
        d.mkdir()
        (d / "f").write_text("x")
        result = runner.invoke(app, ["rm", "-d", str(d)])
        assert result.exit_code == 1
        assert "Directory not empty" in result.output

    def test_once_prompt_declined(self, workdir: Path) -> None:
        """Declining the batch prompt aborts without changes."""
        d = workdir / "d"
        d.mkdir()
        result = runner.invoke(app, ["rm", "-r", "-i", "once", str(d)], input="n\n")
        assert result.exit_code == 0
        assert "Aborted" in result.stdout
        assert d.exists()

    def test_always_prompt_accepted(self, workdir: Path) -> None:
        """Accepting the per-item prompt removes the item."""
        f = workdir / "a.txt"
        f.write_text("x")
        result = runner.invoke(app, ["rm", "-i", "always", str(f)], input="y\n")
        assert result.exit_code == 0
        assert not f.exists()

    def test_force(self, workdir: Path) -> None:
        """-f deletes permanently without trash or history."""
        f = workdir / "a.txt"
        f.write_text("x")
        result = runner.invoke(app, ["rm", "-f", str(f)])
        assert result.exit_code == 0
        assert not f.exists()
        assert not get_trash_dir().exists()
        assert not get_history_path().exists()

    def test_cross_device_declined(self, workdir: Path) -> None:
        """Declining permanent deletion keeps the item and warns."""
        f = workdir / "a.txt"
        f.write_text("x")
        with patch("saferm.engine.remover.is_cross_device", return_value=True):
            result = runner.invoke(app, ["rm", str(f)], input="n\n")
        assert result.exit_code == 0
        assert f.exists()
        assert "skipped" in result.output

    def test_config_trash_dir(self, workdir: Path, tmp_path: Path) -> None:
        """trash_dir from the config file overrides the XDG location."""
        custom = tmp_path / "custom-trash"
        config_path = get_config_path()
        config_path.parent.mkdir(parents=True)
        config_path.write_text(f'[settings]\ntrash_dir = "{custom}"\n')
        f = workdir / "a.txt"
        f.write_text("x")

        result = runner.invoke(app, ["rm", str(f)])

        assert result.exit_code == 0
        assert (custom / "a.txt").exists()

    def test_broken_config_warns(self, workdir: Path) -> None:
        """A broken config falls back to defaults with a warning."""
        config_path = get_config_path()
        config_path.parent.mkdir(parents=True)
        config_path.write_text("[settings\n")
        f = workdir / "a.txt"
        f.write_text("x")

        result = runner.invoke(app, ["rm", str(f)])

        assert result.exit_code == 0
        assert "using default settings" in result.output
        assert not f.exists()
