"""Unit tests for the main CLI application."""

import logging

from typer.testing import CliRunner

from saferm import __version__
from saferm.cli.main import app
from saferm.utils.logs import LOGGER_NAME, setup_logging

runner = CliRunner()


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_no_args_shows_help(self) -> None:
        """Running without a command shows help."""
        result = runner.invoke(app, [])
        assert "rm" in result.output
        assert "revert" in result.output

    def test_debug_enables_logging(self) -> None:
        """--debug switches the package logger to DEBUG."""
        result = runner.invoke(app, ["--debug", "history"])
        assert result.exit_code == 0
        assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG
        setup_logging()
