"""Unit tests for logging setup."""

import logging

from rich.logging import RichHandler

from saferm.utils.logs import setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_quiet_by_default(self) -> None:
        """Without debug only warnings pass and nothing is printed."""
        logger = setup_logging()
        assert logger.level == logging.WARNING
        assert all(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_debug_uses_rich_handler(self) -> None:
        """Debug installs a single Rich handler."""
        logger = setup_logging(debug=True)
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)

    def test_repeated_setup_does_not_duplicate(self) -> None:
        """Calling twice keeps one handler."""
        setup_logging(debug=True)
        logger = setup_logging(debug=True)
        assert len(logger.handlers) == 1
        setup_logging()
