"""Logging setup for the saferm CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "saferm"


def setup_logging(debug: bool = False) -> logging.Logger:
    """Configure the package logger.

    Without ``debug`` the logger only reports warnings and nothing is
    attached, so library use stays silent. With ``debug`` a Rich handler
    writes every record to stderr.

    Args:
        debug: Enable DEBUG level output on stderr.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Clear existing handlers to avoid duplicates when invoked repeatedly
    if logger.handlers:
        logger.handlers.clear()

    if not debug:
        logger.setLevel(logging.WARNING)
        logger.addHandler(logging.NullHandler())
        return logger

    logger.setLevel(logging.DEBUG)
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_path=False,
    )
    handler.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    return logger
