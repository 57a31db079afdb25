"""Command-line interface for saferm."""

from saferm.cli.main import app

__all__ = ["app"]
