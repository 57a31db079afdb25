"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich. Diagnostics
go to stderr with an ``saferm:`` prefix, in the style of coreutils.
"""

import sys

from rich.console import Console
from rich.markup import escape

from saferm.core.theme import get_theme

PREFIX = "saferm:"


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(
    theme=get_theme(), color_system=_detect_color_system(), highlight=False, soft_wrap=True
)
err_console = Console(
    theme=get_theme(),
    stderr=True,
    color_system=_detect_color_system(),
    highlight=False,
    soft_wrap=True,
)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_verbose(message: str) -> None:
    """Print a verbose progress notice."""
    console.print(f"[muted]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]{PREFIX}[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]{PREFIX}[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")
