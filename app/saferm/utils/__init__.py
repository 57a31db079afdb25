"""Utility modules for saferm.

This module exports commonly used utility functions.
"""

from saferm.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_verbose,
    print_warning,
)
from saferm.utils.logs import setup_logging

__all__ = [
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_verbose",
    "print_warning",
    "setup_logging",
]
