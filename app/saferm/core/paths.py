"""XDG-compliant path management for saferm.

This module provides standardized paths following the XDG Base Directory
Specification for configuration, the trash directory and the history log.

XDG defaults:
- Config: ~/.config/saferm/
- Data:   ~/.local/share/saferm/
- Trash:  ~/.local/share/Trash/files/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "saferm"

# Trash location relative to the XDG data home (shared with desktop trash)
TRASH_SUBDIR = Path("Trash") / "files"

HISTORY_FILENAME = "history.log"


def _get_xdg_base(env_var: str, default_subdir: str) -> Path:
    """Get an XDG base directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_DATA_HOME").
        default_subdir: Default subdirectory under home (e.g., ".local/share").

    Returns:
        Path to the XDG base directory (without the application name).
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base)
    return Path.home() / default_subdir


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/saferm/ (or XDG_CONFIG_HOME/saferm/).
    """
    return _get_xdg_base("XDG_CONFIG_HOME", ".config") / APP_NAME


def get_data_dir() -> Path:
    """Get the data directory path.

    Data includes the history log, which must survive between runs
    for revert to work.

    Returns:
        Path to ~/.local/share/saferm/ (or XDG_DATA_HOME/saferm/).
    """
    return _get_xdg_base("XDG_DATA_HOME", ".local/share") / APP_NAME


def get_trash_dir() -> Path:
    """Get the trash directory path.

    Returns:
        Path to ~/.local/share/Trash/files (or XDG_DATA_HOME/Trash/files).
    """
    return _get_xdg_base("XDG_DATA_HOME", ".local/share") / TRASH_SUBDIR


def get_history_path() -> Path:
    """Get the history log file path.

    Returns:
        Path to ~/.local/share/saferm/history.log.
    """
    return get_data_dir() / HISTORY_FILENAME


def get_config_path() -> Path:
    """Get the configuration file path.

    Returns:
        Path to ~/.config/saferm/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/saferm/theme.toml.
    """
    return get_config_dir() / "theme.toml"

