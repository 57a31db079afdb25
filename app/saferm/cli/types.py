"""Shared helpers for CLI commands.

Resolves configuration, the trash directory and the history log once,
so commands hand explicit values to the engine.
"""

from pathlib import Path

import typer

from saferm.core.config import ConfigError, SafermConfig, load_config
from saferm.core.paths import get_history_path, get_trash_dir
from saferm.engine.history import HistoryLog
from saferm.utils.formatting import print_warning


def load_settings() -> SafermConfig:
    """Load the user configuration, falling back to defaults on error.

    A broken config file must not block removals, so the problem is
    reported as a warning.
    """
    try:
        return load_config()
    except ConfigError as e:
        print_warning(f"{e}; using default settings")
        return SafermConfig()


def resolve_trash_dir(config: SafermConfig) -> Path:
    """Return the trash directory, honouring the config override."""
    if config.trash_dir:
        return Path(config.trash_dir).expanduser().absolute()
    return get_trash_dir()


def get_history_log(config: SafermConfig) -> HistoryLog:
    """Return the history log at its standard location."""
    return HistoryLog(get_history_path(), max_records=config.history_limit)


def confirm(prompt: str) -> bool:
    """Ask a yes/no question on the terminal, defaulting to no."""
    return typer.confirm(prompt, default=False, err=True)
