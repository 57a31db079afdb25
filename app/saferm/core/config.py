"""User configuration for saferm.

Configuration is stored in ~/.config/saferm/config.toml under a
``[settings]`` table:

    [settings]
    check_sha256 = false
    silent_dedup_delete = false
    history_limit = 40
    # trash_dir = "/path/to/trash"
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from saferm.core.paths import get_config_path

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 40


class SafermConfig(BaseModel):
    """Settings consumed by the removal engine and history log.

    Attributes:
        check_sha256: Compare content digests against a same-named trash
            entry and skip re-trashing identical files.
        silent_dedup_delete: Delete a digest-identical source without asking.
        trash_dir: Optional override of the trash directory.
        history_limit: Maximum number of records kept in the history log.
    """

    model_config = ConfigDict(extra="forbid")

    check_sha256: Annotated[
        bool,
        Field(description="Verify content hash before permanent delete"),
    ] = False
    silent_dedup_delete: Annotated[
        bool,
        Field(description="Skip confirmation when a digest-identical copy is in the trash"),
    ] = False
    trash_dir: Annotated[
        str | None,
        Field(description="Trash directory override (None = XDG default)"),
    ] = None
    history_limit: Annotated[
        int,
        Field(ge=1, le=10000, description="Maximum history records (1-10000)"),
    ] = DEFAULT_HISTORY_LIMIT


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> SafermConfig:
    """Load configuration from a TOML file.

    A missing file is not an error: defaults are returned.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated SafermConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return SafermConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    settings = data.get("settings", {})
    if not isinstance(settings, dict):
        raise ConfigError(f"'settings' must be a table in {config_path}")

    try:
        return SafermConfig.model_validate(settings)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: SafermConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The SafermConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {"settings": _config_to_dict(config)}

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: SafermConfig) -> dict[str, object]:
    """Convert SafermConfig to a dictionary for TOML serialization.

    TOML has no null, so an unset trash_dir is omitted.
    """
    result: dict[str, object] = {
        "check_sha256": config.check_sha256,
        "silent_dedup_delete": config.silent_dedup_delete,
        "history_limit": config.history_limit,
    }
    if config.trash_dir is not None:
        result["trash_dir"] = config.trash_dir
    return result
