"""Config command for inspecting and creating the settings file.

This module provides `saferm config path`, `saferm config show` and
`saferm config init`.
"""

from typing import Annotated

import typer
from rich.table import Table

from saferm.cli.types import resolve_trash_dir
from saferm.core.config import ConfigError, SafermConfig, load_config, save_config
from saferm.core.paths import get_config_path, get_history_path
from saferm.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    name="config",
    help="Inspect or create the saferm configuration.",
    no_args_is_help=True,
)


@app.command()
def path() -> None:
    """Print the location of the config file."""
    console.print(str(get_config_path()), markup=False)


@app.command()
def show() -> None:
    """Show the effective settings.

    Unlike removal, which falls back to defaults, an invalid config
    file is reported as an error here.
    """
    config_path = get_config_path()
    try:
        config = load_config(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    source = str(config_path) if config_path.exists() else "defaults (no config file)"

    table = Table(title="saferm settings", border_style="border", header_style="bold_header")
    table.add_column("Setting", style="text")
    table.add_column("Value", style="info")
    table.add_row("source", source)
    table.add_row("check_sha256", str(config.check_sha256).lower())
    table.add_row("silent_dedup_delete", str(config.silent_dedup_delete).lower())
    table.add_row("history_limit", str(config.history_limit))
    table.add_row("trash_dir", str(resolve_trash_dir(config)))
    table.add_row("history_file", str(get_history_path()))
    console.print(table)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing config file.",
        ),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_info(f"Config already exists: {config_path}")
        print_info("Use --force to overwrite.")
        raise typer.Exit(code=1)

    try:
        written = save_config(SafermConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Wrote default config to {written}")
