"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from saferm import __version__
from saferm.cli.commands import config, history, revert, rm
from saferm.utils.logs import setup_logging

app = typer.Typer(
    name="saferm",
    help="A safer rm: move files to the trash and revert the last removal.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"saferm version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            help="Log internal decisions to stderr.",
        ),
    ] = False,
) -> None:
    """saferm - move files to the trash instead of deleting them.

    Removals are recorded so the most recent ones can be restored
    with `saferm revert`.
    """
    setup_logging(debug)


# Register commands
app.command(name="rm")(rm.rm)
app.add_typer(revert.app, name="revert")
app.add_typer(history.app, name="history")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
