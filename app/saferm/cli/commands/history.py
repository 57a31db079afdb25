"""History command for viewing revertible removals.

This module provides the `saferm history` command, listing the trash
moves that `saferm revert` can still undo.
"""

import json
from datetime import datetime
from typing import Annotated

import typer
from rich.table import Table

from saferm.cli.types import get_history_log, load_settings
from saferm.engine.errors import HistoryIOError
from saferm.engine.models import HistoryRecord
from saferm.engine.naming import TIMESTAMP_FORMAT
from saferm.utils.formatting import console, print_error, print_info

app = typer.Typer(
    name="history",
    help="View the revertible removal history.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def history(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-n",
            min=1,
            help="Maximum number of entries to show.",
        ),
    ] = 20,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show trashed items that can be reverted, newest first.

    Examples:
        saferm history              # Show last 20 entries
        saferm history -n 5         # Show last 5 entries
        saferm history --json       # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    log = get_history_log(load_settings())
    try:
        records = log.records(limit=limit)
    except HistoryIOError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if json_output:
        _print_json(records)
        return

    if not records:
        print_info("No history entries found.")
        return

    _print_table(records)


def _print_table(records: list[HistoryRecord]) -> None:
    """Print history as a Rich table."""
    table = Table(title="Trash History", border_style="border", header_style="bold_header")
    table.add_column("ID", style="dim")
    table.add_column("Removed", style="info")
    table.add_column("Original Path", style="text")
    table.add_column("Trash Path", style="trashed")

    for record in records:
        table.add_row(
            record.id,
            _format_id(record.id),
            record.original_path,
            record.trash_path,
        )

    console.print(table)


def _format_id(id_: str) -> str:
    """Render a timestamp id as ``YYYY-MM-DD HH:MM:SS``, or as-is if unparseable."""
    try:
        return datetime.strptime(id_, TIMESTAMP_FORMAT).strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        return id_


def _print_json(records: list[HistoryRecord]) -> None:
    """Print history as JSON for scripting."""
    data = [
        {
            "id": r.id,
            "original_path": r.original_path,
            "trash_path": r.trash_path,
        }
        for r in records
    ]
    console.print_json(json.dumps(data))
