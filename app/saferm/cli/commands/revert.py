"""Revert command for restoring the last trashed item.

This module provides the `saferm revert` command, which moves the most
recently trashed item back to where it came from.
"""

from typing import Annotated

import typer

from saferm.cli.types import get_history_log, load_settings
from saferm.engine.errors import HistoryCorruptError, HistoryEmptyError, RevertError
from saferm.engine.history import HistoryLog
from saferm.utils.formatting import console, print_error, print_info, print_success, print_warning

app = typer.Typer(
    name="revert",
    help="Restore the most recently trashed item.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def revert(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be restored without moving anything.",
        ),
    ] = False,
    drop_corrupt: Annotated[
        bool,
        typer.Option(
            "--drop-corrupt",
            help="Discard a malformed last history record instead of reverting.",
        ),
    ] = False,
) -> None:
    """Restore the most recently trashed item.

    Each call consumes one history record, so repeated calls walk back
    through earlier removals.

    Examples:
        saferm revert                  # Restore the last trashed item
        saferm revert --dry-run        # Preview only
        saferm revert --drop-corrupt   # Skip past a damaged last record
    """
    if ctx.invoked_subcommand is not None:
        return

    log = get_history_log(load_settings())

    if drop_corrupt:
        _drop_corrupt(log)
        return

    if dry_run:
        try:
            record = log.peek_last()
        except HistoryEmptyError:
            print_info("Nothing to revert.")
            return
        except RevertError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        console.print("[muted]Would restore:[/]")
        console.print(f"  {record.trash_path}", markup=False)
        console.print(f"  -> {record.original_path}", markup=False)
        return

    try:
        result = log.revert_last()
    except HistoryCorruptError as e:
        print_error(str(e))
        print_info("Run `saferm revert --drop-corrupt` to discard it.")
        raise typer.Exit(code=1) from e
    except RevertError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    record = result.record
    if result.restored:
        print_success(f"Restored {record.original_path}")
    else:
        print_warning(
            f"'{record.trash_path}' is no longer in the trash; dropped its history record"
        )


def _drop_corrupt(log: HistoryLog) -> None:
    """Discard the last history block if, and only if, it is malformed."""
    try:
        log.peek_last()
    except HistoryCorruptError:
        try:
            dropped = log.drop_last()
        except RevertError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        print_warning(f"dropped malformed history record ({len(dropped)} lines)")
        return
    except HistoryEmptyError:
        print_info("Nothing to drop.")
        return
    except RevertError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_info("Last history record is valid; nothing dropped.")
