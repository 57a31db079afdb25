"""Remove command: move files and directories to the trash.

This module provides `saferm rm`, the trash-first replacement for rm.
"""

from pathlib import Path
from typing import Annotated

import typer

from saferm.cli.types import confirm, get_history_log, load_settings, resolve_trash_dir
from saferm.engine.errors import PatternNoMatchError
from saferm.engine.interaction import InteractionPolicy, InteractiveMode
from saferm.engine.models import OutcomeKind, RemovalResult, SelectionCriteria
from saferm.engine.remover import RemovalEngine
from saferm.utils.formatting import (
    console,
    print_error,
    print_info,
    print_verbose,
    print_warning,
)


def rm(
    paths: Annotated[
        list[Path] | None,
        typer.Argument(help="Files or directories to remove.", show_default=False),
    ] = None,
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Remove directories and their contents."),
    ] = False,
    list_only: Annotated[
        bool,
        typer.Option("--list", "-l", help="List items that would be affected (dry run)."),
    ] = False,
    interactive: Annotated[
        InteractiveMode | None,
        typer.Option(
            "--interactive",
            "-i",
            help="When to prompt before removal.",
            case_sensitive=False,
        ),
    ] = None,
    pattern: Annotated[
        str | None,
        typer.Option(
            "--pattern",
            "-p",
            help="Only remove files whose name contains PATTERN. Not revertible.",
            metavar="PATTERN",
        ),
    ] = None,
    force: Annotated[
        list[Path] | None,
        typer.Option(
            "--force",
            "-f",
            help="Delete PATH permanently, bypassing the trash. Repeatable.",
            metavar="PATH",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Explain what is being done."),
    ] = False,
    empty_dir: Annotated[
        bool,
        typer.Option("--dir", "-d", help="Remove empty directories."),
    ] = False,
) -> None:
    """Move files and directories to the trash.

    Trashed items can be restored with `saferm revert` (most recent first).

    Examples:
        saferm rm notes.txt            # Trash a file
        saferm rm -r build/            # Trash a directory tree
        saferm rm -r -p .log logs/     # Trash every *log* file under logs/
        saferm rm -d empty/            # Remove an empty directory
        saferm rm -l -r build/         # Show what would be removed
    """
    if not paths and not force:
        print_error("missing operand")
        raise typer.Exit(code=1)

    config = load_settings()
    engine = RemovalEngine(
        resolve_trash_dir(config),
        get_history_log(config),
        InteractionPolicy(interactive, confirm),
        check_sha256=config.check_sha256,
        silent_dedup_delete=config.silent_dedup_delete,
        dry_run=list_only,
    )

    failed = False

    if paths:
        criteria = SelectionCriteria(
            recursive=recursive,
            pattern=pattern,
            treat_empty_dir_as_removable=empty_dir,
        )
        try:
            report = engine.run(paths, criteria, empty_dir_mode=empty_dir)
        except PatternNoMatchError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e

        for problem in report.problems:
            print_error(str(problem))
        if report.aborted:
            print_info("Aborted.")
        _print_results(report.results, verbose)
        failed = report.has_failures

    if force:
        results = engine.force_remove(force)
        _print_results(results, verbose)
        failed = failed or any(r.failed for r in results)

    if failed:
        raise typer.Exit(code=1)


def _print_results(results: list[RemovalResult], verbose: bool) -> None:
    """Report per-item results.

    Dry-run entries are listed on stdout. Failures and skips get a
    one-line diagnostic on stderr; successes are shown only in verbose mode.
    """
    for r in results:
        if r.dry_run:
            console.print(r.path, markup=False)
        elif r.outcome == OutcomeKind.FAILED:
            print_error(str(r.error) if r.error else f"cannot remove '{r.path}'")
        elif r.outcome == OutcomeKind.SKIPPED:
            print_warning(f"skipped '{r.path}': {r.reason or 'not removed'}")
        elif r.outcome == OutcomeKind.TRASHED:
            if verbose:
                print_verbose(f"Trashed {r.path} to {r.trash_path}")
            if r.reason:
                print_warning(r.reason)
        elif verbose:
            print_verbose(f"Removed {r.path} permanently ({r.reason})")
