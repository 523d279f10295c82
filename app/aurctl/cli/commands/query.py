"""Query commands.

Lists installed packages and the outdated snapshot written by refresh.
Both take an optional substring filter on the package name.
"""

from typing import Annotated

import typer

from aurctl.cli.context import abort, get_options, load_settings, prepare_dirs
from aurctl.core.errors import AurctlError
from aurctl.core.snapshot import SnapshotStore
from aurctl.core.store import VersionStore
from aurctl.utils.formatting import (
    console,
    create_outdated_table,
    create_records_table,
    print_info,
    print_success,
)

SearchTerm = Annotated[
    str | None,
    typer.Argument(help="Only show packages whose name contains this text."),
]


def query(ctx: typer.Context, term: SearchTerm = None) -> None:
    """Display a query of installed packages.

    Examples:
        aurctl query            # All installed packages
        aurctl query python     # Packages with 'python' in their name
        aurctl -q query         # Plain 'name version' lines
    """
    options = get_options(ctx)
    prepare_dirs(load_settings())
    store = VersionStore()

    try:
        records = store.search(term) if term else store.list_installed()
    except AurctlError as e:
        abort(e)

    if options.quiet:
        for record in records:
            typer.echo(f"{record.name} {record.version}")
        return

    if not records:
        print_info("No packages installed.")
        return

    console.print(create_records_table(records))


def query_outdated(ctx: typer.Context, term: SearchTerm = None) -> None:
    """Display packages with available updates.

    Reads the snapshot of the last refresh; run 'aurctl refresh' first to
    check the AUR again.

    Examples:
        aurctl query-outdated
        aurctl -q query-outdated     # Plain 'name old -> new' lines
    """
    options = get_options(ctx)
    prepare_dirs(load_settings())
    snapshots = SnapshotStore()

    try:
        entries = snapshots.filter(term)
    except AurctlError as e:
        abort(e)

    if options.quiet:
        for entry in entries:
            typer.echo(f"{entry.name} {entry.current} -> {entry.latest}")
        return

    if not entries:
        print_success("All packages are up to date!")
        return

    console.print(create_outdated_table(entries))
