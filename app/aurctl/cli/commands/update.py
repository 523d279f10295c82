"""Refresh and update commands.

'refresh' checks the AUR and writes the outdated snapshot; 'apply-updates'
installs what the snapshot lists and empties it; 'refresh-and-apply' runs
both in one go.
"""

import typer

from aurctl.cli.context import abort, get_options, load_settings, prepare_dirs, read_answer
from aurctl.cli.display import ConsoleRefreshObserver
from aurctl.core.config import AurctlConfig, RunOptions
from aurctl.core.errors import AurctlError
from aurctl.core.installer import PackageInstaller
from aurctl.core.refresh import PkgbuildFetcher, RefreshEngine, RefreshObserver
from aurctl.core.snapshot import SnapshotStore
from aurctl.core.store import VersionStore
from aurctl.models.package import OutdatedEntry
from aurctl.utils.formatting import console, print_success


def _run_refresh(options: RunOptions, config: AurctlConfig) -> list[OutdatedEntry]:
    """Run a refresh pass, exiting with status 1 on a domain error."""
    scratch_dir = prepare_dirs(config)

    observer: RefreshObserver
    if options.quiet:
        observer = RefreshObserver()
    else:
        observer = ConsoleRefreshObserver()

    engine = RefreshEngine(
        VersionStore(),
        SnapshotStore(),
        PkgbuildFetcher(config, scratch_dir=scratch_dir),
        observer=observer,
    )

    try:
        return engine.refresh()
    except AurctlError as e:
        if isinstance(observer, ConsoleRefreshObserver):
            observer.close()
        abort(e)


def _run_apply(options: RunOptions, config: AurctlConfig) -> list[OutdatedEntry]:
    """Apply the outdated snapshot, exiting with status 1 on a domain error."""
    scratch_dir = prepare_dirs(config)

    installer = PackageInstaller(
        VersionStore(),
        config,
        options=options,
        prompt=read_answer,
        scratch_dir=scratch_dir,
    )

    def announce(entry: OutdatedEntry) -> None:
        console.print(
            f"[info]Updating[/] [package.name]{entry.name}[/] from "
            f"[version.old]{entry.current}[/] to [version.new]{entry.latest}[/]"
        )

    try:
        updated = installer.apply_updates(SnapshotStore(), on_update=announce)
    except AurctlError as e:
        abort(e)

    if not updated:
        if not options.quiet:
            print_success("No available updates, nothing to do")
        return updated

    print_success(f"\nDone installing updates ({len(updated)} package(s))")
    return updated


def refresh(ctx: typer.Context) -> None:
    """Refresh the AUR database.

    Fetches the latest PKGBUILD of every installed package and records
    which ones have a newer version.
    """
    options = get_options(ctx)
    _run_refresh(options, load_settings())


def apply_updates(ctx: typer.Context) -> None:
    """Install the updates found by the last refresh."""
    options = get_options(ctx)
    _run_apply(options, load_settings())


def refresh_and_apply(ctx: typer.Context) -> None:
    """Refresh the AUR database and install available updates."""
    options = get_options(ctx)
    config = load_settings()
    _run_refresh(options, config)
    _run_apply(options, config)
