"""Sync command implementation.

Installs AUR packages: clone, build with makepkg, record the built version.
"""

from typing import Annotated

import typer

from aurctl.cli.context import abort, get_options, load_settings, prepare_dirs, read_answer
from aurctl.core.errors import AurctlError
from aurctl.core.installer import PackageInstaller
from aurctl.core.store import VersionStore
from aurctl.utils.formatting import console, print_success


def sync(
    ctx: typer.Context,
    names: Annotated[
        list[str],
        typer.Argument(help="AUR package name(s) to install."),
    ],
) -> None:
    """Install one or more AUR packages.

    Packages are processed in order; the first failure stops the run.
    Packages installed before the failure stay installed and recorded.

    Examples:
        aurctl sync yay
        aurctl -q sync paru visual-studio-code-bin
    """
    options = get_options(ctx)
    config = load_settings()
    scratch_dir = prepare_dirs(config)

    installer = PackageInstaller(
        VersionStore(),
        config,
        options=options,
        prompt=read_answer,
        scratch_dir=scratch_dir,
    )

    for name in names:
        if not options.quiet:
            console.print(f"[info]Installing[/] [package.name]{name}[/]")

        try:
            record = installer.sync(name)
        except AurctlError as e:
            abort(e)

        if not options.quiet:
            print_success(f"Installed {name} {record.version}")

    if not options.quiet and len(names) > 1:
        print_success(f"\nPackage installation complete ({len(names)} packages)")
