"""Remove command implementation."""

from typing import Annotated

import typer

from aurctl.cli.context import abort, get_options, load_settings, prepare_dirs
from aurctl.core.errors import AurctlError
from aurctl.core.installer import PackageInstaller
from aurctl.core.store import VersionStore
from aurctl.utils.formatting import print_error, print_success


def remove(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Installed package to remove.")],
) -> None:
    """Remove an installed package.

    Deletes aurctl's record of the package, then removes it together with
    its unneeded dependencies using 'pacman -Rns'.
    """
    options = get_options(ctx)
    config = load_settings()
    prepare_dirs(config)
    installer = PackageInstaller(VersionStore(), config, options=options)

    try:
        removed = installer.remove(name)
    except AurctlError as e:
        abort(e)

    if not removed:
        print_error(f"The package {name} is not installed")
        return

    if not options.quiet:
        print_success(f"\n{name} was uninstalled successfully")
