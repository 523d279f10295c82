"""Config command implementation.

Shows the effective configuration and writes a default config file.
"""

from typing import Annotated

import typer
from rich.table import Table

from aurctl.cli.context import load_settings
from aurctl.core.config import AurctlConfig, ConfigError, save_config
from aurctl.core.paths import get_config_path
from aurctl.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def config(
    init: Annotated[
        bool,
        typer.Option(
            "--init",
            help="Write a config file with the default settings.",
        ),
    ] = False,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing config file (with --init).",
        ),
    ] = False,
) -> None:
    """Show the effective configuration.

    Examples:
        aurctl config                # Show settings
        aurctl config --init         # Create ~/.config/aurctl/config.toml
    """
    path = get_config_path()

    if init:
        if path.exists() and not force:
            print_warning(f"Config already exists: {path}")
            print_info("Use --force to overwrite it.")
            raise typer.Exit(code=1)
        try:
            saved = save_config(AurctlConfig(), path)
        except ConfigError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        print_success(f"Config written: {saved}")
        return

    settings = load_settings()

    table = Table(
        title=f"Configuration ({path})" if path.exists() else "Configuration (defaults)",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="package.name", no_wrap=True)
    table.add_column("Value", style="muted")

    table.add_row("aur_url", settings.aur_url)
    table.add_row("pkgbuild_url", settings.pkgbuild_url)
    table.add_row("scratch_dir", str(settings.effective_scratch_dir))
    table.add_row("makepkg_flags", " ".join(settings.makepkg_flags))

    console.print(table)
