"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from aurctl import __version__
from aurctl.cli.commands import config, explain, query, remove, sync, update
from aurctl.core.config import RunOptions
from aurctl.utils.log import setup_logging

# Create main Typer app
app = typer.Typer(
    name="aurctl",
    help="An Arch User Repository package manager.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"aurctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
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
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Print only the necessary information.",
        ),
    ] = False,
) -> None:
    """aurctl - install, query and update AUR packages.

    Packages are built with makepkg; aurctl keeps track of the installed
    versions and of available updates.
    """
    setup_logging(verbose=verbose, quiet=quiet)

    # Immutable options handed to every subcommand
    ctx.ensure_object(dict)
    ctx.obj["options"] = RunOptions(quiet=quiet, verbose=verbose)


# Register commands
app.command("query")(query.query)
app.command("query-outdated")(query.query_outdated)
app.command("sync")(sync.sync)
app.command("refresh")(update.refresh)
app.command("apply-updates")(update.apply_updates)
app.command("refresh-and-apply")(update.refresh_and_apply)
app.command("remove")(remove.remove)
app.command("explain")(explain.explain)
app.command("config")(config.config)


if __name__ == "__main__":
    app()
