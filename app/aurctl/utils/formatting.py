"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from aurctl.core.theme import get_theme

if TYPE_CHECKING:
    from aurctl.core.errors import AurctlError
    from aurctl.models.package import OutdatedEntry, PackageRecord


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_records_table(records: list[PackageRecord]) -> Table:
    """Create a table of installed packages.

    Args:
        records: Installed package records.

    Returns:
        Rich Table with one row per package.
    """
    table = Table(
        title="Installed Packages",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Package Name", no_wrap=True, style="package.name")
    table.add_column("Version", style="muted")

    for record in records:
        table.add_row(record.name, record.version)

    return table


def create_outdated_table(entries: list[OutdatedEntry]) -> Table:
    """Create a table of outdated packages.

    Args:
        entries: Outdated snapshot entries.

    Returns:
        Rich Table with old and new version columns.
    """
    table = Table(
        title="Available Updates",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Package Name", no_wrap=True, style="package.name")
    table.add_column("Old", style="version.old")
    table.add_column("New", style="version.new")

    for entry in entries:
        table.add_row(entry.name, entry.current, entry.latest)

    return table


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")


def print_domain_error(error: AurctlError) -> None:
    """Print a fatal domain error with a pointer to its explanation.

    Printed on standard output so scripts capturing it see the code.
    """
    code = error.code.hex
    console.print(f"[error]Error {escape(f'[{code}]')}:[/] {escape(str(error))}", highlight=False)
    console.print(f"[warning]Run 'aurctl explain {code}' for a detailed explanation[/]")
