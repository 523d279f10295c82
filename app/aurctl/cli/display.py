"""Shared Rich display helpers for CLI commands."""

from rich.console import Console
from rich.status import Status
from rich.table import Table

from aurctl.core.errors import ErrorInfo
from aurctl.core.refresh import RefreshObserver
from aurctl.models.package import OutdatedEntry
from aurctl.utils.formatting import console


class ConsoleRefreshObserver(RefreshObserver):
    """Shows refresh progress as a single status line updated in place.

    Outdated packages are printed above the status line as they are found.
    """

    def __init__(self, out: Console | None = None) -> None:
        self._console = out if out is not None else console
        self._status: Status | None = None

    def started(self, total: int) -> None:
        self._console.print(f"[info]Refreshing[/] AUR database ({total} package(s))\n")
        self._status = self._console.status("Refreshing...")
        self._status.start()

    def checking(self, name: str) -> None:
        if self._status is not None:
            self._status.update(f"[info]Checking[/] [package.name]{name}[/]...")

    def outdated(self, entry: OutdatedEntry) -> None:
        self._console.print(
            f"[error]Update[/] available for [package.name]{entry.name}[/]: "
            f"[version.old]{entry.current}[/] -> [version.new]{entry.latest}[/]"
        )

    def finished(self, entries: list[OutdatedEntry]) -> None:
        self.close()
        if entries:
            message = "run [warning]'aurctl apply-updates'[/] to install available updates"
        else:
            message = "everything is up to date"
        self._console.print(f"\n[success]Done[/] refreshing, {message}")

    def close(self) -> None:
        """Stop the status line; safe to call more than once."""
        if self._status is not None:
            self._status.stop()
            self._status = None


def create_error_info_table(info: ErrorInfo) -> Table:
    """Create a two-column table describing one error code."""
    table = Table(
        title=f"Info On Error Code {info.code.hex}",
        show_header=False,
        border_style="border",
    )
    table.add_column("Field", style="warning", no_wrap=True)
    table.add_column("Value", style="text")

    table.add_row("Name", info.title)
    table.add_row("Full output", info.output or "-")
    table.add_row("Description", info.description)
    table.add_row("Cause", info.cause)
    table.add_row("Solution", info.remedy)

    return table
