"""Outdated snapshot persistence.

The snapshot is the result of the last refresh, one line per outdated
package. It is overwritten wholesale by every refresh and emptied (never
deleted) after updates are applied, so an empty file means "up to date".
"""

import logging
from pathlib import Path

from aurctl.core.errors import SnapshotCorruptedError, SnapshotWriteError
from aurctl.core.paths import get_outdated_path
from aurctl.models.package import OutdatedEntry

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Reads and writes the outdated snapshot file.

    Storage location: ~/.config/aurctl/out-dated

    Each line holds ``<name> <current> <latest>`` separated by single
    spaces. Names never contain spaces, so no escaping is done.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize SnapshotStore.

        Args:
            path: Optional override for the snapshot file.
                  Default: ~/.config/aurctl/out-dated
        """
        self._path = path if path is not None else get_outdated_path()

    @property
    def path(self) -> Path:
        """Path to the snapshot file."""
        return self._path

    def write(self, entries: list[OutdatedEntry]) -> None:
        """Overwrite the snapshot with the given entries.

        An empty list still produces an (empty) file.

        Args:
            entries: Outdated entries in report order.

        Raises:
            SnapshotWriteError: If the file cannot be written.
        """
        content = "".join(f"{entry.to_line()}\n" for entry in entries)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(content, encoding="utf-8")
        except OSError as e:
            msg = f"Cannot write outdated snapshot {self._path}: {e}"
            raise SnapshotWriteError(msg) from e
        logger.debug("Wrote %d outdated entries to %s", len(entries), self._path)

    def write_empty(self) -> None:
        """Mark everything as up to date."""
        self.write([])

    def clear(self) -> None:
        """Empty the snapshot after updates were applied."""
        self.write_empty()

    def read(self) -> list[OutdatedEntry]:
        """Parse the snapshot.

        A missing or empty file yields no entries.

        Returns:
            Outdated entries in file order.

        Raises:
            SnapshotCorruptedError: If the file cannot be read or a line does
                not have exactly three fields.
        """
        if not self._path.exists():
            return []

        try:
            content = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Cannot read outdated snapshot {self._path}: {e}"
            raise SnapshotCorruptedError(msg) from e

        entries: list[OutdatedEntry] = []

        for line_num, line in enumerate(content.splitlines(), start=1):
            fields = line.split()
            if not fields:
                continue

            if len(fields) != 3:
                msg = f"Malformed line {line_num} in {self._path}: {line.rstrip()!r}"
                raise SnapshotCorruptedError(msg)

            name, current, latest = fields
            entries.append(OutdatedEntry(name=name, current=current, latest=latest))

        return entries

    def filter(self, term: str | None = None) -> list[OutdatedEntry]:
        """Read the snapshot, keeping entries whose name contains ``term``."""
        entries = self.read()
        if term:
            return [e for e in entries if term in e.name]
        return entries
