"""Refresh engine.

Compares every installed package against the latest PKGBUILD in the AUR
and persists the outdated ones as a snapshot for a later apply pass.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from aurctl.core.commands import FETCH, check_result
from aurctl.core.config import AurctlConfig
from aurctl.core.descriptor import read_descriptor
from aurctl.core.errors import VersionReadError
from aurctl.core.paths import ensure_dir, get_update_temp_path
from aurctl.core.snapshot import SnapshotStore
from aurctl.core.store import VersionStore
from aurctl.core.version import is_newer
from aurctl.models.package import OutdatedEntry
from aurctl.utils.shell import run_command

logger = logging.getLogger(__name__)


class VersionFetcher(ABC):
    """Looks up the latest available version of a package."""

    @abstractmethod
    def latest_version(self, name: str) -> str:
        """Return the latest '<pkgver>-<pkgrel>' of a package.

        Args:
            name: AUR package name.

        Returns:
            Full version string.
        """


class PkgbuildFetcher(VersionFetcher):
    """Fetches a package's PKGBUILD with curl and reads its version.

    The PKGBUILD is downloaded into <scratch>/updates/<name>-temp and
    removed again as soon as the version has been read.
    """

    def __init__(self, config: AurctlConfig, scratch_dir: Path | None = None) -> None:
        self._config = config
        self._scratch_dir = scratch_dir if scratch_dir is not None else config.effective_scratch_dir

    def latest_version(self, name: str) -> str:
        temp_path = get_update_temp_path(self._scratch_dir, name)
        ensure_dir(temp_path.parent, "updates")

        result = run_command(
            ["curl", "-s", "-o", temp_path.name, self._config.pkgbuild_url_for(name)],
            cwd=str(temp_path.parent),
        )
        check_result(FETCH, result)

        try:
            pkgver, pkgrel = read_descriptor(temp_path)
        finally:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning("Could not remove %s: %s", temp_path, e)

        return f"{pkgver}-{pkgrel}"


class RefreshObserver:
    """Receives refresh progress. The base class ignores everything."""

    def started(self, total: int) -> None:
        """Called once before the first package is checked."""

    def checking(self, name: str) -> None:
        """Called before a package's latest version is fetched."""

    def outdated(self, entry: OutdatedEntry) -> None:
        """Called for each package found to be outdated."""

    def finished(self, entries: list[OutdatedEntry]) -> None:
        """Called after the snapshot has been written."""


class RefreshEngine:
    """Builds the outdated snapshot.

    Packages are checked one at a time, in record order. A package is
    outdated iff its fetched version differs from the recorded one and
    is_newer() holds.

    Example:
        >>> engine = RefreshEngine(VersionStore(), SnapshotStore(), PkgbuildFetcher(config))
        >>> for entry in engine.refresh():
        ...     print(f"{entry.name}: {entry.current} -> {entry.latest}")
    """

    def __init__(
        self,
        store: VersionStore,
        snapshots: SnapshotStore,
        fetcher: VersionFetcher,
        observer: RefreshObserver | None = None,
    ) -> None:
        self._store = store
        self._snapshots = snapshots
        self._fetcher = fetcher
        self._observer = observer if observer is not None else RefreshObserver()

    def refresh(self) -> list[OutdatedEntry]:
        """Check all installed packages and persist the outdated ones.

        The snapshot is written even when nothing is outdated.

        Returns:
            Outdated entries in record order.

        Raises:
            AurctlError: On the first failing fetch or unreadable record.
        """
        records = self._store.list_installed()
        self._observer.started(len(records))

        outdated: list[OutdatedEntry] = []

        for record in records:
            self._observer.checking(record.name)

            latest = self._fetcher.latest_version(record.name)
            current = record.version

            if latest != current and is_newer(current, latest):
                try:
                    entry = OutdatedEntry(name=record.name, current=current, latest=latest)
                except ValueError as e:
                    raise VersionReadError(f"Invalid latest version for {record.name}: {e}") from e
                outdated.append(entry)
                self._observer.outdated(entry)
                logger.info("Update available for %s: %s -> %s", record.name, current, latest)
            else:
                logger.debug("%s is up to date (%s, latest %s)", record.name, current, latest)

        self._snapshots.write(outdated)
        self._observer.finished(outdated)

        return outdated
