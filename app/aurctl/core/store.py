"""Version store for installed packages.

This module provides the VersionStore class, the sole owner of the
package info directory. A package counts as installed by aurctl exactly
when its record file exists, whatever pacman believes.
"""

import logging
from pathlib import Path

from aurctl.core.errors import (
    RecordDeletionError,
    RecordListingError,
    RecordWriteError,
    VersionReadError,
)
from aurctl.core.paths import get_package_info_dir
from aurctl.models.package import PackageRecord

logger = logging.getLogger(__name__)


class VersionStore:
    """Manages per-package version records.

    Storage location: ~/.config/aurctl/package_info/<name>

    Each record is a small file of ``key=value`` lines holding the pkgver
    and pkgrel the package was built at::

        pkgver=1.2.3
        pkgrel=1

    Attributes:
        info_dir: Directory containing one record file per package.
    """

    def __init__(self, info_dir: Path | None = None) -> None:
        """Initialize VersionStore.

        Args:
            info_dir: Optional override for the package info directory.
                      Default: ~/.config/aurctl/package_info
        """
        self._info_dir = info_dir if info_dir is not None else get_package_info_dir()

    @property
    def info_dir(self) -> Path:
        """Directory containing the record files."""
        return self._info_dir

    def record_path(self, name: str) -> Path:
        """Path of the record file for a package."""
        return self._info_dir / name

    def list_installed(self) -> list[PackageRecord]:
        """Read every record in the package info directory.

        Returns:
            PackageRecord per record file, sorted by name.

        Raises:
            RecordListingError: If the directory cannot be listed.
            VersionReadError: If a record lacks its pkgver or pkgrel.
        """
        try:
            names = sorted(p.name for p in self._info_dir.iterdir() if p.is_file())
        except OSError as e:
            msg = f"Cannot list package info directory {self._info_dir}: {e}"
            raise RecordListingError(msg) from e

        return [self._read_record(name) for name in names]

    def search(self, term: str) -> list[PackageRecord]:
        """Records whose package name contains ``term``."""
        return [r for r in self.list_installed() if term in r.name]

    def get(self, name: str) -> PackageRecord | None:
        """Read the record for one package.

        Args:
            name: Package name.

        Returns:
            PackageRecord, or None if the package is not installed.

        Raises:
            VersionReadError: If the record exists but cannot be read.
        """
        if not self.is_installed(name):
            return None
        return self._read_record(name)

    def is_installed(self, name: str) -> bool:
        """Check whether a record exists for the package."""
        return self.record_path(name).is_file()

    def save(self, name: str, pkgver: str, pkgrel: str) -> PackageRecord:
        """Write or overwrite the record for a package.

        pkgver and pkgrel must come from the locally built PKGBUILD, not from
        the refresh fetch, since the build may differ from what was queried.

        Args:
            name: Package name.
            pkgver: Built pkgver.
            pkgrel: Built pkgrel.

        Returns:
            The saved record.

        Raises:
            VersionReadError: If any field is empty or contains whitespace.
            RecordWriteError: If the file cannot be written.
        """
        try:
            record = PackageRecord(name=name, pkgver=pkgver, pkgrel=pkgrel)
        except ValueError as e:
            raise VersionReadError(f"Invalid version for {name}: {e}") from e

        try:
            self._info_dir.mkdir(parents=True, exist_ok=True)
            self.record_path(name).write_text(
                f"pkgver={record.pkgver}\npkgrel={record.pkgrel}\n",
                encoding="utf-8",
            )
        except OSError as e:
            msg = f"Cannot write package info for {name}: {e}"
            raise RecordWriteError(msg) from e
        logger.info("Saved package info for %s (%s)", name, record.version)
        return record

    def delete(self, name: str) -> None:
        """Delete the record for a package.

        Args:
            name: Package name.

        Raises:
            RecordDeletionError: If the record is missing or cannot be removed.
        """
        try:
            self.record_path(name).unlink()
        except OSError as e:
            msg = f"Cannot delete package info for {name}: {e}"
            raise RecordDeletionError(msg) from e
        logger.info("Deleted package info for %s", name)

    def _read_record(self, name: str) -> PackageRecord:
        """Parse one record file.

        Raises:
            VersionReadError: If the file is unreadable or incomplete.
        """
        path = self.record_path(name)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Cannot read package info for {name}: {e}"
            raise VersionReadError(msg) from e

        fields: dict[str, str] = {}
        for line in content.splitlines():
            key, sep, value = line.partition("=")
            if sep:
                fields.setdefault(key.strip(), value.strip())

        pkgver = fields.get("pkgver")
        pkgrel = fields.get("pkgrel")
        if not pkgver or not pkgrel:
            msg = f"Package info for {name} is missing pkgver or pkgrel"
            raise VersionReadError(msg)

        try:
            return PackageRecord(name=name, pkgver=pkgver, pkgrel=pkgrel)
        except ValueError as e:
            raise VersionReadError(f"Invalid package info for {name}: {e}") from e
