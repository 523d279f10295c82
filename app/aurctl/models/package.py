"""Package models for installed records and outdated entries.

This module defines the core data structures for representing AUR
packages known to aurctl.
"""

from dataclasses import dataclass


def _check_token(value: str, field_name: str) -> None:
    """Validate a value stored as one space-separated field on disk."""
    if not value:
        msg = f"{field_name} cannot be empty"
        raise ValueError(msg)
    if any(ch.isspace() for ch in value):
        msg = f"{field_name} cannot contain whitespace: {value!r}"
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class PackageRecord:
    """An installed package and the version it was built at.

    Attributes:
        name: AUR package name (e.g. 'yay', 'visual-studio-code-bin').
        pkgver: Upstream version from the PKGBUILD.
        pkgrel: Package release number from the PKGBUILD.
    """

    name: str
    pkgver: str
    pkgrel: str

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        _check_token(self.name, "Package name")
        _check_token(self.pkgver, "pkgver")
        _check_token(self.pkgrel, "pkgrel")

    @property
    def version(self) -> str:
        """Full version string, '<pkgver>-<pkgrel>'."""
        return f"{self.pkgver}-{self.pkgrel}"


@dataclass(frozen=True, slots=True)
class OutdatedEntry:
    """A package for which a newer version was found by refresh.

    Attributes:
        name: AUR package name.
        current: Installed version ('<pkgver>-<pkgrel>').
        latest: Version available in the AUR.
    """

    name: str
    current: str
    latest: str

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        _check_token(self.name, "Package name")
        _check_token(self.current, "Current version")
        _check_token(self.latest, "Latest version")

    def to_line(self) -> str:
        """Serialize to a snapshot line (without newline)."""
        return f"{self.name} {self.current} {self.latest}"
