"""PKGBUILD version extraction.

Reads pkgver and pkgrel from a build descriptor with grep.
"""

import logging
from pathlib import Path

from aurctl.core.commands import SEARCH, check_result
from aurctl.core.errors import VersionReadError
from aurctl.utils.shell import run_command

logger = logging.getLogger(__name__)

DESCRIPTOR_FILENAME = "PKGBUILD"


def read_field(path: Path, key: str) -> str:
    """Read the value of one ``key=value`` assignment from a PKGBUILD.

    Only the first assignment counts. A trailing comment and the quotes
    around the value are dropped.

    Args:
        path: PKGBUILD file.
        key: Variable name, "pkgver" or "pkgrel".

    Returns:
        The assigned value.

    Raises:
        CommandFailedError: If grep finds no match or cannot read the file.
        VersionReadError: If the value is empty or contains whitespace.
    """
    result = run_command(
        ["grep", "-oP", f"(?<={key}=).*", path.name],
        cwd=str(path.parent),
    )
    output = check_result(SEARCH, result)

    line = output.split("\n", 1)[0]
    value = line.split("#", 1)[0].strip().strip("'\"")
    if not value:
        msg = f"Empty {key} in {path}"
        raise VersionReadError(msg)
    if any(ch.isspace() for ch in value):
        msg = f"Unsupported {key} in {path}: {value!r}"
        raise VersionReadError(msg)
    return value


def read_descriptor(path: Path) -> tuple[str, str]:
    """Read pkgver and pkgrel from a PKGBUILD.

    Args:
        path: PKGBUILD file.

    Returns:
        Tuple of (pkgver, pkgrel).
    """
    pkgver = read_field(path, "pkgver")
    pkgrel = read_field(path, "pkgrel")
    logger.debug("Read %s-%s from %s", pkgver, pkgrel, path)
    return pkgver, pkgrel
