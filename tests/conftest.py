"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture
def sample_pkgbuild() -> str:
    """PKGBUILD as served by the AUR for a typical package."""
    return """# Maintainer: Jane Doe <jane at example dot org>
pkgname=yay
pkgver=12.3.5
pkgrel=1
pkgdesc="Yet another yogurt. Pacman wrapper and AUR helper written in go."
arch=('i686' 'x86_64' 'arm' 'armv7h' 'armv6h' 'aarch64')
url="https://github.com/Jguer/yay"
license=('GPL-3.0-or-later')
depends=('pacman>6.1' 'git')
makedepends=('go>=1.21')
source=("${pkgname}-${pkgver}.tar.gz::https://github.com/Jguer/yay/archive/v${pkgver}.tar.gz")
"""


@pytest.fixture
def aurctl_home(tmp_path: Path) -> Iterator[Path]:
    """Point the config directory and scratch root into tmp_path.

    Yields:
        tmp_path; config lives in tmp_path/config/aurctl, scratch in tmp_path/scratch.
    """
    env = {
        "XDG_CONFIG_HOME": str(tmp_path / "config"),
        "AURCTL_SCRATCH_DIR": str(tmp_path / "scratch"),
    }
    with patch.dict(os.environ, env):
        yield tmp_path


@pytest.fixture
def info_dir(tmp_path: Path) -> Path:
    """Package info directory with two recorded packages."""
    directory = tmp_path / "package_info"
    directory.mkdir()
    (directory / "yay").write_text("pkgver=12.3.5\npkgrel=1\n", encoding="utf-8")
    (directory / "python-foo").write_text("pkgver=1.0\npkgrel=2\n", encoding="utf-8")
    return directory
