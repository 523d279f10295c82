"""Configuration and per-invocation run options.

Settings are stored in ~/.config/aurctl/config.toml. Every key is optional;
a missing file means all defaults.
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from aurctl.core.paths import DEFAULT_SCRATCH_DIR, get_config_path, resolve_scratch_dir

DEFAULT_AUR_URL = "https://aur.archlinux.org/"
DEFAULT_PKGBUILD_URL = "https://aur.archlinux.org/cgit/aur.git/plain/PKGBUILD?h="
DEFAULT_MAKEPKG_FLAGS = ["-sirc", "--noconfirm"]


@dataclass(frozen=True, slots=True)
class RunOptions:
    """Options fixed for the duration of one invocation.

    Attributes:
        quiet: Print only the necessary information; hide tool output.
        verbose: Enable debug logging.
    """

    quiet: bool = False
    verbose: bool = False


class AurctlConfig(BaseModel):
    """Configuration for aurctl.

    Attributes:
        aur_url: Base URL package repositories are cloned from.
        pkgbuild_url: URL prefix the latest PKGBUILD is fetched from during refresh.
        scratch_dir: Root for clones, builds and fetched PKGBUILDs.
        makepkg_flags: Flags passed to makepkg when building a package.
    """

    model_config = ConfigDict(extra="forbid")

    aur_url: Annotated[
        str,
        Field(min_length=1, description="Base URL of AUR git repositories"),
    ] = DEFAULT_AUR_URL
    pkgbuild_url: Annotated[
        str,
        Field(min_length=1, description="URL prefix for raw PKGBUILD files"),
    ] = DEFAULT_PKGBUILD_URL
    scratch_dir: Annotated[
        Path,
        Field(description="Scratch directory for clones and builds"),
    ] = DEFAULT_SCRATCH_DIR
    makepkg_flags: Annotated[
        list[str],
        Field(description="Flags passed to makepkg"),
    ] = list(DEFAULT_MAKEPKG_FLAGS)

    @property
    def effective_scratch_dir(self) -> Path:
        """Scratch directory after applying the environment override."""
        return resolve_scratch_dir(self.scratch_dir)

    def repository_url(self, name: str) -> str:
        """Git URL of a package's AUR repository."""
        return f"{self.aur_url.rstrip('/')}/{name}.git"

    def pkgbuild_url_for(self, name: str) -> str:
        """URL of a package's latest PKGBUILD."""
        return f"{self.pkgbuild_url}{name}"


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> AurctlConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated AurctlConfig. Defaults if the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return AurctlConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return AurctlConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: AurctlConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically through a temporary file in the same
    directory and os.replace().

    Args:
        config: The AurctlConfig to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json")

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
