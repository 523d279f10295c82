"""Path management for aurctl.

Persistent state lives in the XDG configuration directory; clones, builds
and fetched PKGBUILDs go to a scratch directory.

Layout:
- Config: ~/.config/aurctl/ (config.toml, out-dated, package_info/)
- Scratch: /tmp/aurctl/ (updates/, one working tree per package)
"""

import os
from pathlib import Path

from aurctl.core.errors import DirectoryCreationError

# Application identifier for directory naming
APP_NAME = "aurctl"

PACKAGE_INFO_DIRNAME = "package_info"
OUTDATED_FILENAME = "out-dated"
UPDATES_DIRNAME = "updates"
TEMP_SUFFIX = "-temp"

# Environment override for the scratch root
SCRATCH_ENV_VAR = "AURCTL_SCRATCH_DIR"
DEFAULT_SCRATCH_DIR = Path("/tmp") / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/aurctl/ (or XDG_CONFIG_HOME/aurctl/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_config_path() -> Path:
    """Get the configuration file path.

    Returns:
        Path to ~/.config/aurctl/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_package_info_dir() -> Path:
    """Get the directory holding one version record per installed package.

    Returns:
        Path to ~/.config/aurctl/package_info/.
    """
    return get_config_dir() / PACKAGE_INFO_DIRNAME


def get_outdated_path() -> Path:
    """Get the outdated snapshot file path.

    Returns:
        Path to ~/.config/aurctl/out-dated.
    """
    return get_config_dir() / OUTDATED_FILENAME


def resolve_scratch_dir(configured: Path | None = None) -> Path:
    """Resolve the scratch root.

    AURCTL_SCRATCH_DIR wins over the configured value, which wins over
    /tmp/aurctl.

    Args:
        configured: scratch_dir from the configuration file, if any.

    Returns:
        Path to the scratch root.
    """
    override = os.environ.get(SCRATCH_ENV_VAR)
    if override:
        return Path(override)
    return configured if configured is not None else DEFAULT_SCRATCH_DIR


def get_updates_dir(scratch_dir: Path) -> Path:
    """Get the directory for PKGBUILDs fetched during refresh."""
    return scratch_dir / UPDATES_DIRNAME


def get_update_temp_path(scratch_dir: Path, name: str) -> Path:
    """Get the scratch file a package's latest PKGBUILD is fetched into."""
    return get_updates_dir(scratch_dir) / f"{name}{TEMP_SUFFIX}"


def get_work_dir(scratch_dir: Path, name: str) -> Path:
    """Get the working tree a package is cloned into and built in."""
    return scratch_dir / name


def ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        DirectoryCreationError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise DirectoryCreationError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise DirectoryCreationError(msg) from e
    return path


def ensure_dirs(scratch_dir: Path) -> None:
    """Create all required application directories.

    Creates the package info directory (and with it the config directory),
    the scratch root and its updates subdirectory.

    Args:
        scratch_dir: Resolved scratch root.

    Raises:
        DirectoryCreationError: If any directory cannot be created.
    """
    ensure_dir(get_package_info_dir(), "package info")
    ensure_dir(get_updates_dir(scratch_dir), "updates")
