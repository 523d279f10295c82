"""Shared helpers for CLI commands.

Builds the per-invocation objects (options, configuration, stores) that
commands pass explicitly into the core.
"""

from pathlib import Path
from typing import NoReturn

import typer

from aurctl.core.config import AurctlConfig, ConfigError, RunOptions, load_config
from aurctl.core.errors import AurctlError
from aurctl.core.paths import ensure_dirs
from aurctl.utils.formatting import print_domain_error, print_error


def get_options(ctx: typer.Context) -> RunOptions:
    """Return the run options stored by the root callback."""
    obj = ctx.find_root().obj
    if isinstance(obj, dict) and isinstance(obj.get("options"), RunOptions):
        return obj["options"]
    return RunOptions()


def load_settings() -> AurctlConfig:
    """Load the configuration file.

    Raises:
        typer.Exit: If the configuration is invalid.
    """
    try:
        return load_config()
    except ConfigError as e:
        print_error(f"Failed to load config: {e}")
        raise typer.Exit(code=1) from e


def prepare_dirs(config: AurctlConfig) -> Path:
    """Create the configuration and scratch directories.

    Returns:
        The effective scratch directory.

    Raises:
        typer.Exit: If a directory cannot be created.
    """
    scratch_dir = config.effective_scratch_dir
    try:
        ensure_dirs(scratch_dir)
    except AurctlError as e:
        abort(e)
    return scratch_dir


def abort(error: AurctlError) -> NoReturn:
    """Report a fatal domain error and exit with status 1.

    Raises:
        typer.Exit: Always.
    """
    print_domain_error(error)
    raise typer.Exit(code=1) from error


def read_answer(message: str) -> str:
    """Prompt for a free-form answer; an empty answer is allowed.

    Raises:
        EOFError: If no answer can be read.
    """
    try:
        return typer.prompt(message, default="", show_default=False, prompt_suffix="")
    except typer.Abort as e:
        raise EOFError("prompt aborted") from e
