"""Logging setup for the CLI.

Library modules only create module-level loggers; handlers are attached
here, once, by the CLI entry point.
"""

import logging

from rich.logging import RichHandler

from aurctl.utils.formatting import err_console

LOGGER_NAME = "aurctl"


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configure the aurctl logger.

    Args:
        verbose: Log at DEBUG level.
        quiet: Only log errors. Ignored when verbose is set.

    Returns:
        The configured package logger.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = RichHandler(
        console=err_console,
        show_time=verbose,
        show_path=verbose,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    logger.addHandler(handler)
    logger.propagate = False

    return logger
