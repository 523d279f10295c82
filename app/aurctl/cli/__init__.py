"""Command-line interface for aurctl.

This module exports the main Typer application.
"""

from aurctl.cli.main import app

__all__ = ["app"]
