"""CLI commands for aurctl.

This package contains all subcommand implementations.
"""

from aurctl.cli.commands import config, explain, query, remove, sync, update

__all__ = ["config", "explain", "query", "remove", "sync", "update"]
