"""Utility modules for aurctl.

This module exports commonly used utility functions.
"""

from aurctl.utils.formatting import (
    console,
    create_outdated_table,
    create_records_table,
    err_console,
    print_domain_error,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from aurctl.utils.shell import CommandResult, OutputPolicy, command_exists, run_command

__all__ = [
    "CommandResult",
    "OutputPolicy",
    "command_exists",
    "console",
    "create_outdated_table",
    "create_records_table",
    "err_console",
    "print_domain_error",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
]
