"""Explain command implementation.

Looks up an error code printed by a failed command. Never fails: unknown
codes only produce a message.
"""

from typing import Annotated

import typer
from rich.markup import escape

from aurctl.cli.display import create_error_info_table
from aurctl.core.errors import explain as lookup
from aurctl.core.errors import parse_code
from aurctl.utils.formatting import console


def explain(
    code: Annotated[str, typer.Argument(help="Hexadecimal error code, e.g. 10 or FF.")],
) -> None:
    """Explain an error code.

    Examples:
        aurctl explain 10
        aurctl explain ff
    """
    value = parse_code(code)
    info = lookup(value) if value is not None else None

    if info is None:
        console.print(
            f"[error]Error code[/] '{escape(code)}' does [bold]not[/] exist, did you mistype?"
        )
        return

    console.print(create_error_info_table(info))
