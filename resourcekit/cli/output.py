"""
resourcekit CLI - Rich Output Helpers

Every helper writes to stderr. Stdout belongs to the protocol: the one
JSON document a verb produces is the only thing ever written there.

Functions:
    print_error    - Print error message
    print_success  - Print success message
    print_info     - Print info message
    print_table    - Print a formatted table
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

err_console = Console(stderr=True)


def print_table(
    title: str,
    columns: list[str],
    rows: list[list[str]],
    styles: Optional[list[str]] = None,
) -> None:
    """
    Print a rich table.

    Args:
        title: Table title
        columns: Column headers
        rows: Table rows (list of lists)
        styles: Optional column styles
    """
    table = Table(title=title)

    for i, col in enumerate(columns):
        style = styles[i] if styles and i < len(styles) else None
        table.add_column(col, style=style)

    for row in rows:
        padded_row = list(row) + [""] * (len(columns) - len(row))
        table.add_row(*padded_row[:len(columns)])

    err_console.print(table)


def print_error(message: str, phase: Optional[str] = None) -> None:
    """
    Print an error message.

    Args:
        message: Error message, printed verbatim
        phase: Optional failing phase shown as a prefix
    """
    prefix = f"[red bold]error[/red bold][dim]({escape(phase)})[/dim]" if phase else "[red bold]error[/red bold]"
    err_console.print(f"{prefix}: {escape(message)}", soft_wrap=True)


def print_success(message: str) -> None:
    """Print a success message."""
    err_console.print(f"[green]{escape(message)}[/green]", soft_wrap=True)


def print_info(message: str) -> None:
    """Print an info message."""
    err_console.print(f"[blue]i[/blue] {escape(message)}", soft_wrap=True)
