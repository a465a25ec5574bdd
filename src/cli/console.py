"""Console output utilities.

Usage:
    from cli.console import console, print_success, print_error

    print_success("Wrote 3 routes")
    print_error("Unknown adapter")
"""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

console = Console()
error_console = Console(stderr=True)


def print_success(message: str) -> None:
    """Print a success message (green checkmark)."""
    console.print(f"[green]✓[/green] {message}", soft_wrap=True)


def print_error(message: str) -> None:
    """Print an error message (red X) to stderr."""
    error_console.print(f"[red]✗[/red] {message}", soft_wrap=True)


def print_warning(message: str) -> None:
    """Print a warning message (yellow warning sign)."""
    console.print(f"[yellow]⚠[/yellow] {message}")


def create_table(title: str = "") -> Table:
    """Create a rich table, titled if a title is given."""
    return Table(title=title) if title else Table()


def setup_logging(verbose: bool = False, level: str = "WARNING") -> None:
    """Route library logging through rich on stderr.

    ``verbose`` forces DEBUG; otherwise ``level`` (a logging level name)
    applies, falling back to WARNING if it is not a known level.
    """
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        resolved = logging.WARNING

    logging.basicConfig(
        level=logging.DEBUG if verbose else resolved,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


__all__ = [
    "console",
    "error_console",
    "print_success",
    "print_error",
    "print_warning",
    "create_table",
    "setup_logging",
]
