"""Front Router CLI entry point."""

import typer

from front_router.adapters import get_available_adapters

from . import __version__
from .build_command import build_command
from .console import console, create_table

app = typer.Typer(
    name="front-router",
    help="Front Router - build a routes file from HTML front matter",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"front-router version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Front Router - build a routes file from HTML front matter."""
    pass


@app.command(name="adapters")
def adapters_command() -> None:
    """List the built-in route file adapters."""
    table = create_table("Built-in Adapters")
    table.add_column("Name", style="cyan")
    table.add_column("Default", style="green")

    for name in get_available_adapters():
        table.add_row(name, "yes" if name == "default" else "")

    console.print(table)


# Register the build command
app.command(name="build")(build_command)


if __name__ == "__main__":
    app()
