"""The front-router build command implementation."""

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.panel import Panel
from rich.syntax import Syntax

from front_router.config import get_build_options, load_config, merge_options
from front_router.errors import FrontRouterError
from front_router.pipeline import build

from .console import console, print_error, print_success, print_warning, setup_logging


def build_command(
    src: Optional[List[str]] = typer.Argument(
        None,
        help="Globs of HTML pages to scan (default: pages.src from config)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Routes file to write",
    ),
    root: Optional[Path] = typer.Option(
        None,
        "--root",
        "-r",
        help="Common root of the pages; route paths are relative to it",
    ),
    dest: Optional[Path] = typer.Option(
        None,
        "--dest",
        "-d",
        help="Folder to write pages to, with front matter stripped",
    ),
    library: Optional[str] = typer.Option(
        None,
        "--library",
        "-l",
        help="Adapter to format routes for (see 'front-router adapters')",
    ),
    overwrite: Optional[bool] = typer.Option(
        None,
        "--overwrite/--append",
        help="Replace the routes file instead of appending to it",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: ./front-router.yaml if present)",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Print the routes file instead of writing anything",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show debug logging",
    ),
) -> None:
    """Scan HTML pages for front matter and write a routes file."""
    try:
        config = load_config(config_path)
    except FrontRouterError as e:
        setup_logging(verbose)
        print_error(str(e))
        raise typer.Exit(1)

    setup_logging(verbose, config.get("logging", {}).get("level", "WARNING"))

    options = merge_options(
        get_build_options(config),
        {
            "src": list(src) if src else None,
            "path": str(output) if output else None,
            "root": str(root) if root else None,
            "dest": str(dest) if dest else None,
            "library": library,
            "overwrite": overwrite,
        },
    )

    try:
        result = asyncio.run(build(options, dry_run=dry_run))
    except FrontRouterError as e:
        print_error(str(e))
        raise typer.Exit(1)
    except OSError as e:
        print_error(f"Cannot write output: {e}")
        raise typer.Exit(1)
    except (TypeError, ValueError) as e:
        # a front matter value with no JSON form, e.g. !!binary
        print_error(f"Cannot render routes: {e}")
        raise typer.Exit(1)

    if result.files == 0:
        print_warning("No files matched the source globs")

    if dry_run:
        console.print(
            Panel(
                Syntax(result.rendered or "", "javascript", word_wrap=True),
                title=f"{result.routes} routes from {result.files} files",
                border_style="blue",
            )
        )
        return

    print_success(
        f"Wrote {result.routes} routes from {result.files} files to {result.output}"
    )
