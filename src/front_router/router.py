"""Route Registry

``FrontRouter`` collects routes while a build runs and writes them out as
one JavaScript file at the end.

Lifecycle:
    router = FrontRouter(page_root="src/pages", library="angular")
    router.add_route({"name": "home", "url": "/", "path": "/abs/src/pages/home.html"})
    await router.flush("build/routes.js")

Routes keep insertion order until ``flush``, which sorts them by ``url``
in place before formatting. ``flush`` is not guarded against concurrent
calls on the same router; callers run it once, after the last
``add_route``.
"""

import asyncio
import logging
import os
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from front_router.adapters import (
    AdapterChoice,
    Library,
    get_adapter,
    resolve_adapter,
)
from front_router.errors import InvalidRouteError
from front_router.route import Route

logger = logging.getLogger(__name__)


class FrontRouter:
    """Manages routes and writes them to disk as a routes file."""

    def __init__(
        self,
        page_root: str | Path | None = None,
        library: Any = None,
        overwrite: bool = False,
    ):
        """
        Create a router.

        Args:
            page_root: Root directory of the HTML pages (default: cwd)
            library: Built-in adapter name, Library member, or callable
            overwrite: Replace the routes file instead of appending to it

        Raises:
            ConfigurationError: If library is unknown or of unsupported type
        """
        self.page_root = str(page_root) if page_root else os.getcwd()
        self.library: AdapterChoice = resolve_adapter(library)
        self.overwrite = bool(overwrite)
        self.routes: list[Route] = []

        self._adapter = get_adapter(self.library)

        logger.debug(
            f"FrontRouter initialized: page_root={self.page_root}, "
            f"library={self.library_name}, "
            f"overwrite={self.overwrite}"
        )

    @property
    def library_name(self) -> str:
        """Name of the configured adapter (built-in name or function name)."""
        if isinstance(self.library, Library):
            return self.library.value
        return self.library.name

    def __len__(self) -> int:
        return len(self.routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self.routes)

    def add_route(self, route: Any) -> Route:
        """
        Add a new route.

        Args:
            route: Mapping with at least ``url`` and ``path`` keys

        Returns:
            The stored Route, with ``path`` relative to the page root

        Raises:
            InvalidRouteError: If route is not a mapping or lacks url/path
        """
        try:
            stored = Route.from_mapping(route, self.page_root)
        except InvalidRouteError as e:
            logger.error(f"Rejected route: {e}")
            raise

        self.routes.append(stored)
        logger.debug(f"Added route {stored.url} -> {stored.path}")
        return stored

    def render(self) -> str:
        """
        Sort routes by url and format them with the configured adapter.

        Returns:
            Routes file contents
        """
        self.routes.sort(key=lambda route: route.url)
        return self._adapter([route.to_dict() for route in self.routes])

    async def flush(self, file_path: str | Path) -> None:
        """
        Write all routes to disk using the configured adapter.

        Appends to an existing file unless the router was created with
        ``overwrite=True``. Missing parent directories are not created.

        Args:
            file_path: Path of the routes file to write

        Raises:
            OSError: If the file cannot be written
        """
        contents = self.render()
        mode = "w" if self.overwrite else "a"

        await asyncio.to_thread(_write_text, Path(file_path), contents, mode)
        logger.info(
            f"{'Wrote' if self.overwrite else 'Appended'} {len(self.routes)} "
            f"routes to {file_path}"
        )


def _write_text(file_path: Path, contents: str, mode: str) -> None:
    with open(file_path, mode, encoding="utf-8") as f:
        f.write(contents)


def configure(options: Mapping[str, Any] | None = None) -> FrontRouter:
    """
    Create a router from an options mapping.

    Recognized keys: ``page_root`` (or ``pageRoot``), ``library``,
    ``overwrite``. Other keys are ignored.

    Args:
        options: Router options

    Returns:
        Configured FrontRouter

    Raises:
        ConfigurationError: If library is unknown or of unsupported type
    """
    options = dict(options or {})
    page_root = options.pop("page_root", None)
    camel_page_root = options.pop("pageRoot", None)
    library = options.pop("library", None)
    overwrite = options.pop("overwrite", False)

    for key in options:
        logger.debug(f"Ignoring unrecognized router option: {key}")

    return FrontRouter(
        page_root=page_root or camel_page_root,
        library=library,
        overwrite=overwrite,
    )
