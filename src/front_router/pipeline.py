"""File pipeline hooks and standalone build runner.

An embedding build tool pushes every page through ``RoutePipeline``:

    pipeline = RoutePipeline(FrontRouter(page_root="src/pages"))
    for file in files:
        file = pipeline.transform(file)   # registers the route, strips front matter
        ...
    await pipeline.finish("build/routes.js")

``build()`` does the same without a host tool: it globs the pages itself,
optionally writes the stripped pages to a destination folder and then
flushes the routes file.
"""

import asyncio
import dataclasses
import glob
import logging
import os
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Any

from front_router.errors import (
    ConfigurationError,
    FrontMatterError,
    InvalidRouteError,
    PipelineError,
)
from front_router.frontmatter import extract_front_matter
from front_router.router import FrontRouter, configure

logger = logging.getLogger(__name__)

# Characters that make a path segment a glob pattern
_MAGIC_RE = re.compile(r"[*?[]")


@dataclass(frozen=True)
class SourceFile:
    """A file flowing through the pipeline.

    ``contents`` is None for entries without data (directories), which are
    passed through untouched. ``base`` is the directory the file's output
    path is computed from.
    """

    path: str
    contents: bytes | None = None
    base: str | None = None

    @property
    def relative(self) -> str:
        """Path relative to the file's base directory."""
        base = self.base or os.path.dirname(self.path)
        return os.path.relpath(self.path, base)


@dataclass(frozen=True)
class BuildResult:
    """Summary of a standalone build."""

    files: int
    routes: int
    output: str | None
    rendered: str | None = None


class RoutePipeline:
    """Per-file transform and end-of-run finish hooks around a FrontRouter."""

    def __init__(self, router: FrontRouter):
        self.router = router

    def transform(self, file: SourceFile) -> SourceFile:
        """
        Register a page's route and strip its front matter.

        Front matter without a ``url`` key (layouts, partials) is stripped
        but not registered.

        Args:
            file: Page to process

        Returns:
            The file with front matter removed, or the same file if it had
            none (or no contents)

        Raises:
            PipelineError: If the page is not UTF-8, its front matter is
                invalid, or the route is rejected by the router
        """
        if file.contents is None:
            return file

        try:
            text = file.contents.decode("utf-8")
        except UnicodeDecodeError as e:
            raise PipelineError(file.path, f"Not valid UTF-8: {e}") from e

        try:
            front_matter = extract_front_matter(text)
        except FrontMatterError as e:
            logger.error(f"Front matter error in {file.path}: {e}")
            raise PipelineError(file.path, str(e)) from e

        if not front_matter.has_front_matter:
            logger.debug(f"No front matter in {file.path}, passing through")
            return file

        stripped = dataclasses.replace(file, contents=front_matter.body.encode("utf-8"))
        if "url" not in front_matter.attributes:
            logger.debug(f"No url in front matter of {file.path}, not a route")
            return stripped

        attributes = dict(front_matter.attributes)
        attributes["path"] = file.path
        try:
            self.router.add_route(attributes)
        except InvalidRouteError as e:
            raise PipelineError(file.path, str(e)) from e

        return stripped

    async def finish(self, output: str | Path) -> None:
        """Write the collected routes. Runs after all files are processed."""
        await self.router.flush(output)


def _glob_base(pattern: str) -> str:
    """Return the leading directory of a glob pattern that has no wildcards."""
    parts = PurePath(pattern).parts
    base_parts = []
    for part in parts:
        if _MAGIC_RE.search(part):
            break
        base_parts.append(part)
    else:
        # Plain file path: its directory is the base
        base_parts = base_parts[:-1]

    return str(PurePath(*base_parts)) if base_parts else "."


def iter_source_files(patterns: Iterable[str]) -> Iterator[SourceFile]:
    """
    Expand globs into source files, in sorted order, skipping duplicates.

    Args:
        patterns: Glob patterns (``**`` matches recursively)

    Yields:
        SourceFile for each matched regular file
    """
    seen: set[str] = set()
    for pattern in patterns:
        base = _glob_base(pattern)
        for match in sorted(glob.glob(pattern, recursive=True)):
            resolved = os.path.abspath(match)
            if resolved in seen or not os.path.isfile(match):
                continue
            seen.add(resolved)
            yield SourceFile(
                path=resolved,
                contents=Path(match).read_bytes(),
                base=os.path.abspath(base),
            )


def _write_page(dest: Path, file: SourceFile) -> None:
    target = dest / file.relative
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(file.contents or b"")


async def build(
    options: Mapping[str, Any], dry_run: bool = False
) -> BuildResult:
    """
    Process a set of HTML files and produce a routes file.

    Args:
        options: Build options:
            - src: Glob or list of globs of HTML pages (required)
            - path: Routes file to write (required unless dry_run)
            - root: Common root of the pages (default: cwd)
            - dest: Folder to write stripped pages to (optional)
            - library: Adapter name or callable
            - overwrite: Replace the routes file instead of appending
        dry_run: Render the routes without writing anything

    Returns:
        BuildResult summary

    Raises:
        ConfigurationError: If required options are missing or invalid
        PipelineError: If a page fails to process
        OSError: If a page or the routes file cannot be written
    """
    src = options.get("src") or []
    if isinstance(src, str):
        src = [src]
    if not src:
        raise ConfigurationError("No source files given: set 'src'")

    output = options.get("path")
    if not output and not dry_run:
        raise ConfigurationError("No routes file given: set 'path'")

    router = configure(
        {
            "page_root": options.get("root"),
            "library": options.get("library"),
            "overwrite": options.get("overwrite", False),
        }
    )
    pipeline = RoutePipeline(router)
    dest = Path(options["dest"]) if options.get("dest") else None

    count = 0
    for file in iter_source_files(src):
        processed = pipeline.transform(file)
        count += 1
        if dest is not None and not dry_run:
            await asyncio.to_thread(_write_page, dest, processed)

    logger.info(f"Processed {count} files, found {len(router)} routes")
    if count == 0:
        logger.warning(f"No files matched: {', '.join(src)}")

    if dry_run:
        return BuildResult(
            files=count,
            routes=len(router),
            output=str(output) if output else None,
            rendered=router.render(),
        )

    Path(output).parent.mkdir(parents=True, exist_ok=True)
    await pipeline.finish(output)
    return BuildResult(files=count, routes=len(router), output=str(output))
