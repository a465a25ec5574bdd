"""Route records.

A route is whatever the front matter of a page declares, plus the page's
source path. ``url`` and ``path`` are required and typed; every other
attribute rides along untouched in ``metadata`` so adapters can serialize
it exactly as the author wrote it.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Any

from front_router.errors import InvalidRouteError


@dataclass(frozen=True)
class Route:
    """A single discovered route."""

    url: str
    path: str
    metadata: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, record: Any, page_root: str | Path) -> "Route":
        """
        Build a route from a caller-supplied mapping.

        The record's ``path`` is rewritten relative to ``page_root``; the
        record itself is copied, never mutated.

        Args:
            record: Front-matter attributes merged with the file path
            page_root: Directory that route paths are relative to

        Returns:
            New Route instance

        Raises:
            InvalidRouteError: If record is not a mapping, path is missing,
                or url is neither a string nor a number
        """
        if not isinstance(record, Mapping):
            raise InvalidRouteError(
                f"Routes must be mappings, got {type(record).__name__}"
            )

        file_path = record.get("path")
        if not isinstance(file_path, (str, PurePath)):
            raise InvalidRouteError(
                f"Route is missing a file path: {dict(record)!r}"
            )

        url = record.get("url")
        # YAML reads `url: 404` as a number
        if isinstance(url, (int, float)) and not isinstance(url, bool):
            url = str(url)
        if not isinstance(url, str):
            raise InvalidRouteError(
                f"Route url must be a string, got {type(url).__name__} "
                f"for {file_path}"
            )

        relative = PurePath(os.path.relpath(file_path, page_root)).as_posix()
        return cls(url=url, path=relative, metadata=dict(record))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization, keeping key order."""
        result = dict(self.metadata)
        result["url"] = self.url
        result["path"] = self.path
        return result
