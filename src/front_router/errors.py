"""Front Router exception hierarchy.

Shared by the registry, adapters, front-matter parser and pipeline so
callers can catch a single base type.
"""

from pathlib import Path


class FrontRouterError(Exception):
    """Base for all front-router errors."""


class ConfigurationError(FrontRouterError):
    """Raised when router or pipeline configuration is invalid."""


class InvalidRouteError(FrontRouterError, TypeError):
    """Raised when a route passed to the registry has the wrong shape."""


class FrontMatterError(FrontRouterError):
    """Raised when a document's front matter cannot be parsed."""


class PipelineError(FrontRouterError):
    """Raised when a file fails while passing through the pipeline."""

    def __init__(self, file_path: str | Path, message: str):
        self.file_path = str(file_path)
        super().__init__(f"{self.file_path}: {message}")
