"""Front Router - build a JavaScript routes file from HTML front matter."""

from front_router.adapters import CustomAdapter, Library, get_available_adapters
from front_router.errors import (
    ConfigurationError,
    FrontMatterError,
    FrontRouterError,
    InvalidRouteError,
    PipelineError,
)
from front_router.route import Route
from front_router.router import FrontRouter, configure

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "CustomAdapter",
    "FrontMatterError",
    "FrontRouter",
    "FrontRouterError",
    "InvalidRouteError",
    "Library",
    "PipelineError",
    "Route",
    "__version__",
    "configure",
    "get_available_adapters",
]
