"""Front Router command-line interface."""

from front_router import __version__

__all__ = ["__version__"]
