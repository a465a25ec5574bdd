"""Output Adapters

Formats the sorted route list as the JavaScript source a client-side
router expects. Adapters are pure functions: they take a sequence of route
dictionaries and return text, with no I/O.

Built-in adapters:
    - default: ``var routes = [...];``
    - angular: Angular ``config()`` block calling ``registerDynamicRoutes``
    - node: ``module.exports = [...];``

Selecting an adapter is a tagged choice: either a ``Library`` member
(by value or by name) or a ``CustomAdapter`` wrapping any callable.
``resolve_adapter`` validates the choice when the router is configured,
so an unknown name fails before a single route is added.

Adding a built-in:
    class Library(str, Enum):
        ...
        VUE = "vue"

    @register_adapter(Library.VUE)
    def format_vue(routes):
        ...
"""

import json
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

from front_router.errors import ConfigurationError

logger = logging.getLogger(__name__)

Adapter = Callable[[Sequence[Mapping[str, Any]]], str]


class Library(str, Enum):
    """Built-in adapter identifiers."""

    DEFAULT = "default"
    ANGULAR = "angular"
    NODE = "node"


@dataclass(frozen=True)
class CustomAdapter:
    """A user-supplied formatting function."""

    func: Adapter

    @property
    def name(self) -> str:
        return getattr(self.func, "__name__", repr(self.func))


AdapterChoice = Library | CustomAdapter

# Adapter registry, filled by @register_adapter at import time
_ADAPTER_REGISTRY: dict[str, Adapter] = {}


def register_adapter(library: Library):
    """
    Decorator to register a built-in adapter implementation.

    Usage:
        @register_adapter(Library.ANGULAR)
        def format_angular(routes):
            ...

    Args:
        library: Library member the adapter renders for

    Returns:
        Decorator function that registers the adapter
    """
    def decorator(func: Adapter) -> Adapter:
        _ADAPTER_REGISTRY[library.value] = func
        return func
    return decorator


def _json_default(value: Any) -> Any:
    """Serialize YAML scalar types that JSON has no literal for."""
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(
        f"Object of type {type(value).__name__} is not JSON serializable"
    )


def routes_to_json(routes: Sequence[Mapping[str, Any]]) -> str:
    """
    Serialize routes as a compact JSON array.

    Output matches ``JSON.stringify``: no whitespace between tokens and
    non-ASCII characters kept as-is.

    Raises:
        ValueError: If a route contains a circular reference
        TypeError: If a route contains a value with no JSON form
    """
    return json.dumps(
        [dict(route) for route in routes],
        separators=(",", ":"),
        ensure_ascii=False,
        default=_json_default,
    )


@register_adapter(Library.DEFAULT)
def format_default(routes: Sequence[Mapping[str, Any]]) -> str:
    """Render routes as a plain global variable declaration."""
    return f"var routes = {routes_to_json(routes)};"


@register_adapter(Library.ANGULAR)
def format_angular(routes: Sequence[Mapping[str, Any]]) -> str:
    """Render routes as an Angular dynamic routing config block."""
    return f"""
  angular.module('dynamicRouting').config([
    '$BaseAppsStateProvider',
    function(BaseAppsStateProvider) {{
      BaseAppsStateProvider.registerDynamicRoutes({routes_to_json(routes)});
    }}
  ]);
  """


@register_adapter(Library.NODE)
def format_node(routes: Sequence[Mapping[str, Any]]) -> str:
    """Render routes as a CommonJS module."""
    return f"module.exports = {routes_to_json(routes)};"


def get_available_adapters() -> list[str]:
    """
    Return list of built-in adapter names.

    Returns:
        Registered adapter identifiers, in declaration order
    """
    return [library.value for library in Library if library.value in _ADAPTER_REGISTRY]


def resolve_adapter(library: Any = None) -> AdapterChoice:
    """
    Turn a user-facing ``library`` option into an adapter choice.

    Args:
        library: None for the default adapter, a built-in name or Library
            member, a CustomAdapter, or any callable

    Returns:
        Library member or CustomAdapter

    Raises:
        ConfigurationError: If the name is unknown or the type is unsupported

    Examples:
        resolve_adapter()                # Library.DEFAULT
        resolve_adapter("angular")       # Library.ANGULAR
        resolve_adapter(my_formatter)    # CustomAdapter(my_formatter)
    """
    if library is None:
        return Library.DEFAULT

    if isinstance(library, (Library, CustomAdapter)):
        return library

    if isinstance(library, str):
        try:
            return Library(library)
        except ValueError:
            available = get_available_adapters()
            raise ConfigurationError(
                f"There's no built-in adapter for '{library}'. "
                f"Available adapters: {available}"
            ) from None

    if callable(library):
        return CustomAdapter(library)

    raise ConfigurationError(
        f"library must be a string or callable, got {type(library).__name__}"
    )


def get_adapter(choice: AdapterChoice) -> Adapter:
    """
    Return the formatting function for a resolved adapter choice.

    Raises:
        ConfigurationError: If a Library member has no registered adapter
    """
    if isinstance(choice, CustomAdapter):
        return choice.func

    adapter = _ADAPTER_REGISTRY.get(choice.value)
    if adapter is None:
        raise ConfigurationError(f"No adapter registered for '{choice.value}'")

    logger.debug(f"Using built-in adapter: {choice.value}")
    return adapter
