"""Front Router Configuration

Configuration loading with sensible defaults.

Configuration Schema (front-router.yaml):
    pages:
        src: list[str] - Globs of HTML pages to scan
        root: str - Common root of the pages (route paths are relative to it)
        dest: str - Folder to write pages to, front matter stripped (optional)
    routes:
        path: str - Routes file to write
        library: str - Built-in adapter name (default, angular, node)
        overwrite: bool - Replace the routes file instead of appending
    logging:
        level: str - Logging level (default: "WARNING")

Relative paths in a config file resolve against the file's directory.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from front_router.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE = "front-router.yaml"

# Default configuration values
DEFAULT_CONFIG: Dict[str, Any] = {
    "pages": {
        "src": [],
        "root": None,  # Use current working directory
        "dest": None,  # Don't write pages
    },
    "routes": {
        "path": None,
        "library": None,  # Use the default adapter
        "overwrite": False,
    },
    "logging": {
        "level": "WARNING",
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge override dict into base dict.

    Args:
        base: Base dictionary (defaults)
        override: Override dictionary (user config)

    Returns:
        Merged dictionary with override values taking precedence
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _resolve_path(path: Optional[str], base_dir: Path) -> Optional[str]:
    """Make a relative path absolute from base_dir; None passes through."""
    if path is None:
        return None

    path_obj = Path(path)
    if path_obj.is_absolute():
        return str(path_obj)
    return str((base_dir / path_obj).resolve())


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, encoding="utf-8") as f:
            file_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file: {e}") from e

    if not isinstance(file_config, dict):
        raise ConfigurationError(
            f"Config file must contain a mapping: {config_path}"
        )

    for section in ("pages", "routes", "logging"):
        value = file_config.get(section)
        if value is None:
            file_config.pop(section, None)
        elif not isinstance(value, dict):
            raise ConfigurationError(
                f"'{section}' must be a mapping in config file: {config_path}"
            )

    base_dir = config_path.parent.resolve()
    pages = file_config.get("pages", {})
    routes = file_config.get("routes", {})

    src = pages.get("src")
    if isinstance(src, str):
        pages["src"] = [src]
    if pages.get("src"):
        pages["src"] = [_resolve_path(pattern, base_dir) for pattern in pages["src"]]
    for key in ("root", "dest"):
        if pages.get(key):
            pages[key] = _resolve_path(pages[key], base_dir)
    if routes.get("path"):
        routes["path"] = _resolve_path(routes["path"], base_dir)

    return file_config


def load_config(
    config_path: Optional[str | Path] = None,
    cwd: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Load configuration from a YAML file merged over the defaults.

    Configuration Loading Order (later overrides earlier):
    1. Default values (DEFAULT_CONFIG)
    2. Config file (config_path, or front-router.yaml in cwd if present)

    Args:
        config_path: Explicit config file path (must exist)
        cwd: Directory searched for the default config file

    Returns:
        Merged configuration dictionary

    Raises:
        ConfigurationError: If the config file is missing, unreadable or
            invalid YAML
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        resolved = Path(config_path)
        if not resolved.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")
        config = _deep_merge(config, _read_config_file(resolved))
        logger.info(f"Loaded configuration from: {resolved}")
        return config

    default_path = (cwd or Path.cwd()) / CONFIG_FILE
    if default_path.exists():
        config = _deep_merge(config, _read_config_file(default_path))
        logger.info(f"Loaded configuration from: {default_path}")
    else:
        logger.debug("No config file found, using defaults")

    return config


def get_build_options(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Flatten configuration into options for ``pipeline.build()``.

    Args:
        config: Configuration dictionary from load_config()

    Returns:
        Dictionary with src, root, dest, path, library and overwrite keys
    """
    pages = config.get("pages", {})
    routes = config.get("routes", {})
    return {
        "src": list(pages.get("src") or []),
        "root": pages.get("root"),
        "dest": pages.get("dest"),
        "path": routes.get("path"),
        "library": routes.get("library"),
        "overwrite": bool(routes.get("overwrite", False)),
    }


def merge_options(
    options: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Apply command-line overrides to build options.

    ``None`` values and empty lists in overrides are treated as "not given"
    and leave the configured value in place.
    """
    merged = dict(options)
    for key, value in overrides.items():
        if value is None or (isinstance(value, (list, tuple)) and not value):
            continue
        merged[key] = value
    return merged
