"""
jsonflow.config - Configuration loading and defaults

Configuration comes from three layers, later layers winning:
DEFAULT_CONFIG, a ``.jsonflow.toml`` file, then ``JSONFLOW_<SECTION>_<KEY>``
environment variables.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import ParseError
from tomlkit.toml_document import TOMLDocument

CONFIG_FILENAME = ".jsonflow.toml"
ENV_PREFIX = "JSONFLOW_"

DEFAULT_CONFIG: dict[str, Any] = {
    "layout": {
        "row_height": 80.0,
        "spacing": 250.0,
        "entry_row_offset": 1,
        "nested_depth_step": 2,
    },
    "drag": {
        "overlap_policy": "reject",
        "missing_node_offset": 10.0,
    },
    "server": {
        "host": "127.0.0.1",
        "port": 5055,
    },
    "format": {
        "indent": 2,
    },
}


def parse_toml_document(content: str) -> TOMLDocument:
    """Parse TOML text, keeping comments and layout for round-trip writes."""
    return tomlkit.parse(content)


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML text into plain Python dicts, lists and scalars."""
    return parse_toml_document(content).unwrap()


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find ``.jsonflow.toml`` in ``start_path`` or any parent directory.

    Args:
        start_path: Directory to start from (defaults to the working directory).

    Returns:
        Path to the config file, or None if there is none.
    """
    current = (start_path or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge ``override`` into a copy of ``base``."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _try_parse_numeric(value: str) -> int | float | str:
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


def _try_parse_env_value(value: str) -> Any:
    """Parse an environment variable value into a typed Python value.

    JSON lists and objects are decoded, ``true``/``false`` become booleans
    and numeric strings become numbers. Anything else, including malformed
    JSON, is returned unchanged.
    """
    stripped = value.strip()
    if stripped[:1] in ("[", "{"):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return value
    lowered = stripped.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return _try_parse_numeric(stripped)


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply ``JSONFLOW_<SECTION>_<KEY>`` variables onto a config dict.

    The first underscore-separated part after the prefix names the section;
    the rest (lower-cased) is the key, e.g. ``JSONFLOW_DRAG_OVERLAP_POLICY``
    sets ``config["drag"]["overlap_policy"]``.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX) :].lower().split("_", 1)
        if len(parts) != 2 or not parts[1]:
            continue
        section, key = parts
        target = config.setdefault(section, {})
        if isinstance(target, dict):
            target[key] = _try_parse_env_value(raw)
    return config


def load_config(config_path: Path) -> dict[str, Any]:
    """Load a config file and merge it over the defaults.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid TOML.
    """
    content = config_path.read_text(encoding="utf-8")
    try:
        user_config = parse_toml(content)
    except ParseError as e:
        raise ValueError(f"Invalid TOML in {config_path}: {e}") from e
    return merge_configs(DEFAULT_CONFIG, user_config)


def get_config(
    config_path: Path | None = None,
    start_path: Path | None = None,
) -> dict[str, Any]:
    """Resolve the effective configuration.

    Args:
        config_path: Explicit config file; discovery is skipped when given.
        start_path: Where discovery starts when no path is given.

    Returns:
        Defaults, merged with the config file if any, then env overrides.
    """
    path = config_path or find_config_file(start_path)
    config = load_config(path) if path else copy.deepcopy(DEFAULT_CONFIG)
    return _apply_env_overrides(config)


def default_config_document() -> TOMLDocument:
    """Build a commented TOML document holding DEFAULT_CONFIG."""
    doc = tomlkit.document()
    doc.add(tomlkit.comment("jsonflow configuration"))
    doc.add(tomlkit.nl())
    comments = {
        "layout": "Row height and horizontal slot width of the diagram",
        "drag": 'overlap_policy: "reject" or "last-writer-wins"',
        "server": "Address used by `jsonflow serve`",
        "format": "Indentation of formatted JSON",
    }
    for section, values in DEFAULT_CONFIG.items():
        table = tomlkit.table()
        table.comment(comments[section])
        for key, value in values.items():
            table.add(key, value)
        doc.add(section, table)
    return doc


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "default_config_document",
    "find_config_file",
    "get_config",
    "load_config",
    "merge_configs",
    "parse_toml",
    "parse_toml_document",
]
