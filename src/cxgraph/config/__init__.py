"""
cxgraph.config - Configuration loading and defaults

Configuration lives in a `.cxgraph.toml` file, found by walking up from
the working directory. Values from the file are merged over
DEFAULT_CONFIG, then CXGRAPH_<SECTION>_<KEY> environment variables
override individual keys.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

import tomlkit

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".cxgraph.toml"
ENV_PREFIX = "CXGRAPH_"

DEFAULT_CONFIG: dict[str, Any] = {
    "graph": {
        "on_duplicate": "overwrite",
    },
    "logging": {
        "level": "WARNING",
    },
}

_DUPLICATE_POLICIES = ("overwrite", "error")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def find_config_file(start: Path) -> Path | None:
    """Find .cxgraph.toml in start or any parent directory.

    Args:
        start: Directory to start searching from.

    Returns:
        Path to the config file, or None if not found.
    """
    current = start.resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge override into a copy of base."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _try_parse_env_value(value: str) -> Any:
    """Parse an env var value as boolean or JSON, else return it unchanged."""
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if value.startswith(("[", "{")) or value.lstrip("-").isdigit():
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply CXGRAPH_<SECTION>_<KEY> environment variables.

    CXGRAPH_GRAPH_ON_DUPLICATE=error sets config["graph"]["on_duplicate"].
    """
    for env_key, raw_value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        section, _, key = env_key[len(ENV_PREFIX):].lower().partition("_")
        if not section or not key:
            continue
        target = config.setdefault(section, {})
        if isinstance(target, dict):
            target[key] = _try_parse_env_value(raw_value)
            logger.debug("Config %s.%s overridden from %s", section, key, env_key)
    return config


def validate_config(config: dict[str, Any]) -> None:
    """Reject values the graph layer cannot use.

    Raises:
        ValueError: On an unknown duplicate policy or log level.
    """
    on_duplicate = config.get("graph", {}).get("on_duplicate")
    if on_duplicate not in _DUPLICATE_POLICIES:
        raise ValueError(
            f"graph.on_duplicate must be one of {_DUPLICATE_POLICIES}, got {on_duplicate!r}"
        )
    level = str(config.get("logging", {}).get("level", "")).upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"logging.level must be one of {_LOG_LEVELS}, got {level!r}")


def load_config(config_path: Path) -> dict[str, Any]:
    """Load configuration from a TOML file, merged with defaults.

    Args:
        config_path: Path to the .cxgraph.toml file.

    Returns:
        Merged and validated configuration dict.
    """
    content = config_path.read_text(encoding="utf-8")
    data = tomlkit.parse(content).unwrap()
    config = _apply_env_overrides(merge_configs(DEFAULT_CONFIG, data))
    validate_config(config)
    return config


def get_config(config_path: Path | None = None, start: Path | None = None) -> dict[str, Any]:
    """Return configuration from an explicit file, a discovered one, or defaults."""
    if config_path is None:
        config_path = find_config_file(start or Path.cwd())
    if config_path is not None:
        logger.debug("Loading config from %s", config_path)
        return load_config(config_path)

    config = _apply_env_overrides(merge_configs(DEFAULT_CONFIG, {}))
    validate_config(config)
    return config


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "find_config_file",
    "merge_configs",
    "validate_config",
    "load_config",
    "get_config",
]
