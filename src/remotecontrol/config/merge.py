"""Deep merge for configuration cascading (system -> user -> explicit -> env)."""

from __future__ import annotations

from typing import Any


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    - Nested dicts are merged recursively
    - Lists and scalars from ``override`` replace the base value
    - None in ``override`` leaves the base value alone

    Returns:
        A new dictionary; neither input is modified.
    """
    result = dict(base)

    for key, value in override.items():
        if value is None:
            continue
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value

    return result


def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
    """Merge config dicts in order, later ones winning."""
    result: dict[str, Any] = {}
    for config in configs:
        if config:
            result = deep_merge(result, config)
    return result
