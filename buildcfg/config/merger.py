"""Deep merge logic for configuration files."""

from copy import deepcopy
from typing import Any

from buildcfg.config.exceptions import CyclicStructureError, InvalidInputKindError
from buildcfg.config.values import ValueKind, classify

# Config trees are small; anything deeper is treated as a cycle
MAX_MERGE_DEPTH = 100


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries. Override wins on conflicts.

    Nested dicts are merged key by key. Lists are never merged: the
    override's list replaces the base's list wholesale.

    Args:
        base: Base configuration
        override: Configuration to merge on top

    Returns:
        New merged dictionary. Neither input is mutated.

    Raises:
        InvalidInputKindError: If either argument is not a dict
        CyclicStructureError: If nesting exceeds MAX_MERGE_DEPTH

    Example:
        base = {"compilation": {"input": "./index.html", "sourcemap": True}}
        override = {"compilation": {"sourcemap": False}}
        result = {"compilation": {"input": "./index.html", "sourcemap": False}}
    """
    for name, arg in (("base", base), ("override", override)):
        if classify(arg) is not ValueKind.MAPPING:
            raise InvalidInputKindError(
                f"deep_merge expects mappings, got {type(arg).__name__} for '{name}'"
            )

    return _merge(base, override, depth=0)


def _merge(base: dict, override: dict, depth: int) -> dict:
    if depth > MAX_MERGE_DEPTH:
        raise CyclicStructureError(
            f"Merge exceeded depth {MAX_MERGE_DEPTH}; config contains a cycle"
        )

    result = base.copy()

    for key, value in override.items():
        current = classify(result[key]) if key in result else None
        incoming = classify(value)

        if incoming is ValueKind.MAPPING:
            if current is ValueKind.MAPPING:
                # Both are dicts - recurse
                result[key] = _merge(result[key], value, depth + 1)
            else:
                # Rebuild so the result never shares the override's dict
                result[key] = _merge({}, value, depth + 1)
        elif incoming is ValueKind.SEQUENCE:
            result[key] = deepcopy(value)
        else:
            result[key] = value

    return result


def merge_all(*configs: Any) -> dict:
    """
    Fold configs left to right with deep_merge. Later configs win.

    Usage:
        config = merge_all(defaults, user_config, plugin_fragment)
    """
    result: dict = {}
    for config in configs:
        result = deep_merge(result, config)
    return result
