"""Dictionary merge helpers shared by configuration and option handling.

- ``deep_merge``: recursive merge used when layering YAML configuration.
- ``merge_arrays``: list override semantics ("+" prefix appends).
- ``defaults``: fill missing keys in place, the way collection options
  inherit from registry options.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, MutableMapping


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Example:
        >>> deep_merge({"list": {"pager": False}}, {"list": {"sort": {}}})
        {'list': {'pager': False, 'sort': {}}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        if key in result:
            if isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            elif isinstance(result[key], list) and isinstance(value, list):
                result[key] = merge_arrays(result[key], value)
            else:
                result[key] = value
        else:
            result[key] = value
    return result


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Merge arrays with override semantics.

    A first element of ``"+"`` appends the remaining items to ``base``;
    anything else replaces ``base``.

        >>> merge_arrays(["collection"], ["+", "renderable"])
        ['collection', 'renderable']
    """
    if not override:
        return base
    first = override[0]
    if isinstance(first, str) and first == "+":
        return [*base, *override[1:]]
    return list(override)


def defaults(target: MutableMapping[str, Any], *sources: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Copy keys from ``sources`` that ``target`` does not define yet."""
    for source in sources:
        for key, value in (source or {}).items():
            if key not in target:
                target[key] = value
    return target


__all__ = ["deep_merge", "merge_arrays", "defaults"]
