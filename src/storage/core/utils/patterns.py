"""Fuzzy key matching for item lookups.

An item matches a lookup key when the key equals one of its names (key,
path, basename, or stem), or when the key is a glob pattern matching the
item's key or path.

Example:
    from storage.core.utils.patterns import match_item

    match_item("a", item)          # item.key == "posts/a.md"
    match_item("posts/*.md", item)
"""
from __future__ import annotations

import fnmatch
from pathlib import PurePosixPath
from typing import Any, Iterator

_GLOB_CHARS = set("*?[{")


def is_glob(value: str) -> bool:
    """Return True if ``value`` contains glob syntax."""
    return any(ch in _GLOB_CHARS for ch in value)


def item_names(item: Any) -> Iterator[str]:
    """Yield the names an item can be addressed by."""
    seen = set()
    for raw in (getattr(item, "key", None), getattr(item, "path", None)):
        if not raw:
            continue
        posix = PurePosixPath(str(raw))
        for name in (str(raw), str(posix), posix.name, posix.stem):
            if name and name not in seen:
                seen.add(name)
                yield name


def match_item(key: str, item: Any) -> bool:
    """Return True if ``key`` addresses ``item`` by name or glob."""
    if not isinstance(key, str) or not key:
        return False

    key_posix = str(PurePosixPath(key))
    names = list(item_names(item))
    if key in names or key_posix in names:
        return True

    if not is_glob(key):
        return False

    for pat in _expand_braces(key_posix):
        for name in names:
            if fnmatch.fnmatchcase(name, pat):
                return True
    return False


def match_name(name: str, pattern: str) -> bool:
    """Return True if ``name`` equals ``pattern`` or matches it as a glob."""
    if name == pattern:
        return True
    if not is_glob(pattern):
        return False
    return any(fnmatch.fnmatchcase(name, pat) for pat in _expand_braces(pattern))


def _expand_braces(pattern: str) -> list[str]:
    """Expand brace groups like 'a.{md,txt}' into ['a.md', 'a.txt'].

    Supports multiple groups via recursion; patterns without a comma
    inside the braces are returned unchanged.
    """
    start = pattern.find("{")
    if start == -1:
        return [pattern]
    end = pattern.find("}", start + 1)
    if end == -1:
        return [pattern]

    parts = [p.strip() for p in pattern[start + 1 : end].split(",") if p.strip()]
    if len(parts) <= 1:
        return [pattern]

    before, after = pattern[:start], pattern[end + 1 :]
    expanded: list[str] = []
    for part in parts:
        expanded.extend(_expand_braces(f"{before}{part}{after}"))
    return expanded


__all__ = ["is_glob", "item_names", "match_item", "match_name"]
