"""Centralized configuration caching.

All domain configs load through ``get_cached_config`` so a process reads
the YAML layers once per distinct set of config files and environment.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from .manager import ENV_PREFIX, ConfigManager

_config_cache: Dict[str, Dict[str, Any]] = {}

PathLike = Union[str, Path]


def _normalize_paths(config_path: Optional[Union[PathLike, Sequence[PathLike]]]) -> list[Path]:
    if config_path is None:
        return []
    if isinstance(config_path, (str, Path)):
        return [Path(config_path).expanduser().resolve()]
    return [Path(p).expanduser().resolve() for p in config_path]


def _cache_key(paths: list[Path], validate: bool = True) -> str:
    # Include env overrides and file mtimes so cache hits never return stale config.
    env_items = sorted((k, os.environ.get(k, "")) for k in os.environ if k.startswith(ENV_PREFIX))
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    files = []
    for p in paths:
        try:
            st = p.stat()
            files.append((str(p), int(st.st_mtime_ns), int(st.st_size)))
        except OSError:
            files.append((str(p), 0, 0))
    cfg_fp = hashlib.sha256(repr(files).encode("utf-8")).hexdigest()[:12]
    return f"env={env_fp}:cfg={cfg_fp}:validate={int(validate)}"


def get_cached_config(
    config_path: Optional[Union[PathLike, Sequence[PathLike]]] = None,
    validate: bool = True,
) -> Dict[str, Any]:
    """Get configuration with caching.

    Returns the same dict instance for the same inputs; treat it as
    immutable.
    """
    paths = _normalize_paths(config_path)
    key = _cache_key(paths, validate)
    if key not in _config_cache:
        _config_cache[key] = ConfigManager(paths).load_config(validate=validate)
    return _config_cache[key]


def clear_all_caches() -> None:
    """Clear the configuration cache and the bundled data read cache."""
    from storage.data import clear_caches

    _config_cache.clear()
    clear_caches()


def is_cached(config_path: Optional[Union[PathLike, Sequence[PathLike]]] = None) -> bool:
    return _cache_key(_normalize_paths(config_path)) in _config_cache


__all__ = ["get_cached_config", "clear_all_caches", "is_cached"]
