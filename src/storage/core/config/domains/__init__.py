"""Domain-specific configuration accessors.

- ListConfig: list engine defaults (paging, duplicates, queue bound)
- RegistryConfig: registry defaults (kind, rename strategy, provider)
- LoggingConfig: package logging

Usage:
    from storage.core.config.domains import ListConfig

    pager = ListConfig().pager
"""
from __future__ import annotations

from .list import ListConfig, DUPLICATE_POLICIES
from .registry import RegistryConfig, RENAME_STRATEGIES
from .logging import LoggingConfig

__all__ = [
    "ListConfig",
    "RegistryConfig",
    "LoggingConfig",
    "DUPLICATE_POLICIES",
    "RENAME_STRATEGIES",
]
