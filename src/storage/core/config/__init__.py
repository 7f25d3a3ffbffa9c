"""Storage configuration system.

Usage:
    from storage.core.config import ConfigManager
    from storage.core.config.domains import ListConfig

    config = ConfigManager("storage.yaml").load_config()
    pager = ListConfig(config).pager

    # Cached config access
    from storage.core.config import get_cached_config, clear_all_caches
    config = get_cached_config()
"""
from __future__ import annotations

from .manager import ConfigManager
from .cache import get_cached_config, clear_all_caches, is_cached
from .base import BaseDomainConfig
from .domains import ListConfig, RegistryConfig, LoggingConfig

__all__ = [
    "ConfigManager",
    "BaseDomainConfig",
    "get_cached_config",
    "clear_all_caches",
    "is_cached",
    "ListConfig",
    "RegistryConfig",
    "LoggingConfig",
]
