"""Base class for domain-specific configuration accessors.

Provides a standardized pattern for all domain configs with:
- Centralized caching via cache.py
- Type-safe section access
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from .cache import get_cached_config


class BaseDomainConfig(ABC):
    """Abstract base class for domain-specific configuration accessors.

    Usage:
        class MyConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "mySection"

            @cached_property
            def my_setting(self) -> str:
                return self.section.get("my_setting", "default")

        cfg = MyConfig(config_path="storage.yaml")
        print(cfg.my_setting)
    """

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        *,
        config_path: Optional[Union[str, Path, Sequence[Union[str, Path]]]] = None,
    ) -> None:
        """Initialize domain config.

        Args:
            config: Already-loaded configuration. Loaded via the cache if None.
            config_path: YAML overlay file(s) used when ``config`` is None.
        """
        if config is None:
            config = get_cached_config(config_path)
        self._config = config

    @abstractmethod
    def _config_section(self) -> str:
        """Return the top-level config key for this domain."""
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        """Get this domain's configuration section (empty dict if missing)."""
        return dict(self._config.get(self._config_section(), {}) or {})


__all__ = ["BaseDomainConfig"]
