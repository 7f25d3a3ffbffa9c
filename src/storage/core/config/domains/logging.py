"""Configuration for package logging (``logging`` section)."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Optional

from ..base import BaseDomainConfig


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def enabled(self) -> bool:
        return bool(self.section.get("enabled", False))

    @cached_property
    def level(self) -> str:
        return str(self.section.get("level") or "WARNING").upper()

    @cached_property
    def path(self) -> Optional[Path]:
        raw = self.section.get("path")
        return Path(raw).expanduser() if raw else None

    def apply(self) -> bool:
        """Configure the ``storage`` logger when logging is enabled."""
        if not self.enabled:
            return False
        from storage.core.utils.stdlib_logging import configure_logging

        configure_logging(level=self.level, log_path=self.path)
        return True
