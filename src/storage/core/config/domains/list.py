"""Configuration for list engine defaults (``list`` section)."""
from __future__ import annotations

from functools import cached_property
from typing import Any, Dict

from ..base import BaseDomainConfig

DUPLICATE_POLICIES = ("append", "reject")


class ListConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "list"

    @cached_property
    def pager(self) -> bool:
        return bool(self.section.get("pager", False))

    @cached_property
    def duplicates(self) -> str:
        policy = str(self.section.get("duplicates", "append")).lower()
        return policy if policy in DUPLICATE_POLICIES else "append"

    @cached_property
    def max_queue_drain(self) -> int:
        return int(self.section.get("max_queue_drain", 1000) or 1000)

    @cached_property
    def sort(self) -> Dict[str, Any]:
        return dict(self.section.get("sort") or {})

    @cached_property
    def paginate(self) -> Dict[str, Any]:
        return dict(self.section.get("paginate") or {})

    def defaults(self) -> Dict[str, Any]:
        """Option defaults applied to every new list or collection."""
        return {
            "pager": self.pager,
            "duplicates": self.duplicates,
            "max_queue_drain": self.max_queue_drain,
            "sort": self.sort,
            "paginate": self.paginate,
        }
