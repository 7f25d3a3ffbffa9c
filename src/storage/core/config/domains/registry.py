"""Configuration for the registry (``storage`` section)."""
from __future__ import annotations

import posixpath
from functools import cached_property
from typing import Any, Callable, Dict, List, Optional

from ..base import BaseDomainConfig

RenameKey = Callable[[str], str]


def _basename(key: str) -> str:
    return posixpath.basename(key)


def _stem(key: str) -> str:
    return posixpath.splitext(posixpath.basename(key))[0]


def _identity(key: str) -> str:
    return key


RENAME_STRATEGIES: Dict[str, RenameKey] = {
    "basename": _basename,
    "stem": _stem,
    "none": _identity,
}


class RegistryConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "storage"

    @cached_property
    def kind(self) -> str:
        kind = str(self.section.get("kind", "list")).lower()
        return kind if kind in ("list", "collection") else "list"

    @cached_property
    def rename_key(self) -> RenameKey:
        name = str(self.section.get("rename_key", "basename")).lower()
        return RENAME_STRATEGIES.get(name, _basename)

    @cached_property
    def provider(self) -> Optional[str]:
        value = self.section.get("provider")
        return str(value) if value else None

    @cached_property
    def types(self) -> List[str]:
        return [str(t) for t in (self.section.get("types") or ["collection"])]

    def defaults(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "rename_key": self.rename_key,
            "provider": self.provider,
            "types": list(self.types),
        }
