"""In-memory provider with ``find`` and ``delete``."""
from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Dict

from storage.core.exceptions import InvalidInputError
from storage.core.utils.futures import call_as_future
from storage.core.utils.patterns import match_name

from .base import BaseProvider, ProviderCollection


class MemoryCollection(ProviderCollection):
    def find(self, pattern: Any) -> "Future[Any]":
        """Resolve to ``{key: value}`` for every key matching ``pattern``.

        ``pattern`` may be an exact key or a glob (``"posts/*.md"``).
        """
        return call_as_future(self._find, pattern)

    def delete(self, key: str) -> "Future[Any]":
        """Resolve to the removed value (None if ``key`` was absent)."""
        return call_as_future(self.items.pop, key, None)

    def _find(self, pattern: Any) -> Dict[str, Any]:
        if not isinstance(pattern, str):
            raise InvalidInputError(f"expected pattern to be a string, got {type(pattern).__name__}")
        return {key: value for key, value in self.items.items() if match_name(str(key), pattern)}


class MemoryProvider(BaseProvider):
    collection_cls = MemoryCollection


__all__ = ["MemoryCollection", "MemoryProvider"]
