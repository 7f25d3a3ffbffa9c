"""Protocols for the collaborators the engine calls through.

- ProviderCollectionLike: a provider-backed store for one collection
- ProviderLike: a provider hosting many named collections
- Inflector: singular/plural name resolution
"""
from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Mapping, Optional, Protocol, runtime_checkable


class _Missing:
    """Sentinel for omitted optional arguments."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@runtime_checkable
class ProviderCollectionLike(Protocol):
    """Protocol for a provider-backed store.

    Every operation returns a future; failures are set on the future.
    ``set`` may be called without a value.
    """

    def get(self, key: str) -> "Future[Any]":
        ...

    def set(self, key: Any, value: Any = MISSING) -> "Future[Any]":
        ...

    def find(self, pattern: Any) -> "Future[Any]":
        ...

    def delete(self, key: str) -> "Future[Any]":
        ...


@runtime_checkable
class ProviderLike(Protocol):
    """Protocol for a provider that hosts named collections."""

    def create(self, name: str, options: Optional[Mapping[str, Any]] = None) -> ProviderCollectionLike:
        ...

    def get_collection(self, name: str) -> Optional[ProviderCollectionLike]:
        ...


@runtime_checkable
class Inflector(Protocol):
    """Protocol for collection name inflection (deterministic, idempotent)."""

    def single(self, name: str) -> str:
        ...

    def plural(self, name: str) -> str:
        ...


__all__ = [
    "MISSING",
    "ProviderCollectionLike",
    "ProviderLike",
    "Inflector",
]
