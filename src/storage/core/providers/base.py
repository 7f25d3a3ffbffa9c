"""Reference provider: named in-memory stores with future-returning operations.

Providers host one store per collection name. ``Collection.bind_provider``
routes a collection's ``get``/``set``/``find``/``delete`` to its store.

Example:
    provider = BaseProvider()
    files = provider.create("files")
    files.set("foo", "bar").result()
    files.get("foo").result()   # "bar"
"""
from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Any, Dict, Mapping, Optional, Type

from storage.core.entity.protocols import MISSING
from storage.core.exceptions import CollectionNotFoundError, ProviderNotImplementedError
from storage.core.utils.futures import call_as_future, failed

logger = logging.getLogger(__name__)


class ProviderCollection:
    """Key-value store for one collection.

    ``find`` and ``delete`` are not implemented here; subclasses override them.
    """

    def __init__(self, name: str, options: Optional[Mapping[str, Any]] = None) -> None:
        self.name = name
        self.options = dict(options or {})
        self.items: Dict[str, Any] = {}

    def get(self, key: str) -> "Future[Any]":
        return call_as_future(self.items.get, key)

    def set(self, key: Any, value: Any = MISSING) -> "Future[Any]":
        return call_as_future(self._set, key, value)

    def find(self, pattern: Any) -> "Future[Any]":
        return failed(ProviderNotImplementedError("find"))

    def delete(self, key: str) -> "Future[Any]":
        return failed(ProviderNotImplementedError("delete"))

    def _set(self, key: Any, value: Any) -> None:
        if value is not MISSING:
            self.items[key] = value
        elif isinstance(key, Mapping):
            self.items.update(key)
        else:
            self.items[key] = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


class BaseProvider:
    """Provider hosting named ``ProviderCollection`` stores.

    Every per-name operation fails its future with
    ``CollectionNotFoundError`` when ``name`` has not been created.
    """

    collection_cls: Type[ProviderCollection] = ProviderCollection

    def __init__(self, options: Optional[Mapping[str, Any]] = None) -> None:
        self.options = dict(options or {})
        self.settings: Dict[str, Any] = dict(self.options.get("settings") or {})
        self.collections: Dict[str, ProviderCollection] = {}

    def create(self, name: str, options: Optional[Mapping[str, Any]] = None) -> ProviderCollection:
        opts = dict(options or {})
        cls = opts.get("provider_collection_class") or self.options.get("collection_class") or self.collection_cls
        collection = cls(name, opts)
        self.collections[name] = collection
        logger.debug("created provider collection %r", name)
        return collection

    def get_collection(self, name: str) -> Optional[ProviderCollection]:
        return self.collections.get(name)

    def get(self, name: str, key: str) -> "Future[Any]":
        return self._call(name, "get", key)

    def set(self, name: str, key: Any, value: Any = MISSING) -> "Future[Any]":
        return self._call(name, "set", key, value)

    def find(self, name: str, pattern: Any) -> "Future[Any]":
        return self._call(name, "find", pattern)

    def delete(self, name: str, key: str) -> "Future[Any]":
        return self._call(name, "delete", key)

    def _call(self, name: str, operation: str, *args: Any) -> "Future[Any]":
        collection = self.get_collection(name)
        if collection is None:
            return failed(CollectionNotFoundError(name, context={"operation": operation}))
        return call_as_future(getattr(collection, operation), *args)


__all__ = ["ProviderCollection", "BaseProvider"]
