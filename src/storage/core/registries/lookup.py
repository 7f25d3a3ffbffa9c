"""Collection and item lookup across a registry."""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from storage.core.config.domains import RENAME_STRATEGIES
from storage.core.entity import BaseItemManager, Item
from storage.core.exceptions import CollectionNotFoundError, InvalidInputError

from .accessors import CollectionAccessor

logger = logging.getLogger(__name__)

RenameKey = Callable[[str], str]


class LookupMixin:
    """Lookup methods for ``Storage``.

    Expects ``collections``, ``inflections`` and ``options`` on the host.
    """

    collections: dict
    inflections: dict
    options: dict

    def get_collection(self, name: Any) -> BaseItemManager:
        """Resolve a collection by plural or singular name.

        Containers and accessors are returned as their collection.

        Raises:
            CollectionNotFoundError: If neither spelling is registered
        """
        if isinstance(name, BaseItemManager):
            return name
        if isinstance(name, CollectionAccessor):
            return name.collection
        if not isinstance(name, str):
            raise InvalidInputError(
                f"expected collection name to be a string, got {type(name).__name__}"
            )
        if name in self.collections:
            return self.collections[name]
        plural = self.inflections.get(name)
        if plural is not None and plural in self.collections:
            return self.collections[plural]
        raise CollectionNotFoundError(name)

    def get_item(self, collection: Any, key: Any, rename: Optional[RenameKey] = None) -> Optional[Item]:
        """Get item ``key`` from ``collection`` by exact key.

        On a miss, retries with ``rename(key)`` and then with the registry's
        ``rename_key`` function. Returns None when nothing matches.

        Raises:
            CollectionNotFoundError: If ``collection`` is unknown
        """
        items = self.get_collection(collection)
        if isinstance(key, Item):
            key = key.key
        if not isinstance(key, str):
            return None
        if key in items:
            return items[key]

        for fn in (rename, self.rename_key()):
            if fn is None:
                continue
            name = fn(key)
            if name and name != key and name in items:
                return items[name]
        return None

    def find(self, name: str, collection: Any = None) -> Optional[Item]:
        """Find an item by ``name``, optionally within one collection.

        Without a collection every registered collection is scanned in
        registration order: exact key, renamed key, then the collection's
        fuzzy lookup.

        Raises:
            InvalidInputError: If ``name`` is not a string
            CollectionNotFoundError: If ``collection`` is unknown
        """
        if not isinstance(name, str):
            raise InvalidInputError(f"expected name to be a string, got {type(name).__name__}")

        if collection is not None:
            return self.get_collection(collection).get_item(name)

        for items in list(self.collections.values()):
            item = self.get_item(items, name)
            if item is None:
                item = items.get_item(name)
            if item is not None:
                return item
        return None

    def rename_key(self) -> Optional[RenameKey]:
        """Return the default rename function (``options["rename_key"]``)."""
        value = self.options.get("rename_key")
        if value is None or callable(value):
            return value
        if isinstance(value, str) and value in RENAME_STRATEGIES:
            return RENAME_STRATEGIES[value]
        raise InvalidInputError(
            f"expected rename_key to be callable or one of {sorted(RENAME_STRATEGIES)}, got {value!r}"
        )


__all__ = ["LookupMixin", "RenameKey"]
