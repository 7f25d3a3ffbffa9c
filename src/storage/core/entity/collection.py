"""Keyed, provider-backed item collection."""
from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Any, Dict, Iterator, List, Mapping, Optional, Type

from storage.core.exceptions import InvalidInputError, ProviderNotImplementedError
from storage.core.utils.futures import call_as_future, failed
from storage.core.utils.patterns import match_item

from .base import Item, ItemKey
from .manager import BaseItemManager
from .protocols import MISSING, ProviderCollectionLike

logger = logging.getLogger(__name__)


class Collection(BaseItemManager[Item]):
    """Unordered map of ``key -> Item``.

    Besides the synchronous item surface shared with ``ItemList``, a
    collection exposes ``get``/``set``/``find``/``delete``, which return
    ``concurrent.futures.Future`` objects. When a provider is bound these
    calls go to the provider; otherwise ``get``/``set`` use the item map and
    ``find``/``delete`` fail with ``ProviderNotImplementedError``.

    Errors from the provider surface are always delivered on the future.
    """

    entity_type = "collection"

    def __init__(
        self,
        options: Optional[Mapping[str, Any]] = None,
        *,
        items: Any = None,
        item_cls: Optional[Type[Item]] = None,
        config: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(options, item_cls=item_cls, config=config)
        self.items: Dict[ItemKey, Item] = {}
        if items is not None:
            self.add_items(items)

    @property
    def keys(self) -> List[ItemKey]:
        return list(self.items)

    # ---------- Synchronous item surface ----------

    def set_item(self, key: Any, value: Any = None) -> Item:
        """Store an item, replacing any item with the same key."""
        item = self.item(key, value)
        self.items[item.key] = item
        logger.debug("committed %r to %s", item.key, self.name)
        self._committed(item)
        return item

    def _exact(self, key: ItemKey) -> Optional[Item]:
        return self.items.get(key)

    def get_item(self, key: Any) -> Optional[Item]:
        """Return the item for ``key`` (exact, then fuzzy), or None."""
        if key is None:
            raise InvalidInputError("expected a key to look up, got None", context={"collection": self.name})
        if isinstance(key, Item):
            key = key.key
        item = self.items.get(key) if isinstance(key, str) else None
        if item is not None:
            return item
        for candidate in reversed(list(self.items.values())):
            if match_item(key, candidate):
                return candidate
        return None

    def delete_item(self, key: Any) -> "Collection":
        item = key if isinstance(key, Item) else self.get_item(key)
        if item is not None and self.items.get(item.key) is item:
            del self.items[item.key]
            logger.debug("deleted %r from %s", item.key, self.name)
        return self

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self.items.values()))

    def __len__(self) -> int:
        return len(self.items)

    # ---------- Provider surface ----------

    def bind_provider(self, provider: ProviderCollectionLike) -> "Collection":
        """Route ``get``/``set``/``find``/``delete`` through ``provider``."""
        if not isinstance(provider, ProviderCollectionLike):
            raise InvalidInputError(
                f"expected a provider collection with get/set/find/delete, got {type(provider).__name__}",
                context={"collection": self.name},
            )
        self.provider = provider
        return self

    def get(self, key: str) -> "Future[Any]":
        if self.provider is not None:
            return call_as_future(self.provider.get, key)
        return call_as_future(self.items.get, key)

    def set(self, key: Any, value: Any = MISSING) -> "Future[Any]":
        """Write ``key`` (and optionally ``value``).

        Without a value, a mapping ``key`` sets each of its pairs and any
        other key is stored empty.
        """
        if self.provider is not None:
            return call_as_future(self.provider.set, key, value)
        return call_as_future(self._set_local, key, value)

    def find(self, pattern: Any) -> "Future[Any]":
        if self.provider is not None:
            return call_as_future(self.provider.find, pattern)
        return failed(ProviderNotImplementedError("find"))

    def delete(self, key: str) -> "Future[Any]":
        if self.provider is not None:
            return call_as_future(self.provider.delete, key)
        return failed(ProviderNotImplementedError("delete"))

    def _set_local(self, key: Any, value: Any) -> Any:
        if value is not MISSING:
            return self.set_item(key, value)
        if isinstance(key, Mapping):
            for k, v in key.items():
                self.set_item(k, v)
            return None
        return self.set_item(key)


__all__ = ["Collection"]
