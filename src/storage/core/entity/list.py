"""Ordered, indexed item list.

``ItemList`` keeps two parallel sequences, ``keys`` and ``items``, that are
always the same length. Items are appended in insertion order; sorting and
pagination produce derived views that share the same ``Item`` instances.

Lookup order in ``get_index``:
    1. exact key, scanning ``keys`` from the front (first occurrence wins)
    2. fuzzy name/glob match, scanning ``items`` from the back (last wins)
"""
from __future__ import annotations

import logging
from typing import Any, Iterator, List, Mapping, Optional, Type

from storage.core.exceptions import DuplicateItemError, InvalidInputError
from storage.core.utils.pagination import Page
from storage.core.utils.pagination import paginate as paginate_items
from storage.core.utils.patterns import match_item
from storage.core.utils.sorting import Criterion
from storage.core.utils.sorting import sort_by as sort_items

from .base import Item, ItemKey, Pager
from .manager import BaseItemManager, _is_sequence

logger = logging.getLogger(__name__)


class ItemList(BaseItemManager[Item]):
    """Ordered list of items with a synchronized key index.

    Args:
        options: List options (``pager``, ``duplicates``, ``sort``,
            ``paginate``, ``max_queue_drain``). A sequence or another
            container passed here is treated as ``items``.
        items: Initial items: a sequence of item-like entries, another
            ``ItemList`` or a ``Collection``. Existing ``Item`` instances
            are shared, not copied.
    """

    entity_type = "list"

    def __init__(
        self,
        options: Any = None,
        *,
        items: Any = None,
        item_cls: Optional[Type[Item]] = None,
        config: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if items is None and (isinstance(options, BaseItemManager) or _is_sequence(options)):
            options, items = None, options
        super().__init__(options, item_cls=item_cls, config=config)
        self.keys: List[ItemKey] = []
        self.items: List[Item] = []
        if items is not None:
            self.add_list(items)

    # ---------- Commit ----------

    def set_item(self, key: Any, value: Any = None) -> Item:
        """Append an item to the list.

        Never drains the queue and never emits ``add_item``. With paging
        enabled the pager is linked against the current tail before the
        append. Emits ``load`` and ``<item key>`` afterwards.

        Raises:
            DuplicateItemError: If ``duplicates`` is ``reject`` and the key
                is already present (nothing is appended)
        """
        item = self.item(key, value)
        if self.options.get("duplicates") == "reject" and item.key in self.keys:
            raise DuplicateItemError(item.key, collection=self.name)

        if self.options.get("pager"):
            self.add_pager(item)

        self.keys.append(item.key)
        self.items.append(item)
        logger.debug("committed %r to %s at index %d", item.key, self.name, len(self.items) - 1)
        self._committed(item)
        return item

    def add_pager(self, item: Item) -> Item:
        """Link ``item`` to the current tail of the list."""
        prev = self.items[-1] if self.items else None
        item.pager = Pager(index=len(self.items), current=item, prev=prev)
        if prev is not None and prev.pager is not None:
            prev.pager.next = item
        return item

    # ---------- Lookup ----------

    def get_index(self, key: Any) -> int:
        """Return the index of ``key`` or ``-1``.

        Raises:
            InvalidInputError: If ``key`` is None
        """
        if key is None:
            raise InvalidInputError("expected a key to look up, got None", context={"collection": self.name})
        if isinstance(key, Item):
            key = key.key
        try:
            return self.keys.index(key)
        except ValueError:
            pass
        for idx in range(len(self.items) - 1, -1, -1):
            if match_item(key, self.items[idx]):
                return idx
        return -1

    def get_item(self, key: Any) -> Optional[Item]:
        idx = self.get_index(key)
        return self.items[idx] if idx != -1 else None

    def _exact(self, key: ItemKey) -> Optional[Item]:
        try:
            return self.items[self.keys.index(key)]
        except ValueError:
            return None

    def delete_item(self, key: Any) -> "ItemList":
        """Remove an item (by identity, exact key or fuzzy match) and its key."""
        idx = -1
        if isinstance(key, Item):
            idx = next((i for i, item in enumerate(self.items) if item is key), -1)
        if idx == -1:
            idx = self.get_index(key)
        if idx != -1:
            del self.items[idx]
            del self.keys[idx]
            logger.debug("deleted index %d from %s", idx, self.name)
        return self

    # ---------- Derived views ----------

    def sort_by(self, *criteria: Criterion, options: Optional[Mapping[str, Any]] = None) -> "ItemList":
        """Return a new list ordered by ``criteria``; this list is unchanged.

        The first criterion is primary and later criteria break ties.
        ``options`` merge over ``self.options["sort"]`` (``reverse``).
        """
        opts = dict(self.options.get("sort") or {})
        opts.update(options or {})
        derived = type(self)(dict(self.options), item_cls=self.item_cls)
        derived._adopt(sort_items(self.items, *criteria, options=opts))
        return derived

    def paginate(self, options: Optional[Mapping[str, Any]] = None) -> List[Page[Item]]:
        """Group a shallow copy of ``items`` into pages.

        ``options`` merge over ``self.options["paginate"]`` (``limit``).
        """
        opts = dict(self.options.get("paginate") or {})
        opts.update(options or {})
        return paginate_items(list(self.items), opts)

    def _adopt(self, items: List[Item]) -> None:
        # Shared items keep their pager and decoration; no events fire.
        for item in items:
            self.keys.append(item.key)
            self.items.append(item)

    # ---------- Container protocol ----------

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self.items))

    def __len__(self) -> int:
        return len(self.items)


__all__ = ["ItemList"]
