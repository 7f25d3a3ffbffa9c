"""Item and container types.

- Item, Pager: the stored records
- ItemList: ordered, indexed, sortable, pageable list
- Collection: keyed, provider-backed map
- BaseItemManager: shared base for both containers
"""
from __future__ import annotations

from .base import Item, ItemKey, Pager
from .manager import BaseItemManager
from .list import ItemList
from .collection import Collection
from .checks import is_item, is_list, is_collection
from .protocols import MISSING, Inflector, ProviderCollectionLike, ProviderLike

__all__ = [
    "Item",
    "ItemKey",
    "Pager",
    "BaseItemManager",
    "ItemList",
    "Collection",
    "is_item",
    "is_list",
    "is_collection",
    "MISSING",
    "Inflector",
    "ProviderCollectionLike",
    "ProviderLike",
]
