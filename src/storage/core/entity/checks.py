"""Type checks for items and containers."""
from __future__ import annotations

from typing import Any

from .base import Item
from .collection import Collection
from .list import ItemList


def is_item(value: Any) -> bool:
    return isinstance(value, Item)


def is_list(value: Any) -> bool:
    return isinstance(value, ItemList)


def is_collection(value: Any) -> bool:
    """True for keyed collections; lists are not collections."""
    return isinstance(value, Collection)


__all__ = ["is_item", "is_list", "is_collection"]
