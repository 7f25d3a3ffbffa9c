"""
Storage - named collections of items

Register groups of records (pages, posts, products) under singular and
plural names, then add, look up, sort and paginate them.

    from storage import Storage

    app = Storage()
    app.create("post")
    app.post("a.md", {"title": "A"})
    app.posts.get_item("a.md").data["title"]
"""

__version__ = "0.5.0"

from storage.core.entity import Collection, Item, ItemList, Pager
from storage.core.exceptions import StorageError
from storage.core.providers import BaseProvider, MemoryProvider
from storage.core.registries import CollectionAccessor, Storage

__all__ = [
    "__version__",
    "Storage",
    "CollectionAccessor",
    "Item",
    "ItemList",
    "Collection",
    "Pager",
    "BaseProvider",
    "MemoryProvider",
    "StorageError",
]
