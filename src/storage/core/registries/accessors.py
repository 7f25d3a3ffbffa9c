"""Per-collection accessor handles.

``Storage.create("post")`` synthesizes two handles that front the same
collection:

    app.post("a.md", {...})       # singular: add_item, returns the Item
    app.posts({"b.md": {...}})    # plural: add_items, returns the collection
    app.posts.get_item("a.md")    # both delegate everything else
"""
from __future__ import annotations

from typing import Any, Iterator


class CollectionAccessor:
    """Callable handle that adds items and delegates to its collection."""

    def __init__(self, collection: Any, *, many: bool = False) -> None:
        self._collection = collection
        self.many = many

    @property
    def collection(self) -> Any:
        return self._collection

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        if self.many:
            return self._collection.add_items(*args, **kwargs)
        return self._collection.add_item(*args, **kwargs)

    def __getattr__(self, name: str) -> Any:
        collection = self.__dict__.get("_collection")
        if collection is None:
            raise AttributeError(name)
        return getattr(collection, name)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._collection)

    def __len__(self) -> int:
        return len(self._collection)

    def __contains__(self, key: object) -> bool:
        return key in self._collection

    def __getitem__(self, key: str) -> Any:
        return self._collection[key]

    def __repr__(self) -> str:
        kind = "plural" if self.many else "singular"
        return f"<CollectionAccessor {kind} {self._collection!r}>"


__all__ = ["CollectionAccessor"]
