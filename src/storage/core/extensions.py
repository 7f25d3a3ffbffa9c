"""Extension pipeline: ordered item and collection hooks.

Hooks run synchronously and may mutate what they receive in place.

Example:
    pipeline = ExtensionPipeline()

    @pipeline.use_item
    def add_slug(item, owner):
        item.data.setdefault("slug", item.key.rsplit(".", 1)[0])
"""
from __future__ import annotations

import logging
from typing import Any, List, Protocol

logger = logging.getLogger(__name__)


class ItemHook(Protocol):
    def __call__(self, item: Any, owner: Any) -> None:
        ...


class CollectionHook(Protocol):
    def __call__(self, collection: Any, registry: Any) -> None:
        ...


class ExtensionPipeline:
    def __init__(self) -> None:
        self.item_hooks: List[ItemHook] = []
        self.collection_hooks: List[CollectionHook] = []

    def use_item(self, hook: ItemHook) -> ItemHook:
        """Register a hook called as ``hook(item, owner)``."""
        self.item_hooks.append(hook)
        return hook

    def use_collection(self, hook: CollectionHook) -> CollectionHook:
        """Register a hook called as ``hook(collection, registry)``."""
        self.collection_hooks.append(hook)
        return hook

    def run_item(self, item: Any, owner: Any) -> Any:
        for hook in list(self.item_hooks):
            hook(item, owner)
        return item

    def run_collection(self, collection: Any, registry: Any) -> Any:
        logger.debug("decorating %r with %d hook(s)", collection, len(self.collection_hooks))
        for hook in list(self.collection_hooks):
            hook(collection, registry)
        return collection


__all__ = ["ItemHook", "CollectionHook", "ExtensionPipeline"]
