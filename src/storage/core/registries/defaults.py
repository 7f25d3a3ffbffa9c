"""Hooks every ``Storage`` registers before any user hook."""
from __future__ import annotations

import logging
from typing import Any

from storage.core.entity import Collection

logger = logging.getLogger(__name__)


def attach_collection(collection: Any, registry: Any) -> None:
    """Attach ``collection`` to ``registry`` and bind its named provider.

    Once attached, committed items bubble to the registry as ``item`` and
    singular-name events, and ``extend_item`` runs the registry's item hooks.
    """
    collection.registry = registry

    name = collection.options.get("provider")
    if not name or not isinstance(collection, Collection):
        return

    provider = registry.require_provider(name)
    plural = collection.options.get("plural") or collection.name
    store = provider.get_collection(plural) or provider.create(plural, collection.options)
    collection.bind_provider(store)
    logger.debug("bound %s to provider %r", plural, name)


def stamp_provider(item: Any, owner: Any) -> None:
    """Record the owning collection's provider name on ``item``."""
    if owner is None:
        return
    item.provider = owner.options.get("provider") or item.provider


__all__ = ["attach_collection", "stamp_provider"]
