"""Named-collection registry.

- Storage: the registry
- CollectionAccessor: singular/plural accessor handles
- LookupMixin, ProviderRegistryMixin: registry capabilities
"""
from __future__ import annotations

from .accessors import CollectionAccessor
from .lookup import LookupMixin
from .providers import ProviderRegistryMixin
from .storage import Storage

__all__ = [
    "Storage",
    "CollectionAccessor",
    "LookupMixin",
    "ProviderRegistryMixin",
]
