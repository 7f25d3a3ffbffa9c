"""Storage providers.

- BaseProvider / ProviderCollection: reference contract implementation
- MemoryProvider / MemoryCollection: adds glob ``find`` and ``delete``
"""
from __future__ import annotations

from .base import BaseProvider, ProviderCollection
from .memory import MemoryCollection, MemoryProvider

__all__ = ["BaseProvider", "ProviderCollection", "MemoryProvider", "MemoryCollection"]
