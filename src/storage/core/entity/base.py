"""Base item types.

This module provides the record types stored by lists and collections:
- ItemKey: Type alias for item identifiers
- Pager: Insertion-order neighbour links for paged lists
- Item: A keyed record with a data map and an opaque payload
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from storage.core.exceptions import InvalidInputError


# Type alias for item identifiers
ItemKey = str

# Mapping keys that populate Item fields instead of `data`.
PAYLOAD_KEYS = ("payload", "content", "contents")
FIELD_KEYS = ("key", "path", "data", *PAYLOAD_KEYS)


@dataclass(eq=False)
class Pager:
    """Paging links recorded when an item is appended to a paged list.

    Attributes:
        index: Position of the item at insertion time
        current: The item itself
        prev: Item that was at the tail when this one was added
        next: Item added right after this one (set retroactively)
    """
    index: int
    current: Optional["Item"] = field(default=None, repr=False)
    prev: Optional["Item"] = field(default=None, repr=False)
    next: Optional["Item"] = field(default=None, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "current": self.current.key if self.current else None,
            "prev": self.prev.key if self.prev else None,
            "next": self.next.key if self.next else None,
        }


@dataclass(eq=False)
class Item:
    """A single keyed record.

    Items compare by identity: two items with equal fields are still
    different records.

    Attributes:
        key: Item identifier within its list or collection
        data: Arbitrary metadata, freely mutable by decorators
        payload: Opaque content (bytes or str)
        path: Path-like name used when loading from sequences (defaults to key)
        pager: Paging links, only set by lists with paging enabled
        provider: Name of the provider bound by the owning collection
    """
    key: ItemKey = ""
    data: Dict[str, Any] = field(default_factory=dict)
    payload: Any = None
    path: str = ""
    pager: Optional[Pager] = None
    provider: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.path:
            self.path = self.key

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.key!r}>"

    @property
    def content(self) -> Any:
        """Alias for ``payload``."""
        return self.payload

    @classmethod
    def from_value(cls, key: ItemKey, value: Any = None) -> "Item":
        """Build an item for ``key`` from a raw value.

        - ``None`` creates an empty item.
        - ``str``/``bytes`` become the payload.
        - A mapping fills ``data``/``payload``/``path``; every other key is
          merged into ``data`` (explicit ``data`` entries win).

        Raises:
            InvalidInputError: If ``value`` has an unsupported type
        """
        if value is None:
            return cls(key=key)
        if isinstance(value, (str, bytes, bytearray)):
            return cls(key=key, payload=value)
        if not isinstance(value, Mapping):
            raise InvalidInputError(
                f"expected item value to be a mapping, str or bytes, got {type(value).__name__}",
                context={"key": key},
            )

        data: Dict[str, Any] = {k: v for k, v in value.items() if k not in FIELD_KEYS}
        explicit = value.get("data")
        if explicit is not None:
            if not isinstance(explicit, Mapping):
                raise InvalidInputError("expected item data to be a mapping", context={"key": key})
            data.update(explicit)

        payload = None
        for name in PAYLOAD_KEYS:
            if name in value:
                payload = value[name]
                break

        return cls(key=key, data=data, payload=payload, path=str(value.get("path") or key))

    @classmethod
    def from_mapping(cls, value: Mapping[str, Any]) -> "Item":
        """Build an item from a mapping that carries its own ``key`` or ``path``."""
        key = value.get("key") or value.get("path")
        if not isinstance(key, str) or not key:
            raise InvalidInputError("expected item mapping to define a 'key' or 'path'")
        return cls.from_value(key, {k: v for k, v in value.items() if k != "key"})

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "key": self.key,
            "path": self.path,
            "data": dict(self.data),
            "payload": self.payload,
        }
        if self.pager is not None:
            result["pager"] = self.pager.to_dict()
        if self.provider:
            result["provider"] = self.provider
        return result


__all__ = [
    "ItemKey",
    "Pager",
    "Item",
]
