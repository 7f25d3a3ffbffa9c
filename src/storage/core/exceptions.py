from __future__ import annotations

from typing import Any, Dict, Mapping


class StorageError(Exception):
    """Base exception for the storage package."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class NotFoundError(StorageError, LookupError):
    """Raised when a collection, item or provider does not exist."""


class CollectionNotFoundError(NotFoundError):
    """Raised when a collection name resolves through neither inflection."""

    def __init__(self, name: Any, *, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        ctx["collection"] = name
        super().__init__(f"cannot find collection: {name}", context=ctx)
        self.name = name


class ItemNotFoundError(NotFoundError):
    """Raised by strict item lookups (``collection[key]``)."""

    def __init__(self, key: Any, *, collection: str | None = None) -> None:
        ctx: Dict[str, Any] = {"key": key}
        if collection:
            ctx["collection"] = collection
        super().__init__(f"item '{key}' not found", context=ctx)
        self.key = key


class ProviderNotFoundError(NotFoundError):
    """Raised when no provider is registered under the requested name."""


class InvalidInputError(StorageError, TypeError):
    """Raised when a value of the wrong shape is passed to the engine."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        StorageError.__init__(self, message, context=context)
        TypeError.__init__(self, message)


class DuplicateItemError(StorageError, ValueError):
    """Raised when a list that rejects duplicates receives a known key."""

    def __init__(self, key: str, *, collection: str | None = None) -> None:
        ctx: Dict[str, Any] = {"key": key}
        if collection:
            ctx["collection"] = collection
        StorageError.__init__(self, f"item '{key}' already exists", context=ctx)
        ValueError.__init__(self, f"item '{key}' already exists")
        self.key = key


class ProviderNotImplementedError(StorageError, NotImplementedError):
    """Raised (through a future) when a provider operation has no implementation."""

    def __init__(self, operation: str) -> None:
        super().__init__(f".{operation} not implemented", context={"operation": operation})
        self.operation = operation


class ProviderError(StorageError, RuntimeError):
    """Generic failure reported by a storage provider."""

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        operation: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if provider:
            ctx["provider"] = provider
        if operation:
            ctx["operation"] = operation
        super().__init__(message, context=ctx)


class QueueOverflowError(StorageError, RuntimeError):
    """Raised when draining the add queue exceeds ``max_queue_drain``."""


class ConfigError(StorageError, ValueError):
    """Raised when configuration fails to load or validate."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        StorageError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "StorageError",
    "NotFoundError",
    "CollectionNotFoundError",
    "ItemNotFoundError",
    "ProviderNotFoundError",
    "InvalidInputError",
    "DuplicateItemError",
    "ProviderNotImplementedError",
    "ProviderError",
    "QueueOverflowError",
    "ConfigError",
]
