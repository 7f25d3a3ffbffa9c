"""Base item manager - foundation for lists and collections.

This module provides the abstract base class that both the ordered list
engine and the keyed collection extend. It owns the concerns they share:
options, the event dispatcher, the extension pipeline, the item factory,
and the ``add_item`` commit routine with its queue.

Architecture:
    BaseItemManager (this module)
    ├── ItemList - ordered, indexed, sortable, pageable
    └── Collection - keyed map, provider-backed get/set/find/delete
"""
from __future__ import annotations

import logging
import warnings
from abc import ABC, abstractmethod
from collections import deque
from typing import (
    Any,
    Callable,
    Deque,
    Dict,
    Generic,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)

from storage.core.config.domains import ListConfig
from storage.core.events import (
    Event,
    EventDispatcher,
    ItemAdded,
    ItemLoaded,
    ItemsAdded,
    ListAdded,
    OptionChanged,
)
from storage.core.exceptions import InvalidInputError, ItemNotFoundError, QueueOverflowError
from storage.core.extensions import ExtensionPipeline
from storage.core.utils.merge import defaults

from .base import Item, ItemKey
from .protocols import MISSING

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Item)

ItemTransform = Callable[[Any], Any]


class BaseItemManager(Generic[T], ABC):
    """Abstract base class for item containers.

    Provides the item factory, option access, events, item decoration and
    the queue-draining ``add_item`` routine. Subclasses decide how committed
    items are stored.

    Type Parameters:
        T: The item type this manager holds

    Attributes:
        options: Configuration bag (``pager``, ``duplicates``, ``sort``, ...)
        events: Dispatcher for this container's lifecycle events
        extensions: Item/collection hooks owned by this container
        registry: Owning registry, set when a registry decorates the container
        provider: Bound provider-side collection (collections only)
        queue: Entries to commit as a side effect of the current ``add_item``
        loaded: Re-entrancy guard; an ``add_items``/``add_list`` listener sets
            it to signal that it loaded the items itself
    """

    # Item type identifier used in log and error messages
    entity_type: str = "collection"

    def __init__(
        self,
        options: Optional[Mapping[str, Any]] = None,
        *,
        item_cls: Optional[Type[T]] = None,
        config: Optional[Mapping[str, Any]] = None,
    ) -> None:
        opts: Dict[str, Any] = dict(options or {})
        defaults(opts, ListConfig(config).defaults())
        self.options = opts

        cls = item_cls or opts.get("item_class") or Item
        if not (isinstance(cls, type) and issubclass(cls, Item)):
            raise InvalidInputError(
                f"expected item_class to be a subclass of Item, got {cls!r}",
                context={"item_class": repr(cls)},
            )
        self.item_cls: Type[T] = cls

        self.events = EventDispatcher()
        self.extensions = ExtensionPipeline()
        self.registry: Any = None
        self.provider: Any = None
        self.queue: Deque[Tuple[Any, Any]] = deque()
        self.loaded = False
        self._aliases: Dict[str, Any] = {}

    # ---------- Names and options ----------

    @property
    def name(self) -> str:
        return str(self.options.get("plural") or self.options.get("name") or self.entity_type)

    def option(self, key: str, value: Any = MISSING) -> Any:
        """Get option ``key``, or set it when ``value`` is given."""
        if value is MISSING:
            return self.options.get(key)
        self.options[key] = value
        self.emit(OptionChanged(source=self, key=key, value=value))
        return self

    def collection_types(self) -> List[str]:
        """Type tags this container is grouped under in a registry."""
        types = self.options.get("types") or ["collection"]
        if isinstance(types, str):
            types = [types]
        return [str(t) for t in types]

    # ---------- Events ----------

    def on(self, name: str, handler: Optional[Callable[[Any], None]] = None) -> Any:
        return self.events.on(name, handler)

    def off(self, name: str, handler: Optional[Callable[[Any], None]] = None) -> None:
        self.events.off(name, handler)

    def emit(self, event: Event, name: Optional[str] = None) -> Event:
        return self.events.emit(event, name)

    def _committed(self, item: T) -> None:
        """Emit the post-commit events for ``item``."""
        event = ItemLoaded(source=self, item=item)
        self.emit(event)
        self.emit(event, name=item.key)
        if self.registry is not None:
            self.registry.item_committed(self, event)

    # ---------- Aliases ----------

    def alias(self, name: str, target: Any) -> None:
        """Expose ``target`` as attribute ``name`` (registry accessors)."""
        self._aliases[name] = target

    def __getattr__(self, name: str) -> Any:
        aliases = self.__dict__.get("_aliases")
        if aliases and name in aliases:
            return aliases[name]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    # ---------- Item factory ----------

    def item(self, key: Any, value: Any = None) -> T:
        """Build or accept an item for ``key``/``value``.

        Existing ``Item`` instances are reused, never copied.

        Raises:
            InvalidInputError: If no usable key can be determined
        """
        if isinstance(key, Item):
            return key  # type: ignore[return-value]
        if isinstance(value, Item):
            if not value.key and isinstance(key, str):
                value.key = key
            return value  # type: ignore[return-value]
        if isinstance(key, Mapping) and value is None:
            return self.item_cls.from_mapping(key)  # type: ignore[return-value]
        if not isinstance(key, str) or not key:
            raise InvalidInputError(
                f"expected item key to be a non-empty string, got {key!r}",
                context={"collection": self.name},
            )
        return self.item_cls.from_value(key, value)  # type: ignore[return-value]

    # ---------- Storage interface ----------

    @abstractmethod
    def set_item(self, key: Any, value: Any = None) -> T:
        """Commit an item without draining the queue or emitting ``add_item``."""
        pass

    @abstractmethod
    def get_item(self, key: Any) -> Optional[T]:
        """Return the item for ``key`` (exact, then fuzzy), or None."""
        pass

    @abstractmethod
    def delete_item(self, key: Any) -> "BaseItemManager[T]":
        """Remove the item for ``key``; no-op if missing."""
        pass

    @abstractmethod
    def _exact(self, key: ItemKey) -> Optional[T]:
        """Return the item stored under exactly ``key``, or None."""
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[T]:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    def __contains__(self, key: object) -> bool:
        if isinstance(key, Item):
            key = key.key
        if not isinstance(key, str):
            return False
        return self._exact(key) is not None

    def __getitem__(self, key: ItemKey) -> T:
        item = self._exact(key) if isinstance(key, str) else None
        if item is None:
            raise ItemNotFoundError(key, collection=self.name)
        return item

    def has_item(self, key: Any) -> bool:
        return self.get_item(key) is not None

    def get_or_raise(self, key: Any) -> T:
        """Get an item, raising ItemNotFoundError on a miss."""
        item = self.get_item(key)
        if item is None:
            raise ItemNotFoundError(key, collection=self.name)
        return item

    def get_view(self, key: Any) -> Optional[T]:
        """Alias for ``get_item``."""
        return self.get_item(key)

    def remove_item(self, key: Any) -> "BaseItemManager[T]":
        """Deprecated alias for ``delete_item``."""
        warnings.warn(
            "remove_item() is deprecated, use delete_item()",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.delete_item(key)

    # ---------- Adding items ----------

    def enqueue(self, key: Any, value: Any = None) -> None:
        """Schedule an entry to be committed by the running ``add_item``."""
        self.queue.append((key, value))

    def add_item(self, key: Any, value: Any = None) -> T:
        """Add an item, commit queued side-effect items, then decorate it.

        Emits ``add_item`` with the raw arguments before committing. Only
        the item passed in is decorated; queued items are committed with
        ``set_item`` alone, including entries enqueued by item hooks.

        Raises:
            QueueOverflowError: If more than ``max_queue_drain`` queued
                entries are committed by one call
        """
        self.emit(ItemAdded(source=self, args=(key, value)))
        item = self.set_item(key, value)
        drained = self._drain_queue()
        self.extend_item(item)
        self._drain_queue(drained)
        return item

    def _drain_queue(self, drained: int = 0) -> int:
        """Commit queued entries; return the running count for this call."""
        limit = int(self.options.get("max_queue_drain") or 1000)
        while self.queue:
            if drained >= limit:
                pending = len(self.queue)
                self.queue.clear()
                raise QueueOverflowError(
                    f"queue for '{self.name}' exceeded {limit} entries",
                    context={"collection": self.name, "limit": limit, "pending": pending},
                )
            key, value = self.queue.popleft()
            self.set_item(key, value)
            drained += 1
        return drained

    def add_items(self, items: Any) -> "BaseItemManager[T]":
        """Load a mapping of ``key -> value`` (sequences go to ``add_list``).

        Returns:
            self, for chaining
        """
        if _is_sequence(items) or isinstance(items, BaseItemManager):
            return self.add_list(items)
        if not isinstance(items, Mapping):
            raise InvalidInputError(
                f"expected items to be a mapping or a list, got {type(items).__name__}",
                context={"collection": self.name},
            )

        self.emit(ItemsAdded(source=self, items=items))
        if self.loaded:
            self.loaded = False
            return self

        for key, value in list(items.items()):
            self.add_item(key, value)
        return self

    def add_list(self, items: Any, fn: Optional[ItemTransform] = None) -> "BaseItemManager[T]":
        """Load a sequence of items (or another container) in order.

        Each entry is passed through ``fn`` (a ``None`` return keeps the
        entry), then added under its ``path`` (falling back to ``key``).
        The whole input is validated before anything is added.

        Raises:
            InvalidInputError: If ``items`` is not a sequence of item-like entries
        """
        self.emit(ListAdded(source=self, items=items))
        if self.loaded:
            self.loaded = False
            return self

        if isinstance(items, BaseItemManager):
            items = list(items)
        if not _is_sequence(items):
            raise InvalidInputError(
                f"expected list to be a sequence, got {type(items).__name__}",
                context={"collection": self.name},
            )

        transform = fn if callable(fn) else _identity
        entries: List[Tuple[str, Any]] = []
        for entry in items:
            result = transform(entry)
            if result is not None:
                entry = result
            entries.append((_entry_key(entry, self.name), entry))

        for key, entry in entries:
            self.add_item(key, entry)
        return self

    # ---------- Decoration ----------

    def extend_item(self, item: T) -> "BaseItemManager[T]":
        """Run the item hooks of this container, then of its registry."""
        self.extensions.run_item(item, self)
        if self.registry is not None:
            self.registry.extend_item(item, self)
        return self

    def use(self, hook: Callable[[Any, Any], None]) -> Callable[[Any, Any], None]:
        """Register an item hook on this container."""
        return self.extensions.use_item(hook)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r} ({len(self)} items)>"


def _identity(value: Any) -> Any:
    return value


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _entry_key(entry: Any, collection: str) -> str:
    if isinstance(entry, Item):
        key = entry.path or entry.key
    elif isinstance(entry, Mapping):
        key = entry.get("path") or entry.get("key")
    else:
        raise InvalidInputError(
            f"expected list entries to be items or mappings, got {type(entry).__name__}",
            context={"collection": collection},
        )
    if not isinstance(key, str) or not key:
        raise InvalidInputError(
            "expected list entry to define a 'path' or 'key'",
            context={"collection": collection},
        )
    return key


__all__ = ["BaseItemManager", "ItemTransform"]
