"""Typed lifecycle events and an ordered dispatcher.

Every list, collection and registry owns an ``EventDispatcher``. Handlers
are called synchronously, in subscription order, with the event payload.
Handler exceptions propagate to the caller that emitted the event.

Event names:
    add_item    ItemAdded        before an item is committed (raw arguments)
    load        ItemLoaded       after an item is committed
    <item key>  ItemLoaded       after an item is committed
    item        ItemLoaded       bubbled to the owning registry
    <singular>  ItemLoaded       bubbled to the owning registry (e.g. "post")
    add_items   ItemsAdded       before a mapping of items is loaded
    add_list    ListAdded        before a sequence of items is loaded
    collection  CollectionCreated
    create      CollectionCreated
    list        ListCreated
    option      OptionChanged
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass
class Event:
    """Base class for event payloads."""

    name: ClassVar[str] = "event"


@dataclass
class ItemAdded(Event):
    source: Any
    args: Tuple[Any, ...] = ()

    name: ClassVar[str] = "add_item"


@dataclass
class ItemLoaded(Event):
    source: Any
    item: Any

    name: ClassVar[str] = "load"


@dataclass
class ItemsAdded(Event):
    source: Any
    items: Mapping[str, Any] = field(default_factory=dict)

    name: ClassVar[str] = "add_items"


@dataclass
class ListAdded(Event):
    source: Any
    items: Any = None

    name: ClassVar[str] = "add_list"


@dataclass
class CollectionCreated(Event):
    registry: Any
    collection: Any
    options: Mapping[str, Any] = field(default_factory=dict)

    name: ClassVar[str] = "create"


@dataclass
class ListCreated(Event):
    registry: Any
    list: Any
    options: Mapping[str, Any] = field(default_factory=dict)

    name: ClassVar[str] = "list"


@dataclass
class OptionChanged(Event):
    source: Any
    key: str
    value: Any = None

    name: ClassVar[str] = "option"


Handler = Callable[[Any], None]


class EventDispatcher:
    """Ordered, synchronous event dispatch keyed by event name."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Handler]] = {}

    def on(self, name: str, handler: Optional[Handler] = None) -> Any:
        """Subscribe ``handler`` to ``name``.

        Usable as a decorator when ``handler`` is omitted.
        """
        if handler is None:
            def decorator(fn: Handler) -> Handler:
                self.on(name, fn)
                return fn

            return decorator
        self._subscribers.setdefault(name, []).append(handler)
        return handler

    def once(self, name: str, handler: Handler) -> Handler:
        def wrapper(event: Any) -> None:
            self.off(name, wrapper)
            handler(event)

        return self.on(name, wrapper)

    def off(self, name: str, handler: Optional[Handler] = None) -> None:
        """Remove ``handler`` (or every handler) from ``name``."""
        if handler is None:
            self._subscribers.pop(name, None)
            return
        handlers = self._subscribers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def has_listeners(self, name: str) -> bool:
        return bool(self._subscribers.get(name))

    def listeners(self, name: str) -> List[Handler]:
        return list(self._subscribers.get(name, []))

    def emit(self, event: Event, name: Optional[str] = None) -> Event:
        """Deliver ``event`` to the subscribers of ``name`` (default: ``event.name``)."""
        key = name if name is not None else event.name
        for handler in list(self._subscribers.get(key, [])):
            handler(event)
        return event


__all__ = [
    "Event",
    "ItemAdded",
    "ItemLoaded",
    "ItemsAdded",
    "ListAdded",
    "CollectionCreated",
    "ListCreated",
    "OptionChanged",
    "EventDispatcher",
]
