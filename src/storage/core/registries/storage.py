"""The named-collection registry.

``Storage`` maps collection names, in both their singular and plural
spellings, to lists and collections, and synthesizes an accessor pair for
each name:

    app = Storage()
    app.create("post")
    app.post("a.md", {"title": "A"})
    app.posts.get_item("a.md").data["title"]   # "A"
"""
from __future__ import annotations

import logging
import types
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Type, Union

from storage.core.config import LoggingConfig, RegistryConfig, get_cached_config
from storage.core.entity import BaseItemManager, Collection, Item, ItemList, checks
from storage.core.entity.protocols import MISSING, Inflector as InflectorLike
from storage.core.events import (
    CollectionCreated,
    Event,
    EventDispatcher,
    ItemLoaded,
    ListCreated,
    OptionChanged,
)
from storage.core.exceptions import CollectionNotFoundError, InvalidInputError
from storage.core.extensions import CollectionHook, ExtensionPipeline, ItemHook
from storage.core.utils.inflection import Inflector
from storage.core.utils.merge import defaults

from .accessors import CollectionAccessor
from .defaults import attach_collection, stamp_provider
from .lookup import LookupMixin
from .providers import ProviderRegistryMixin

logger = logging.getLogger(__name__)

# Registry options that are not inherited by the containers it builds.
REGISTRY_ONLY_OPTIONS = ("mixins", "rename_key")


class Storage(LookupMixin, ProviderRegistryMixin):
    """Directory of named lists and collections.

    Args:
        options: Registry options; every container created by this registry
            inherits the ones it does not set itself. ``mixins`` maps names
            to functions bound as methods.
        config: Already-loaded configuration (defaults to the cached config)
        config_path: YAML overlay(s) used when ``config`` is None
        inflector: Object with ``single(name)``/``plural(name)``

    Attributes:
        collections: plural name -> container, in registration order
        inflections: singular name -> plural name
        collection_types: type tag -> plural names
        providers: provider name -> provider
    """

    def __init__(
        self,
        options: Optional[Mapping[str, Any]] = None,
        *,
        config: Optional[Mapping[str, Any]] = None,
        config_path: Optional[Union[str, Path, Sequence[Union[str, Path]]]] = None,
        inflector: Optional[InflectorLike] = None,
    ) -> None:
        if config is None:
            config = get_cached_config(config_path)
        self.config = config

        opts: Dict[str, Any] = dict(options or {})
        defaults(opts, RegistryConfig(config).defaults())
        self.options = opts

        self.events = EventDispatcher()
        self.extensions = ExtensionPipeline()
        self.inflector = inflector or Inflector()
        self.collections: Dict[str, BaseItemManager] = {}
        self.inflections: Dict[str, str] = {}
        self.collection_types: Dict[str, List[str]] = {"collection": []}
        self.providers: Dict[str, Any] = {}
        self.provider_settings: Dict[str, Dict[str, Any]] = {}
        self._accessors: Dict[str, CollectionAccessor] = {}

        self.extensions.use_collection(attach_collection)
        self.extensions.use_item(stamp_provider)

        for name, fn in dict(opts.get("mixins") or {}).items():
            self.mixin(name, fn)

        LoggingConfig(config).apply()
        logger.debug("initialized storage")

    # ---------- Containers ----------

    def create(self, name: str, options: Optional[Mapping[str, Any]] = None) -> BaseItemManager:
        """Create a collection and register it under ``name``.

        Either spelling may be passed. ``options["kind"]`` selects ``"list"``
        (default) or ``"collection"``. Creating an existing name replaces
        the registered container.

        Raises:
            InvalidInputError: If ``name`` is empty or collides with a
                registry attribute
        """
        if not isinstance(name, str) or not name:
            raise InvalidInputError(f"expected collection name to be a non-empty string, got {name!r}")

        single = self.inflector.single(name)
        plural = self.inflector.plural(single)
        for reserved in (single, plural):
            self._check_name(reserved)
        if plural in self.collections:
            logger.warning("re-creating collection %r", plural)
        logger.debug("creating collection %r (%s)", plural, single)

        opts = self._inherit(options)
        kind = str(opts.get("kind") or "list")
        if kind == "collection":
            collection: BaseItemManager = self.collection(opts, created=True)
        elif kind == "list":
            collection = self._build(ItemList, opts, "list_class")
            self.emit(CollectionCreated(registry=self, collection=collection, options=opts), name="collection")
        else:
            raise InvalidInputError(f"unknown collection kind {kind!r}", context={"collection": plural})

        self.inflections[single] = plural
        collection.option("inflection", single)
        collection.option("plural", plural)
        self.collection_type(plural, collection.collection_types())
        self.collections[plural] = collection

        many = CollectionAccessor(collection, many=True)
        one = CollectionAccessor(collection, many=False)
        self._accessors[plural] = many
        self._accessors[single] = one
        collection.alias(plural, many)
        collection.alias(single, one)

        self.extend_collection(collection)
        self.emit(CollectionCreated(registry=self, collection=collection, options=opts))
        return collection

    def collection(self, options: Any = None, created: bool = False) -> Collection:
        """Build (or adopt) an unregistered keyed collection.

        Unless ``created`` is True the collection is decorated before the
        ``collection`` event fires.
        """
        if isinstance(options, CollectionAccessor):
            options = options.collection
        if isinstance(options, Collection):
            collection, opts = options, dict(options.options)
        else:
            opts = self._inherit(options)
            collection = self._build(Collection, opts, "collection_class")

        if not created:
            self.extend_collection(collection)
        self.emit(CollectionCreated(registry=self, collection=collection, options=opts), name="collection")
        return collection

    def list(self, options: Any = None) -> ItemList:
        """Build (or adopt) an unregistered list, decorate it, emit ``list``.

        A ``Collection`` passed as ``options`` seeds the new list with its
        items.
        """
        if isinstance(options, CollectionAccessor):
            options = options.collection
        if isinstance(options, ItemList):
            lst, opts = options, dict(options.options)
        elif isinstance(options, Collection):
            opts = self._inherit(None)
            lst = self._build(ItemList, opts, "list_class")
            lst.add_list(options)
        else:
            opts = self._inherit(options)
            lst = self._build(ItemList, opts, "list_class")

        self.extend_collection(lst)
        self.emit(ListCreated(registry=self, list=lst, options=opts))
        return lst

    def _inherit(self, options: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        opts: Dict[str, Any] = dict(options or {})
        inherited = {k: v for k, v in self.options.items() if k not in REGISTRY_ONLY_OPTIONS}
        return dict(defaults(opts, inherited))

    def _build(self, base: Type[BaseItemManager], opts: Dict[str, Any], class_option: str) -> Any:
        cls = opts.get(class_option) or base
        if not (isinstance(cls, type) and issubclass(cls, base)):
            raise InvalidInputError(
                f"expected {class_option} to be a subclass of {base.__name__}, got {cls!r}",
                context={"option": class_option},
            )
        return cls(opts, config=self.config)

    def _check_name(self, name: str) -> None:
        if name in self._accessors:
            return
        if hasattr(type(self), name) or name in self.__dict__:
            raise InvalidInputError(
                f"collection name '{name}' collides with a Storage attribute",
                context={"collection": name},
            )

    # ---------- Accessors ----------

    def accessor(self, name: str) -> CollectionAccessor:
        """Return the accessor registered for a singular or plural name."""
        try:
            return self._accessors[name]
        except KeyError:
            raise CollectionNotFoundError(name) from None

    def __getattr__(self, name: str) -> Any:
        accessors = self.__dict__.get("_accessors")
        if accessors and name in accessors:
            return accessors[name]
        raise AttributeError(f"'Storage' object has no attribute {name!r}")

    # ---------- Collection types ----------

    def collection_type(self, plural: str, types_: Union[str, Sequence[str]]) -> "Storage":
        """Tag collection ``plural`` with one or more type names."""
        tags = [types_] if isinstance(types_, str) else list(types_)
        for tag in tags:
            names = self.collection_types.setdefault(tag, [])
            if plural not in names:
                names.append(plural)
        return self

    def collections_of_type(self, tag: str) -> List[BaseItemManager]:
        return [self.collections[p] for p in self.collection_types.get(tag, []) if p in self.collections]

    # ---------- Extensions ----------

    def use_item(self, hook: ItemHook) -> ItemHook:
        """Register ``hook(item, owner)``, run after each item is added."""
        return self.extensions.use_item(hook)

    def use_collection(self, hook: CollectionHook) -> CollectionHook:
        """Register ``hook(collection, registry)``, run when a container is created."""
        return self.extensions.use_collection(hook)

    def extend_item(self, item: Item, owner: Any = None) -> "Storage":
        self.extensions.run_item(item, owner)
        return self

    def extend_collection(
        self, collection: BaseItemManager, options: Optional[Mapping[str, Any]] = None
    ) -> "Storage":
        """Run collection hooks; ``options`` fill keys the collection lacks."""
        if options:
            defaults(collection.options, dict(options))
        self.extensions.run_collection(collection, self)
        return self

    def item_committed(self, collection: BaseItemManager, event: ItemLoaded) -> None:
        """Bubble a committed item as ``item`` and the collection's singular name."""
        self.emit(event, name="item")
        single = collection.options.get("inflection")
        if single:
            self.emit(event, name=single)

    # ---------- Events and options ----------

    def on(self, name: str, handler: Optional[Callable[[Any], None]] = None) -> Any:
        return self.events.on(name, handler)

    def off(self, name: str, handler: Optional[Callable[[Any], None]] = None) -> None:
        self.events.off(name, handler)

    def emit(self, event: Event, name: Optional[str] = None) -> Event:
        return self.events.emit(event, name)

    def option(self, key: str, value: Any = MISSING) -> Any:
        """Get option ``key``, or set it (emitting ``option``) when ``value`` is given."""
        if value is MISSING:
            return self.options.get(key)
        self.options[key] = value
        self.emit(OptionChanged(source=self, key=key, value=value))
        return self

    def mixin(self, name: str, fn: Callable[..., Any]) -> "Storage":
        """Bind ``fn`` as method ``name`` on this registry."""
        if not callable(fn):
            raise InvalidInputError(f"expected mixin '{name}' to be callable")
        self._check_name(name)
        setattr(self, name, types.MethodType(fn, self))
        return self

    # ---------- Checks ----------

    @staticmethod
    def is_storage(value: Any) -> bool:
        return isinstance(value, Storage)

    @staticmethod
    def is_collection(value: Any) -> bool:
        return checks.is_collection(value)

    @staticmethod
    def is_list(value: Any) -> bool:
        return checks.is_list(value)

    @staticmethod
    def is_item(value: Any) -> bool:
        return checks.is_item(value)

    def __repr__(self) -> str:
        return f"<Storage collections={list(self.collections)!r}>"


__all__ = ["Storage", "REGISTRY_ONLY_OPTIONS"]
