"""Tests for Storage options, mixins, list/collection builders and checks."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from storage import Storage
from storage.core.entity import Collection, Item, ItemList
from storage.core.exceptions import InvalidInputError
from storage.core.utils.stdlib_logging import PACKAGE_LOGGER

from helpers.recorder import EventRecorder


def test_option_get_set_emits(app: Storage) -> None:
    rec = EventRecorder().listen(app, "option")
    assert app.option("kind") == "list"
    assert app.option("layout", "default") is app
    assert app.options["layout"] == "default"
    assert rec.calls[0][1].key == "layout"
    assert rec.calls[0][1].value == "default"


def test_registry_options_are_inherited(app: Storage) -> None:
    app.option("pager", True)
    posts = app.create("post")
    pages = app.create("page", {"pager": False})
    assert posts.options["pager"] is True
    assert pages.options["pager"] is False
    assert "rename_key" not in posts.options


def test_list_config_defaults_reach_lists(tmp_path: Path) -> None:
    path = tmp_path / "storage.yaml"
    path.write_text("list:\n  pager: true\n  duplicates: reject\n", encoding="utf-8")
    app = Storage(config_path=path)
    posts = app.create("post")
    assert posts.options["pager"] is True
    assert posts.options["duplicates"] == "reject"
    app.post("a.md")
    assert app.posts.items[0].pager.index == 0


def test_registry_kind_from_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORAGE_STORAGE__KIND", "collection")
    assert isinstance(Storage().create("post"), Collection)


def test_mixins(app: Storage) -> None:
    def count(self):
        return sum(len(c) for c in self.collections.values())

    app.mixin("count", count)
    app.create("post")
    app.post("a.md")
    assert app.count() == 1

    other = Storage({"mixins": {"count": count}})
    assert other.count() == 0

    with pytest.raises(InvalidInputError):
        app.mixin("create", count)
    with pytest.raises(InvalidInputError):
        app.mixin("thing", "not callable")


def test_list_builds_unregistered_decorated_list(app: Storage) -> None:
    rec = EventRecorder().listen(app, "list", "item")
    lst = app.list({"pager": True})
    assert isinstance(lst, ItemList)
    assert app.collections == {}
    assert lst.registry is app
    assert rec.names == ["list"]
    assert rec.calls[0][1].list is lst

    lst.add_item("a")
    assert rec.names == ["list", "item"]


def test_list_adopts_lists_and_seeds_from_collections(app: Storage) -> None:
    existing = ItemList()
    assert app.list(existing) is existing

    products = app.create("product", {"kind": "collection"})
    app.products({"a": None, "b": None})
    lst = app.list(products)
    assert lst.keys == ["a", "b"]
    assert lst.items[0] is products.items["a"]


def test_list_and_collection_accept_accessors(app: Storage) -> None:
    products = app.create("product", {"kind": "collection"})
    app.product("a.md", {"title": "A"})
    lst = app.list(app.products)
    assert isinstance(lst, ItemList)
    assert lst.keys == ["a.md"]
    assert lst.items[0] is products.items["a.md"]
    assert app.collection(app.product) is products

    posts = app.create("post")
    assert app.list(app.posts) is posts


def test_collection_builder(app: Storage) -> None:
    rec = EventRecorder().listen(app, "collection")
    decorated = []
    app.use_collection(lambda coll, registry: decorated.append(coll))

    coll = app.collection({"custom": 1})
    assert isinstance(coll, Collection)
    assert decorated == [coll]
    assert rec.names == ["collection"]
    assert app.collection(coll) is coll

    created = app.collection(created=True)
    assert created not in decorated
    assert created.registry is None


def test_extend_collection_fills_missing_options(app: Storage) -> None:
    coll = app.collection({"custom": 1}, created=True)
    app.extend_collection(coll, {"custom": 2, "extra": True})
    assert coll.options["custom"] == 1
    assert coll.options["extra"] is True
    assert coll.registry is app


def test_static_checks(app: Storage) -> None:
    assert Storage.is_storage(app)
    assert Storage.is_list(app.list())
    assert Storage.is_collection(app.collection())
    assert not Storage.is_collection(app.list())
    assert Storage.is_item(Item("a"))
    assert not Storage.is_storage({})


def test_logging_enabled_from_config(tmp_path: Path) -> None:
    log_file = tmp_path / "storage.log"
    path = tmp_path / "storage.yaml"
    path.write_text(
        f"logging:\n  enabled: true\n  level: DEBUG\n  path: {log_file}\n", encoding="utf-8"
    )
    app = Storage(config_path=path)
    app.create("post")
    for handler in logging.getLogger(PACKAGE_LOGGER).handlers:
        handler.flush()
    assert "creating collection 'posts'" in log_file.read_text(encoding="utf-8")


def test_recreating_a_collection_warns(app: Storage, caplog: pytest.LogCaptureFixture) -> None:
    app.create("post")
    with caplog.at_level(logging.WARNING, logger="storage"):
        app.create("posts")
    assert "re-creating collection 'posts'" in caplog.text
