"""Tests for Item construction from raw values."""
from __future__ import annotations

import pytest

from storage.core.entity import Item, Pager
from storage.core.exceptions import InvalidInputError


def test_none_value_creates_empty_item() -> None:
    item = Item.from_value("a.md")
    assert item.key == "a.md"
    assert item.path == "a.md"
    assert item.data == {}
    assert item.payload is None


def test_string_and_bytes_become_payload() -> None:
    assert Item.from_value("a.md", "hello").payload == "hello"
    assert Item.from_value("b.md", b"\x00\x01").content == b"\x00\x01"


def test_mapping_extra_keys_merge_into_data() -> None:
    item = Item.from_value("a.md", {"title": "A", "data": {"draft": True}, "content": "body"})
    assert item.data == {"title": "A", "draft": True}
    assert item.payload == "body"


def test_explicit_data_wins_over_extra_keys() -> None:
    item = Item.from_value("a.md", {"title": "outer", "data": {"title": "inner"}})
    assert item.data["title"] == "inner"


def test_mapping_path_is_kept() -> None:
    item = Item.from_value("a.md", {"path": "posts/a.md"})
    assert item.key == "a.md"
    assert item.path == "posts/a.md"


def test_unsupported_value_raises() -> None:
    with pytest.raises(InvalidInputError):
        Item.from_value("a.md", 42)


def test_non_mapping_data_raises() -> None:
    with pytest.raises(InvalidInputError):
        Item.from_value("a.md", {"data": ["x"]})


def test_from_mapping_requires_key_or_path() -> None:
    assert Item.from_mapping({"path": "posts/a.md"}).key == "posts/a.md"
    assert Item.from_mapping({"key": "a", "title": "A"}).data == {"title": "A"}
    with pytest.raises(InvalidInputError):
        Item.from_mapping({"title": "no key"})


def test_items_compare_by_identity() -> None:
    assert Item("a") != Item("a")


def test_to_dict_includes_pager_keys() -> None:
    first, second = Item("a"), Item("b")
    second.pager = Pager(index=1, current=second, prev=first)
    assert second.to_dict()["pager"] == {"index": 1, "current": "b", "prev": "a", "next": None}
    assert "pager" not in first.to_dict()
