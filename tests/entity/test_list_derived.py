"""Tests for sort_by and paginate derived views."""
from __future__ import annotations

import pytest

from storage.core.entity import ItemList
from storage.core.exceptions import InvalidInputError

from helpers.recorder import EventRecorder


@pytest.fixture
def posts() -> ItemList:
    lst = ItemList()
    lst.add_item("x.md", {"date": "2016-03-01", "tag": "b"})
    lst.add_item("y.md", {"date": "2016-01-01", "tag": "a"})
    lst.add_item("z.md", {"date": "2016-02-01", "tag": "a"})
    return lst


def test_sort_by_returns_new_list_sharing_items(posts: ItemList) -> None:
    before = list(posts.items)
    result = posts.sort_by("data.date")

    assert result is not posts
    assert result.keys == ["y.md", "z.md", "x.md"]
    assert posts.items == before
    assert all(a is b for a, b in zip(posts.items, before))
    assert set(map(id, result.items)) == set(map(id, before))


def test_first_criterion_is_primary(posts: ItemList) -> None:
    result = posts.sort_by("data.tag", "data.date")
    assert result.keys == ["y.md", "z.md", "x.md"]

    result = posts.sort_by("data.tag", "key")
    assert result.keys == ["y.md", "z.md", "x.md"]


def test_sort_reverse_option(posts: ItemList) -> None:
    result = posts.sort_by("data.date", options={"reverse": True})
    assert result.keys == ["x.md", "z.md", "y.md"]


def test_sort_reverse_from_list_options() -> None:
    lst = ItemList({"sort": {"reverse": True}})
    lst.add_items({"a": {"n": 1}, "b": {"n": 2}})
    assert lst.sort_by("data.n").keys == ["b", "a"]


def test_missing_values_sort_last(posts: ItemList) -> None:
    posts.add_item("undated.md")
    assert posts.sort_by("data.date").keys[-1] == "undated.md"
    assert posts.sort_by("data.date", options={"reverse": True}).keys[-1] == "undated.md"


def test_comparator_criterion(posts: ItemList) -> None:
    def by_key_desc(a, b):
        return (a.key < b.key) - (a.key > b.key)

    assert posts.sort_by(by_key_desc).keys == ["z.md", "y.md", "x.md"]


def test_bad_criterion_raises(posts: ItemList) -> None:
    with pytest.raises(InvalidInputError):
        posts.sort_by(42)


def test_sorted_list_does_not_replay_events_or_pager() -> None:
    lst = ItemList({"pager": True})
    a = lst.add_item("b")
    lst.add_item("a")
    rec = EventRecorder()

    result = lst.sort_by("key")
    rec.listen(result, "load")
    assert result.keys == ["a", "b"]
    assert a.pager.index == 0
    assert rec.calls == []


def test_paginate_groups_items(posts: ItemList) -> None:
    pages = posts.paginate({"limit": 2})
    assert [p.current for p in pages] == [1, 2]
    assert pages[0].items == posts.items[:2]
    assert pages[0].items[0] is posts.items[0]
    assert pages[0].is_first and not pages[0].is_last
    assert pages[1].prev == 1 and pages[1].next is None
    assert pages[1].total == 2 and pages[1].is_last
    assert len(posts) == 3


def test_paginate_uses_list_defaults() -> None:
    lst = ItemList({"paginate": {"limit": 1}})
    lst.add_items({"a": None, "b": None})
    assert len(lst.paginate()) == 2
    assert len(ItemList().paginate()) == 0


def test_paginate_rejects_bad_limit(posts: ItemList) -> None:
    with pytest.raises(InvalidInputError):
        posts.paginate({"limit": 0})
