from __future__ import annotations

import pytest

from storage.core.entity import Item
from storage.core.utils.patterns import is_glob, item_names, match_item, match_name


def test_item_names_cover_key_path_basename_and_stem() -> None:
    item = Item(key="posts/a.md", path="src/posts/a.md")
    assert list(item_names(item)) == ["posts/a.md", "a.md", "a", "src/posts/a.md"]


@pytest.mark.parametrize("key", ["posts/a.md", "a.md", "a", "posts/*.md", "*.{md,txt}", "src/**/a.md"])
def test_match_item_hits(key: str) -> None:
    assert match_item(key, Item(key="posts/a.md", path="src/posts/a.md"))


@pytest.mark.parametrize("key", ["b.md", "posts/b.md", "*.txt", "", None])
def test_match_item_misses(key) -> None:
    assert not match_item(key, Item(key="posts/a.md"))


def test_is_glob() -> None:
    assert is_glob("*.md")
    assert is_glob("a.{md,txt}")
    assert not is_glob("posts/a.md")


def test_match_name_braces() -> None:
    assert match_name("a.txt", "a.{md,txt}")
    assert match_name("a.md", "a.md")
    assert not match_name("a.md", "b.md")
