"""Tests for get_collection, get_item and find."""
from __future__ import annotations

import pytest

from storage import Storage
from storage.core.exceptions import CollectionNotFoundError, InvalidInputError


@pytest.fixture
def site(app: Storage) -> Storage:
    app.create("post")
    app.create("page")
    app.post("blog/hello.md", {"title": "Hello"})
    app.page("about.md", {"title": "About"})
    app.page("docs/hello.md", {"title": "Docs hello"})
    return app


def test_get_collection_by_either_spelling(site: Storage) -> None:
    posts = site.collections["posts"]
    assert site.get_collection("posts") is posts
    assert site.get_collection("post") is posts
    assert site.get_collection(posts) is posts
    assert site.get_collection(site.posts) is posts


def test_get_collection_unknown(site: Storage) -> None:
    with pytest.raises(CollectionNotFoundError) as exc:
        site.get_collection("products")
    assert exc.value.context["collection"] == "products"


def test_get_item_exact_then_default_rename(site: Storage) -> None:
    site.post("hello.md", {"title": "Short"})
    assert site.get_item("posts", "blog/hello.md").data["title"] == "Hello"
    assert site.get_item("posts", "drafts/hello.md").data["title"] == "Short"
    assert site.get_item("posts", "nothing.md") is None


def test_get_item_custom_rename(site: Storage) -> None:
    item = site.get_item("posts", "hello", rename=lambda key: f"blog/{key}.md")
    assert item.data["title"] == "Hello"
    assert site.get_item("posts", 42) is None


def test_get_item_rename_strategy_by_name() -> None:
    app = Storage({"rename_key": "stem"})
    app.create("post")
    app.post("hello")
    assert app.get_item("posts", "blog/hello.md").key == "hello"

    app.option("rename_key", "bogus")
    with pytest.raises(InvalidInputError):
        app.get_item("posts", "x/missing.md")


def test_find_scans_in_registration_order(site: Storage) -> None:
    assert site.find("about.md").data["title"] == "About"
    assert site.find("hello.md").data["title"] == "Hello"
    assert site.find("hello").data["title"] == "Hello"
    assert site.find("missing.md") is None


def test_find_restricted_to_collection(site: Storage) -> None:
    assert site.find("hello.md", "pages").data["title"] == "Docs hello"
    assert site.find("hello.md", "page").data["title"] == "Docs hello"
    with pytest.raises(CollectionNotFoundError):
        site.find("hello.md", "products")


def test_find_requires_string_name(site: Storage) -> None:
    with pytest.raises(InvalidInputError):
        site.find(None)
