"""Tests for add_item commit ordering, the queue and item decoration."""
from __future__ import annotations

import pytest

from storage.core.entity import ItemList
from storage.core.exceptions import QueueOverflowError

from helpers.recorder import EventRecorder


def test_hook_enqueuing_one_item_is_drained() -> None:
    lst = ItemList()

    @lst.on("add_item")
    def enqueue_sidecar(event):
        key, _ = event.args
        if key == "a.md":
            lst.enqueue("a.json", {"generated": True})

    added = lst.add_item("a.md")
    assert added.key == "a.md"
    assert lst.keys == ["a.md", "a.json"]
    assert len(lst.queue) == 0


def test_queued_items_can_enqueue_more() -> None:
    lst = ItemList()

    @lst.on("load")
    def chain(event):
        if event.item.key == "a":
            lst.enqueue("b")
        elif event.item.key == "b":
            lst.enqueue("c")

    lst.add_item("a")
    assert lst.keys == ["a", "b", "c"]


def test_item_hook_enqueuing_is_drained_by_the_same_call() -> None:
    lst = ItemList()
    decorated = []

    def hook(item, owner):
        decorated.append(item.key)
        if item.key == "a":
            lst.enqueue("b")

    lst.use(hook)
    lst.add_item("a")
    assert lst.keys == ["a", "b"]
    assert len(lst.queue) == 0
    assert decorated == ["a"]


def test_item_hook_enqueuing_shares_the_drain_limit() -> None:
    lst = ItemList({"max_queue_drain": 2})
    lst.on("add_item", lambda event: lst.enqueue("x") if event.args[0] == "a" else None)
    lst.use(lambda item, owner: [lst.enqueue("y"), lst.enqueue("z")] if item.key == "a" else None)

    with pytest.raises(QueueOverflowError):
        lst.add_item("a")
    assert len(lst.queue) == 0
    assert lst.keys == ["a", "x", "y"]


def test_only_the_added_item_is_decorated() -> None:
    lst = ItemList()
    decorated = []
    lst.use(lambda item, owner: decorated.append(item.key))
    lst.on("add_item", lambda event: lst.enqueue("side") if event.args[0] == "main" else None)

    lst.add_item("main")
    assert lst.keys == ["main", "side"]
    assert decorated == ["main"]


def test_set_item_does_not_drain_or_emit_add_item() -> None:
    lst = ItemList()
    rec = EventRecorder().listen(lst, "add_item", "load")
    lst.enqueue("pending")
    lst.set_item("a")
    assert rec.names == ["load"]
    assert list(lst.queue) == [("pending", None)]


def test_event_order_per_commit() -> None:
    lst = ItemList()
    rec = EventRecorder().listen(lst, "add_item", "load", "a.md")
    lst.use(lambda item, owner: rec.calls.append(("decorate", item)))
    lst.add_item("a.md", {"title": "A"})

    assert rec.names == ["add_item", "load", "a.md", "decorate"]
    assert rec.calls[0][1].args == ("a.md", {"title": "A"})
    assert rec.calls[1][1].item is lst.items[0]


def test_runaway_hook_overflows_and_clears_queue() -> None:
    lst = ItemList({"max_queue_drain": 5})
    counter = iter(range(100))
    lst.on("load", lambda event: lst.enqueue(f"item-{next(counter)}"))

    with pytest.raises(QueueOverflowError) as exc:
        lst.add_item("start")
    assert exc.value.context["limit"] == 5
    assert len(lst.queue) == 0
    assert len(lst.keys) == len(lst.items)


def test_hook_errors_propagate() -> None:
    lst = ItemList()

    def broken(item, owner):
        raise RuntimeError("boom")

    lst.use(broken)
    with pytest.raises(RuntimeError, match="boom"):
        lst.add_item("a")
    assert lst.keys == ["a"]
