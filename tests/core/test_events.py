"""Tests for the event dispatcher and extension pipeline."""
from __future__ import annotations

import pytest

from storage.core.events import EventDispatcher, ItemAdded, ItemLoaded
from storage.core.extensions import ExtensionPipeline


def test_handlers_run_in_subscription_order() -> None:
    events = EventDispatcher()
    calls = []
    events.on("load", lambda e: calls.append(1))
    events.on("load", lambda e: calls.append(2))
    events.emit(ItemLoaded(source=None, item="x"))
    assert calls == [1, 2]


def test_emit_under_custom_name() -> None:
    events = EventDispatcher()
    seen = []
    events.on("a.md", seen.append)
    event = ItemLoaded(source=None, item="a")
    assert events.emit(event, name="a.md") is event
    assert seen == [event]


def test_once_and_off() -> None:
    events = EventDispatcher()
    seen = []
    events.once("add_item", seen.append)
    handler = events.on("add_item", seen.append)
    events.emit(ItemAdded(source=None))
    events.off("add_item", handler)
    events.emit(ItemAdded(source=None))
    assert len(seen) == 2
    assert not events.has_listeners("add_item")


def test_off_without_handler_removes_all() -> None:
    events = EventDispatcher()
    events.on("x", print)
    events.on("x", repr)
    events.off("x")
    assert events.listeners("x") == []


def test_handler_exceptions_propagate() -> None:
    events = EventDispatcher()

    @events.on("load")
    def broken(event):
        raise ValueError("bad handler")

    with pytest.raises(ValueError):
        events.emit(ItemLoaded(source=None, item=None))


def test_pipeline_runs_hooks_in_order() -> None:
    pipeline = ExtensionPipeline()
    order = []
    pipeline.use_item(lambda item, owner: order.append(("item", item, owner)))
    pipeline.use_collection(lambda coll, registry: order.append(("collection", coll, registry)))

    assert pipeline.run_item("i", "o") == "i"
    assert pipeline.run_collection("c", "r") == "c"
    assert order == [("item", "i", "o"), ("collection", "c", "r")]
