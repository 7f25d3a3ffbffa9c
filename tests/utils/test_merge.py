from __future__ import annotations

from storage.core.utils.merge import deep_merge, defaults, merge_arrays


def test_deep_merge_nested() -> None:
    assert deep_merge({"a": {"b": 1}}, {"a": {"c": 2}}) == {"a": {"b": 1, "c": 2}}


def test_merge_arrays_append_and_replace() -> None:
    assert merge_arrays(["a"], ["+", "b"]) == ["a", "b"]
    assert merge_arrays(["a"], ["b"]) == ["b"]
    assert merge_arrays(["a"], []) == ["a"]


def test_defaults_fills_missing_keys_only() -> None:
    target = {"a": 1}
    assert defaults(target, {"a": 2, "b": 2}, {"c": 3}) == {"a": 1, "b": 2, "c": 3}
