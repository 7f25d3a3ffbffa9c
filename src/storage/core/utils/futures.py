"""Helpers for the provider completion channel.

Provider operations return ``concurrent.futures.Future`` objects. In-memory
providers complete them before returning; remote providers may complete
them later from another thread.
"""
from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Callable, TypeVar

T = TypeVar("T")


def resolved(value: T = None) -> "Future[T]":
    """Return a future already completed with ``value``."""
    fut: "Future[T]" = Future()
    fut.set_result(value)
    return fut


def failed(exc: BaseException) -> "Future[Any]":
    """Return a future already completed with ``exc``."""
    fut: "Future[Any]" = Future()
    fut.set_exception(exc)
    return fut


def call_as_future(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> "Future[Any]":
    """Run ``fn`` and expose its outcome as a future.

    If ``fn`` already returns a future it is passed through. Exceptions are
    delivered on the future unchanged, never raised to the caller.
    """
    try:
        result = fn(*args, **kwargs)
    except Exception as exc:
        return failed(exc)
    if isinstance(result, Future):
        return result
    return resolved(result)


__all__ = ["resolved", "failed", "call_as_future"]
