"""Shared utilities for the storage core.

Sorting, pagination, fuzzy matching and inflection are consumed by the
engine through these modules so they can be replaced independently.
"""
from __future__ import annotations

from .merge import deep_merge, merge_arrays, defaults
from .patterns import is_glob, match_item, match_name
from .sorting import get_path, sort_by
from .pagination import Page, paginate
from .inflection import Inflector
from .futures import resolved, failed, call_as_future

__all__ = [
    "deep_merge",
    "merge_arrays",
    "defaults",
    "is_glob",
    "match_item",
    "match_name",
    "get_path",
    "sort_by",
    "Page",
    "paginate",
    "Inflector",
    "resolved",
    "failed",
    "call_as_future",
]
