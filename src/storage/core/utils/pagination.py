"""Split a sequence of items into pages."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, TypeVar

from ..exceptions import InvalidInputError

T = TypeVar("T")

DEFAULT_LIMIT = 10


@dataclass
class Page(Generic[T]):
    """A single page of items.

    Attributes:
        index: Zero-based page index
        current: One-based page number
        total: Total number of pages
        items: Items on this page (shared with the source list)
        first: Page number of the first page (always 1)
        last: Page number of the last page
        prev: Previous page number, or None on the first page
        next: Next page number, or None on the last page
    """

    index: int
    current: int
    total: int
    items: List[T] = field(default_factory=list)
    first: int = 1
    last: int = 1
    prev: Optional[int] = None
    next: Optional[int] = None

    @property
    def is_first(self) -> bool:
        return self.current == self.first

    @property
    def is_last(self) -> bool:
        return self.current == self.last

    def to_dict(self) -> Dict[str, Any]:
        return {
            "idx": self.index,
            "current": self.current,
            "total": self.total,
            "first": self.first,
            "last": self.last,
            "prev": self.prev,
            "next": self.next,
            "isFirst": self.is_first,
            "isLast": self.is_last,
            "items": list(self.items),
        }


def paginate(items: Sequence[T], options: Optional[Mapping[str, Any]] = None) -> List[Page[T]]:
    """Group ``items`` into pages of ``options["limit"]`` entries.

    An empty sequence yields no pages.
    """
    opts = dict(options or {})
    limit = opts.get("limit", DEFAULT_LIMIT)
    if not isinstance(limit, int) or isinstance(limit, bool) or limit < 1:
        raise InvalidInputError(
            f"expected pagination limit to be a positive integer, got {limit!r}",
            context={"limit": limit},
        )

    source = list(items)
    total = (len(source) + limit - 1) // limit
    pages: List[Page[T]] = []
    for idx in range(total):
        current = idx + 1
        pages.append(
            Page(
                index=idx,
                current=current,
                total=total,
                items=source[idx * limit : current * limit],
                first=1,
                last=total,
                prev=current - 1 if current > 1 else None,
                next=current + 1 if current < total else None,
            )
        )
    return pages


__all__ = ["DEFAULT_LIMIT", "Page", "paginate"]
