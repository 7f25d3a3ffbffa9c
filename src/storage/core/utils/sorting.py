"""Multi-key stable sorting for items.

Criteria are dotted property paths (``"data.date"``, ``"key"``) or
comparator functions ``(a, b) -> int``. The first criterion is the primary
key; later criteria only break ties. This is implemented as successive
stable sorts in reverse criterion order, so the last pass applied is the
primary criterion.

Values that are missing (``None`` or an unresolvable path) sort after
present values regardless of direction.
"""
from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable, List, Mapping, Optional, Sequence, TypeVar, Union

from ..exceptions import InvalidInputError

T = TypeVar("T")

Comparator = Callable[[Any, Any], int]
Criterion = Union[str, Comparator]

_MISSING = object()


def get_path(obj: Any, path: str, default: Any = None) -> Any:
    """Resolve a dotted ``path`` against attributes and mapping keys."""
    current = obj
    for segment in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(segment, _MISSING)
        else:
            current = getattr(current, segment, _MISSING)
        if current is _MISSING:
            return default
    return current


def _path_comparator(path: str) -> Comparator:
    def compare(a: Any, b: Any) -> int:
        va, vb = get_path(a, path), get_path(b, path)
        if va is None and vb is None:
            return 0
        if va is None:
            return 1
        if vb is None:
            return -1
        try:
            return (va > vb) - (va < vb)
        except TypeError:
            # Mixed types: compare their string forms.
            sa, sb = str(va), str(vb)
            return (sa > sb) - (sa < sb)

    return compare


def sort_by(
    items: Sequence[T],
    *criteria: Criterion,
    options: Optional[Mapping[str, Any]] = None,
) -> List[T]:
    """Return a new list with ``items`` ordered by ``criteria``.

    Args:
        items: Sequence to sort (not mutated)
        *criteria: Property paths or comparator functions, primary first
        options: ``reverse`` (bool) flips every criterion

    Raises:
        InvalidInputError: If a criterion is neither a string nor callable
    """
    opts = dict(options or {})
    reverse = bool(opts.get("reverse", False))
    result = list(items)
    if not criteria:
        if reverse:
            result.reverse()
        return result

    for criterion in reversed(criteria):
        if isinstance(criterion, str):
            compare = _path_comparator(criterion)
            if reverse:
                # Keep missing values last when flipping direction.
                base = compare

                def compare(a: Any, b: Any, _base: Comparator = base, _path: str = criterion) -> int:
                    if get_path(a, _path) is None or get_path(b, _path) is None:
                        return _base(a, b)
                    return -_base(a, b)

            result.sort(key=cmp_to_key(compare))
        elif callable(criterion):
            result.sort(key=cmp_to_key(criterion), reverse=reverse)
        else:
            raise InvalidInputError(
                f"expected sort criterion to be a string or function, got {type(criterion).__name__}",
                context={"criterion": repr(criterion)},
            )
    return result


__all__ = ["Comparator", "Criterion", "get_path", "sort_by"]
