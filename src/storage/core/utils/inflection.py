"""Singular/plural name resolution for collection names.

The registry consumes any object with ``single(name)`` and ``plural(name)``
(see ``storage.core.entity.protocols.Inflector``). ``Inflector`` is the
default implementation, backed by the ``inflection`` library.
"""
from __future__ import annotations

from functools import lru_cache

import inflection


class Inflector:
    """Resolve collection names to their singular and plural forms.

    Either spelling may be passed in: ``single("pages")`` and
    ``single("page")`` both return ``"page"``.
    """

    def single(self, name: str) -> str:
        return _single(name)

    def plural(self, name: str) -> str:
        return _plural(name)


@lru_cache(maxsize=256)
def _single(name: str) -> str:
    return inflection.singularize(name)


@lru_cache(maxsize=256)
def _plural(name: str) -> str:
    return inflection.pluralize(inflection.singularize(name))


__all__ = ["Inflector"]
