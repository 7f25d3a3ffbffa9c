"""Provider registration for ``Storage``."""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from storage.core.entity.protocols import ProviderLike
from storage.core.exceptions import InvalidInputError, ProviderNotFoundError

logger = logging.getLogger(__name__)


class ProviderRegistryMixin:
    """Named provider registry.

    Expects ``providers``, ``provider_settings`` and ``options`` on the host.
    """

    providers: Dict[str, Any]
    provider_settings: Dict[str, Dict[str, Any]]
    options: dict

    def provider(
        self,
        name: Union[str, Sequence[str]],
        provider: Any = None,
        settings: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Register ``provider`` under ``name`` (or each of several names).

        Called with a name only, returns the registered provider.

        Example:
            app.provider("memory", MemoryProvider())
            memory = app.provider("memory")
        """
        if provider is None and settings is None:
            if not isinstance(name, str):
                raise InvalidInputError("expected provider name to be a string")
            return self.get_provider(name)

        if isinstance(name, str):
            names = [name]
        elif isinstance(name, (list, tuple)):
            names = list(name)
        else:
            names = []
        if not names or not all(isinstance(n, str) and n for n in names):
            raise InvalidInputError("expected provider name to be a string")
        for n in names:
            self.set_provider(n, provider, settings)
        return self

    def set_provider(self, name: str, provider: Any, settings: Optional[Mapping[str, Any]] = None) -> Any:
        if not isinstance(provider, ProviderLike):
            raise InvalidInputError(
                f"expected provider '{name}' to implement create() and get_collection()",
                context={"provider": name},
            )
        logger.debug("registering provider %r", name)
        self.providers[name] = provider
        self.provider_settings[name] = dict(settings or getattr(provider, "settings", None) or {})
        return self

    def get_provider(self, name: Optional[str] = None) -> Any:
        """Return the provider registered as ``name``.

        Falls back to the provider named by the ``provider`` option. Returns
        None when neither is registered.
        """
        if name and name in self.providers:
            return self.providers[name]
        fallback = self.options.get("provider")
        if fallback:
            return self.providers.get(fallback)
        return None

    def require_provider(self, name: str) -> Any:
        """Like ``get_provider``, but raise when nothing is registered."""
        provider = self.get_provider(name)
        if provider is None:
            raise ProviderNotFoundError(
                f"provider '{name}' is not registered",
                context={"provider": name, "registered": sorted(self.providers)},
            )
        return provider


__all__ = ["ProviderRegistryMixin"]
