"""Search provider registry."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .search_provider import SearchProvider, SearchProviderConstructor, provider_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Registration:
    provider: SearchProviderConstructor
    factory: Callable[[], SearchProvider]


class SearchProviderRegistry:
    """Ordered set of provider classes, resolved first-match-wins.

    Register specific providers before general fallbacks: the first class whose
    ``can_search_on`` accepts a document is the one used.
    """

    def __init__(self, providers: list[SearchProviderConstructor] | None = None) -> None:
        """Initialize the registry with an optional initial provider list."""
        self._registrations: list[_Registration] = []
        for provider in providers or []:
            self.register(provider)

    def __len__(self) -> int:
        """Number of registered provider classes."""
        return len(self._registrations)

    def __contains__(self, provider: object) -> bool:
        """Whether a provider class is registered."""
        return any(r.provider is provider for r in self._registrations)

    @property
    def providers(self) -> list[SearchProviderConstructor]:
        """Registered provider classes, in resolution order."""
        return [r.provider for r in self._registrations]

    def register(
        self, provider: SearchProviderConstructor, factory: Callable[[], SearchProvider] | None = None
    ) -> None:
        """Append a provider class.

        ``factory`` builds the provider instances and defaults to calling the
        class. Registering a class again keeps its original position.
        """
        if provider in self:
            return
        self._registrations.append(_Registration(provider, factory or provider))
        logger.debug("Registered search provider %s", provider_name(provider))

    def unregister(self, provider: SearchProviderConstructor) -> bool:
        """Remove a provider class; return ``True`` if it was registered."""
        before = len(self._registrations)
        self._registrations = [r for r in self._registrations if r.provider is not provider]
        return len(self._registrations) < before

    def get_provider_for_widget(self, document: Any) -> SearchProvider | None:
        """Build a provider for ``document``, or return ``None`` if none applies."""
        for registration in self._registrations:
            if registration.provider.can_search_on(document):
                logger.debug("Resolved %s for %r", provider_name(registration.provider), document)
                return registration.factory()
        logger.debug("No search provider for %r", document)
        return None
