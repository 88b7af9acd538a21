"""Search provider capability contract.

Providers are matched structurally: a class qualifies by exposing the methods
below and a static ``can_search_on`` predicate. Nothing needs to inherit from
anything in this module.
"""

import re
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from ..common.pydantic import Match
from ..common.signal import Signal


@runtime_checkable
class SearchProvider(Protocol):
    """Document-type specific search implementation."""

    @property
    def matches(self) -> Sequence[Match]:
        """The matches found by the most recent ``start_query``."""
        ...

    @property
    def current_match_index(self) -> int | None:
        """Index of the selected match, or ``None`` when nothing is selected."""
        ...

    @property
    def changed(self) -> Signal[Any]:
        """Emits whenever ``matches`` or ``current_match_index`` change."""
        ...

    async def start_query(self, query: re.Pattern[str], search_target: Any) -> list[Match]:
        """Find all matches of ``query`` in ``search_target`` and decorate them.

        Resets match bookkeeping. Must be preceded by ``end_query`` when a
        previous query ran on the same provider.
        """
        ...

    async def end_query(self) -> None:
        """Clear match state so ``start_query`` can run again. Idempotent."""
        ...

    async def end_search(self) -> None:
        """Remove all decoration and release document resources. Terminal."""
        ...

    async def highlight_next(self) -> Match | None:
        """Select the next match, wrapping from the last to the first."""
        ...

    async def highlight_previous(self) -> Match | None:
        """Select the previous match, wrapping from the first to the last."""
        ...


class SearchProviderConstructor(Protocol):
    """A provider class: builds providers and reports what it can search."""

    def __call__(self) -> SearchProvider:
        """Construct a fresh provider."""
        ...

    def can_search_on(self, document: Any) -> bool:
        """Report whether providers of this type can search ``document``."""
        ...


def provider_name(provider: SearchProvider | SearchProviderConstructor) -> str:
    """Human readable name of a provider or provider class."""
    cls = provider if isinstance(provider, type) else type(provider)
    return cls.__name__
