"""Test utilities and fake implementations."""

import asyncio
import re
from typing import Any

from docsearch.common.pydantic import Match
from docsearch.common.signal import Signal


class FakeDocument:
    """Bare document object that only fake providers accept."""

    def __init__(self, text: str, doc_id: str | None = None):
        """Store the document text."""
        self.text = text
        if doc_id is not None:
            self.id = doc_id


class OtherDocument(FakeDocument):
    """Document that the more specific fake provider accepts."""


class ProviderFault(Exception):
    """Failure raised by the fake provider on request."""


class FakeSearchProvider:
    """Provider recording its calls, with optional gating and injected failures."""

    def __init__(self) -> None:
        """Initialize empty bookkeeping."""
        self.calls: list[str] = []
        self.fail_on: set[str] = set()
        self.gate: asyncio.Event | None = None
        self.in_flight = 0
        self.max_in_flight = 0
        self._matches: list[Match] = []
        self._current: int | None = None
        self._changed: Signal[Any] = Signal()

    @staticmethod
    def can_search_on(document: Any) -> bool:
        """Accept every fake document."""
        return isinstance(document, FakeDocument)

    @property
    def matches(self) -> list[Match]:
        """Current matches."""
        return list(self._matches)

    @property
    def current_match_index(self) -> int | None:
        """Selected match."""
        return self._current

    @property
    def changed(self) -> Signal[Any]:
        """Change notifications."""
        return self._changed

    async def _call(self, name: str) -> None:
        self.calls.append(name)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.gate is not None:
                await self.gate.wait()
            await asyncio.sleep(0)
            if name in self.fail_on:
                raise ProviderFault(name)
        finally:
            self.in_flight -= 1

    async def start_query(self, query: re.Pattern[str], search_target: Any) -> list[Match]:
        """Match against the document text."""
        await self._call("start_query")
        self._matches = [
            Match(text=m.group(), fragment=search_target.text, line=0, column=m.start(), index=i)
            for i, m in enumerate(query.finditer(search_target.text))
        ]
        self._current = None
        self._changed.emit(None)
        return list(self._matches)

    async def end_query(self) -> None:
        """Clear matches."""
        await self._call("end_query")
        self._matches = []
        self._current = None
        self._changed.emit(None)

    async def end_search(self) -> None:
        """Record the teardown."""
        await self._call("end_search")

    async def highlight_next(self) -> Match | None:
        """Select the next match."""
        await self._call("highlight_next")
        if not self._matches:
            return None
        self._current = 0 if self._current is None else (self._current + 1) % len(self._matches)
        return self._matches[self._current]

    async def highlight_previous(self) -> Match | None:
        """Select the previous match."""
        await self._call("highlight_previous")
        if not self._matches:
            return None
        count = len(self._matches)
        self._current = count - 1 if self._current is None else (self._current - 1) % count
        return self._matches[self._current]


class SpecificSearchProvider(FakeSearchProvider):
    """Fake provider that only accepts ``OtherDocument``."""

    @staticmethod
    def can_search_on(document: Any) -> bool:
        """Accept only the specific document type."""
        return isinstance(document, OtherDocument)


async def settle(rounds: int = 5) -> None:
    """Let pending tasks run up to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)
