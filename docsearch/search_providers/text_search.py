"""Search provider for plain text documents."""

import re
from typing import Any

from pydantic import BaseModel, Field, PrivateAttr

from ..common.pydantic import Match
from ..common.signal import Signal
from ..documents.text_document import Span, TextDocument
from ..search.errors import DocumentClosedError, SearchDisposedError
from .text.matching import FRAGMENT_WIDTH, find_matches, step


class TextDocumentSearchProvider(BaseModel):
    """Finds matches in a single ``TextDocument`` and decorates them in place."""

    fragment_width: int = Field(default=FRAGMENT_WIDTH, ge=0, description="Context characters around a match.")

    _document: TextDocument | None = PrivateAttr(default=None)
    _query: re.Pattern[str] | None = PrivateAttr(default=None)
    _spans: list[Span] = PrivateAttr(default_factory=list)
    _matches: list[Match] = PrivateAttr(default_factory=list)
    _current: int | None = PrivateAttr(default=None)
    _ended: bool = PrivateAttr(default=False)
    _changed: Signal[Any] = PrivateAttr(default_factory=Signal)

    @staticmethod
    def can_search_on(document: Any) -> bool:
        """Plain text documents only."""
        return isinstance(document, TextDocument)

    @property
    def matches(self) -> list[Match]:
        """Matches of the active query."""
        return list(self._matches)

    @property
    def current_match_index(self) -> int | None:
        """Index of the selected match."""
        return self._current

    @property
    def changed(self) -> Signal[Any]:
        """Change notifications."""
        return self._changed

    def _check_open(self) -> None:
        if self._ended:
            raise SearchDisposedError("Search provider was already ended")
        if self._document is not None and self._document.closed:
            raise DocumentClosedError(f"{self._document!r} was closed")

    def _find(self) -> None:
        assert self._document is not None and self._query is not None
        found = find_matches(self._query, self._document.text, fragment_width=self.fragment_width)
        self._spans = [span for span, _ in found]
        self._matches = [match for _, match in found]

    def _decorate(self) -> None:
        assert self._document is not None
        current = self._spans[self._current] if self._current is not None else None
        self._document.set_decorations(self._spans, current)

    def _on_text_changed(self, _: TextDocument) -> None:
        if self._query is None or self._ended:
            return
        self._find()
        if self._current is not None and self._current >= len(self._matches):
            self._current = None
        self._decorate()
        self._changed.emit(None)

    async def start_query(self, query: re.Pattern[str], search_target: Any) -> list[Match]:
        """Highlight every match of ``query``; nothing is selected until navigation."""
        if not isinstance(search_target, TextDocument):
            raise TypeError(f"Cannot search {search_target!r}")
        if self._document is not search_target:
            if self._document is not None:
                self._document.changed.disconnect(self._on_text_changed)
            self._document = search_target
            search_target.changed.connect(self._on_text_changed)
        self._check_open()
        self._query = query
        self._current = None
        self._find()
        self._decorate()
        self._changed.emit(None)
        return list(self._matches)

    async def end_query(self) -> None:
        """Forget the active query and remove its highlights. The selection stays."""
        if self._query is None and not self._matches:
            return
        self._query = None
        self._spans = []
        self._matches = []
        self._current = None
        if self._document is not None:
            self._document.clear_decorations()
        self._changed.emit(None)

    async def end_search(self) -> None:
        """Remove all decoration and stop following the document."""
        if self._ended:
            return
        await self.end_query()
        if self._document is not None:
            self._document.changed.disconnect(self._on_text_changed)
            self._document.clear_decorations()
        self._ended = True
        self._document = None

    async def _highlight(self, forward: bool) -> Match | None:
        self._check_open()
        self._current = step(self._current, len(self._matches), forward)
        if self._current is None:
            return None
        assert self._document is not None
        self._document.selection = self._spans[self._current]
        self._decorate()
        self._changed.emit(None)
        return self._matches[self._current]

    async def highlight_next(self) -> Match | None:
        """Select the next match."""
        return await self._highlight(forward=True)

    async def highlight_previous(self) -> Match | None:
        """Select the previous match."""
        return await self._highlight(forward=False)
