"""Search provider for documents made of cells."""

import logging
import re
from typing import Any

from pydantic import BaseModel, Field, PrivateAttr

from ..common.pydantic import Match
from ..common.signal import Signal
from ..documents.text_document import CellDocument, Span, TextDocument
from ..search.errors import DocumentClosedError, SearchDisposedError
from .text.matching import FRAGMENT_WIDTH, find_matches, step

logger = logging.getLogger(__name__)


class CellDocumentSearchProvider(BaseModel):
    """Searches every cell of a ``CellDocument`` in order.

    Matches are numbered across the whole document; ``line`` and ``column``
    are relative to the cell holding the match.
    """

    fragment_width: int = Field(default=FRAGMENT_WIDTH, ge=0, description="Context characters around a match.")

    _document: CellDocument | None = PrivateAttr(default=None)
    _query: re.Pattern[str] | None = PrivateAttr(default=None)
    _cells: list[TextDocument] = PrivateAttr(default_factory=list)
    _locations: list[tuple[TextDocument, Span]] = PrivateAttr(default_factory=list)
    _matches: list[Match] = PrivateAttr(default_factory=list)
    _current: int | None = PrivateAttr(default=None)
    _ended: bool = PrivateAttr(default=False)
    _changed: Signal[Any] = PrivateAttr(default_factory=Signal)

    @staticmethod
    def can_search_on(document: Any) -> bool:
        """Cell documents only."""
        return isinstance(document, CellDocument)

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

    def _follow_cells(self) -> None:
        """Track text changes of the document's current cells."""
        assert self._document is not None
        for cell in self._cells:
            cell.changed.disconnect(self._on_content_changed)
        self._cells = self._document.cells
        for cell in self._cells:
            cell.changed.connect(self._on_content_changed)

    def _find(self) -> None:
        assert self._query is not None
        self._locations = []
        self._matches = []
        for cell in self._cells:
            for span, match in find_matches(
                self._query, cell.text, first_index=len(self._matches), fragment_width=self.fragment_width
            ):
                self._locations.append((cell, span))
                self._matches.append(match)

    def _decorate(self) -> None:
        current = self._locations[self._current] if self._current is not None else None
        for cell in self._cells:
            spans = [span for owner, span in self._locations if owner is cell]
            cell.set_decorations(spans, current[1] if current is not None and current[0] is cell else None)

    def _clear_decorations(self) -> None:
        for cell in self._cells:
            cell.clear_decorations()

    def _on_content_changed(self, _: Any) -> None:
        if self._ended or self._document is None:
            return
        if self._query is None:
            self._follow_cells()
            return
        self._clear_decorations()
        self._follow_cells()
        self._find()
        if self._current is not None and self._current >= len(self._matches):
            self._current = None
        self._decorate()
        self._changed.emit(None)

    async def start_query(self, query: re.Pattern[str], search_target: Any) -> list[Match]:
        """Highlight every match of ``query`` in every cell."""
        if not isinstance(search_target, CellDocument):
            raise TypeError(f"Cannot search {search_target!r}")
        if self._document is not search_target:
            if self._document is not None:
                self._document.changed.disconnect(self._on_content_changed)
            self._document = search_target
            search_target.changed.connect(self._on_content_changed)
        self._check_open()
        self._follow_cells()
        self._query = query
        self._current = None
        self._find()
        self._decorate()
        self._changed.emit(None)
        return list(self._matches)

    async def end_query(self) -> None:
        """Forget the active query and remove its highlights."""
        if self._query is None and not self._matches:
            return
        self._query = None
        self._locations = []
        self._matches = []
        self._current = None
        self._clear_decorations()
        self._changed.emit(None)

    async def end_search(self) -> None:
        """Remove all decoration and stop following the document."""
        if self._ended:
            return
        await self.end_query()
        self._clear_decorations()
        for cell in self._cells:
            cell.changed.disconnect(self._on_content_changed)
        if self._document is not None:
            self._document.changed.disconnect(self._on_content_changed)
        self._cells = []
        self._document = None
        self._ended = True

    async def _highlight(self, forward: bool) -> Match | None:
        self._check_open()
        self._current = step(self._current, len(self._matches), forward)
        if self._current is None:
            return None
        cell, span = self._locations[self._current]
        cell.selection = span
        self._decorate()
        self._changed.emit(None)
        logger.debug("Selected match %d of %d", self._current, len(self._matches))
        return self._matches[self._current]

    async def highlight_next(self) -> Match | None:
        """Select the next match."""
        return await self._highlight(forward=True)

    async def highlight_previous(self) -> Match | None:
        """Select the previous match."""
        return await self._highlight(forward=False)
