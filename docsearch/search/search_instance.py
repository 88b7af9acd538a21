"""Per-document search session."""

import asyncio
import logging
import re
from enum import StrEnum
from typing import Any

from ..common.pydantic import DisplayState, Match
from ..common.signal import Signal
from ..events import publish
from ..events.search import QueryRejected, QueryStarted, SearchClosed, SearchOpened
from .errors import InvalidQueryError, SearchDisposedError
from .query import build_query, same_query
from .search_provider import SearchProvider, provider_name

logger = logging.getLogger(__name__)


class SearchState(StrEnum):
    """Lifecycle of a search session."""

    IDLE = "idle"
    ACTIVE = "active"
    DISPOSED = "disposed"


def document_key(document: Any) -> str:
    """Identity of a document: its ``id`` attribute when it has one, else its object id."""
    doc_id = getattr(document, "id", None)
    if doc_id is None or doc_id == "":
        return f"{type(document).__name__}@{id(document):x}"
    return str(doc_id)


class SearchInstance:
    """Search session binding one provider to one document.

    Every provider call goes through a per-instance lock, so at most one
    provider operation is in flight and the display state is only updated
    once an operation has completed. A provider failure propagates to the
    caller and leaves the display state at its last good value.
    """

    def __init__(
        self,
        document: Any,
        provider: SearchProvider,
        case_sensitive: bool = False,
        use_regex: bool = False,
    ) -> None:
        """Bind ``provider`` to ``document``."""
        self._document = document
        self._document_id = document_key(document)
        self._provider = provider
        self._display_state = DisplayState(case_sensitive=case_sensitive, use_regex=use_regex)
        self._state = SearchState.IDLE
        # query the provider is running, None until start_query succeeds
        self._active_query: re.Pattern[str] | None = None
        self._closing = False
        self._lock = asyncio.Lock()

        self.display_changed: Signal[DisplayState] = Signal()
        self.disposed: Signal[SearchInstance] = Signal()

        self._provider.changed.connect(self._on_provider_changed)
        publish(SearchOpened(document_id=self._document_id, provider=provider_name(provider)))
        logger.debug("Opened search on %s with %s", self._document_id, provider_name(provider))

    def __repr__(self) -> str:
        return f"SearchInstance(document_id={self._document_id!r}, state={self._state.value})"

    @property
    def document(self) -> Any:
        """The searched document."""
        return self._document

    @property
    def document_id(self) -> str:
        """Key of the searched document."""
        return self._document_id

    @property
    def provider(self) -> SearchProvider:
        """The provider bound at construction."""
        return self._provider

    @property
    def state(self) -> SearchState:
        """Lifecycle state."""
        return self._state

    @property
    def is_disposed(self) -> bool:
        """Whether the session was closed or is closing."""
        return self._closing or self._state is SearchState.DISPOSED

    @property
    def display_state(self) -> DisplayState:
        """Snapshot of the display state."""
        return self._display_state.model_copy()

    def _check_alive(self) -> None:
        if self.is_disposed:
            raise SearchDisposedError(f"Search on {self._document_id!r} is closed")

    def _emit_display(self) -> None:
        self.display_changed.emit(self.display_state)

    def _on_provider_changed(self, _: Any) -> None:
        # changes made during our own operations are picked up when they complete
        if self._lock.locked() or self.is_disposed:
            return
        self.update_indices()

    def update_indices(self) -> None:
        """Copy match count and current index from the provider."""
        matches = self._provider.matches
        index = self._provider.current_match_index
        self._display_state.total_matches = len(matches)
        self._display_state.current_index = index if index is not None and 0 <= index < len(matches) else -1
        self._emit_display()

    def focus_input(self) -> None:
        """Ask the presentation layer to focus the search input on next render."""
        self._check_alive()
        self._display_state.force_focus = True
        self._emit_display()

    def consume_force_focus(self) -> bool:
        """Return the force-focus flag and clear it."""
        force_focus = self._display_state.force_focus
        self._display_state.force_focus = False
        return force_focus

    async def start_query(self, query: re.Pattern[str]) -> None:
        """Replace the active query with ``query``."""
        self._check_alive()
        async with self._lock:
            self._check_alive()
            await self._start_query(query)

    async def _start_query(self, query: re.Pattern[str]) -> None:
        if self._state is SearchState.ACTIVE:
            await self._provider.end_query()
            self._active_query = None
        await self._provider.start_query(query, self._document)
        self._active_query = query
        self._state = SearchState.ACTIVE
        self._display_state.query = query
        self._display_state.error_message = ""
        self.update_indices()
        logger.debug(
            "Query %r on %s found %d matches", query.pattern, self._document_id, self._display_state.total_matches
        )
        publish(
            QueryStarted(
                document_id=self._document_id,
                pattern=query.pattern,
                total_matches=self._display_state.total_matches,
            )
        )

    async def end_query(self) -> None:
        """Drop the active query and its matches, keeping the session open."""
        self._check_alive()
        async with self._lock:
            self._check_alive()
            await self._end_query()

    async def _end_query(self) -> None:
        if self._state is SearchState.ACTIVE:
            await self._provider.end_query()
            self._active_query = None
        self._display_state.query = None
        self._display_state.error_message = ""
        self._display_state.total_matches = 0
        self._display_state.current_index = -1
        self._emit_display()

    async def highlight_next(self) -> Match | None:
        """Select the next match."""
        self._check_alive()
        async with self._lock:
            self._check_alive()
            match = await self._provider.highlight_next()
            self.update_indices()
            return match

    async def highlight_previous(self) -> Match | None:
        """Select the previous match."""
        self._check_alive()
        async with self._lock:
            self._check_alive()
            match = await self._provider.highlight_previous()
            self.update_indices()
            return match

    async def update_input(self, input_text: str) -> None:
        """Handle a change of the search text."""
        self._check_alive()
        self._display_state.input_text = input_text
        await self.refresh_query()

    async def toggle_case_sensitive(self) -> None:
        """Flip case sensitivity and rerun the query."""
        self._check_alive()
        self._display_state.case_sensitive = not self._display_state.case_sensitive
        await self.refresh_query()

    async def toggle_use_regex(self) -> None:
        """Flip regex mode and rerun the query."""
        self._check_alive()
        self._display_state.use_regex = not self._display_state.use_regex
        await self.refresh_query()

    def _compile(self, input_text: str, case_sensitive: bool, use_regex: bool) -> re.Pattern[str] | None:
        """Compile input, recording a rejection in the display state. ``None`` means rejected."""
        try:
            return build_query(input_text, case_sensitive, use_regex)
        except InvalidQueryError as e:
            logger.warning("Rejected query on %s: %s", self._document_id, e)
            self._display_state.error_message = e.reason
            self._emit_display()
            publish(QueryRejected(document_id=self._document_id, input_text=input_text, error_message=e.reason))
            return None

    async def refresh_query(self) -> None:
        """Run the query described by the current input, if it differs from the active one."""
        await self.execute_search(navigate=False)

    async def execute_search(self, go_forward: bool = True, navigate: bool = True) -> None:
        """Run the current input as a query, or move through matches if it is already running.

        Empty input ends the active query. Input that does not compile only sets
        the error message; the provider is not called and previous matches stay.
        """
        self._check_alive()
        # capture the input now, later input events queue behind us on the lock
        state = self._display_state
        input_text, case_sensitive, use_regex = state.input_text, state.case_sensitive, state.use_regex
        async with self._lock:
            self._check_alive()
            if not input_text:
                await self._end_query()
                return
            query = self._compile(input_text, case_sensitive, use_regex)
            if query is None:
                return
            if not same_query(query, self._active_query):
                await self._start_query(query)
                return
            if self._display_state.error_message:
                self._display_state.error_message = ""
                self._emit_display()
            if navigate:
                if go_forward:
                    await self._provider.highlight_next()
                else:
                    await self._provider.highlight_previous()
                self.update_indices()

    async def dispose(self) -> None:
        """Tear down the provider and close the session. Later calls do nothing.

        The session is closed even if the provider fails to tear down; the
        failure is then raised to the caller.
        """
        if self.is_disposed:
            return
        self._closing = True
        async with self._lock:
            try:
                await self._provider.end_search()
            finally:
                self._state = SearchState.DISPOSED
                self._provider.changed.disconnect(self._on_provider_changed)
                logger.debug("Closed search on %s", self._document_id)
                publish(SearchClosed(document_id=self._document_id))
                self.disposed.emit(self)
                self.display_changed.disconnect_all()
