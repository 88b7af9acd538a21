"""Search session events."""

from . import Event


class SearchEvent(Event):
    """Event concerning the search session of one document."""

    document_id: str


class SearchOpened(SearchEvent):
    """A search session was created for a document."""

    provider: str


class QueryStarted(SearchEvent):
    """A query ran to completion on a document."""

    pattern: str
    total_matches: int


class QueryRejected(SearchEvent):
    """User input did not compile to a query."""

    input_text: str
    error_message: str


class SearchClosed(SearchEvent):
    """A search session was torn down."""
