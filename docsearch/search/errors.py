"""Search errors."""


class SearchError(Exception):
    """Base class for document search errors."""


class InvalidQueryError(SearchError, ValueError):
    """User input could not be compiled into a query."""

    def __init__(self, input_text: str, reason: str) -> None:
        """Store the offending input and the compiler's complaint."""
        super().__init__(f"Invalid query {input_text!r}: {reason}")
        self.input_text = input_text
        self.reason = reason


class SearchDisposedError(SearchError, RuntimeError):
    """An operation was requested on a search session that was already closed."""


class SearchAlreadyActiveError(SearchError, KeyError):
    """A second search session was registered for the same document."""


class DocumentClosedError(SearchError):
    """The searched document was closed while a search was running on it."""
