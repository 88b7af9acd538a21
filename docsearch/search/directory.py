"""Directory of live search sessions."""

import logging
from collections.abc import Iterator
from typing import Any

from .errors import SearchAlreadyActiveError
from .search_instance import SearchInstance, document_key

logger = logging.getLogger(__name__)


class ActiveSearchDirectory:
    """Maps document keys to their live search session.

    Holds at most one session per document. Entries are removed by the
    session's own ``disposed`` signal, never by commands.
    """

    def __init__(self) -> None:
        """Initialize an empty directory."""
        self._searches: dict[str, SearchInstance] = {}

    def __len__(self) -> int:
        """Number of live sessions."""
        return len(self._searches)

    def __contains__(self, document_id: object) -> bool:
        """Whether a session exists for ``document_id``."""
        return document_id in self._searches

    def __iter__(self) -> Iterator[str]:
        """Iterate over document keys with a live session."""
        return iter(list(self._searches))

    def lookup(self, document_id: str) -> SearchInstance | None:
        """Return the live session for ``document_id``, if any."""
        return self._searches.get(document_id)

    def lookup_document(self, document: Any) -> SearchInstance | None:
        """Return the live session for a document object, if any."""
        return self.lookup(document_key(document))

    def register(self, document_id: str, instance: SearchInstance) -> None:
        """Add a session and arrange for its removal when it is disposed.

        Raises:
            SearchAlreadyActiveError: ``document_id`` already has a session.
        """
        if document_id in self._searches:
            raise SearchAlreadyActiveError(document_id)
        if instance.is_disposed:
            raise ValueError(f"Cannot register closed search for {document_id!r}")
        self._searches[document_id] = instance
        instance.disposed.connect(lambda disposed: self.on_dispose(document_id, disposed))
        logger.debug("Registered search for %s (%d active)", document_id, len(self._searches))

    def on_dispose(self, document_id: str, instance: SearchInstance | None = None) -> None:
        """Remove the entry of a disposed session.

        When ``instance`` is given the entry is only removed if it is still the
        one registered for ``document_id``.
        """
        current = self._searches.get(document_id)
        if current is None or (instance is not None and current is not instance):
            return
        del self._searches[document_id]
        logger.debug("Removed search for %s (%d active)", document_id, len(self._searches))

    async def dispose_all(self) -> None:
        """Close every live session, e.g. on application shutdown."""
        for document_id in list(self._searches):
            instance = self._searches.get(document_id)
            if instance is not None:
                await instance.dispose()
