"""Search command provider."""

from collections.abc import Callable
from typing import Any

from textual.command import DiscoveryHit, Hit, Hits, Provider

SEARCH_COMMANDS = [
    ("Search the open document", "action_start_search"),
    ("Next match in open document", "action_highlight_next"),
    ("Previous match in open document", "action_highlight_previous"),
]


class SearchCommands(Provider):
    """Exposes the document search commands in the command palette."""

    def _commands(self) -> list[tuple[str, Callable[[], Any]]]:
        return [(label, getattr(self.app, action)) for label, action in SEARCH_COMMANDS]

    async def discover(self) -> Hits:
        """List every search command."""
        for label, callback in self._commands():
            yield DiscoveryHit(label, callback, help="Document search")

    async def search(self, query: str) -> Hits:
        """Return the commands matching ``query``."""
        matcher = self.matcher(query)
        for label, callback in self._commands():
            score = matcher.match(label)
            if score > 0:
                yield Hit(score, matcher.highlight(label), callback, help="Document search")
