"""Status bar widget for the DocSearch app."""

from typing import Any

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Label

from ...events import get_events
from ...events.search import QueryRejected, QueryStarted, SearchClosed, SearchEvent, SearchOpened

REFRESH_INTERVAL = 0.2


def describe_event(event: SearchEvent) -> str:
    """One-line description of a search event."""
    if isinstance(event, SearchOpened):
        return f"Searching with {event.provider}"
    if isinstance(event, QueryStarted):
        return f"{event.total_matches} matches for {event.pattern!r}"
    if isinstance(event, QueryRejected):
        return f"Invalid query: {event.error_message}"
    if isinstance(event, SearchClosed):
        return "Search closed"
    return ""


class StatusBar(Horizontal):
    """A thin bottom bar showing the latest search activity and the number of open searches."""

    def __init__(self, *args: Any, **kwargs: Any):
        """Initialize the status bar."""
        super().__init__(*args, **kwargs)
        self.activity_text = Label("", id="activity_text")
        self.spacer = Container(id="status_spacer")
        self.status_text = Label("Ready", id="status_text")
        self.active_searches = 0
        self._last_t: int | None = None

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield self.activity_text
        yield self.spacer
        yield self.status_text

    def on_mount(self) -> None:
        """Poll the event bus."""
        events = get_events(None, limit=1)
        self._last_t = events[-1].event_t if events else None
        self.set_interval(REFRESH_INTERVAL, self.refresh_status)

    def refresh_status(self) -> None:
        """Show the newest search event and the open search count."""
        events = get_events(SearchEvent, after_t=self._last_t)
        if events:
            self._last_t = events[-1].event_t
            self.activity_text.update(describe_event(events[-1]))
        if self.active_searches:
            self.status_text.update(f"{self.active_searches} open searches")
        else:
            self.status_text.update("Ready")
