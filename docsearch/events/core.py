"""A small, thread-safe, in-process event bus.

Components publish immutable events describing what happened to a search
session; observers such as the status bar read them back
by type and time without holding references to the publishers.
"""

import threading
import time
from collections import deque
from typing import Any

from pydantic import Field

from ..common.pydantic import FrozenBaseModel


class Event(FrozenBaseModel):
    """Base class for all events, stamped with a publication time."""

    event_t: int = Field(default_factory=time.time_ns)


class EventBus:
    """Event bus implementation."""

    def __init__(self, history_size: int) -> None:
        """Initialize the event bus."""
        self._events: deque[Event] = deque(maxlen=history_size)
        self._lock = threading.Lock()

    def submit_event(self, event: Event) -> None:
        """Submit an event to the event bus."""
        with self._lock:
            self._events.append(event)

    def get_events(
        self, event_type: type[Event] | type[Any] | None, after_t: int | None = None, limit: int | None = None
    ) -> list[Event]:
        """Get events from the event bus, oldest first."""
        result = []
        with self._lock:
            snapshot = list(self._events)
        for ev in reversed(snapshot):
            if after_t is not None and ev.event_t <= after_t:
                break
            if event_type is None or isinstance(ev, event_type):
                result.append(ev)
                if limit is not None and len(result) >= limit:
                    break
        return result[::-1]

    def clear(self) -> None:
        """Forget all recorded events."""
        with self._lock:
            self._events.clear()
