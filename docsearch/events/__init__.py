"""Events."""

from typing import Any

from .core import Event, EventBus

HISTORY_SIZE = 100_000

_default_event_bus = EventBus(HISTORY_SIZE)


def publish(event: Event) -> None:
    """Publish an event."""
    return _default_event_bus.submit_event(event)


def get_events(
    event_type: type[Event] | type[Any] | None, after_t: int | None = None, limit: int | None = None
) -> list[Event]:
    """Get events from the event bus."""
    return _default_event_bus.get_events(event_type=event_type, after_t=after_t, limit=limit)


def clear_events() -> None:
    """Drop the recorded history."""
    _default_event_bus.clear()


__all__ = ["Event", "EventBus", "clear_events", "get_events", "publish"]
