"""Synchronous notification channel."""

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class Signal(Generic[T]):
    """A list of callbacks invoked in connection order on every emit."""

    def __init__(self) -> None:
        """Initialize the signal with no listeners."""
        self._callbacks: list[Callable[[T], object]] = []

    def connect(self, callback: Callable[[T], object]) -> None:
        """Connect a callback. Connecting the same callback twice is a no-op."""
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def disconnect(self, callback: Callable[[T], object]) -> bool:
        """Disconnect a callback; return ``True`` if it was connected."""
        try:
            self._callbacks.remove(callback)
        except ValueError:
            return False
        return True

    def disconnect_all(self) -> None:
        """Drop every listener."""
        self._callbacks.clear()

    def emit(self, value: T) -> None:
        """Call every listener with ``value``."""
        # listeners may disconnect themselves while being called
        for callback in list(self._callbacks):
            callback(value)
