"""Debounced runner."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any


class AsyncDebouncedRunner:
    """Debounced runner."""

    def __init__(self, delay: float):
        """Initialize the debounced runner."""
        self._delay = delay
        self._task: asyncio.Task | None = None

    def cancel(self) -> None:
        """Cancel the debounced runner."""
        if self._task and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run_func(self, func: Callable[[], Any | Awaitable[Any]]) -> Any:
        """Run the function."""
        await asyncio.sleep(self._delay)
        # once started the function runs to completion
        self._task = None
        result = func()
        if isinstance(result, Awaitable):
            return await result
        else:
            return result

    def submit(self, func: Callable[[], Any | Awaitable[Any]]) -> asyncio.Task[Any]:
        """Run the function once no further submit arrives within the delay."""
        self.cancel()
        self._task = asyncio.create_task(self._run_func(func))
        return self._task
