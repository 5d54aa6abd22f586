"""Trailing-edge debouncing on the running event loop."""

import asyncio
from typing import Any, Callable, Optional


class Debouncer:
    """Run a callback once calls have been quiet for ``delay`` seconds.

    Each call replaces the pending one, so only the most recent callback
    and arguments fire. Must be used from inside a running event loop.
    """

    def __init__(self, delay: float) -> None:
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def call(self, callback: Callable[..., Any], *args: Any) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, callback, args)

    def cancel(self) -> bool:
        """Drop the pending callback; returns whether one was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    def _fire(self, callback: Callable[..., Any], args: tuple) -> None:
        self._handle = None
        callback(*args)
