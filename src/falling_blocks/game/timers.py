from __future__ import annotations

import asyncio
from typing import Optional

from .errors import TimerError
from .interfaces import TickHandler


class ManualTimer:
    """Timer that only fires when told to.

    Used by the gym environment and by tests: each :meth:`tick` call is one
    gravity step. The interval is recorded but never waited on.
    """

    def __init__(self) -> None:
        self.running = False
        self.interval_ms: Optional[int] = None
        self.ticks = 0
        self._handler: Optional[TickHandler] = None
        self._in_tick = False

    def start(self) -> None:
        self.running = True

    def stop(self) -> None:
        self.running = False

    def set_interval(self, interval_ms: int) -> None:
        self.interval_ms = int(interval_ms)

    def on_tick(self, handler: TickHandler) -> None:
        self._handler = handler

    def tick(self) -> bool:
        """Fire once. Returns False when the timer is stopped."""
        if not self.running or self._handler is None:
            return False
        if self._in_tick:
            raise TimerError("tick() called from inside a tick handler")
        self._in_tick = True
        try:
            self._handler()
        finally:
            self._in_tick = False
        self.ticks += 1
        return True


class AsyncioTimer:
    """Periodic timer on an asyncio event loop.

    The next firing is scheduled only after the handler has returned, so
    ticks never overlap, and it uses whatever interval is current at that
    point. ``start`` must be called from a running loop unless one is given.
    """

    def __init__(self, interval_ms: int = 1000, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.interval_ms = int(interval_ms)
        self.running = False
        self._loop = loop
        self._handler: Optional[TickHandler] = None
        self._pending: Optional[asyncio.TimerHandle] = None

    def start(self) -> None:
        if self.running:
            return
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self.running = True
        self._schedule()

    def stop(self) -> None:
        self.running = False
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def set_interval(self, interval_ms: int) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.interval_ms = int(interval_ms)

    def on_tick(self, handler: TickHandler) -> None:
        self._handler = handler

    def _schedule(self) -> None:
        assert self._loop is not None
        self._pending = self._loop.call_later(self.interval_ms / 1000.0, self._fire)

    def _fire(self) -> None:
        self._pending = None
        if not self.running:
            return
        if self._handler is not None:
            self._handler()
        # The handler may have stopped us (game over)
        if self.running:
            self._schedule()
