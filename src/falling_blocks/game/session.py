from __future__ import annotations

import asyncio
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Callable, Generator, Optional


@dataclass(frozen=True)
class ScoreSnapshot:
    score: int
    level: int
    lines: int


class SessionHandle:
    """One-shot result of a play session.

    Resolves exactly once, at game over, to the final :class:`ScoreSnapshot`.
    It can be polled, given callbacks, or awaited; awaiting a handle that has
    already resolved returns straight away.
    """

    def __init__(self) -> None:
        self._future: "Future[ScoreSnapshot]" = Future()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: Optional[float] = None) -> ScoreSnapshot:
        return self._future.result(timeout)

    def add_done_callback(self, fn: Callable[[ScoreSnapshot], Any]) -> None:
        self._future.add_done_callback(lambda fut: fn(fut.result()))

    def resolve(self, snapshot: ScoreSnapshot) -> None:
        # Future.set_result raises InvalidStateError on a second call
        self._future.set_result(snapshot)

    def __await__(self) -> Generator[Any, None, ScoreSnapshot]:
        return asyncio.wrap_future(self._future).__await__()

    def __repr__(self) -> str:
        state = repr(self._future.result()) if self.done() else "pending"
        return f"SessionHandle({state})"
