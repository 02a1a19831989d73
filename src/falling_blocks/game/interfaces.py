"""Contracts for the collaborators the game loop talks to.

The engine never draws, reads keys or keeps time itself. It calls a
Renderer, a ScoreReporter and a Timer that the embedding application
supplies; anything satisfying these protocols will do.
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import TYPE_CHECKING, Callable, Protocol, Sequence

if TYPE_CHECKING:
    from .grid import Grid


TickHandler = Callable[[], None]


class Renderer(Protocol):
    def render_grid(self, grid: "Grid") -> None:
        """Draw ``grid`` as the current picture."""

    def flash_rows(self, row_indices: Sequence[int]) -> None:
        """Start a short highlight of cleared rows. Must not block."""

    def fill_animation(self) -> "Future[None]":
        """Start the game-over fill; the future completes when it ends."""


class ScoreReporter(Protocol):
    def render(self, score: int, level: int, lines: int) -> None:
        ...


class Timer(Protocol):
    def start(self) -> None:
        ...

    def stop(self) -> None:
        ...

    def set_interval(self, interval_ms: int) -> None:
        """Change the period; takes effect from the next scheduled firing."""

    def on_tick(self, handler: TickHandler) -> None:
        """Register the single tick handler, replacing any earlier one."""


def completed_future() -> "Future[None]":
    future: "Future[None]" = Future()
    future.set_result(None)
    return future


class NullRenderer:
    def render_grid(self, grid: "Grid") -> None:
        pass

    def flash_rows(self, row_indices: Sequence[int]) -> None:
        pass

    def fill_animation(self) -> "Future[None]":
        return completed_future()


class NullScoreReporter:
    def render(self, score: int, level: int, lines: int) -> None:
        pass
