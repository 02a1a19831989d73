from __future__ import annotations

from concurrent.futures import Future
from typing import List, Optional, Sequence, Tuple

from falling_blocks.game import Grid


class RecordingRenderer:
    """Renderer double that remembers every call."""

    def __init__(self, fill_future: Optional[Future] = None) -> None:
        self.frames: List[Grid] = []
        self.flashes: List[List[int]] = []
        self.fill_calls = 0
        self._fill_future = fill_future

    def render_grid(self, grid: Grid) -> None:
        self.frames.append(grid)

    def flash_rows(self, row_indices: Sequence[int]) -> None:
        self.flashes.append(list(row_indices))

    def fill_animation(self) -> Future:
        self.fill_calls += 1
        if self._fill_future is not None:
            return self._fill_future
        done: Future = Future()
        done.set_result(None)
        return done


class RecordingScoreReporter:
    def __init__(self) -> None:
        self.reports: List[Tuple[int, int, int]] = []

    def render(self, score: int, level: int, lines: int) -> None:
        self.reports.append((score, level, lines))

    @property
    def last(self) -> Tuple[int, int, int]:
        return self.reports[-1]


def filled_rows(cols: int, rows: int, full: Sequence[int], color: int = 1, gap_col: Optional[int] = None) -> Grid:
    """Field with the listed rows filled, optionally leaving one column empty."""
    field = Grid.create(cols, rows)
    for r in full:
        for c in range(cols):
            if c != gap_col:
                field.set_cell(c, r, color)
    return field
