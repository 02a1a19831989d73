from __future__ import annotations

import sys
from concurrent.futures import Future
from typing import Optional, Sequence, TextIO, Tuple, Union

import numpy as np

from falling_blocks.game import Grid
from falling_blocks.game.config import DEFAULT_PALETTE, hex_to_rgb
from falling_blocks.game.interfaces import completed_future


Palette = Sequence[Tuple[int, int, int]]

FILLED = "█"
EMPTY = "·"
FLASH = "="


def _as_array(grid: Union[Grid, np.ndarray]) -> np.ndarray:
    return grid.to_array() if isinstance(grid, Grid) else np.asarray(grid)


def _color_for_value(v: int, palette: Palette) -> Tuple[int, int, int]:
    if 0 <= v < len(palette):
        return palette[v]
    return (200, 200, 200)


def grid_to_rgb(
    grid: Union[Grid, np.ndarray],
    palette: Optional[Palette] = None,
    cell_size: int = 12,
) -> np.ndarray:
    """Paint colour indices into an (H*cell, W*cell, 3) uint8 image."""
    palette = palette or tuple(hex_to_rgb(c) for c in DEFAULT_PALETTE)
    cells = _as_array(grid)
    size = max(len(palette), int(cells.max(initial=0)) + 1)
    lut = np.array([_color_for_value(i, palette) for i in range(size)], dtype=np.uint8)
    img = lut[np.clip(cells, 0, size - 1)]
    return np.repeat(np.repeat(img, cell_size, axis=0), cell_size, axis=1)


def format_grid(grid: Union[Grid, np.ndarray]) -> str:
    return "\n".join("".join(FILLED if cell else EMPTY for cell in row) for row in _as_array(grid))


class TextRenderer:
    """Renderer that prints frames to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream or sys.stdout
        self.last_frame: Optional[Grid] = None

    def _write(self, text: str) -> None:
        print(text, file=self.stream)
        print(file=self.stream)

    def render_grid(self, grid: Grid) -> None:
        self.last_frame = grid
        self._write(format_grid(grid))

    def flash_rows(self, row_indices: Sequence[int]) -> None:
        if self.last_frame is None:
            return
        lines = format_grid(self.last_frame).split("\n")
        for r in row_indices:
            if 0 <= r < len(lines):
                lines[r] = FLASH * len(lines[r])
        self._write("\n".join(lines))

    def fill_animation(self) -> "Future[None]":
        if self.last_frame is not None:
            rows, cols = self.last_frame.shape
            self._write("\n".join(FILLED * cols for _ in range(rows)))
        return completed_future()


class TextScoreReporter:
    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream or sys.stdout

    def render(self, score: int, level: int, lines: int) -> None:
        print(f"Score: {score}  Level: {level}  Lines: {lines}", file=self.stream)
