from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .grid import MAX_COLOR, Grid


class GameMode(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


Cells = Tuple[Tuple[int, ...], ...]


@dataclass(frozen=True)
class ShapeTemplate:
    """Uncoloured 0/1 shape shared by every catalog.

    Templates are never coloured themselves; ``instantiate`` hands out an
    owned Grid that the caller may recolour freely.
    """

    name: str
    cells: Cells

    def grid(self) -> Grid:
        return Grid.from_matrix(self.cells)

    def instantiate(self, color_index: int) -> Grid:
        piece = self.grid()
        piece.fill_color(color_index)
        return piece


BASE_SHAPES: Dict[str, Cells] = {
    "I": ((1, 1, 1, 1),),
    "J": ((1, 0, 0), (1, 1, 1)),
    "L": ((0, 0, 1), (1, 1, 1)),
    "T": ((0, 1, 0), (1, 1, 1)),
    "S": ((0, 1, 1), (1, 1, 0)),
    "Z": ((1, 1, 0), (0, 1, 1)),
    "O": ((1, 1), (1, 1)),
}

# Added on medium and hard
CORNER_SHAPES: Dict[str, Cells] = {
    "corner_left": ((1, 0), (1, 1)),
    "corner_right": ((0, 1), (1, 1)),
}

# Added on hard only
IRREGULAR_SHAPES: Dict[str, Cells] = {
    "cup": ((1, 0, 1), (1, 1, 1)),
    "long_s": ((1, 0, 0), (1, 1, 1), (0, 0, 1)),
    "long_z": ((0, 0, 1), (1, 1, 1), (1, 0, 0)),
}


def templates_for_mode(mode: GameMode) -> List[ShapeTemplate]:
    mode = GameMode(mode)
    shapes = dict(BASE_SHAPES)
    if mode in (GameMode.MEDIUM, GameMode.HARD):
        shapes.update(CORNER_SHAPES)
    if mode is GameMode.HARD:
        shapes.update(IRREGULAR_SHAPES)
    return [ShapeTemplate(name, cells) for name, cells in shapes.items()]


class PieceCatalog:
    """Pieces available in one game mode.

    Every figure handed out is a fresh Grid coloured with a random index in
    ``1..color_count``; the templates stay untouched.
    """

    def __init__(
        self,
        mode: GameMode = GameMode.EASY,
        color_count: int = 8,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not 1 <= color_count <= MAX_COLOR:
            raise ValueError(f"color_count must be in 1..{MAX_COLOR}, got {color_count}")
        self.mode = GameMode(mode)
        self.color_count = int(color_count)
        self.rng = rng or random.Random()
        self.templates: Tuple[ShapeTemplate, ...] = tuple(templates_for_mode(self.mode))

    def __len__(self) -> int:
        return len(self.templates)

    def _random_color(self) -> int:
        return self.rng.randint(1, self.color_count)

    def available_figures(self, randomize_colors: bool = False) -> List[Grid]:
        if randomize_colors:
            return [t.instantiate(self._random_color()) for t in self.templates]
        return [t.grid() for t in self.templates]

    def generate_figure(self) -> Grid:
        template = self.rng.choice(self.templates)
        return template.instantiate(self._random_color())
