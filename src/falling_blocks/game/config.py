from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .grid import MAX_COLOR


# Index 0 is the field background, the rest are piece colours.
DEFAULT_PALETTE: Tuple[str, ...] = (
    "161f27",
    "ffd498",
    "047c51",
    "fe5825",
    "700414",
    "df3d2e",
    "fefefe",
    "668bc4",
    "335495",
)

# (cleared lines needed, tick interval in ms)
DEFAULT_LEVELS: Tuple[Tuple[int, int], ...] = (
    (0, 770),
    (15, 730),
    (30, 680),
    (45, 620),
    (60, 550),
    (75, 470),
    (90, 380),
    (100, 280),
    (110, 160),
    (120, 100),
)


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    value = value.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected a 6 digit hex colour, got {value!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


@dataclass(frozen=True)
class GameConfig:
    """Immutable engine settings, passed explicitly to whoever needs them."""

    field_width: int = 10
    field_height: int = 20
    palette: Tuple[str, ...] = DEFAULT_PALETTE
    levels: Tuple[Tuple[int, int], ...] = DEFAULT_LEVELS
    random_seed: Optional[int] = None
    preview_cols: int = 4
    preview_rows: int = 3

    def __post_init__(self) -> None:
        if self.field_width <= 0 or self.field_height <= 0:
            raise ValueError(
                f"Field must have positive dimensions, got {self.field_width}x{self.field_height}"
            )
        if len(self.palette) < 2:
            raise ValueError("Palette needs a background colour and at least one piece colour")
        if len(self.palette) - 1 > MAX_COLOR:
            raise ValueError(f"Palette has {len(self.palette) - 1} piece colours, at most {MAX_COLOR} fit a cell")
        if not self.levels:
            raise ValueError("At least one level is required")

    @property
    def color_count(self) -> int:
        """Number of piece colours (palette minus the background)."""
        return len(self.palette) - 1

    def palette_rgb(self) -> Tuple[Tuple[int, int, int], ...]:
        return tuple(hex_to_rgb(c) for c in self.palette)
