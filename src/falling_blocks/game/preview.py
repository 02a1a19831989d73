from __future__ import annotations

import math
from typing import Sequence

from .grid import Grid


def arrange_figures(figures: Sequence[Grid]) -> Grid:
    """Lay figures out on a near-square grid, one empty cell between them.

    Every figure gets a slot as large as the widest and tallest figure; slots
    are filled left to right, top to bottom. Used to show a mode's catalog.
    """
    if not figures:
        return Grid.create(0, 0)

    max_cols = max(f.cols for f in figures)
    max_rows = max(f.rows for f in figures)
    per_row = math.ceil(math.sqrt(len(figures)))
    row_count = math.ceil(len(figures) / per_row)

    sheet = Grid.create(
        per_row * max_cols + per_row - 1,
        row_count * max_rows + row_count - 1,
    )
    for i, figure in enumerate(figures):
        slot_row, slot_col = divmod(i, per_row)
        sheet = sheet.merge_with(
            figure,
            slot_col * (max_cols + 1),
            slot_row * (max_rows + 1),
        ).unwrap()
    return sheet
