from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import CollisionError, OutOfBoundsError


Matrix = Union[Sequence[Sequence[int]], np.ndarray]

# Cells are stored as int8, so colour indices live in 0..MAX_COLOR
MAX_COLOR = int(np.iinfo(np.int8).max)


def _check_color(value: int) -> None:
    if not 0 <= value <= MAX_COLOR:
        raise ValueError(f"Cell value {value} outside 0..{MAX_COLOR}")


class Rejection(Enum):
    OUT_OF_BOUNDS = "out_of_bounds"
    COLLISION = "collision"


@dataclass(frozen=True)
class Placement:
    """Outcome of :meth:`Grid.merge_with`.

    Exactly one of ``grid`` and ``rejection`` is set. A rejected placement is
    an ordinary result, so callers branch on it instead of catching.
    """

    grid: Optional["Grid"] = None
    rejection: Optional[Rejection] = None
    col: int = 0
    row: int = 0

    @property
    def ok(self) -> bool:
        return self.rejection is None

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> "Grid":
        if self.rejection is Rejection.OUT_OF_BOUNDS:
            raise OutOfBoundsError("Cells go beyond the borders", self.col, self.row)
        if self.rejection is Rejection.COLLISION:
            raise CollisionError("Cells collide with other cells", self.col, self.row)
        assert self.grid is not None
        return self.grid


class Grid:
    """Rectangular matrix of colour indices (0 = empty).

    Used both for the play field and for single pieces. Transformations
    (merge, rotation, row removal) return new grids and leave the receiver
    alone. ``set_cell`` and ``fill_color`` write in place and are meant for
    freshly made working copies only.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: np.ndarray) -> None:
        """Wrap a copy of ``cells``; the caller's array is never shared."""
        cells = np.asarray(cells)
        if cells.ndim != 2:
            raise ValueError(f"Grid needs a 2D matrix, got {cells.ndim} dimension(s)")
        if cells.size:
            _check_color(int(cells.min()))
            _check_color(int(cells.max()))
        self._cells = cells.astype(np.int8, copy=True)

    @classmethod
    def create(cls, cols: int, rows: int) -> "Grid":
        if cols < 0 or rows < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {cols}x{rows}")
        return cls(np.zeros((int(rows), int(cols)), dtype=np.int8))

    @classmethod
    def from_matrix(cls, matrix: Matrix) -> "Grid":
        if isinstance(matrix, np.ndarray):
            return cls(matrix)
        rows = [list(row) for row in matrix]
        if not rows:
            return cls.create(0, 0)
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("Grid rows must all have the same length")
        return cls(np.array(rows, dtype=np.int64).reshape(len(rows), width))

    # ------------------------------------------------------------------ access

    @property
    def cols(self) -> int:
        return int(self._cells.shape[1])

    @property
    def rows(self) -> int:
        return int(self._cells.shape[0])

    @property
    def shape(self) -> Tuple[int, int]:
        """(rows, cols), numpy order."""
        return self.rows, self.cols

    @property
    def occupied(self) -> int:
        return int(np.count_nonzero(self._cells))

    def _check_bounds(self, col: int, row: int) -> None:
        if not (0 <= col < self.cols and 0 <= row < self.rows):
            raise IndexError(f"Cell ({col}, {row}) outside {self.cols}x{self.rows} grid")

    def get_cell(self, col: int, row: int) -> int:
        self._check_bounds(col, row)
        return int(self._cells[row, col])

    def set_cell(self, col: int, row: int, value: int) -> None:
        self._check_bounds(col, row)
        _check_color(value)
        self._cells[row, col] = value

    def fill_color(self, color_index: int) -> None:
        _check_color(color_index)
        self._cells[self._cells != 0] = color_index

    def copy(self) -> "Grid":
        return Grid(self._cells)

    def to_array(self) -> np.ndarray:
        return self._cells.copy()

    def to_list(self) -> List[List[int]]:
        return self._cells.tolist()

    def complete_rows(self) -> List[int]:
        if self.cols == 0:
            return []
        return [int(r) for r in np.flatnonzero(np.all(self._cells != 0, axis=1))]

    # --------------------------------------------------------- transformations

    def merge_with(
        self,
        piece: "Grid",
        at_col: int = 0,
        at_row: int = 0,
        detect_collision: bool = True,
    ) -> Placement:
        """Overlay ``piece`` with its top-left corner at (at_col, at_row).

        With ``detect_collision`` the piece's bounding box has to fit inside
        the receiver and none of its filled cells may land on a filled cell.
        Without it the overlay is clipped to the receiver.
        """
        if detect_collision and (
            at_col < 0
            or at_row < 0
            or at_col + piece.cols > self.cols
            or at_row + piece.rows > self.rows
        ):
            return Placement(rejection=Rejection.OUT_OF_BOUNDS, col=at_col, row=at_row)

        # Visible window of the piece inside the receiver
        r0, r1 = max(at_row, 0), min(at_row + piece.rows, self.rows)
        c0, c1 = max(at_col, 0), min(at_col + piece.cols, self.cols)

        cells = self._cells.copy()
        if r0 < r1 and c0 < c1:
            window = cells[r0:r1, c0:c1]
            overlay = piece._cells[r0 - at_row : r1 - at_row, c0 - at_col : c1 - at_col]
            filled = overlay != 0
            if detect_collision and np.any(filled & (window != 0)):
                return Placement(rejection=Rejection.COLLISION, col=at_col, row=at_row)
            window[filled] = overlay[filled]
        return Placement(grid=Grid(cells), col=at_col, row=at_row)

    def rotate_clockwise(self) -> "Grid":
        return Grid(np.rot90(self._cells, 1, axes=(1, 0)))

    def rotate_counter_clockwise(self) -> "Grid":
        return Grid(np.rot90(self._cells, 1))

    def remove_rows(self, row_indices: Iterable[int]) -> "Grid":
        """Drop the given rows and push zero rows in from the top.

        Rows are removed one at a time from the progressively updated grid,
        smallest index first. In that order every removal only shifts rows
        above it, so the remaining indices still point at the rows the
        caller meant. Duplicates are ignored.
        """
        cells = self._cells
        for index in sorted(set(int(i) for i in row_indices)):
            if not 0 <= index < self.rows:
                raise IndexError(f"Row {index} outside grid with {self.rows} rows")
            cells = np.delete(cells, index, axis=0)
            cells = np.vstack((np.zeros((1, self.cols), dtype=np.int8), cells))
        return Grid(cells)

    # ------------------------------------------------------------------ dunder

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._cells, other._cells))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid({self.to_list()!r})"
