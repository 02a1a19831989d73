from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Dict, Optional, Set, Tuple

from .config import GameConfig
from .grid import Grid, Placement
from .interfaces import NullRenderer, NullScoreReporter, Renderer, ScoreReporter, Timer
from .levels import DifficultyCurve
from .pieces import GameMode, PieceCatalog
from .rules import ScoringRules
from .session import ScoreSnapshot, SessionHandle
from .timers import ManualTimer


logger = logging.getLogger(__name__)


class Command(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    ROTATE_CW = 2
    DROP = 3


class LoopState(Enum):
    IDLE = "idle"
    SPAWNING = "spawning"
    FALLING = "falling"
    GAME_OVER = "game_over"


class Outcome(Enum):
    PLACED = "placed"
    REJECTED = "rejected"


# (state, result of that state's placement attempt) -> next state
TRANSITIONS: Dict[Tuple[LoopState, Outcome], LoopState] = {
    (LoopState.SPAWNING, Outcome.PLACED): LoopState.FALLING,
    (LoopState.SPAWNING, Outcome.REJECTED): LoopState.GAME_OVER,
    (LoopState.FALLING, Outcome.PLACED): LoopState.FALLING,
    (LoopState.FALLING, Outcome.REJECTED): LoopState.SPAWNING,
}

# Followed within the same tick: a lock spawns the next piece immediately
CHAINED: Set[Tuple[LoopState, LoopState]] = {(LoopState.FALLING, LoopState.SPAWNING)}
MAX_STEPS_PER_TICK = 2


def spawn_column(field_width: int, piece_width: int) -> int:
    """Column that centres a piece on the field, halves rounding up."""
    return int(math.floor((field_width - piece_width) / 2 + 0.5))


@dataclass(frozen=True)
class ActivePiece:
    piece: Grid
    col: int
    row: int

    def moved(self, d_col: int = 0, d_row: int = 0) -> "ActivePiece":
        return replace(self, col=self.col + d_col, row=self.row + d_row)


class GameLoop:
    """Falling-block game state machine.

    Ticks come from ``timer``; commands come from whoever embeds the loop and
    must be issued on the same thread as the ticks. Pictures go to
    ``renderer`` (and the upcoming piece to ``preview_renderer`` if given),
    score changes to ``score_reporter``.
    """

    def __init__(
        self,
        renderer: Optional[Renderer] = None,
        timer: Optional[Timer] = None,
        score_reporter: Optional[ScoreReporter] = None,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        preview_renderer: Optional[Renderer] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.renderer: Renderer = renderer or NullRenderer()
        self.score_reporter: ScoreReporter = score_reporter or NullScoreReporter()
        self.preview_renderer = preview_renderer
        self.timer: Timer = timer if timer is not None else ManualTimer()
        self.timer.on_tick(self.tick)
        self.rng = random.Random(self.config.random_seed)

        self.catalog: Optional[PieceCatalog] = None
        self.curve = DifficultyCurve(self.config.levels)
        self.score = 0
        self.lines = 0
        self._state = LoopState.IDLE
        self._field = Grid.create(self.config.field_width, self.config.field_height)
        self._active: Optional[ActivePiece] = None
        self._next_piece: Optional[Grid] = None
        self._handle: Optional[SessionHandle] = None

    # ------------------------------------------------------------------ state

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state in (LoopState.SPAWNING, LoopState.FALLING)

    @property
    def is_game_over(self) -> bool:
        return self._state is LoopState.GAME_OVER

    @property
    def field(self) -> Grid:
        return self._field.copy()

    @property
    def active(self) -> Optional[ActivePiece]:
        a = self._active
        return None if a is None else replace(a, piece=a.piece.copy())

    @property
    def next_piece(self) -> Optional[Grid]:
        return None if self._next_piece is None else self._next_piece.copy()

    @property
    def level(self) -> int:
        return self.curve.current_level

    def snapshot(self) -> ScoreSnapshot:
        return ScoreSnapshot(score=self.score, level=self.level, lines=self.lines)

    def composite(self) -> Grid:
        """The field with the falling piece drawn in."""
        if self._active is None:
            return self._field.copy()
        a = self._active
        return self._field.merge_with(a.piece, a.col, a.row, detect_collision=False).unwrap()

    def preview(self) -> Grid:
        """The next piece inside a preview-sized box (clipped if larger)."""
        box = Grid.create(self.config.preview_cols, self.config.preview_rows)
        if self._next_piece is None:
            return box
        return box.merge_with(self._next_piece, 0, 0, detect_collision=False).unwrap()

    # ------------------------------------------------------------------ start

    def start(self, mode: GameMode = GameMode.EASY, field: Optional[Grid] = None) -> Optional[SessionHandle]:
        """Begin a session and return its handle; no-op while one is running.

        ``field`` presets the play field (same size as the configured one).
        """
        if self.is_running:
            logger.debug("start() ignored, session already running")
            return None
        self._reset(field)
        self.catalog = PieceCatalog(mode, self.config.color_count, self.rng)
        self._next_piece = self.catalog.generate_figure()
        self.curve = DifficultyCurve(self.config.levels, self.timer)
        self._handle = SessionHandle()
        self._state = LoopState.SPAWNING
        logger.debug("Session started in %s mode", self.catalog.mode.value)
        self._render_preview()
        self._report_score()
        self.timer.start()
        return self._handle

    def _reset(self, field: Optional[Grid]) -> None:
        if field is None:
            field = Grid.create(self.config.field_width, self.config.field_height)
        elif (field.cols, field.rows) != (self.config.field_width, self.config.field_height):
            raise ValueError(
                f"Preset field is {field.cols}x{field.rows}, expected "
                f"{self.config.field_width}x{self.config.field_height}"
            )
        self._field = field.copy()
        self._active = None
        self._next_piece = None
        self.score = 0
        self.lines = 0

    # ------------------------------------------------------------------- tick

    def tick(self) -> None:
        if not self.is_running:
            return
        state = self._state
        for _ in range(MAX_STEPS_PER_TICK):
            outcome = self._spawn() if state is LoopState.SPAWNING else self._fall()
            previous, state = state, TRANSITIONS[(state, outcome)]
            self._state = state
            if (previous, state) not in CHAINED:
                break
        self._handle_complete_rows()
        self._report_score()
        if self._state is LoopState.GAME_OVER:
            self._finish()

    def _spawn(self) -> Outcome:
        assert self.catalog is not None and self._next_piece is not None
        piece = self._next_piece
        self._next_piece = self.catalog.generate_figure()
        col = spawn_column(self._field.cols, piece.cols)
        placement = self._field.merge_with(piece, col, 0)
        if not placement:
            logger.debug("Spawn at column %d rejected: %s", col, placement.rejection.value)
            self._active = None
            return Outcome.REJECTED
        self._active = ActivePiece(piece, col, 0)
        self.renderer.render_grid(placement.grid)
        self._render_preview()
        return Outcome.PLACED

    def _fall(self) -> Outcome:
        assert self._active is not None
        a = self._active
        placement = self._field.merge_with(a.piece, a.col, a.row + 1)
        if placement:
            self._active = a.moved(d_row=1)
            self.renderer.render_grid(placement.grid)
            return Outcome.PLACED
        self._lock()
        return Outcome.REJECTED

    def _lock(self) -> None:
        assert self._active is not None
        a = self._active
        self._field = self._field.merge_with(a.piece, a.col, a.row, detect_collision=False).unwrap()
        self._active = None
        logger.debug("Piece locked at column %d, row %d", a.col, a.row)

    def _handle_complete_rows(self) -> None:
        rows = self._field.complete_rows()
        count = len(rows)
        self.score += self.rules.score_for_lines(count)
        self.lines += count
        if count:
            logger.debug("Cleared rows %s", rows)
            self.renderer.flash_rows(rows)
            self._field = self._field.remove_rows(rows)
            self.curve.advance(self.lines)

    def _finish(self) -> None:
        self.timer.stop()
        snapshot = self.snapshot()
        handle = self._handle
        assert handle is not None
        logger.info("Game over: score=%d level=%d lines=%d", snapshot.score, snapshot.level, snapshot.lines)
        self.renderer.fill_animation().add_done_callback(lambda _: handle.resolve(snapshot))

    # --------------------------------------------------------------- commands

    def command(self, command: Command) -> bool:
        command = Command(command)
        if command is Command.MOVE_LEFT:
            return self.move_left()
        if command is Command.MOVE_RIGHT:
            return self.move_right()
        if command is Command.ROTATE_CW:
            return self.rotate_clockwise()
        return self.drop()

    def move_left(self) -> bool:
        return self._shift(-1)

    def move_right(self) -> bool:
        return self._shift(1)

    def _shift(self, d_col: int) -> bool:
        a = self._active
        if a is None or not self.is_running:
            return False
        placement = self._field.merge_with(a.piece, a.col + d_col, a.row)
        if not placement:
            return False
        self._active = a.moved(d_col=d_col)
        self._show(placement)
        return True

    def rotate_clockwise(self) -> bool:
        a = self._active
        if a is None or not self.is_running:
            return False
        rotated = a.piece.rotate_clockwise()
        placement = self._field.merge_with(rotated, a.col, a.row)
        if not placement:
            return False
        self._active = replace(a, piece=rotated)
        self._show(placement)
        return True

    def drop(self) -> bool:
        """Push the piece down as far as it goes; it locks on the next tick."""
        a = self._active
        if a is None or not self.is_running:
            return False
        rows = 0
        landed: Optional[Placement] = None
        while True:
            placement = self._field.merge_with(a.piece, a.col, a.row + rows + 1)
            if not placement:
                break
            rows += 1
            landed = placement
        if landed is None:
            return False
        self._active = a.moved(d_row=rows)
        self.score += rows * self.rules.drop_points_per_row
        self._show(landed)
        return True

    # -------------------------------------------------------------- reporting

    def _show(self, placement: Placement) -> None:
        assert placement.grid is not None
        self.renderer.render_grid(placement.grid)
        self._report_score()

    def _render_preview(self) -> None:
        if self.preview_renderer is not None:
            self.preview_renderer.render_grid(self.preview())

    def _report_score(self) -> None:
        self.score_reporter.render(self.score, self.level, self.lines)
