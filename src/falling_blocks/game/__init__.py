"""Game module for the falling-blocks engine.

Exports the core engine and its supporting classes:
- Grid: immutable cell matrix with merge, rotation and row removal
- PieceCatalog: shape templates per GameMode, coloured on demand
- DifficultyCurve: cleared lines to gravity interval
- GameConfig / ScoringRules: immutable settings
- GameLoop: the tick/command state machine
- ManualTimer / AsyncioTimer: stock Timer implementations
"""

from .config import GameConfig
from .core import ActivePiece, Command, GameLoop, LoopState, spawn_column
from .errors import (
    CollisionError,
    FallingBlocksError,
    OutOfBoundsError,
    PlacementError,
    TimerError,
)
from .grid import Grid, Placement, Rejection
from .interfaces import NullRenderer, NullScoreReporter, Renderer, ScoreReporter, Timer
from .levels import DifficultyCurve
from .pieces import GameMode, PieceCatalog, ShapeTemplate
from .preview import arrange_figures
from .rules import ScoringRules
from .session import ScoreSnapshot, SessionHandle
from .timers import AsyncioTimer, ManualTimer

__all__ = [
    "ActivePiece",
    "AsyncioTimer",
    "CollisionError",
    "Command",
    "DifficultyCurve",
    "FallingBlocksError",
    "GameConfig",
    "GameLoop",
    "GameMode",
    "Grid",
    "LoopState",
    "ManualTimer",
    "NullRenderer",
    "NullScoreReporter",
    "OutOfBoundsError",
    "PieceCatalog",
    "Placement",
    "PlacementError",
    "Rejection",
    "Renderer",
    "ScoreReporter",
    "ScoreSnapshot",
    "ScoringRules",
    "SessionHandle",
    "ShapeTemplate",
    "Timer",
    "TimerError",
    "arrange_figures",
    "spawn_column",
]
