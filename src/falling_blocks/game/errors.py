from __future__ import annotations


class FallingBlocksError(Exception):
    """Base class for errors raised by the engine."""


class PlacementError(FallingBlocksError):
    """A piece could not be placed where it was asked to go."""

    def __init__(self, message: str, col: int, row: int) -> None:
        super().__init__(message)
        self.col = col
        self.row = row


class OutOfBoundsError(PlacementError):
    pass


class CollisionError(PlacementError):
    pass


class TimerError(FallingBlocksError, RuntimeError):
    """Timer ticked again from inside its own tick handler."""
