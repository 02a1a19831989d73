from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from .config import DEFAULT_LEVELS
from .interfaces import Timer


logger = logging.getLogger(__name__)


class DifficultyCurve:
    """Turns cumulative cleared lines into a gravity interval.

    ``table`` is a strictly ascending sequence of ``(lines, interval_ms)``;
    level N is reached once ``lines >= table[N][0]``. Each level change is
    pushed to the timer, which applies it to its next firing.
    """

    def __init__(
        self,
        table: Sequence[Tuple[int, int]] = DEFAULT_LEVELS,
        timer: Optional[Timer] = None,
    ) -> None:
        table = tuple((int(lines), int(interval)) for lines, interval in table)
        if not table:
            raise ValueError("Difficulty table must not be empty")
        thresholds = [lines for lines, _ in table]
        if any(b <= a for a, b in zip(thresholds, thresholds[1:])):
            raise ValueError(f"Difficulty thresholds must be strictly ascending, got {thresholds}")
        if any(interval <= 0 for _, interval in table):
            raise ValueError("Tick intervals must be positive")
        self.table = table
        self.timer = timer
        self.current_level = 0
        if self.timer is not None:
            self.timer.set_interval(self.current_interval)

    @property
    def current_interval(self) -> int:
        return self.interval_for_level(self.current_level)

    @property
    def next_threshold(self) -> Optional[int]:
        """Lines needed for the next level, or None on the last level."""
        nxt = self.current_level + 1
        if nxt >= len(self.table):
            return None
        return self.table[nxt][0]

    def interval_for_level(self, level: int) -> int:
        if not 0 <= level < len(self.table):
            raise IndexError(f"Level {level} outside table of {len(self.table)} levels")
        return self.table[level][1]

    def advance(self, total_lines: int) -> bool:
        """Move up one level if ``total_lines`` reached the next threshold."""
        threshold = self.next_threshold
        if threshold is None or total_lines < threshold:
            return False
        self.current_level += 1
        interval = self.current_interval
        logger.info("Level %d reached at %d lines, interval %d ms", self.current_level, total_lines, interval)
        if self.timer is not None:
            self.timer.set_interval(interval)
        return True
