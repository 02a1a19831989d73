from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringRules:
    line_clear_points: int = 10
    drop_points_per_row: int = 1

    def score_for_lines(self, lines: int) -> int:
        # Clearing k rows at once is worth k^2 times the base
        if lines <= 0:
            return 0
        return lines * lines * self.line_clear_points
