from __future__ import annotations

from concurrent.futures import Future
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Command, GameConfig, GameLoop, GameMode, Grid, ManualTimer
from falling_blocks.game.interfaces import completed_future
from falling_blocks.visualization.renderer import format_grid, grid_to_rgb


WAIT = len(Command)


class _FrameCapture:
    """Renderer that keeps the latest frame and cleared rows for the env."""

    def __init__(self) -> None:
        self.frame: Optional[Grid] = None
        self.flashed: List[int] = []

    def render_grid(self, grid: Grid) -> None:
        self.frame = grid

    def flash_rows(self, row_indices: Sequence[int]) -> None:
        self.flashed = list(row_indices)

    def fill_animation(self) -> "Future[None]":
        return completed_future()


class FallingBlocksEnv(gym.Env):
    """
    The game loop as a step-by-step environment.

    Actions (5 total):
      0: Move Left
      1: Move Right
      2: Rotate CW
      3: Drop
      4: Wait

    Every step applies the action and then advances one gravity tick, so the
    piece keeps falling whatever the agent does. The reward is the change in
    engine score.
    """

    metadata = {"render_modes": ["ansi", "rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        mode: GameMode = GameMode.EASY,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 10000,
    ) -> None:
        super().__init__()
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode {render_mode!r}")
        self.config = config or GameConfig()
        self.mode = GameMode(mode)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.config.field_height, self.config.field_width
        colors = self.config.color_count
        self.observation_space = spaces.Dict(
            {
                "field": spaces.Box(low=0, high=colors, shape=(h, w), dtype=np.int8),
                "next": spaces.Box(
                    low=0,
                    high=colors,
                    shape=(self.config.preview_rows, self.config.preview_cols),
                    dtype=np.int8,
                ),
            }
        )
        self.action_space = spaces.Discrete(len(Command) + 1)

        self.timer = ManualTimer()
        self._frames = _FrameCapture()
        self.game = GameLoop(self._frames, self.timer, config=self.config)
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "field": self.game.composite().to_array(),
            "next": self.game.preview().to_array(),
        }

    def _get_info(self) -> Dict[str, Any]:
        snap = self.game.snapshot()
        return {
            "score": snap.score,
            "level": snap.level,
            "lines": snap.lines,
            "steps": self._steps,
            "cleared_rows": list(self._frames.flashed),
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        # Catalog randomness follows the env's seeded generator
        game_seed = int(self.np_random.integers(0, 2**31 - 1))
        self._frames = _FrameCapture()
        self.game = GameLoop(
            self._frames,
            self.timer,
            config=replace(self.config, random_seed=game_seed),
        )
        mode = GameMode((options or {}).get("mode", self.mode))
        self.game.start(mode)
        self._steps = 0
        # First tick spawns the first piece
        self.timer.tick()
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        action = int(action)
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action {action}")
        before = self.game.score
        self._frames.flashed = []
        if action != WAIT:
            self.game.command(Command(action))
        self.timer.tick()
        self._steps += 1

        reward = float(self.game.score - before)
        terminated = bool(self.game.is_game_over)
        truncated = not terminated and self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[Any]:
        if self.render_mode == "rgb_array":
            return grid_to_rgb(self.game.composite(), self.config.palette_rgb())
        if self.render_mode == "ansi":
            snap = self.game.snapshot()
            return f"{format_grid(self.game.composite())}\nScore: {snap.score}  Level: {snap.level}  Lines: {snap.lines}\n"
        return None

    def close(self) -> None:
        self.timer.stop()
