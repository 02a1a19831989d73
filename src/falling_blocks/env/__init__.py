"""Gymnasium environments for the falling-blocks engine."""

from __future__ import annotations

from gymnasium.envs.registration import register

from .falling_blocks_env import FallingBlocksEnv

# One command (or a wait) per step, one gravity tick per step
register(
    id="FallingBlocks-v0",
    entry_point="falling_blocks.env.falling_blocks_env:FallingBlocksEnv",
)

__all__ = ["FallingBlocksEnv"]
