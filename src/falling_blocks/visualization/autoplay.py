from __future__ import annotations

import argparse
import asyncio
import logging
import random
from dataclasses import replace

from falling_blocks.game import AsyncioTimer, Command, GameConfig, GameLoop, GameMode, ScoreSnapshot
from .renderer import TextRenderer, TextScoreReporter


# Relative odds of each random command
COMMAND_WEIGHTS = {
    Command.MOVE_LEFT: 3,
    Command.MOVE_RIGHT: 3,
    Command.ROTATE_CW: 2,
    Command.DROP: 1,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Watch the engine play itself in the terminal.")
    p.add_argument("--mode", choices=[m.value for m in GameMode], default=GameMode.EASY.value)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--speed", type=float, default=4.0,
                   help="Divide every gravity interval by this factor")
    p.add_argument("--command_ms", type=int, default=150,
                   help="Delay between random commands")
    p.add_argument("--log_level", default="WARNING")
    return p


def scaled_config(config: GameConfig, speed: float) -> GameConfig:
    if speed <= 0:
        raise ValueError(f"speed must be positive, got {speed}")
    levels = tuple((lines, max(1, int(interval / speed))) for lines, interval in config.levels)
    return replace(config, levels=levels)


async def play(config: GameConfig, mode: GameMode, command_ms: int) -> ScoreSnapshot:
    game = GameLoop(TextRenderer(), AsyncioTimer(), TextScoreReporter(), config=config)
    handle = game.start(mode)
    assert handle is not None
    rng = random.Random(config.random_seed)
    commands = list(COMMAND_WEIGHTS)
    weights = list(COMMAND_WEIGHTS.values())
    while not handle.done():
        await asyncio.sleep(command_ms / 1000.0)
        game.command(rng.choices(commands, weights)[0])
    return await handle


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    config = scaled_config(GameConfig(random_seed=args.seed), args.speed)
    final = asyncio.run(play(config, GameMode(args.mode), args.command_ms))
    print(f"Final score: {final.score} (level {final.level}, {final.lines} lines)")


if __name__ == "__main__":  # pragma: no cover
    main()
