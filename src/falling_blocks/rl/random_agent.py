from __future__ import annotations

import argparse

import gymnasium as gym

# Ensure envs are registered
import falling_blocks.env  # noqa: F401


def run_random(episodes: int = 1, seed: int | None = None, mode: str = "easy") -> list[float]:
    env = gym.make("FallingBlocks-v0", mode=mode)
    env.action_space.seed(seed)
    returns: list[float] = []
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    while len(returns) < episodes:
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            returns.append(total_reward)
            print(f"Episode {len(returns)}: reward {total_reward:.0f}, "
                  f"lines {info['lines']}, level {info['level']}")
            total_reward = 0.0
            obs, info = env.reset()
    env.close()
    return returns


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--episodes", type=int, default=3)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--mode", choices=["easy", "medium", "hard"], default="easy")
    return p


def main() -> None:
    args = build_parser().parse_args()
    run_random(args.episodes, args.seed, args.mode)


if __name__ == "__main__":  # pragma: no cover
    main()
