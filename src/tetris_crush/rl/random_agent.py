from __future__ import annotations

import argparse
from typing import Optional

import gymnasium as gym

import tetris_crush.env  # noqa: F401
from tetris_crush.env.wrappers import ResampleInvalidActionWrapper
from tetris_crush.game import format_grid


ENV_IDS = {
    "line-clear": "TetrisCrush-LineClear-v0",
    "match3": "TetrisCrush-Match3-v0",
}


def run_random(variant: str = "line-clear", steps: int = 200, seed: Optional[int] = None) -> float:
    env = ResampleInvalidActionWrapper(gym.make(ENV_IDS[variant]))
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    episodes = 1
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            print(f"episode {episodes} finished with score {info['score']}")
            episodes += 1
            obs, info = env.reset()
    session = env.unwrapped.session
    print(format_grid(session.get_state()))
    print(f"Random agent total reward: {total_reward:.2f} over {episodes} episode(s), score {info['score']}")
    env.close()
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play random actions against a tetris-crush environment")
    p.add_argument("--variant", choices=sorted(ENV_IDS), default="line-clear")
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    return p


def main(argv: Optional[list] = None) -> None:
    args = build_parser().parse_args(argv)
    run_random(args.variant, args.steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
