from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_crush.game import Action, GameConfig, GameSession, PieceCatalog, Variant


def _compute_action_mask(session: GameSession) -> np.ndarray:
    """Boolean mask over the flat action space.

    Piece commands are always legal (a blocked move is a no-op). Pause and
    cell selection only exist in the match-3 variant, and only filled cells
    can be selected.
    """
    n_base = len(Action)
    if not session.is_match_variant:
        mask = np.ones((n_base,), dtype=np.bool_)
        mask[Action.TOGGLE_PAUSE] = False
        return mask
    filled = (session.grid.grid > 0).reshape(-1)
    return np.concatenate([np.ones((n_base,), dtype=np.bool_), filled])


class TetrisCrushEnv(gym.Env):
    metadata = {"render_modes": [], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, variant: Optional[Variant] = None,
                 max_episode_steps: int = 10000, render_mode: Optional[str] = None) -> None:
        super().__init__()
        config = config or GameConfig()
        if variant is not None:
            config = replace(config, variant=Variant(variant))
        self.session = GameSession(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        width = self.session.grid.width
        height = self.session.grid.height
        n_colors = len(PieceCatalog.COLORS)

        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=-1, high=n_colors, shape=(height, width), dtype=np.int8),
                "piece": spaces.Box(low=0, high=n_colors, shape=(height, width), dtype=np.int8),
                "paused": spaces.Discrete(2),
            }
        )

        n_actions = len(Action)
        if self.session.is_match_variant:
            # Trailing actions select cell (x, y), row-major
            n_actions += width * height
        self.action_space = spaces.Discrete(n_actions)

        self._steps = 0

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.session)

    def _get_obs(self) -> Dict[str, Any]:
        grid = self.session.grid.grid.astype(np.int8)
        piece = np.zeros_like(grid)
        active = self.session.controller.piece
        if active is not None:
            for (x, y), color in active.colored_cells():
                if self.session.grid.is_inside(x, y):
                    piece[y, x] = color
        return {"grid": grid, "piece": piece, "paused": int(self.session.paused)}

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": self.get_action_mask(),
            "score": self.session.score.value,
            "lines_cleared_total": self.session.controller.lines_cleared_total,
            "steps": self._steps,
        }

    def _apply(self, action: int) -> None:
        n_base = len(Action)
        if action < n_base:
            self.session.step(Action(action))
            return
        index = action - n_base
        x = index % self.session.grid.width
        y = index // self.session.grid.width
        self.session.select(x, y)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.session.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        action = int(action)
        if not self.action_space.contains(action):
            raise ValueError(f"action {action} outside {self.action_space}")
        before = self.session.score.value
        self._apply(action)
        self._steps += 1
        reward = float(self.session.score.value - before)
        # The engine keeps spawning after a top-out; the episode ends there
        terminated = self.session.controller.is_spawn_blocked()
        truncated = self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> None:
        # Rendering is left to external adapters
        return None

    def close(self) -> None:
        pass
