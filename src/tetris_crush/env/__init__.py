"""Gymnasium environments for tetris-crush."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="TetrisCrush-LineClear-v0",
    entry_point="tetris_crush.env.tetris_env:TetrisCrushEnv",
    kwargs={"variant": "line-clear"},
)

# Match-3 variant: piece commands plus one select action per cell
register(
    id="TetrisCrush-Match3-v0",
    entry_point="tetris_crush.env.tetris_env:TetrisCrushEnv",
    kwargs={"variant": "match3"},
)

__all__ = ["TetrisCrush-LineClear-v0", "TetrisCrush-Match3-v0"]
