"""Falling-block grid engine with a line-clear and a swap-to-match variant."""

from .game import Action, GameConfig, GameSession, Variant

__all__ = ["Action", "GameConfig", "GameSession", "Variant"]
