"""Gymnasium environments for the falling-block game."""

from __future__ import annotations

from gymnasium.envs.registration import register

from .tetris_env import TetrisEnv

# Register the standard 10x20 well
register(
    id="Tetris-10x20-v0",
    entry_point="brick_game.env.tetris_env:TetrisEnv",
)

__all__ = ["TetrisEnv"]
