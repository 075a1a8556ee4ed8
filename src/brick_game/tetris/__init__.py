"""Falling-block game engine.

Exports the engine and its supporting classes:
- Board: Locked-cell grid, collision test and line clearing
- Piece / PieceType: The seven 4x4 templates and clockwise rotation
- ScoringRules / ScoreState: Reward table, level and drop-speed progression
- DropClock / ManualClock: Gravity gate over an injectable millisecond clock
- HighScoreStore: Single persisted high score
- TetrisGame: Tick-driven state machine tying it all together
"""

from .board import Board
from .pieces import Piece, PieceType, rotate_shape, rotation_candidate
from .rules import PauseFlag, ScoreState, ScoringRules
from .clock import DropClock, ManualClock, monotonic_ms
from .highscore import HighScoreStore
from .core import GameConfig, GameInfo, GameState, TetrisGame, UserAction

__all__ = [
    "Board",
    "Piece",
    "PieceType",
    "rotate_shape",
    "rotation_candidate",
    "PauseFlag",
    "ScoreState",
    "ScoringRules",
    "DropClock",
    "ManualClock",
    "monotonic_ms",
    "HighScoreStore",
    "GameConfig",
    "GameInfo",
    "GameState",
    "TetrisGame",
    "UserAction",
]
