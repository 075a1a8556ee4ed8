from __future__ import annotations

import random

import pytest

from brick_game.tetris import (
    GameConfig,
    GameState,
    HighScoreStore,
    ManualClock,
    Piece,
    PieceType,
    TetrisGame,
    UserAction,
)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def game(clock: ManualClock) -> TetrisGame:
    return TetrisGame(GameConfig(highscore_path=None), rng=random.Random(0), clock=clock)


@pytest.fixture
def start_with(game: TetrisGame):
    """Start ``game`` so the first falling piece is of the given type."""

    def _start(kind: PieceType) -> TetrisGame:
        game.next_piece = Piece.from_template(kind, game.config.spawn_x, game.config.spawn_y)
        game.user_input(UserAction.START)
        game.update_current_state()
        assert game.state == GameState.MOVING
        assert game.current.kind == kind
        return game

    return _start


@pytest.fixture
def store(tmp_path) -> HighScoreStore:
    return HighScoreStore(tmp_path / "highscore.txt")
