from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

import numpy as np

from .board import Board
from .clock import DropClock, TimeSource, monotonic_ms
from .highscore import HighScoreStore
from .pieces import BLOCK, Piece, PieceType, rotate_shape, rotation_candidate
from .rules import PauseFlag, ScoreState, ScoringRules

logger = logging.getLogger(__name__)


class UserAction(IntEnum):
    START = 0
    PAUSE = 1
    TERMINATE = 2
    LEFT = 3
    RIGHT = 4
    UP = 5  # reserved
    DOWN = 6
    ACTION = 7  # rotate


class GameState(IntEnum):
    START = 0
    SPAWN = 1
    MOVING = 2
    SHIFTING = 3
    PAUSE = 4
    ATTACHING = 5
    TERMINATE = 6  # terminal like GAME_OVER; the Terminate input goes straight to GAME_OVER
    GAME_OVER = 7


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    highscore_path: Optional[str] = "highscore.txt"

    @property
    def spawn_x(self) -> int:
        return self.width // 2 - BLOCK // 2

    @property
    def spawn_y(self) -> int:
        return 0


@dataclass(frozen=True)
class GameInfo:
    """Read-only snapshot handed to the renderer once per tick."""

    field: np.ndarray
    next: np.ndarray
    score: int
    high_score: int
    level: int
    speed: int
    pause: int
    state: GameState


class TetrisGame:
    """One play session: board, current and next piece, score and clock.

    The driver calls :meth:`user_input` when a key arrives and
    :meth:`update_current_state` once per tick. Nothing here blocks or
    sleeps; time and randomness come from the injected sources.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[TimeSource] = None,
        store: Optional[HighScoreStore] = None,
    ) -> None:
        self.config = config or GameConfig()
        if self.config.width < BLOCK or self.config.height < BLOCK:
            raise ValueError(f"board must be at least {BLOCK}x{BLOCK}, got "
                             f"{self.config.width}x{self.config.height}")
        self.rules = rules or ScoringRules()
        self.rng = rng or random.Random(self.config.random_seed)
        self.store = store or HighScoreStore(self.config.highscore_path)
        self.board = Board(self.config.width, self.config.height)
        self.drop_clock = DropClock(clock or monotonic_ms)
        self.score_state = ScoreState.fresh(self.rules, self.store.load())
        self.state = GameState.START
        self.started = False
        self.current: Optional[Piece] = None
        self.next_piece: Optional[Piece] = None
        self.preview = np.zeros((BLOCK, BLOCK), dtype=np.int8)
        self.spawn_next(initial=True)

    def reset(self) -> None:
        """Start over with an empty board and a freshly read high score."""
        self.board.reset()
        self.score_state = ScoreState.fresh(self.rules, self.store.load())
        self.state = GameState.START
        self.started = False
        self.current = None
        self.spawn_next(initial=True)

    # ------------------------------------------------------------------
    # Collision, spawning and movement
    # ------------------------------------------------------------------
    def can_place(self, piece: Piece, dx: int = 0, dy: int = 0) -> bool:
        return self.board.can_place(piece, dx, dy)

    def _random_piece(self) -> Piece:
        kind = PieceType(self.rng.randrange(len(PieceType)))
        return Piece.from_template(kind, self.config.spawn_x, self.config.spawn_y)

    def _draw_next(self) -> None:
        self.next_piece = self._random_piece()
        self.preview = self.next_piece.preview()

    def spawn_next(self, initial: bool = False) -> bool:
        """Promote the preview piece to current; False on top-out.

        The initial call only draws the first preview piece.
        """
        if initial:
            self._draw_next()
            return True
        self.current = Piece.from_template(
            self.next_piece.kind, self.config.spawn_x, self.config.spawn_y
        )
        if not self.can_place(self.current):
            logger.debug("no room to spawn %s", self.current.kind.name)
            return False
        self._draw_next()
        logger.debug("spawned %s, next %s", self.current.kind.name, self.next_piece.kind.name)
        return True

    def _shift(self, dx: int, dy: int) -> bool:
        if self.current is None or not self.can_place(self.current, dx, dy):
            return False
        self.current.x += dx
        self.current.y += dy
        return True

    def move_left(self) -> bool:
        return self._shift(-1, 0)

    def move_right(self) -> bool:
        return self._shift(1, 0)

    def move_down(self) -> bool:
        return self._shift(0, 1)

    def hard_drop(self) -> int:
        """Drop as far as the piece goes; return the rows travelled."""
        rows = 0
        while self.move_down():
            rows += 1
        return rows

    # ------------------------------------------------------------------
    # Rotation
    # ------------------------------------------------------------------
    def rotate(self) -> bool:
        """Turn the current piece clockwise, all or nothing.

        The square always succeeds without change. Other pieces must fit
        both turned in place and at the recentred anchor, otherwise the
        piece is left exactly as it was.
        """
        piece = self.current
        if piece is None:
            return False
        if not piece.kind.rotates:
            return True
        if not self.can_place(piece.with_shape(rotate_shape(piece.shape))):
            return False
        candidate = rotation_candidate(piece)
        if not self.can_place(candidate):
            return False
        self.current = candidate
        return True

    # ------------------------------------------------------------------
    # Locking and line clears
    # ------------------------------------------------------------------
    def lock_piece(self) -> None:
        if self.current is None:
            return
        self.board.lock(self.current)
        logger.debug("locked %s at (%d, %d)", self.current.kind.name,
                     self.current.x, self.current.y)

    def resolve_lines(self) -> int:
        cleared = self.board.clear_full_lines()
        if cleared:
            level = self.score_state.level
            gained = self.score_state.register_lines(cleared, self.rules)
            logger.debug("cleared %d rows for %d points", cleared, gained)
            if self.score_state.level != level:
                logger.info("level %d, drop interval %d ms",
                            self.score_state.level, self.score_state.speed)
        return cleared

    # ------------------------------------------------------------------
    # Input and ticks
    # ------------------------------------------------------------------
    def _steerable(self) -> bool:
        return self.state == GameState.MOVING and self.score_state.pause == PauseFlag.RUNNING

    def _finish(self) -> None:
        if self.score_state.pause == PauseFlag.ENDED:
            return
        self.score_state.pause = PauseFlag.ENDED
        score = self.score_state.score
        if score > self.score_state.high_score:
            self.score_state.high_score = score
            self.store.save(score)
        logger.info("game over with %d points", score)

    def user_input(self, action: UserAction, hold: bool = False) -> None:
        action = UserAction(action)
        if hold:
            if action == UserAction.DOWN and self._steerable():
                self.hard_drop()
            return

        if action == UserAction.START:
            if self.state in (GameState.START, GameState.GAME_OVER):
                if self.state == GameState.GAME_OVER:
                    self.reset()
                self.started = True
                self.drop_clock.reset()
                self.state = GameState.SPAWN
                logger.info("session started")
        elif action == UserAction.PAUSE:
            if self.state == GameState.PAUSE:
                self.state = GameState.MOVING
                self.score_state.pause = PauseFlag.RUNNING
            elif self.state == GameState.MOVING:
                self.state = GameState.PAUSE
                self.score_state.pause = PauseFlag.PAUSED
        elif action == UserAction.TERMINATE:
            self._finish()
            self.state = GameState.GAME_OVER
        elif action == UserAction.LEFT:
            if self._steerable():
                self.move_left()
        elif action == UserAction.RIGHT:
            if self._steerable():
                self.move_right()
        elif action == UserAction.DOWN:
            if self._steerable():
                self.move_down()
        elif action == UserAction.ACTION:
            if self._steerable():
                self.rotate()

    def update_current_state(self) -> GameInfo:
        """Advance the state machine by one transition and return a snapshot."""
        if self.score_state.pause == PauseFlag.PAUSED or not self.started:
            return self.get_state()

        state = self.state
        if state == GameState.START:
            self.state = GameState.SPAWN
        elif state == GameState.SPAWN:
            self.state = GameState.MOVING if self.spawn_next() else GameState.GAME_OVER
        elif state == GameState.MOVING:
            if self.drop_clock.ready(self.score_state.speed):
                self.state = GameState.SHIFTING
        elif state == GameState.SHIFTING:
            self.state = GameState.MOVING if self.move_down() else GameState.ATTACHING
        elif state == GameState.ATTACHING:
            self.lock_piece()
            self.resolve_lines()
            self.state = GameState.SPAWN
        elif state in (GameState.TERMINATE, GameState.GAME_OVER):
            self._finish()
        return self.get_state()

    def get_state(self) -> GameInfo:
        s = self.score_state
        return GameInfo(
            field=self.board.render(self.current),
            next=self.preview.copy(),
            score=s.score,
            high_score=s.high_score,
            level=s.level,
            speed=s.speed,
            pause=int(s.pause),
            state=self.state,
        )
