from __future__ import annotations

import random
from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from brick_game.tetris import (
    GameConfig,
    GameInfo,
    GameState,
    ManualClock,
    PauseFlag,
    TetrisGame,
    UserAction,
)


class TetrisEnv(gym.Env):
    """Falling-block game as a gymnasium environment.

    Actions (6 total):
      0: No-op
      1: Move Left
      2: Move Right
      3: Rotate CW
      4: Soft drop (one row)
      5: Hard drop

    Each step applies the action and then lets one full drop interval pass
    on a manual clock, so gravity moves the piece exactly once per step.
    The reward is the change in game score.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    ACTIONS: Tuple[Tuple[Optional[UserAction], bool], ...] = (
        (None, False),
        (UserAction.LEFT, False),
        (UserAction.RIGHT, False),
        (UserAction.ACTION, False),
        (UserAction.DOWN, False),
        (UserAction.DOWN, True),
    )
    # Moving -> Shifting -> Attaching -> Spawn -> Moving/GameOver -> end
    MAX_TICKS_PER_STEP = 8

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        # Training never touches the high-score file
        self.config = replace(config or GameConfig(), highscore_path=None)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.config.height, self.config.width
        self.observation_space = spaces.Dict(
            {
                "field": spaces.Box(low=0, high=7, shape=(h, w), dtype=np.int8),
                "next": spaces.Box(low=0, high=7, shape=(4, 4), dtype=np.int8),
            }
        )
        self.action_space = spaces.Discrete(len(self.ACTIONS))

        self.clock = ManualClock()
        self.game = TetrisGame(self.config, clock=self.clock)
        self._last_info: Optional[GameInfo] = None
        self._steps = 0

    def _get_obs(self, info: GameInfo) -> Dict[str, Any]:
        return {"field": info.field.astype(np.int8), "next": info.next.astype(np.int8)}

    def _get_info(self, info: GameInfo) -> Dict[str, Any]:
        return {
            "score": info.score,
            "level": info.level,
            "speed": info.speed,
            "state": info.state.name,
            "steps": self._steps,
        }

    def _settle(self) -> GameInfo:
        """Tick until the engine is back to a falling piece or the game ends."""
        info = self.game.update_current_state()
        for _ in range(self.MAX_TICKS_PER_STEP):
            if self.game.state == GameState.MOVING or info.pause == PauseFlag.ENDED:
                break
            info = self.game.update_current_state()
        return info

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))
        self.clock = ManualClock()
        self.game = TetrisGame(self.config, rng=random.Random(seed), clock=self.clock)
        self.game.user_input(UserAction.START)
        info = self._settle()
        self._steps = 0
        self._last_info = info
        return self._get_obs(info), self._get_info(info)

    def step(self, action: int):
        if self._last_info is None:
            raise RuntimeError("call reset() before step()")
        user_action, hold = self.ACTIONS[int(action)]
        before = self.game.score_state.score

        if user_action is not None:
            self.game.user_input(user_action, hold)
        self.clock.advance(self.game.score_state.speed)
        info = self._settle()

        self._steps += 1
        terminated = info.pause == PauseFlag.ENDED
        truncated = not terminated and self._steps >= self.max_episode_steps
        reward = float(info.score - before)

        self._last_info = info
        return self._get_obs(info), reward, terminated, truncated, self._get_info(info)

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            from brick_game.visualization.renderer import to_rgb

            info = self._last_info or self.game.get_state()
            return to_rgb(info.field)
        return None

    def close(self) -> None:
        pass
