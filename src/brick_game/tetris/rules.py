from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class PauseFlag(IntEnum):
    RUNNING = 0
    PAUSED = 1
    ENDED = 2


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 700, 1500)
    points_per_level: int = 600
    max_level: int = 10
    base_speed: int = 1000
    speed_step: int = 100
    min_speed: int = 100

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        # More than four rows at once pays the four-row reward
        return self.line_clear_scores[min(lines, 4) - 1]

    def level_for_score(self, score: int) -> int:
        return min(self.max_level, score // self.points_per_level + 1)

    def speed_for_level(self, level: int) -> int:
        return max(self.min_speed, self.base_speed - (level - 1) * self.speed_step)


@dataclass
class ScoreState:
    score: int = 0
    high_score: int = 0
    level: int = 1
    speed: int = 1000
    pause: PauseFlag = PauseFlag.RUNNING

    @classmethod
    def fresh(cls, rules: ScoringRules, high_score: int = 0) -> "ScoreState":
        return cls(score=0, high_score=high_score, level=1,
                   speed=rules.speed_for_level(1), pause=PauseFlag.RUNNING)

    def register_lines(self, lines: int, rules: ScoringRules) -> int:
        """Add the reward for ``lines`` cleared rows; return the points gained."""
        gained = rules.score_for_lines(lines)
        if gained == 0:
            return 0
        self.score += gained
        level = rules.level_for_score(self.score)
        if level != self.level:
            self.level = level
            self.speed = rules.speed_for_level(level)
        return gained
