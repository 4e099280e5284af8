"""Correctness and point calculation for resolved answers."""

from __future__ import annotations

from dataclasses import dataclass, field
import math

from learn_quiz.constants.quiz_constants import (
    BASE_POINTS_EASY,
    BASE_POINTS_HARD,
    BASE_POINTS_MEDIUM,
    SPEED_MULTIPLIER_FLOOR,
)
from learn_quiz.core.models import AnswerState, AnswerStatus, Difficulty, Question, QuestionType


def _default_base_points() -> dict[Difficulty, int]:
    return {
        Difficulty.EASY: BASE_POINTS_EASY,
        Difficulty.MEDIUM: BASE_POINTS_MEDIUM,
        Difficulty.HARD: BASE_POINTS_HARD,
    }


@dataclass(slots=True)
class ScoringConfig:
    """Point table and speed floor; override to change scoring policy."""

    base_points: dict[Difficulty, int] = field(default_factory=_default_base_points)
    speed_floor: float = SPEED_MULTIPLIER_FLOOR

    def __post_init__(self) -> None:
        if not 0.0 <= self.speed_floor <= 1.0:
            raise ValueError("Speed floor must be between 0.0 and 1.0.")
        missing = set(Difficulty) - set(self.base_points)
        if missing:
            raise ValueError(f"Base points missing for: {sorted(d.value for d in missing)}")


@dataclass(frozen=True, slots=True)
class ScoreOutcome:
    correct: bool | None
    points: int


class Scorer:
    """Grades choice questions by exact set equality; open-ended answers stay ungraded."""

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self._config = config or ScoringConfig()

    @property
    def config(self) -> ScoringConfig:
        return self._config

    def score(self, question: Question, answer: AnswerState) -> ScoreOutcome:
        if answer.status is AnswerStatus.SKIPPED_TIMEOUT:
            # A pending multi-choice pick never counts once time ran out.
            return ScoreOutcome(correct=False, points=0)
        if question.type is QuestionType.OPEN_ENDED:
            return ScoreOutcome(correct=None, points=0)

        correct = set(answer.selected_option_ids) == set(question.correct_option_ids)
        if not correct:
            return ScoreOutcome(correct=False, points=0)

        base = self._config.base_points[question.difficulty]
        multiplier = self.speed_multiplier(answer.elapsed_millis, question.time_limit_seconds)
        return ScoreOutcome(correct=True, points=math.floor(base * multiplier + 0.5))

    def speed_multiplier(self, elapsed_millis: int | None, time_limit_seconds: int | None) -> float:
        if time_limit_seconds is None:
            return 1.0
        floor = self._config.speed_floor
        limit_millis = time_limit_seconds * 1000
        used = min(max(elapsed_millis or 0, 0), limit_millis) / limit_millis
        return max(floor, 1.0 - (1.0 - floor) * used)
