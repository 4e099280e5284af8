"""Default reward-computation collaborator: XP and badges from a finished session."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Protocol, Sequence

from learn_quiz.constants.quiz_constants import XP_PER_POINT
from learn_quiz.core.models import Badge, RewardSummary, SessionResult


class RewardPolicy(Protocol):
    def compute(self, result: SessionResult) -> RewardSummary:
        ...


@dataclass(frozen=True, slots=True)
class QuizScoreBadgeRule:
    """Awards ``badge`` when the session percentage reaches ``minimum_percentage``."""

    badge: Badge
    minimum_percentage: int

    def matches(self, result: SessionResult) -> bool:
        return result.percentage >= self.minimum_percentage


DEFAULT_BADGE_RULES: tuple[QuizScoreBadgeRule, ...] = (
    QuizScoreBadgeRule(
        badge=Badge(
            key="quiz_master",
            display_name="Quiz Master",
            description="Scored at least 90% on a quiz.",
            icon="🎓",
        ),
        minimum_percentage=90,
    ),
    QuizScoreBadgeRule(
        badge=Badge(
            key="perfect_score",
            display_name="Perfect Score",
            description="Answered every question correctly.",
            icon="⭐",
        ),
        minimum_percentage=100,
    ),
)


class ScoreRewardPolicy:
    """XP proportional to the session score plus score-threshold badges.

    Badges are awarded in rule order, followed by the optional completion badge.
    """

    def __init__(
        self,
        xp_per_point: float = XP_PER_POINT,
        badge_rules: Sequence[QuizScoreBadgeRule] = DEFAULT_BADGE_RULES,
        completion_badge: Badge | None = None,
    ) -> None:
        if xp_per_point < 0:
            raise ValueError("XP per point must not be negative.")
        self._xp_per_point = xp_per_point
        self._badge_rules = tuple(badge_rules)
        self._completion_badge = completion_badge

    def compute(self, result: SessionResult) -> RewardSummary:
        xp = math.floor(result.total_score * self._xp_per_point)
        badges = [rule.badge for rule in self._badge_rules if rule.matches(result)]
        if self._completion_badge is not None:
            badges.append(self._completion_badge)
        return RewardSummary(xp_awarded=xp, badges_awarded=tuple(badges))
