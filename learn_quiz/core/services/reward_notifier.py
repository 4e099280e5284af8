"""Turns earned XP and badges into a staggered sequence of toast jobs."""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from learn_quiz.constants.quiz_constants import NOTIFICATION_DURATION_MS, NOTIFICATION_STAGGER_MS
from learn_quiz.core.models import Badge, NotificationJob, NotificationKind

logger = logging.getLogger(__name__)


class NotificationDisplay(Protocol):
    """Display port that renders jobs relative to the moment it receives them."""

    def present(self, jobs: Sequence[NotificationJob]) -> None:
        ...


class RewardNotifier:
    """Stateless scheduler; every call is a pure function of its inputs.

    The XP toast (if any) starts immediately and badge toasts follow at a
    fixed stagger. Staggering only controls start offsets, so toasts may
    overlap on screen.
    """

    def __init__(
        self,
        duration_millis: int = NOTIFICATION_DURATION_MS,
        stagger_millis: int = NOTIFICATION_STAGGER_MS,
    ) -> None:
        self._duration_millis = duration_millis
        self._stagger_millis = stagger_millis

    def schedule(self, xp_awarded: int, badges_awarded: Sequence[Badge]) -> list[NotificationJob]:
        if xp_awarded < 0:
            raise ValueError("XP awarded must not be negative.")

        jobs: list[NotificationJob] = []
        if xp_awarded > 0:
            jobs.append(
                NotificationJob(
                    kind=NotificationKind.XP,
                    payload=xp_awarded,
                    scheduled_offset_millis=0,
                    duration_millis=self._duration_millis,
                )
            )

        badge_base = self._stagger_millis if xp_awarded > 0 else 0
        for position, badge in enumerate(badges_awarded):
            jobs.append(
                NotificationJob(
                    kind=NotificationKind.BADGE,
                    payload=badge,
                    scheduled_offset_millis=badge_base + position * self._stagger_millis,
                    duration_millis=self._duration_millis,
                )
            )

        logger.debug("Scheduled %d reward notification(s)", len(jobs))
        return jobs
