import pytest

from learn_quiz.core.models import Badge, NotificationKind
from learn_quiz.core.services.reward_notifier import RewardNotifier

BADGE_A = Badge("a", "Badge A")
BADGE_B = Badge("b", "Badge B")


def test_xp_then_staggered_badges():
    jobs = RewardNotifier().schedule(50, [BADGE_A, BADGE_B])
    assert [(job.kind, job.payload, job.scheduled_offset_millis) for job in jobs] == [
        (NotificationKind.XP, 50, 0),
        (NotificationKind.BADGE, BADGE_A, 500),
        (NotificationKind.BADGE, BADGE_B, 1000),
    ]
    assert all(job.duration_millis == 3000 for job in jobs)


def test_badges_start_immediately_without_xp():
    jobs = RewardNotifier().schedule(0, [BADGE_A])
    assert len(jobs) == 1
    assert jobs[0].kind is NotificationKind.BADGE
    assert jobs[0].scheduled_offset_millis == 0


def test_nothing_earned_schedules_nothing():
    assert RewardNotifier().schedule(0, []) == []


def test_schedule_is_repeatable():
    notifier = RewardNotifier()
    assert notifier.schedule(10, [BADGE_A]) == notifier.schedule(10, [BADGE_A])


def test_custom_timing():
    jobs = RewardNotifier(duration_millis=1000, stagger_millis=250).schedule(5, [BADGE_A, BADGE_B])
    assert [job.scheduled_offset_millis for job in jobs] == [0, 250, 500]
    assert {job.duration_millis for job in jobs} == {1000}


def test_negative_xp_rejected():
    with pytest.raises(ValueError):
        RewardNotifier().schedule(-1, [])
