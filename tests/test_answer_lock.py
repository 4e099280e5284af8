import pytest

from learn_quiz.core.errors import InvalidTransitionError
from learn_quiz.core.models import AnswerStatus
from learn_quiz.core.services.answer_lock import AnswerLock
from learn_quiz.core.services.scorer import Scorer


def test_single_choice_select_locks_and_records_elapsed(single_question):
    lock = AnswerLock(single_question, activated_at_millis=1_000)
    assert lock.select("b", now_millis=4_500) is True
    assert lock.status is AnswerStatus.LOCKED
    assert lock.state.selected_option_ids == {"b"}
    assert lock.state.locked_at_millis == 4_500
    assert lock.state.elapsed_millis == 3_500


def test_locked_answer_ignores_further_selections(single_question):
    lock = AnswerLock(single_question, activated_at_millis=0)
    lock.select("b", now_millis=100)
    assert lock.select("a", now_millis=200) is False
    assert lock.state.selected_option_ids == {"b"}
    assert lock.state.elapsed_millis == 100


def test_multi_choice_toggles_until_submit(multi_question):
    lock = AnswerLock(multi_question, activated_at_millis=0)
    lock.select("a", now_millis=100)
    lock.select("b", now_millis=200)
    lock.select("b", now_millis=300)
    lock.select("c", now_millis=400)
    assert lock.status is AnswerStatus.UNANSWERED
    assert lock.state.selected_option_ids == {"a", "c"}

    assert lock.submit(now_millis=900) is True
    assert lock.status is AnswerStatus.LOCKED
    assert lock.state.elapsed_millis == 900


def test_submit_without_selection_is_ignored(multi_question, single_question):
    assert AnswerLock(multi_question, activated_at_millis=0).submit(now_millis=10) is False
    assert AnswerLock(single_question, activated_at_millis=0).submit(now_millis=10) is False


def test_unknown_option_raises(single_question):
    lock = AnswerLock(single_question, activated_at_millis=0)
    with pytest.raises(InvalidTransitionError):
        lock.select("z", now_millis=10)


def test_open_ended_select_stores_trimmed_response(open_question):
    lock = AnswerLock(open_question, activated_at_millis=0)
    assert lock.select("   ", now_millis=10) is False
    assert lock.select("  Rayleigh scattering ", now_millis=20) is True
    assert lock.status is AnswerStatus.LOCKED
    assert lock.state.response_text == "Rayleigh scattering"


def test_reveal_before_lock_raises(single_question):
    lock = AnswerLock(single_question, activated_at_millis=0)
    with pytest.raises(InvalidTransitionError):
        lock.reveal(Scorer())


def test_reveal_scores_once(single_question):
    lock = AnswerLock(single_question, activated_at_millis=0)
    lock.select("b", now_millis=0)
    assert lock.reveal(Scorer()) is True
    assert lock.status is AnswerStatus.REVEALED
    assert lock.state.correct is True
    assert lock.state.points == 200
    assert lock.reveal(Scorer()) is False


def test_expire_freezes_unanswered_question(multi_question):
    lock = AnswerLock(multi_question, activated_at_millis=0)
    lock.select("a", now_millis=100)
    assert lock.expire(now_millis=20_000, scorer=Scorer()) is True
    assert lock.status is AnswerStatus.SKIPPED_TIMEOUT
    assert lock.state.correct is False
    assert lock.state.points == 0
    assert lock.state.elapsed_millis == 20_000
    assert lock.select("c", now_millis=20_100) is False
    assert lock.submit(now_millis=20_200) is False


def test_expire_after_lock_is_ignored(single_question):
    lock = AnswerLock(single_question, activated_at_millis=0)
    lock.select("b", now_millis=100)
    assert lock.expire(now_millis=30_000, scorer=Scorer()) is False
    assert lock.status is AnswerStatus.LOCKED


def test_overdue_only_while_unanswered_and_timed(single_question, untimed_question):
    lock = AnswerLock(single_question, activated_at_millis=1_000)
    assert lock.is_overdue(now_millis=30_999) is False
    assert lock.is_overdue(now_millis=31_000) is True
    lock.select("b", now_millis=2_000)
    assert lock.is_overdue(now_millis=60_000) is False
    assert AnswerLock(untimed_question, activated_at_millis=0).is_overdue(now_millis=10**9) is False
