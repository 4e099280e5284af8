import pytest

from learn_quiz.core.errors import InvalidSessionError, InvalidTransitionError
from learn_quiz.core.models import AnswerStatus, Badge, QuestionPhase, RewardSummary, SessionStatus
from learn_quiz.core.services.countdown_timer import CountdownTimer
from learn_quiz.core.services.quiz_session import QuizSession

from conftest import run_countdown


def _answer_all_correctly(session, clock):
    """Walks the four-question fixture quiz answering each question at once."""
    session.select_answer("b")
    session.reveal_current()
    session.advance()

    session.select_answer("a")
    session.select_answer("c")
    session.submit_answer()
    session.reveal_current()
    session.advance()

    session.select_answer("Light scattering")
    session.reveal_current()
    session.advance()

    session.select_answer("a")
    session.reveal_current()
    session.advance()


def test_start_activates_first_question(make_session, quiz_questions):
    session = make_session()
    session.start(quiz_questions)
    snapshot = session.snapshot()
    assert snapshot.status is SessionStatus.IN_PROGRESS
    assert snapshot.question_index == 0
    assert snapshot.question.id == "q1"
    assert snapshot.phase is QuestionPhase.ACTIVE
    assert snapshot.remaining_seconds == 30
    assert session.timer.is_active() is True


def test_start_rejects_second_start_and_empty_quiz(make_session, quiz_questions):
    session = make_session()
    session.start(quiz_questions)
    with pytest.raises(InvalidSessionError):
        session.start(quiz_questions)
    with pytest.raises(InvalidSessionError):
        make_session().start([])


def test_commands_before_start(make_session):
    session = make_session()
    assert session.select_answer("a") is False
    with pytest.raises(InvalidSessionError):
        session.submit_answer()
    with pytest.raises(InvalidSessionError):
        session.reveal_current()
    with pytest.raises(InvalidSessionError):
        session.advance()


def test_full_run_records_answers_in_order(make_session, quiz_questions, clock):
    session = make_session()
    session.start(quiz_questions)
    _answer_all_correctly(session, clock)

    result = session.get_result()
    assert session.status is SessionStatus.COMPLETED
    assert [a.question_id for a in result.answers] == ["q1", "q2", "q3", "q4"]
    assert all(a.status is AnswerStatus.REVEALED for a in result.answers)
    assert result.finalized is True
    assert result.total_score == 200 + 300 + 0 + 100
    assert result.correct_count == 3
    assert result.total_score == sum(a.points for a in result.answers)


def test_lock_records_elapsed_time_and_cancels_timer(make_session, quiz_questions, clock):
    session = make_session()
    session.start(quiz_questions)
    clock.advance(15)
    session.select_answer("b")
    assert session.timer.is_active() is False
    session.reveal_current()
    snapshot = session.snapshot()
    assert snapshot.answer.elapsed_millis == 15_000
    assert snapshot.answer.points == 150
    assert snapshot.score_so_far == 150


def test_frozen_answer_ignores_new_selection(make_session, quiz_questions):
    session = make_session()
    session.start(quiz_questions)
    session.select_answer("b")
    assert session.select_answer("a") is False
    session.reveal_current()
    assert session.select_answer("c") is False
    assert session.snapshot().answer.selected_option_ids == {"b"}


def test_multi_choice_needs_explicit_submit(make_session, multi_question):
    session = make_session()
    session.start([multi_question])
    session.select_answer("a")
    session.select_answer("c")
    assert session.snapshot().answer.status is AnswerStatus.UNANSWERED
    assert session.timer.is_active() is True
    with pytest.raises(InvalidTransitionError):
        session.reveal_current()
    assert session.submit_answer() is True
    assert session.snapshot().answer.status is AnswerStatus.LOCKED


def test_advance_requires_resolved_question(make_session, quiz_questions):
    session = make_session()
    session.start(quiz_questions)
    with pytest.raises(InvalidTransitionError):
        session.advance()
    session.select_answer("b")
    with pytest.raises(InvalidTransitionError):
        session.advance()
    assert session.snapshot().question_index == 0


def test_timeout_skips_question_without_advancing(make_session, quiz_questions, clock):
    session = make_session()
    session.start(quiz_questions)
    run_countdown(session.timer, clock, 30)

    snapshot = session.snapshot()
    assert snapshot.question_index == 0
    assert snapshot.phase is QuestionPhase.RESOLVED
    assert snapshot.remaining_seconds == 0
    assert snapshot.answer.status is AnswerStatus.SKIPPED_TIMEOUT
    assert snapshot.answer.points == 0
    assert session.select_answer("b") is False
    assert session.reveal_current() is False

    assert session.advance() is True
    assert session.snapshot().question.id == "q2"


def test_timer_ticks_update_remaining_seconds(make_session, quiz_questions, clock):
    session = make_session()
    session.start(quiz_questions)
    run_countdown(session.timer, clock, 4)
    assert session.snapshot().remaining_seconds == 26


def test_untimed_question_has_no_countdown(make_session, untimed_question):
    session = make_session()
    session.start([untimed_question])
    assert session.timer.is_active() is False
    assert session.snapshot().remaining_seconds is None


def test_last_advance_completes_exactly_once(make_session, single_question):
    session = make_session()
    session.start([single_question])
    session.select_answer("b")
    session.reveal_current()
    assert session.advance() is True
    assert session.status is SessionStatus.COMPLETED
    assert session.advance() is False
    assert session.select_answer("a") is False
    assert len(session.get_result().answers) == 1


def test_result_hidden_until_completed(make_session, quiz_questions):
    session = make_session()
    session.start(quiz_questions)
    assert session.get_result() is None
    assert session.snapshot().result is None


def test_question_phases_move_forward(make_session, quiz_questions):
    session = make_session()
    session.start(quiz_questions)
    session.select_answer("b")
    session.reveal_current()
    session.advance()
    assert session.question_phase(0) is QuestionPhase.RESOLVED
    assert session.question_phase(1) is QuestionPhase.ACTIVE
    assert session.question_phase(2) is QuestionPhase.PENDING
    with pytest.raises(IndexError):
        session.question_phase(9)


def test_abandon_stops_timer_and_commands(make_session, quiz_questions):
    session = make_session()
    session.start(quiz_questions)
    session.abandon()
    assert session.status is SessionStatus.ABANDONED
    assert session.timer.is_active() is False
    assert session.select_answer("b") is False
    assert session.advance() is False
    assert session.get_result() is None


def test_external_grade_updates_completed_totals(make_session, quiz_questions, clock):
    session = make_session()
    session.start(quiz_questions)
    _answer_all_correctly(session, clock)

    session.apply_external_grade("q3", correct=True, points=150)
    result = session.get_result()
    assert result.answers[2].correct is True
    assert result.total_score == 750
    assert result.correct_count == 4


def test_external_grade_rejects_choice_questions(make_session, quiz_questions, clock):
    session = make_session()
    session.start(quiz_questions)
    _answer_all_correctly(session, clock)
    with pytest.raises(InvalidTransitionError):
        session.apply_external_grade("q1", correct=False, points=0)
    with pytest.raises(ValueError):
        session.apply_external_grade("q3", correct=True, points=-1)


def test_record_rewards_requires_completion(make_session, single_question):
    session = make_session()
    session.start([single_question])
    rewards = RewardSummary(xp_awarded=20, badges_awarded=(Badge("first", "First Quiz"),))
    with pytest.raises(InvalidSessionError):
        session.record_rewards(rewards)

    session.select_answer("b")
    session.reveal_current()
    session.advance()
    session.record_rewards(rewards)
    result = session.get_result()
    assert result.xp_awarded == 20
    assert [badge.key for badge in result.badges_awarded] == ["first"]


def test_snapshot_is_detached_from_session(make_session, multi_question):
    session = make_session()
    session.start([multi_question])
    snapshot = session.snapshot()
    snapshot.answer.selected_option_ids.add("a")
    assert session.snapshot().answer.selected_option_ids == set()


def test_custom_timer_is_used(clock, single_question):
    timer = CountdownTimer(clock=clock)
    session = QuizSession(timer=timer, clock=clock)
    session.start([single_question])
    assert session.timer is timer
    assert timer.remaining_seconds == 30


def test_external_grade_rejects_points_for_incorrect_answer(make_session, quiz_questions, clock):
    session = make_session()
    session.start(quiz_questions)
    _answer_all_correctly(session, clock)
    with pytest.raises(ValueError):
        session.apply_external_grade("q3", correct=False, points=150)

    result = session.get_result()
    assert result.answers[2].correct is None
    assert result.answers[2].points == 0
    assert result.total_score == 600


def test_selection_after_deadline_times_out_before_timer_polls(make_session, single_question, clock):
    session = make_session()
    session.start([single_question])
    clock.advance(30.05)

    assert session.select_answer("b") is False
    snapshot = session.snapshot()
    assert snapshot.answer.status is AnswerStatus.SKIPPED_TIMEOUT
    assert snapshot.answer.points == 0
    assert snapshot.remaining_seconds == 0
    assert session.timer.is_active() is False

    session.timer._check_deadline()
    assert session.advance() is True
    assert [a.status for a in session.get_result().answers] == [AnswerStatus.SKIPPED_TIMEOUT]


def test_late_submit_times_out_multi_choice(make_session, multi_question, clock):
    session = make_session()
    session.start([multi_question])
    session.select_answer("a")
    session.select_answer("c")
    clock.advance(20)

    assert session.submit_answer() is False
    snapshot = session.snapshot()
    assert snapshot.answer.status is AnswerStatus.SKIPPED_TIMEOUT
    assert snapshot.answer.correct is False
