"""State machine driving one learner through an ordered quiz."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from threading import Lock
import time
from typing import Iterable

from learn_quiz.core.errors import InvalidSessionError, InvalidTransitionError
from learn_quiz.core.models import (
    AnswerState,
    AnswerStatus,
    Question,
    QuestionPhase,
    QuestionType,
    RewardSummary,
    SessionResult,
    SessionStatus,
)
from learn_quiz.core.services.answer_lock import AnswerLock
from learn_quiz.core.services.countdown_timer import Clock, CountdownTimer
from learn_quiz.core.services.scorer import Scorer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Read-only view of the session handed to the presentation layer."""

    status: SessionStatus
    question_index: int | None
    question_count: int
    question: Question | None
    phase: QuestionPhase | None
    answer: AnswerState | None
    remaining_seconds: int | None
    score_so_far: int
    result: SessionResult | None


class QuizSession:
    """Strictly forward cursor over the questions with one active AnswerLock.

    The presentation layer drives the session with ``select_answer`` (plus
    ``submit_answer`` for multi-choice), ``reveal_current`` and ``advance``.
    The countdown timer is owned here and cancelled on every path that
    leaves an unanswered question.
    """

    def __init__(
        self,
        timer: CountdownTimer | None = None,
        scorer: Scorer | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self._clock = clock
        self._timer = timer or CountdownTimer(clock=clock)
        self._scorer = scorer or Scorer()
        self._timer.tick.connect(self._handle_tick)
        self._timer.expired.connect(self._handle_timer_expired)

        self._lock = Lock()
        self._status = SessionStatus.NOT_STARTED
        self._questions: tuple[Question, ...] = ()
        self._index: int = -1
        self._answer_lock: AnswerLock | None = None
        self._result: SessionResult | None = None
        self._remaining_seconds: int | None = None

    @property
    def timer(self) -> CountdownTimer:
        return self._timer

    @property
    def status(self) -> SessionStatus:
        return self._status

    # --- Commands ---

    def start(self, questions: Iterable[Question]) -> None:
        with self._lock:
            if self._status is not SessionStatus.NOT_STARTED:
                raise InvalidSessionError("Session has already been started.")
            ordered = tuple(questions)
            if not ordered:
                raise InvalidSessionError("A session needs at least one question.")
            self._questions = ordered
            self._result = SessionResult(question_count=len(ordered))
            self._status = SessionStatus.IN_PROGRESS
            logger.info("Quiz session started with %d question(s)", len(ordered))
            self._activate(0)

    def select_answer(self, option_id: str) -> bool:
        with self._lock:
            if self._status is not SessionStatus.IN_PROGRESS or self._answer_lock is None:
                return False
            now_millis = self._now_millis()
            if self._answer_lock.is_overdue(now_millis):
                self._expire_current(now_millis)
                return False
            changed = self._answer_lock.select(option_id, now_millis)
            if changed and self._answer_lock.status is AnswerStatus.LOCKED:
                self._timer.cancel()
            return changed

    def submit_answer(self) -> bool:
        with self._lock:
            if not self._require_started():
                return False
            now_millis = self._now_millis()
            if self._answer_lock.is_overdue(now_millis):
                self._expire_current(now_millis)
                return False
            changed = self._answer_lock.submit(now_millis)
            if changed:
                self._timer.cancel()
            return changed

    def reveal_current(self) -> bool:
        with self._lock:
            if not self._require_started():
                return False
            if not self._answer_lock.reveal(self._scorer):
                return False
            self._timer.cancel()
            self._result.answers.append(self._answer_lock.state)
            return True

    def advance(self) -> bool:
        with self._lock:
            if not self._require_started():
                return False
            if not self._answer_lock.status.is_resolved:
                raise InvalidTransitionError(
                    "The current question must be revealed or timed out before advancing."
                )
            self._timer.cancel()
            next_index = self._index + 1
            if next_index < len(self._questions):
                self._activate(next_index)
            else:
                self._finalize()
            return True

    def abandon(self) -> None:
        """Stop the session early; the partial result is kept but never finalized."""
        with self._lock:
            self._timer.cancel()
            if self._status is SessionStatus.IN_PROGRESS:
                self._status = SessionStatus.ABANDONED
                self._remaining_seconds = None
                logger.info("Quiz session abandoned at question %d", self._index + 1)

    def apply_external_grade(self, question_id: str, correct: bool, points: int) -> None:
        """Record a grade for a resolved open-ended answer."""
        if points < 0:
            raise ValueError("Points must not be negative.")
        if not correct and points > 0:
            raise ValueError("An incorrect answer cannot earn points.")
        with self._lock:
            if self._result is None:
                raise InvalidSessionError("Session has not been started.")
            answer = next((a for a in self._result.answers if a.question_id == question_id), None)
            if answer is None:
                raise InvalidTransitionError(f"Question {question_id!r} has not been resolved yet.")
            question = next(q for q in self._questions if q.id == question_id)
            if question.type is not QuestionType.OPEN_ENDED:
                raise InvalidTransitionError("Only open-ended answers accept an external grade.")
            if answer.status is AnswerStatus.SKIPPED_TIMEOUT:
                raise InvalidTransitionError("Timed-out answers cannot be graded.")
            answer.correct = correct
            answer.points = points
            if self._result.finalized:
                self._result.recompute_totals()

    def record_rewards(self, rewards: RewardSummary) -> None:
        with self._lock:
            if self._status is not SessionStatus.COMPLETED or self._result is None:
                raise InvalidSessionError("Rewards can only be recorded for a completed session.")
            self._result.xp_awarded = rewards.xp_awarded
            self._result.badges_awarded = list(rewards.badges_awarded)

    # --- Queries ---

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            question = self._questions[self._index] if self._index >= 0 else None
            answer = self._answer_lock.state.copy() if self._answer_lock else None
            phase = None
            if self._answer_lock is not None:
                phase = (
                    QuestionPhase.RESOLVED
                    if self._answer_lock.status.is_resolved
                    else QuestionPhase.ACTIVE
                )
            score = sum(a.points for a in self._result.answers) if self._result else 0
            result = None
            if self._status is SessionStatus.COMPLETED and self._result is not None:
                result = self._result.copy()
            return SessionSnapshot(
                status=self._status,
                question_index=self._index if self._index >= 0 else None,
                question_count=len(self._questions),
                question=question,
                phase=phase,
                answer=answer,
                remaining_seconds=self._remaining_seconds,
                score_so_far=score,
                result=result,
            )

    def question_phase(self, index: int) -> QuestionPhase:
        with self._lock:
            if not 0 <= index < len(self._questions):
                raise IndexError(f"Question index {index} out of range")
            if index < self._index or self._status is SessionStatus.COMPLETED:
                return QuestionPhase.RESOLVED
            if index == self._index and self._answer_lock is not None:
                if self._answer_lock.status.is_resolved:
                    return QuestionPhase.RESOLVED
                return QuestionPhase.ACTIVE
            return QuestionPhase.PENDING

    def get_result(self) -> SessionResult | None:
        with self._lock:
            if self._status is not SessionStatus.COMPLETED or self._result is None:
                return None
            return self._result.copy()

    # --- Timer callbacks ---

    def _handle_tick(self, remaining_seconds: int) -> None:
        with self._lock:
            if self._status is SessionStatus.IN_PROGRESS:
                self._remaining_seconds = remaining_seconds

    def _handle_timer_expired(self) -> None:
        with self._lock:
            if self._status is not SessionStatus.IN_PROGRESS or self._answer_lock is None:
                return
            self._expire_current(self._now_millis())

    # --- Internals ---

    def _require_started(self) -> bool:
        """Raise before start; report False once the session is over."""
        if self._status is SessionStatus.NOT_STARTED:
            raise InvalidSessionError("Session has not been started.")
        return not self._status.is_terminal and self._answer_lock is not None

    def _expire_current(self, now_millis: int) -> None:
        """Resolve the active question as timed out and record it."""
        self._timer.cancel()
        if self._answer_lock.expire(now_millis, self._scorer):
            self._remaining_seconds = 0
            self._result.answers.append(self._answer_lock.state)

    def _activate(self, index: int) -> None:
        question = self._questions[index]
        self._index = index
        self._answer_lock = AnswerLock(question, activated_at_millis=self._now_millis())
        if question.time_limit_seconds is not None:
            self._remaining_seconds = question.time_limit_seconds
            self._timer.start(question.time_limit_seconds)
        else:
            self._remaining_seconds = None
            self._timer.cancel()
        logger.debug("Question %d/%d active (%s)", index + 1, len(self._questions), question.id)

    def _finalize(self) -> None:
        self._result.recompute_totals()
        self._result.finalized = True
        self._status = SessionStatus.COMPLETED
        self._remaining_seconds = None
        logger.info(
            "Quiz session completed: score=%d correct=%d/%d",
            self._result.total_score,
            self._result.correct_count,
            self._result.question_count,
        )

    def _now_millis(self) -> int:
        return int(self._clock() * 1000)
