"""Lock/reveal protocol for a single question's answer."""

from __future__ import annotations

import logging

from learn_quiz.core.errors import InvalidTransitionError
from learn_quiz.core.models import AnswerState, AnswerStatus, Question, QuestionType
from learn_quiz.core.services.scorer import Scorer

logger = logging.getLogger(__name__)


class AnswerLock:
    """Owns the AnswerState of one question while it is active.

    ``unanswered -> locked -> revealed`` is the normal path and
    ``unanswered -> skipped_timeout`` the timeout path. Writes to a frozen
    state are ignored and reported through the ``False`` return value.
    """

    def __init__(self, question: Question, activated_at_millis: int) -> None:
        self._question = question
        self._activated_at_millis = activated_at_millis
        self._state = AnswerState(question_id=question.id)

    @property
    def question(self) -> Question:
        return self._question

    @property
    def state(self) -> AnswerState:
        return self._state

    @property
    def status(self) -> AnswerStatus:
        return self._state.status

    def is_overdue(self, now_millis: int) -> bool:
        """True once a timed question has run to its limit without being answered."""
        limit = self._question.time_limit_seconds
        return (
            limit is not None
            and self._state.status is AnswerStatus.UNANSWERED
            and now_millis - self._activated_at_millis >= limit * 1000
        )

    def select(self, option_id: str, now_millis: int) -> bool:
        """Apply a selection; returns True when the state changed."""
        if self._state.status.is_frozen:
            return False

        question_type = self._question.type
        if question_type is QuestionType.OPEN_ENDED:
            response = option_id.strip()
            if not response:
                return False
            self._state.response_text = response
            self._lock(now_millis)
            return True

        if not self._question.has_option(option_id):
            raise InvalidTransitionError(
                f"Option {option_id!r} does not belong to question {self._question.id!r}."
            )

        if question_type is QuestionType.SINGLE_CHOICE:
            self._state.selected_option_ids = {option_id}
            self._lock(now_millis)
        elif option_id in self._state.selected_option_ids:
            self._state.selected_option_ids.discard(option_id)
        else:
            self._state.selected_option_ids.add(option_id)
        return True

    def submit(self, now_millis: int) -> bool:
        if (
            self._question.type is not QuestionType.MULTI_CHOICE
            or self._state.status is not AnswerStatus.UNANSWERED
            or not self._state.selected_option_ids
        ):
            return False
        self._lock(now_millis)
        return True

    def reveal(self, scorer: Scorer) -> bool:
        status = self._state.status
        if status.is_resolved:
            return False
        if status is AnswerStatus.UNANSWERED:
            raise InvalidTransitionError("Cannot reveal an answer before it is locked.")

        outcome = scorer.score(self._question, self._state)
        self._state.correct = outcome.correct
        self._state.points = outcome.points
        self._state.status = AnswerStatus.REVEALED
        logger.debug(
            "Revealed %s: correct=%s points=%s", self._question.id, outcome.correct, outcome.points
        )
        return True

    def expire(self, now_millis: int, scorer: Scorer) -> bool:
        if self._state.status is not AnswerStatus.UNANSWERED:
            return False
        self._state.status = AnswerStatus.SKIPPED_TIMEOUT
        self._state.elapsed_millis = max(0, now_millis - self._activated_at_millis)
        outcome = scorer.score(self._question, self._state)
        self._state.correct = outcome.correct
        self._state.points = outcome.points
        logger.debug("Question %s timed out", self._question.id)
        return True

    def _lock(self, now_millis: int) -> None:
        self._state.locked_at_millis = now_millis
        self._state.elapsed_millis = max(0, now_millis - self._activated_at_millis)
        self._state.status = AnswerStatus.LOCKED
