"""Business logic for managing quiz state shared between UI and API."""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock
from typing import Callable

from learn_quiz.core.errors import InvalidSessionError
from learn_quiz.core.models import NotificationJob, Question, SessionResult, SessionStatus
from learn_quiz.core.quiz_importer import load_quiz_from_file
from learn_quiz.core.result_summary import AnswerBreakdown, build_answer_breakdown
from learn_quiz.core.services.quiz_repository import QuizRepository
from learn_quiz.core.services.quiz_session import QuizSession, SessionSnapshot
from learn_quiz.core.services.reward_notifier import NotificationDisplay, RewardNotifier
from learn_quiz.core.services.reward_policy import RewardPolicy, ScoreRewardPolicy

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], QuizSession]


class QuizManager:
    """Facade over the repository, the active session and the reward pipeline.

    The Qt thread issues commands; the API thread only reads snapshots. A new
    QuizSession is created for every run because sessions cannot be restarted.
    """

    def __init__(
        self,
        session_factory: SessionFactory = QuizSession,
        reward_policy: RewardPolicy | None = None,
        notifier: RewardNotifier | None = None,
    ) -> None:
        self._lock = Lock()

        # Services
        self._repository = QuizRepository()
        self._session_factory = session_factory
        self._session: QuizSession | None = None
        self._reward_policy = reward_policy or ScoreRewardPolicy()
        self._notifier = notifier or RewardNotifier()
        self._display: NotificationDisplay | None = None
        self._notification_jobs: list[NotificationJob] = []

    # --- Quiz Repository Delegation ---

    def load_quiz_from_questions(self, questions: list[Question]) -> None:
        with self._lock:
            self._repository.load_questions(questions)
            self._discard_session()

    def load_quiz_from_file(self, file_path: Path) -> int:
        imported = load_quiz_from_file(file_path)
        self.load_quiz_from_questions(imported.questions)
        logger.info("Loaded %d question(s) from %s", len(imported.questions), file_path)
        return len(imported.questions)

    def get_loaded_questions(self) -> list[Question]:
        with self._lock:
            return self._repository.get_questions()

    def has_loaded_quiz(self) -> bool:
        with self._lock:
            return self._repository.has_questions()

    def get_question_count(self) -> int:
        with self._lock:
            return self._repository.get_question_count()

    # --- Session Delegation ---

    @property
    def session(self) -> QuizSession | None:
        return self._session

    def start_session(self) -> QuizSession:
        with self._lock:
            if not self._repository.has_questions():
                raise InvalidSessionError("No quiz loaded.")
            self._discard_session()
            session = self._session_factory()
            session.start(self._repository.get_questions())
            self._session = session
            return session

    def abandon_session(self) -> None:
        with self._lock:
            if self._session is not None:
                self._session.abandon()

    def select_answer(self, option_id: str) -> bool:
        with self._lock:
            if self._session is None:
                return False
            return self._session.select_answer(option_id)

    def submit_answer(self) -> bool:
        with self._lock:
            return self._active_session().submit_answer()

    def reveal_current(self) -> bool:
        with self._lock:
            return self._active_session().reveal_current()

    def advance(self) -> bool:
        with self._lock:
            session = self._active_session()
            advanced = session.advance()
            if advanced and session.status is SessionStatus.COMPLETED:
                self._deliver_rewards(session)
            return advanced

    def apply_external_grade(self, question_id: str, correct: bool, points: int) -> None:
        with self._lock:
            self._active_session().apply_external_grade(question_id, correct, points)

    def get_snapshot(self) -> SessionSnapshot | None:
        with self._lock:
            return self._session.snapshot() if self._session is not None else None

    def get_result(self) -> SessionResult | None:
        with self._lock:
            return self._session.get_result() if self._session is not None else None

    def get_answer_breakdown(self) -> list[AnswerBreakdown]:
        """Per-question rows of the completed session; empty until it completes."""
        with self._lock:
            result = self._session.get_result() if self._session is not None else None
            if result is None:
                return []
            return build_answer_breakdown(result, self._repository.get_questions())

    # --- Reward Notifications ---

    def set_notification_display(self, display: NotificationDisplay | None) -> None:
        with self._lock:
            self._display = display

    def get_notification_jobs(self) -> list[NotificationJob]:
        with self._lock:
            return list(self._notification_jobs)

    def _deliver_rewards(self, session: QuizSession) -> None:
        result = session.get_result()
        rewards = self._reward_policy.compute(result)
        session.record_rewards(rewards)
        self._notification_jobs = self._notifier.schedule(
            rewards.xp_awarded, list(rewards.badges_awarded)
        )
        logger.info(
            "Awarded %d XP and %d badge(s)", rewards.xp_awarded, len(rewards.badges_awarded)
        )
        if self._display is not None and self._notification_jobs:
            self._display.present(self._notification_jobs)

    def _active_session(self) -> QuizSession:
        if self._session is None:
            raise InvalidSessionError("Session has not been started.")
        return self._session

    def _discard_session(self) -> None:
        if self._session is not None:
            self._session.abandon()
        self._session = None
        self._notification_jobs = []
