"""Domain models for the quiz session engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import math
from typing import Union

from learn_quiz.constants.quiz_constants import PASSING_PERCENTAGE


class QuestionType(str, Enum):
    SINGLE_CHOICE = "single_choice"
    MULTI_CHOICE = "multi_choice"
    OPEN_ENDED = "open_ended"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class AnswerStatus(str, Enum):
    UNANSWERED = "unanswered"
    LOCKED = "locked"
    REVEALED = "revealed"
    SKIPPED_TIMEOUT = "skipped_timeout"

    @property
    def is_frozen(self) -> bool:
        return self is not AnswerStatus.UNANSWERED

    @property
    def is_resolved(self) -> bool:
        return self in (AnswerStatus.REVEALED, AnswerStatus.SKIPPED_TIMEOUT)


class SessionStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ABANDONED = "abandoned"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionStatus.COMPLETED, SessionStatus.ABANDONED)


class QuestionPhase(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    RESOLVED = "resolved"


class NotificationKind(str, Enum):
    XP = "xp"
    BADGE = "badge"


@dataclass(frozen=True, slots=True)
class QuestionOption:
    """A selectable answer choice."""

    id: str
    text: str


@dataclass(frozen=True, slots=True)
class Question:
    """Quiz question; immutable for the lifetime of a session."""

    id: str
    body: str
    type: QuestionType
    options: tuple[QuestionOption, ...] = ()
    correct_option_ids: frozenset[str] = field(default_factory=frozenset)
    difficulty: Difficulty = Difficulty.MEDIUM
    time_limit_seconds: int | None = None
    explanation: str | None = None

    def __post_init__(self) -> None:
        # Accept lists/sets from callers but store immutable containers.
        object.__setattr__(self, "options", tuple(self.options))
        object.__setattr__(self, "correct_option_ids", frozenset(self.correct_option_ids))
        object.__setattr__(self, "type", QuestionType(self.type))
        object.__setattr__(self, "difficulty", Difficulty(self.difficulty))

        option_ids = [option.id for option in self.options]
        if len(set(option_ids)) != len(option_ids):
            raise ValueError(f"Question {self.id!r} has duplicate option ids.")
        if self.type is QuestionType.OPEN_ENDED:
            if self.options or self.correct_option_ids:
                raise ValueError(f"Open-ended question {self.id!r} cannot define options.")
        else:
            if not self.options:
                raise ValueError(f"Question {self.id!r} needs at least one option.")
            unknown = self.correct_option_ids - set(option_ids)
            if unknown:
                raise ValueError(
                    f"Question {self.id!r} marks unknown options as correct: {sorted(unknown)}"
                )
        if self.type is QuestionType.SINGLE_CHOICE and len(self.correct_option_ids) != 1:
            raise ValueError(f"Single-choice question {self.id!r} needs exactly one correct option.")
        if self.time_limit_seconds is not None and self.time_limit_seconds <= 0:
            raise ValueError("Time limit must be a positive integer.")

    @property
    def is_timed(self) -> bool:
        return self.time_limit_seconds is not None

    def has_option(self, option_id: str) -> bool:
        return any(option.id == option_id for option in self.options)


@dataclass(slots=True)
class AnswerState:
    """Learner's answer for one question; mutated only through AnswerLock."""

    question_id: str
    selected_option_ids: set[str] = field(default_factory=set)
    status: AnswerStatus = AnswerStatus.UNANSWERED
    locked_at_millis: int | None = None
    elapsed_millis: int | None = None
    response_text: str | None = None
    correct: bool | None = None
    points: int = 0

    def copy(self) -> AnswerState:
        return AnswerState(
            question_id=self.question_id,
            selected_option_ids=set(self.selected_option_ids),
            status=self.status,
            locked_at_millis=self.locked_at_millis,
            elapsed_millis=self.elapsed_millis,
            response_text=self.response_text,
            correct=self.correct,
            points=self.points,
        )


@dataclass(frozen=True, slots=True)
class Badge:
    """An earned achievement."""

    key: str
    display_name: str
    description: str = ""
    icon: str = "🏆"


@dataclass(slots=True)
class SessionResult:
    """Accumulated outcome of a session; totals are set on finalization."""

    question_count: int
    answers: list[AnswerState] = field(default_factory=list)
    total_score: int = 0
    correct_count: int = 0
    total_elapsed_millis: int = 0
    xp_awarded: int = 0
    badges_awarded: list[Badge] = field(default_factory=list)
    finalized: bool = False

    def recompute_totals(self) -> None:
        self.total_score = sum(answer.points for answer in self.answers)
        self.correct_count = sum(1 for answer in self.answers if answer.correct is True)
        self.total_elapsed_millis = sum(answer.elapsed_millis or 0 for answer in self.answers)

    def copy(self) -> SessionResult:
        return SessionResult(
            question_count=self.question_count,
            answers=[answer.copy() for answer in self.answers],
            total_score=self.total_score,
            correct_count=self.correct_count,
            total_elapsed_millis=self.total_elapsed_millis,
            xp_awarded=self.xp_awarded,
            badges_awarded=list(self.badges_awarded),
            finalized=self.finalized,
        )

    @property
    def percentage(self) -> int:
        if not self.question_count:
            return 0
        return math.floor(self.correct_count / self.question_count * 100 + 0.5)

    @property
    def is_passing(self) -> bool:
        return self.percentage >= PASSING_PERCENTAGE

    @property
    def feedback_message(self) -> str:
        percentage = self.percentage
        if percentage >= 90:
            return "Outstanding!"
        if percentage >= 70:
            return "Great job!"
        if percentage < 50:
            return "Keep studying!"
        return "Good effort!"


NotificationPayload = Union[int, Badge]


@dataclass(frozen=True, slots=True)
class NotificationJob:
    """A transient reward notification scheduled relative to session completion."""

    kind: NotificationKind
    payload: NotificationPayload
    scheduled_offset_millis: int
    duration_millis: int


@dataclass(frozen=True, slots=True)
class RewardSummary:
    """Output of the reward-computation collaborator."""

    xp_awarded: int = 0
    badges_awarded: tuple[Badge, ...] = ()
