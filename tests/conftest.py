"""
Pytest configuration and fixtures for LearnQuiz tests.
"""
import pytest
from PySide6.QtCore import QCoreApplication

from learn_quiz.core.models import Difficulty, Question, QuestionOption, QuestionType
from learn_quiz.core.services.countdown_timer import CountdownTimer
from learn_quiz.core.services.quiz_session import QuizSession


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def run_countdown(timer: CountdownTimer, clock: FakeClock, seconds: int) -> None:
    """Advance the clock one second at a time, polling the timer after each step."""
    for _ in range(seconds):
        clock.advance(1)
        timer._check_deadline()


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    """Qt objects need a core application; no event loop is ever run."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_session(clock):
    def factory():
        return QuizSession(clock=clock)

    return factory


@pytest.fixture
def single_question():
    return Question(
        id="q1",
        body="What is 2 + 2?",
        type=QuestionType.SINGLE_CHOICE,
        options=[QuestionOption("a", "3"), QuestionOption("b", "4"), QuestionOption("c", "5")],
        correct_option_ids={"b"},
        difficulty=Difficulty.MEDIUM,
        time_limit_seconds=30,
    )


@pytest.fixture
def multi_question():
    return Question(
        id="q2",
        body="Which numbers are prime?",
        type=QuestionType.MULTI_CHOICE,
        options=[
            QuestionOption("a", "2"),
            QuestionOption("b", "4"),
            QuestionOption("c", "7"),
        ],
        correct_option_ids={"a", "c"},
        difficulty=Difficulty.HARD,
        time_limit_seconds=20,
    )


@pytest.fixture
def open_question():
    return Question(
        id="q3",
        body="Why is the sky blue?",
        type=QuestionType.OPEN_ENDED,
        difficulty=Difficulty.EASY,
    )


@pytest.fixture
def untimed_question():
    return Question(
        id="q4",
        body="Capital of France?",
        type=QuestionType.SINGLE_CHOICE,
        options=[QuestionOption("a", "Paris"), QuestionOption("b", "Rome")],
        correct_option_ids={"a"},
        difficulty=Difficulty.EASY,
    )


@pytest.fixture
def quiz_questions(single_question, multi_question, open_question, untimed_question):
    return [single_question, multi_question, open_question, untimed_question]
