from pathlib import Path

import pytest

from learn_quiz.core.models import Difficulty, QuestionType
from learn_quiz.core.quiz_importer import QuizImportError, load_quiz_from_file, parse_quiz_text

SAMPLE_QUIZ = Path(__file__).resolve().parents[1] / "learn_quiz" / "data" / "sample_quiz.txt"


def test_parse_mixed_question_types():
    text = """
Q: What is 2 + 2?
A: 3
B: 4
CORRECT: B
TIMELIMIT: 20
EXPLANATION: Basic addition.
  Counting on fingers works.

---
Q: Which are even?
A: 2
B: 3
C: 4
CORRECT: A, C
DIFFICULTY: hard

Q: Describe photosynthesis.
"""
    questions = parse_quiz_text(text)
    assert [q.id for q in questions] == ["q1", "q2", "q3"]

    first, second, third = questions
    assert first.type is QuestionType.SINGLE_CHOICE
    assert first.time_limit_seconds == 20
    assert first.difficulty is Difficulty.MEDIUM
    assert first.explanation == "Basic addition.\nCounting on fingers works."

    assert second.type is QuestionType.MULTI_CHOICE
    assert second.correct_option_ids == frozenset({"A", "C"})
    assert second.difficulty is Difficulty.HARD

    assert third.type is QuestionType.OPEN_ENDED
    assert third.options == ()


def test_multiline_question_and_option_text():
    questions = parse_quiz_text("Q: First line\nsecond line\nA: Option one\ncontinued\nB: Two\nCORRECT: A\n")
    assert questions[0].body == "First line\nsecond line"
    assert questions[0].options[0].text == "Option one\ncontinued"


def test_explicit_type_overrides_inference():
    questions = parse_quiz_text("Q: Pick any\nA: x\nB: y\nTYPE: multi\nCORRECT: A\n")
    assert questions[0].type is QuestionType.MULTI_CHOICE


@pytest.mark.parametrize(
    "text",
    [
        "A: orphan option\nCORRECT: A",
        "Q: Missing correct\nA: x\nB: y",
        "Q: Bad letter\nA: x\nC: y\nCORRECT: A",
        "Q: Unknown correct\nA: x\nB: y\nCORRECT: D",
        "Q: Bad type\nA: x\nTYPE: essay\nCORRECT: A",
        "Q: Bad difficulty\nA: x\nCORRECT: A\nDIFFICULTY: extreme",
        "Q: Bad limit\nA: x\nCORRECT: A\nTIMELIMIT: soon",
        "Q: Zero limit\nA: x\nCORRECT: A\nTIMELIMIT: 0",
        "Q: Two answers\nA: x\nB: y\nTYPE: single\nCORRECT: A, B",
        "Q: Stray\nCORRECT: A\nloose text",
    ],
)
def test_invalid_blocks_raise(text):
    with pytest.raises(QuizImportError):
        parse_quiz_text(text)


def test_load_sample_quiz():
    imported = load_quiz_from_file(SAMPLE_QUIZ)
    assert imported.source_path == SAMPLE_QUIZ
    assert len(imported.questions) == 4
    assert imported.questions[-1].type is QuestionType.OPEN_ENDED


def test_empty_file_raises(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("\n\n---\n", encoding="utf-8")
    with pytest.raises(QuizImportError):
        load_quiz_from_file(path)
