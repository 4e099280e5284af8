"""Utilities for importing quizzes from a human-friendly text file.

File format (repeat blocks separated by blank lines or '---'):

    Q: Question text (supports markdown + LaTeX). Additional lines until the
       next marker are treated as part of the question.
    A: First option text
    B: Second option text        (up to H; omit all options for open questions)
    TYPE: single|multi|open      (optional, inferred from CORRECT otherwise)
    CORRECT: B  or  A, C         (required for choice questions)
    DIFFICULTY: easy|medium|hard (optional, defaults to medium)
    TIMELIMIT: seconds           (optional, omit for no timer)
    EXPLANATION: text            (optional, shown after the answer is revealed)

Example:

    Q: Which of these are prime?
    A: 2
    B: 4
    C: 7
    TYPE: multi
    CORRECT: A, C
    TIMELIMIT: 30
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from learn_quiz.core.models import Difficulty, Question, QuestionOption, QuestionType


class QuizImportError(Exception):
    """Raised when a quiz definition cannot be parsed."""


@dataclass(slots=True)
class ImportedQuiz:
    """Container for imported quiz metadata and questions."""

    source_path: Path
    questions: list[Question]


_OPTION_ORDER = ["A", "B", "C", "D", "E", "F", "G", "H"]
_TYPE_ALIASES = {
    "single": QuestionType.SINGLE_CHOICE,
    "single_choice": QuestionType.SINGLE_CHOICE,
    "multi": QuestionType.MULTI_CHOICE,
    "multi_choice": QuestionType.MULTI_CHOICE,
    "open": QuestionType.OPEN_ENDED,
    "open_ended": QuestionType.OPEN_ENDED,
}


def load_quiz_from_file(file_path: Path) -> ImportedQuiz:
    text = file_path.read_text(encoding="utf-8")
    questions = parse_quiz_text(text)
    if not questions:
        raise QuizImportError("Quiz file did not contain any questions.")
    return ImportedQuiz(source_path=file_path, questions=questions)


def parse_quiz_text(text: str) -> list[Question]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            # Blank line encountered after content - finalize current block
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())

    return [
        _parse_block(block, question_id=f"q{position}")
        for position, block in enumerate((b for b in blocks if b), start=1)
    ]


def _parse_block(block: str, question_id: str) -> Question:
    question_lines: list[str] = []
    options: dict[str, str] = {}
    correct_letters: list[str] = []
    type_value: str | None = None
    difficulty = Difficulty.MEDIUM
    time_limit_seconds: int | None = None
    explanation: str | None = None
    current_section: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("Q:"):
            question_lines = [line[2:].strip()]
            current_section = "Q"
            continue

        if upper.startswith("CORRECT:"):
            raw_value = line.split(":", 1)[1]
            correct_letters = [part.strip().upper() for part in raw_value.split(",") if part.strip()]
            current_section = None
            continue

        if upper.startswith("TYPE:"):
            type_value = line.split(":", 1)[1].strip().lower()
            current_section = None
            continue

        if upper.startswith("DIFFICULTY:"):
            raw_value = line.split(":", 1)[1].strip().lower()
            try:
                difficulty = Difficulty(raw_value)
            except ValueError as exc:
                raise QuizImportError("DIFFICULTY must be easy, medium or hard.") from exc
            current_section = None
            continue

        if upper.startswith("TIMELIMIT:"):
            time_limit_seconds = _parse_time_limit(line.split(":", 1)[1].strip())
            current_section = None
            continue

        if upper.startswith("EXPLANATION:"):
            explanation = line.split(":", 1)[1].strip()
            current_section = "EXPLANATION"
            continue

        if len(line) > 2 and line[0].upper() in _OPTION_ORDER and line[1] == ":":
            letter = line[0].upper()
            options[letter] = line[2:].strip()
            current_section = letter
            continue

        if current_section == "Q":
            question_lines.append(line)
        elif current_section == "EXPLANATION":
            explanation = f"{explanation}\n{line}" if explanation else line
        elif current_section in _OPTION_ORDER:
            options[current_section] = options[current_section] + f"\n{line}"
        else:
            raise QuizImportError(
                f"Encountered text outside of a known section: '{line}'."
            )

    question_text = "\n".join(question_lines).strip()
    if not question_text:
        raise QuizImportError("Question text missing (Q: ...)")

    letters = [letter for letter in _OPTION_ORDER if letter in options]
    if letters != _OPTION_ORDER[: len(letters)]:
        raise QuizImportError("Options must use consecutive letters starting at A.")
    option_list = [QuestionOption(id=letter, text=options[letter].strip()) for letter in letters]
    if any(not option.text for option in option_list):
        raise QuizImportError("Option text cannot be empty.")

    question_type = _resolve_type(type_value, option_list, correct_letters)
    if question_type is not QuestionType.OPEN_ENDED:
        if not correct_letters:
            raise QuizImportError("Choice questions must define CORRECT.")
        unknown = [letter for letter in correct_letters if letter not in letters]
        if unknown:
            raise QuizImportError(f"CORRECT refers to missing options: {', '.join(unknown)}.")

    try:
        return Question(
            id=question_id,
            body=question_text,
            type=question_type,
            options=tuple(option_list),
            correct_option_ids=frozenset(correct_letters),
            difficulty=difficulty,
            time_limit_seconds=time_limit_seconds,
            explanation=explanation,
        )
    except ValueError as exc:
        raise QuizImportError(str(exc)) from exc


def _resolve_type(
    type_value: str | None,
    options: list[QuestionOption],
    correct_letters: list[str],
) -> QuestionType:
    if type_value is not None:
        try:
            return _TYPE_ALIASES[type_value]
        except KeyError as exc:
            raise QuizImportError("TYPE must be single, multi or open.") from exc
    if not options:
        return QuestionType.OPEN_ENDED
    if len(correct_letters) > 1:
        return QuestionType.MULTI_CHOICE
    return QuestionType.SINGLE_CHOICE


def _parse_time_limit(raw_value: str) -> int:
    if not raw_value:
        raise QuizImportError("TIMELIMIT must include an integer value.")
    try:
        parsed_value = int(raw_value)
    except ValueError as exc:  # pragma: no cover - conversion error details unnecessary
        raise QuizImportError("TIMELIMIT must be an integer number of seconds.") from exc
    if parsed_value <= 0:
        raise QuizImportError("TIMELIMIT must be a positive integer.")
    return parsed_value
