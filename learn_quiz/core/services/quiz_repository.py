"""Service for managing the collection of quiz questions."""

from __future__ import annotations

from dataclasses import replace

from learn_quiz.core.models import Question


class QuizRepository:
    """Holds the validated question sequence a session is started from."""

    def __init__(self) -> None:
        self._questions: list[Question] = []

    def load_questions(self, questions: list[Question]) -> None:
        """Replace the current quiz with a new list of questions."""
        if not questions:
            raise ValueError("Quiz must contain at least one question.")

        prepared = [self._prepare_question(q) for q in questions]
        ids = [q.id for q in prepared]
        duplicates = sorted({qid for qid in ids if ids.count(qid) > 1})
        if duplicates:
            raise ValueError(f"Question ids must be unique: {duplicates}")
        self._questions = prepared

    def get_questions(self) -> list[Question]:
        """Return a copy of all loaded questions."""
        return list(self._questions)

    def has_questions(self) -> bool:
        return bool(self._questions)

    def get_question_count(self) -> int:
        return len(self._questions)

    def clear(self) -> None:
        self._questions = []

    @staticmethod
    def _prepare_question(question: Question) -> Question:
        cleaned_body = question.body.strip()
        if not cleaned_body:
            raise ValueError(f"Question {question.id!r} must not have an empty body.")
        if any(not option.text.strip() for option in question.options):
            raise ValueError(f"Question {question.id!r} has an empty option.")
        return replace(question, body=cleaned_body)
