"""Per-question breakdown of a finished session for the results views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from learn_quiz.core.models import AnswerStatus, Question, SessionResult


@dataclass(frozen=True, slots=True)
class AnswerBreakdown:
    """One row of the results view."""

    question_number: int
    question_id: str
    status: AnswerStatus
    correct: bool | None
    points: int
    explanation: str | None

    @property
    def verdict(self) -> str:
        if self.status is AnswerStatus.SKIPPED_TIMEOUT:
            return "Time ran out"
        if self.correct is None:
            return "Awaiting grading"
        return "Correct" if self.correct else "Incorrect"


def build_answer_breakdown(
    result: SessionResult,
    questions: Sequence[Question] = (),
) -> list[AnswerBreakdown]:
    """Pair each recorded answer with its question's explanation, in quiz order."""
    explanations = {question.id: question.explanation for question in questions}
    return [
        AnswerBreakdown(
            question_number=number,
            question_id=answer.question_id,
            status=answer.status,
            correct=answer.correct,
            points=answer.points,
            explanation=explanations.get(answer.question_id),
        )
        for number, answer in enumerate(result.answers, start=1)
    ]


def format_quiz_summary(result: SessionResult) -> str:
    lines = [
        result.feedback_message,
        "",
        f"{result.correct_count} out of {result.question_count} correct ({result.percentage}%)",
        f"Score: {result.total_score} points",
        f"XP earned: {result.xp_awarded}",
    ]
    if result.badges_awarded:
        badges = ", ".join(f"{badge.icon} {badge.display_name}" for badge in result.badges_awarded)
        lines.append(f"Badges: {badges}")
    return "\n".join(lines)


def format_answer_breakdown(rows: Sequence[AnswerBreakdown]) -> str:
    lines: list[str] = []
    for row in rows:
        lines.append(f"Question {row.question_number}: {row.verdict} (+{row.points} points)")
        if row.explanation:
            lines.append(f"    {row.explanation}")
    return "\n".join(lines)
