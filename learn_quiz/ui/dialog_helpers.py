"""Message boxes used by the learner window."""

from __future__ import annotations

from typing import Sequence

from PySide6.QtWidgets import QMessageBox, QWidget

from learn_quiz.core.models import SessionResult
from learn_quiz.core.result_summary import (
    AnswerBreakdown,
    format_answer_breakdown,
    format_quiz_summary,
)


def confirm_abandon_quiz(parent: QWidget) -> bool:
    """Ask before leaving a quiz that is still running; True means leave."""
    reply = QMessageBox.question(
        parent,
        "Leave Quiz",
        "The current quiz is still running. Leave it without finishing?",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def show_error(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.information(parent, title, message)


def show_warning(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.warning(parent, title, message)


def show_quiz_summary(
    parent: QWidget,
    result: SessionResult,
    breakdown: Sequence[AnswerBreakdown] = (),
) -> None:
    """Completion dialog; the per-question breakdown sits behind "Show Details"."""
    msg_box = QMessageBox(parent)
    msg_box.setIcon(QMessageBox.Information if result.is_passing else QMessageBox.NoIcon)
    msg_box.setWindowTitle("Quiz complete")
    msg_box.setText(format_quiz_summary(result))
    if breakdown:
        msg_box.setDetailedText(format_answer_breakdown(breakdown))
    msg_box.setStandardButtons(QMessageBox.Ok)
    msg_box.exec()
