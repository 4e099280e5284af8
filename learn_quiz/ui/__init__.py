"""Qt UI components for the learner application."""

from .dialog_helpers import (
    confirm_abandon_quiz,
    show_error,
    show_info,
    show_quiz_summary,
    show_warning,
)
from .learner_main_window import LearnerMainWindow
from .question_renderer import render_explanation_document, render_question_document

__all__ = [
    "LearnerMainWindow",
    "confirm_abandon_quiz",
    "show_error",
    "show_info",
    "show_quiz_summary",
    "show_warning",
    "render_explanation_document",
    "render_question_document",
]
