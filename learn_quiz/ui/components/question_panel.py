"""Component for answering the active quiz question."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from learn_quiz.constants.quiz_constants import TIME_LIMIT_WARNING_WINDOW_SECONDS
from learn_quiz.constants.ui_constants import (
    DEFAULT_FONT_SIZE,
    FINISH_BUTTON_TEXT,
    NEXT_BUTTON_TEXT,
    OPEN_ANSWER_PLACEHOLDER,
    REVEAL_BUTTON_TEXT,
    SUBMIT_BUTTON_TEXT,
    TIME_UP_MESSAGE,
)
from learn_quiz.core.errors import QuizError
from learn_quiz.core.models import AnswerStatus, QuestionType, SessionStatus
from learn_quiz.core.quiz_manager import QuizManager
from learn_quiz.core.services.quiz_session import QuizSession, SessionSnapshot
from learn_quiz.styling.styles import Styles
from learn_quiz.ui.dialog_helpers import show_warning
from learn_quiz.ui.question_renderer import render_explanation_document, render_question_document


class QuestionPanel(QWidget):
    """Renders the session snapshot and forwards learner commands to the manager."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        on_session_finished: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.on_session_finished = on_session_finished
        self._font_size: int = DEFAULT_FONT_SIZE
        self._rendered_question_key: tuple[str, bool] | None = None
        self._option_buttons: dict[str, QPushButton] = {}
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header_row = QHBoxLayout()
        self.progress_label = QLabel("", self)
        header_row.addWidget(self.progress_label)
        header_row.addStretch()
        self.time_limit_label = QLabel("", self)
        self.time_limit_label.setVisible(False)
        header_row.addWidget(self.time_limit_label)
        layout.addLayout(header_row)

        self.time_limit_progress = QProgressBar(self)
        self.time_limit_progress.setTextVisible(False)
        self.time_limit_progress.setVisible(False)
        layout.addWidget(self.time_limit_progress)

        self.preview_view = QWebEngineView(self)
        layout.addWidget(self.preview_view, stretch=1)

        self.options_layout = QVBoxLayout()
        layout.addLayout(self.options_layout)

        self.open_answer_edit = QLineEdit(self)
        self.open_answer_edit.setPlaceholderText(OPEN_ANSWER_PLACEHOLDER)
        self.open_answer_edit.returnPressed.connect(self._handle_open_answer)
        self.open_answer_edit.setVisible(False)
        layout.addWidget(self.open_answer_edit)

        self.feedback_label = QLabel("", self)
        self.feedback_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.feedback_label)

        button_row = QHBoxLayout()
        button_row.addStretch()
        self.submit_button = QPushButton(SUBMIT_BUTTON_TEXT, self)
        self.submit_button.clicked.connect(self._handle_submit)
        button_row.addWidget(self.submit_button)
        self.reveal_button = QPushButton(REVEAL_BUTTON_TEXT, self)
        self.reveal_button.clicked.connect(self._handle_reveal)
        button_row.addWidget(self.reveal_button)
        self.next_button = QPushButton(NEXT_BUTTON_TEXT, self)
        self.next_button.clicked.connect(self._handle_next)
        button_row.addWidget(self.next_button)
        layout.addLayout(button_row)

    # --- Session wiring ---

    def attach_session(self, session: QuizSession) -> None:
        session.timer.tick.connect(self._handle_timer_tick)
        session.timer.expired.connect(self.refresh)
        self._rendered_question_key = None
        self.refresh()

    def refresh(self) -> None:
        snapshot = self.quiz_manager.get_snapshot()
        if snapshot is None or snapshot.question is None or snapshot.answer is None:
            return
        self._render_question(snapshot)
        self._update_progress(snapshot)
        self._update_timer(snapshot)
        self._update_options(snapshot)
        self._update_buttons(snapshot)
        self._update_feedback(snapshot)

    # --- Learner commands ---

    def _run_command(self, command: Callable[[], bool]) -> None:
        try:
            command()
        except QuizError as exc:
            show_warning(self, "Not yet", str(exc))
        self.refresh()

    def _handle_option_clicked(self, option_id: str) -> None:
        self._run_command(lambda: self.quiz_manager.select_answer(option_id))

    def _handle_open_answer(self) -> None:
        text = self.open_answer_edit.text()
        self._run_command(lambda: self.quiz_manager.select_answer(text))

    def _handle_submit(self) -> None:
        self._run_command(self.quiz_manager.submit_answer)

    def _handle_reveal(self) -> None:
        self._run_command(self.quiz_manager.reveal_current)

    def _handle_next(self) -> None:
        self._run_command(self.quiz_manager.advance)
        snapshot = self.quiz_manager.get_snapshot()
        if snapshot is not None and snapshot.status is SessionStatus.COMPLETED:
            self.on_session_finished()

    def _handle_timer_tick(self, remaining_seconds: int) -> None:
        snapshot = self.quiz_manager.get_snapshot()
        if snapshot is not None:
            self._update_timer(snapshot)

    # --- Rendering ---

    def _render_question(self, snapshot: SessionSnapshot) -> None:
        question = snapshot.question
        resolved = snapshot.answer.status.is_resolved
        key = (question.id, resolved)
        if key == self._rendered_question_key:
            return
        self._rendered_question_key = key
        if resolved:
            html = render_explanation_document(question, self._font_size)
        else:
            html = render_question_document(question, self._font_size)
        self.preview_view.setHtml(html)

        if not resolved:
            self._rebuild_option_buttons(snapshot)
            self.open_answer_edit.clear()

    def _rebuild_option_buttons(self, snapshot: SessionSnapshot) -> None:
        while self.options_layout.count():
            item = self.options_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        self._option_buttons = {}

        question = snapshot.question
        checkable = question.type is QuestionType.MULTI_CHOICE
        for option in question.options:
            button = QPushButton(f"{option.id}. {option.text}", self)
            button.setCheckable(checkable)
            button.clicked.connect(lambda _checked=False, oid=option.id: self._handle_option_clicked(oid))
            self.options_layout.addWidget(button)
            self._option_buttons[option.id] = button
        self.open_answer_edit.setVisible(question.type is QuestionType.OPEN_ENDED)

    def _update_progress(self, snapshot: SessionSnapshot) -> None:
        number = (snapshot.question_index or 0) + 1
        self.progress_label.setText(
            f"Question {number} of {snapshot.question_count} · Score: {snapshot.score_so_far}"
        )

    def _update_timer(self, snapshot: SessionSnapshot) -> None:
        limit = snapshot.question.time_limit_seconds if snapshot.question else None
        remaining = snapshot.remaining_seconds
        if limit is None or remaining is None:
            self.time_limit_label.setVisible(False)
            self.time_limit_progress.setVisible(False)
            return
        self.time_limit_label.setVisible(True)
        self.time_limit_progress.setVisible(True)
        self.time_limit_progress.setRange(0, limit)
        self.time_limit_progress.setValue(remaining)
        if remaining > 0:
            self.time_limit_label.setText(f"{remaining}s remaining")
        else:
            self.time_limit_label.setText("Time limit reached")
        urgent = 0 < remaining <= min(TIME_LIMIT_WARNING_WINDOW_SECONDS, limit)
        self.time_limit_label.setStyleSheet(Styles.get_timer_label_style(urgent))

    def _update_options(self, snapshot: SessionSnapshot) -> None:
        answer = snapshot.answer
        question = snapshot.question
        editable = answer.status is AnswerStatus.UNANSWERED
        for option_id, button in self._option_buttons.items():
            button.setEnabled(editable)
            if button.isCheckable():
                button.setChecked(option_id in answer.selected_option_ids)
            if answer.status.is_resolved and option_id in question.correct_option_ids:
                button.setStyleSheet(Styles.get_option_feedback_style(correct=True))
            elif answer.status.is_resolved and option_id in answer.selected_option_ids:
                button.setStyleSheet(Styles.get_option_feedback_style(correct=False))
            else:
                button.setStyleSheet("")
        self.open_answer_edit.setEnabled(editable)

    def _update_buttons(self, snapshot: SessionSnapshot) -> None:
        status = snapshot.answer.status
        is_multi = snapshot.question.type is QuestionType.MULTI_CHOICE
        self.submit_button.setVisible(is_multi)
        self.submit_button.setEnabled(
            status is AnswerStatus.UNANSWERED and bool(snapshot.answer.selected_option_ids)
        )
        self.reveal_button.setEnabled(status is AnswerStatus.LOCKED)
        self.next_button.setEnabled(status.is_resolved)
        is_last = (snapshot.question_index or 0) + 1 >= snapshot.question_count
        self.next_button.setText(FINISH_BUTTON_TEXT if is_last else NEXT_BUTTON_TEXT)

    def _update_feedback(self, snapshot: SessionSnapshot) -> None:
        answer = snapshot.answer
        if answer.status is AnswerStatus.SKIPPED_TIMEOUT:
            self.feedback_label.setText(TIME_UP_MESSAGE)
        elif answer.status is AnswerStatus.REVEALED:
            if answer.correct is None:
                self.feedback_label.setText("Answer recorded. Your teacher will grade it.")
            elif answer.correct:
                self.feedback_label.setText(f"That's correct! +{answer.points} points")
            else:
                self.feedback_label.setText("Not quite right.")
        elif answer.status is AnswerStatus.LOCKED:
            self.feedback_label.setText("Answer locked. Reveal it when you're ready.")
        else:
            self.feedback_label.setText("")
