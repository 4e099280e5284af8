"""Qt main window hosting the learner's quiz run."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from learn_quiz.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from learn_quiz.constants.ui_constants import (
    IMPORT_BUTTON_TEXT,
    IMPORT_DIALOG_TITLE,
    IMPORT_FILE_FILTER,
    NO_QUIZ_LOADED_MESSAGE,
    START_BUTTON_TEXT,
    WINDOW_TITLE,
)
from learn_quiz.core.errors import QuizError
from learn_quiz.core.models import SessionStatus
from learn_quiz.core.quiz_importer import QuizImportError
from learn_quiz.core.quiz_manager import QuizManager
from learn_quiz.styling.styles import Styles
from learn_quiz.ui.components.question_panel import QuestionPanel
from learn_quiz.ui.components.toast_overlay import ToastOverlay
from learn_quiz.ui.dialog_helpers import (
    confirm_abandon_quiz,
    show_error,
    show_info,
    show_quiz_summary,
    show_warning,
)


class LearnerMainWindow(QMainWindow):
    """Import a quiz, run it question by question and celebrate the result."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        progress_url: str | None = None,
        initial_quiz_path: Path | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.quiz_manager = quiz_manager
        self.progress_url = progress_url

        self._build_ui()
        self.setStyleSheet(Styles.get_main_window_style())
        self.toast_overlay = ToastOverlay(self)
        self.quiz_manager.set_notification_display(self.toast_overlay)

        if initial_quiz_path is not None:
            self._load_quiz(initial_quiz_path)

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)
        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        button_row = QHBoxLayout()
        self.import_button = QPushButton(IMPORT_BUTTON_TEXT, self)
        self.import_button.clicked.connect(self._handle_import_quiz)
        button_row.addWidget(self.import_button)

        self.start_button = QPushButton(START_BUTTON_TEXT, self)
        self.start_button.clicked.connect(self._handle_start_quiz)
        button_row.addWidget(self.start_button)

        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)
        button_row.addStretch()
        root_layout.addLayout(button_row)

        self.status_label = QLabel(NO_QUIZ_LOADED_MESSAGE, self)
        root_layout.addWidget(self.status_label)
        if self.progress_url:
            self.progress_label = QLabel(f"Parents and teachers can follow along at: {self.progress_url}", self)
            self.progress_label.setWordWrap(True)
            root_layout.addWidget(self.progress_label)

        self.question_panel = QuestionPanel(
            self.quiz_manager,
            on_session_finished=self._handle_session_finished,
            parent=self,
        )
        self.question_panel.setVisible(False)
        root_layout.addWidget(self.question_panel, stretch=1)

    # --- Handlers ---

    def _handle_import_quiz(self) -> None:
        if not self._confirm_leave_running_quiz():
            return
        file_path, _ = QFileDialog.getOpenFileName(self, IMPORT_DIALOG_TITLE, "", IMPORT_FILE_FILTER)
        if not file_path:
            return
        self._load_quiz(Path(file_path))

    def _load_quiz(self, file_path: Path) -> None:
        try:
            count = self.quiz_manager.load_quiz_from_file(file_path)
        except (QuizImportError, ValueError, OSError) as exc:
            show_error(self, "Import failed", str(exc))
            return
        self.question_panel.setVisible(False)
        self.status_label.setText(f"Loaded {count} question(s) from {file_path.name}.")

    def _handle_start_quiz(self) -> None:
        if not self.quiz_manager.has_loaded_quiz():
            show_warning(self, "No quiz", NO_QUIZ_LOADED_MESSAGE)
            return
        if not self._confirm_leave_running_quiz():
            return
        try:
            session = self.quiz_manager.start_session()
        except QuizError as exc:
            show_error(self, "Cannot start quiz", str(exc))
            return
        self.status_label.setText("Quiz in progress.")
        self.question_panel.setVisible(True)
        self.question_panel.attach_session(session)

    def _handle_session_finished(self) -> None:
        result = self.quiz_manager.get_result()
        if result is None:
            return
        self.status_label.setText("Quiz complete.")
        show_quiz_summary(self, result, self.quiz_manager.get_answer_breakdown())

    def _handle_help(self) -> None:
        show_info(self, "Help", HELP_TEXT)

    def _handle_about(self) -> None:
        show_info(self, f"About {APP_NAME}", f"{APP_NAME} {APP_VERSION}\n{APP_LICENSE}\n\n{APP_ABOUT_TEXT}")

    def _confirm_leave_running_quiz(self) -> bool:
        snapshot = self.quiz_manager.get_snapshot()
        if snapshot is None or snapshot.status is not SessionStatus.IN_PROGRESS:
            return True
        if not confirm_abandon_quiz(self):
            return False
        self.quiz_manager.abandon_session()
        return True

    # --- Qt overrides ---

    def resizeEvent(self, event) -> None:  # noqa: N802 - Qt naming
        super().resizeEvent(event)
        if hasattr(self, "toast_overlay"):
            self.toast_overlay.sync_geometry()

    def closeEvent(self, event) -> None:  # noqa: N802 - Qt naming
        self.quiz_manager.abandon_session()
        super().closeEvent(event)
