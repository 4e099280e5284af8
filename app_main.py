"""Application entry point for LearnQuiz."""

from __future__ import annotations

from pathlib import Path
import socket
import sys

from PySide6.QtWidgets import QApplication

from learn_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from learn_quiz.core.quiz_manager import QuizManager
from learn_quiz.server.api_server import start_api_server
from learn_quiz.ui.learner_main_window import LearnerMainWindow
from learn_quiz.utils.logging_config import configure_logging


def _determine_progress_url(port: int) -> str:
    """Best-effort determination of the local IP for the dashboard URL."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}/"


def main() -> None:
    """Initialize logging, start the progress API, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting LearnQuiz…")

    app = QApplication(sys.argv)
    quiz_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None

    quiz_manager = QuizManager()
    start_api_server(quiz_manager=quiz_manager, host=DEFAULT_HOST, port=DEFAULT_PORT)
    progress_url = _determine_progress_url(DEFAULT_PORT)
    logger.info("Progress page available at %s", progress_url)

    window = LearnerMainWindow(
        quiz_manager=quiz_manager,
        progress_url=progress_url,
        initial_quiz_path=quiz_path,
    )
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
