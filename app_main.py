"""Application entry point for Speed Quiz."""

from __future__ import annotations

import socket
import sys

from PySide6.QtWidgets import QApplication

from speed_quiz.constants.network_constants import API_PREFIX, DEFAULT_HOST, DEFAULT_PORT
from speed_quiz.core.quiz_manager import QuizManager
from speed_quiz.server.api_server import start_api_server
from speed_quiz.ui.main_window import HostMainWindow
from speed_quiz.utils.logging_config import configure_logging


def _determine_api_url(port: int) -> str:
    """Best-effort determination of the local IP for the quiz management API."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}{API_PREFIX}/quizzes"


def main() -> None:
    """Initialize logging, start the API server, and launch the Qt host."""
    logger = configure_logging()
    logger.info("Starting Speed Quiz...")

    quiz_manager = QuizManager()
    start_api_server(quiz_manager=quiz_manager, host=DEFAULT_HOST, port=DEFAULT_PORT)
    api_url = _determine_api_url(DEFAULT_PORT)
    logger.info("Quiz API available at %s", api_url)

    app = QApplication(sys.argv)
    window = HostMainWindow(quiz_manager=quiz_manager, api_url=api_url)
    window.resize(1100, 760)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
