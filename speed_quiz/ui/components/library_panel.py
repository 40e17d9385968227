"""Component listing the quizzes the host can play."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from speed_quiz.constants.ui_constants import (
    LIBRARY_DELETE_BUTTON,
    LIBRARY_EMPTY_STATE,
    LIBRARY_ITEM_TEMPLATE,
    LIBRARY_PLAY_BUTTON,
    NO_QUIZ_SELECTED_MESSAGE,
)
from speed_quiz.core.exceptions import QuizNotFoundError
from speed_quiz.core.models import Quiz
from speed_quiz.core.quiz_manager import QuizManager
from speed_quiz.ui.dialog_helpers import confirm_delete_quiz, show_warning


def _describe_quiz(quiz: Quiz) -> str:
    return LIBRARY_ITEM_TEMPLATE.format(
        title=quiz.title,
        groups=len(quiz.groups),
        seconds=quiz.time_per_quiz,
        words=quiz.total_word_count(),
        passes=quiz.pass_limit,
    )


class LibraryPanel(QWidget):
    """UI component for browsing, playing and deleting quizzes.

    Quizzes can also arrive through the HTTP API, so the list is polled and
    only rebuilt when its contents change.
    """

    def __init__(
        self,
        quiz_manager: QuizManager,
        on_play_quiz: Callable[[int], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.on_play_quiz = on_play_quiz
        self._snapshot: list[tuple[int, str]] = []

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.quiz_list = QListWidget(self)
        self.quiz_list.setAlternatingRowColors(True)
        self.quiz_list.itemDoubleClicked.connect(lambda _item: self._handle_play_click())
        layout.addWidget(self.quiz_list, stretch=1)

        self.empty_label = QLabel(LIBRARY_EMPTY_STATE, self)
        self.empty_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.empty_label)

        button_row = QHBoxLayout()
        button_row.addStretch()

        self.delete_button = QPushButton(LIBRARY_DELETE_BUTTON, self)
        self.delete_button.clicked.connect(self._handle_delete_click)
        button_row.addWidget(self.delete_button)

        self.play_button = QPushButton(LIBRARY_PLAY_BUTTON, self)
        self.play_button.clicked.connect(self._handle_play_click)
        button_row.addWidget(self.play_button)

        layout.addLayout(button_row)

    def selected_quiz_id(self) -> int | None:
        item = self.quiz_list.currentItem()
        if item is None:
            return None
        return item.data(Qt.UserRole)

    def refresh_quizzes(self) -> None:
        quizzes = self.quiz_manager.list_quizzes()
        snapshot = [(quiz.id, _describe_quiz(quiz)) for quiz in quizzes]
        if snapshot == self._snapshot:
            return
        self._snapshot = snapshot

        selected_id = self.selected_quiz_id()
        self.quiz_list.clear()
        for quiz_id, text in snapshot:
            item = QListWidgetItem(text, self.quiz_list)
            item.setData(Qt.UserRole, quiz_id)
            if quiz_id == selected_id:
                self.quiz_list.setCurrentItem(item)
        if self.quiz_list.currentItem() is None and self.quiz_list.count() > 0:
            self.quiz_list.setCurrentRow(0)

        has_quizzes = bool(snapshot)
        self.empty_label.setVisible(not has_quizzes)
        self.play_button.setEnabled(has_quizzes)
        self.delete_button.setEnabled(has_quizzes)

    def select_quiz(self, quiz_id: int) -> None:
        self.refresh_quizzes()
        for row in range(self.quiz_list.count()):
            if self.quiz_list.item(row).data(Qt.UserRole) == quiz_id:
                self.quiz_list.setCurrentRow(row)
                return

    def _handle_play_click(self) -> None:
        quiz_id = self.selected_quiz_id()
        if quiz_id is None:
            show_warning(self, "No quiz", NO_QUIZ_SELECTED_MESSAGE)
            return
        self.on_play_quiz(quiz_id)

    def _handle_delete_click(self) -> None:
        quiz_id = self.selected_quiz_id()
        if quiz_id is None:
            show_warning(self, "No quiz", NO_QUIZ_SELECTED_MESSAGE)
            return
        quiz = self.quiz_manager.get_quiz(quiz_id)
        if quiz is None or not confirm_delete_quiz(self, quiz.title):
            return
        try:
            self.quiz_manager.delete_quiz(quiz_id)
        except QuizNotFoundError:
            # Already removed through the API.
            pass
        self.refresh_quizzes()

    def apply_font_size(self, font_size: int) -> None:
        self.quiz_list.setStyleSheet(f"font-size: {font_size}pt;")
        self.play_button.setStyleSheet(f"font-size: {font_size}pt;")
        self.delete_button.setStyleSheet(f"font-size: {font_size}pt;")
