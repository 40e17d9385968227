"""Component where the next group is chosen between turns."""

from __future__ import annotations

from typing import Callable

from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from speed_quiz.constants.ui_constants import GROUP_SELECT_END_EARLY, GROUP_SELECT_TITLE
from speed_quiz.core.quiz_manager import QuizManager
from speed_quiz.styling.styles import Styles

_COLUMNS = 2


class GroupSelectPanel(QWidget):
    """Shows one button per group that still has to play."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        on_group_selected: Callable[[str], None],
        on_end_early: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.on_group_selected = on_group_selected
        self.on_end_early = on_end_early
        self._game_font_size: int = 14
        self._group_buttons: list[QPushButton] = []

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.quiz_title_label = QLabel("", self)
        self.quiz_title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.quiz_title_label)

        self.prompt_label = QLabel(GROUP_SELECT_TITLE, self)
        layout.addWidget(self.prompt_label)

        self.scores_label = QLabel("", self)
        self.scores_label.setWordWrap(True)
        layout.addWidget(self.scores_label)

        self.button_grid = QGridLayout()
        layout.addLayout(self.button_grid)
        layout.addStretch()

        footer = QHBoxLayout()
        footer.addStretch()
        self.end_early_button = QPushButton(GROUP_SELECT_END_EARLY, self)
        self.end_early_button.clicked.connect(self.on_end_early)
        footer.addWidget(self.end_early_button)
        layout.addLayout(footer)

    def refresh_groups(self) -> None:
        quiz = self.quiz_manager.get_active_quiz()
        self.quiz_title_label.setText(quiz.title if quiz else "")

        for button in self._group_buttons:
            self.button_grid.removeWidget(button)
            button.deleteLater()
        self._group_buttons = []

        for index, group in enumerate(self.quiz_manager.get_selectable_groups()):
            button = QPushButton(f"{group.name}\n{len(group.words)} word(s)", self)
            button.setMinimumHeight(80)
            button.setStyleSheet(f"font-size: {self._game_font_size}pt; font-weight: bold;")
            button.clicked.connect(lambda _checked=False, group_id=group.id: self.on_group_selected(group_id))
            self.button_grid.addWidget(button, index // _COLUMNS, index % _COLUMNS)
            self._group_buttons.append(button)

        played = [state for state in self.quiz_manager.get_group_states() if state.played]
        self.scores_label.setText(
            "  |  ".join(f"{state.name}: {state.score}" for state in played)
        )
        self.scores_label.setVisible(bool(played))
        self.end_early_button.setEnabled(bool(played))

    def apply_font_size(self, font_size: int) -> None:
        self._game_font_size = font_size
        self.prompt_label.setStyleSheet(f"font-size: {font_size}pt;")
        self.scores_label.setStyleSheet(f"font-size: {font_size}pt;")
        for button in self._group_buttons:
            button.setStyleSheet(f"font-size: {font_size}pt; font-weight: bold;")
