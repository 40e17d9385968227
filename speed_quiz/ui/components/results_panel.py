"""Component showing the final standings and the bonus round offer."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from speed_quiz.constants.game_constants import MEDAL_POSITIONS
from speed_quiz.constants.ui_constants import (
    RESULTS_BONUS_BUTTON,
    RESULTS_NOT_APPLICABLE,
    RESULTS_RESTART_BUTTON,
    RESULTS_ROW_TEMPLATE,
    RESULTS_SKIP_BUTTON,
    RESULTS_TIE_TEMPLATE,
    RESULTS_TITLE,
)
from speed_quiz.core.quiz_manager import QuizManager
from speed_quiz.styling.styles import Styles

_MEDALS = {1: "Gold", 2: "Silver", 3: "Bronze"}


class ResultsPanel(QWidget):
    """Final ranking with medals, tie notice and follow-up actions."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        on_bonus_round: Callable[[], None],
        on_back_to_library: Callable[[], None],
        on_play_again: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.on_bonus_round = on_bonus_round
        self.on_back_to_library = on_back_to_library
        self.on_play_again = on_play_again
        self._game_font_size: int = 14
        self._row_labels: list[QLabel] = []

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.title_label = QLabel(RESULTS_TITLE, self)
        self.title_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.title_label)

        self.rows_layout = QVBoxLayout()
        layout.addLayout(self.rows_layout)
        layout.addStretch()

        self.tie_label = QLabel("", self)
        self.tie_label.setAlignment(Qt.AlignCenter)
        self.tie_label.setWordWrap(True)
        layout.addWidget(self.tie_label)

        button_row = QHBoxLayout()
        self.library_button = QPushButton(RESULTS_SKIP_BUTTON, self)
        self.library_button.clicked.connect(self.on_back_to_library)
        button_row.addWidget(self.library_button)

        self.restart_button = QPushButton(RESULTS_RESTART_BUTTON, self)
        self.restart_button.clicked.connect(self.on_play_again)
        button_row.addWidget(self.restart_button)

        button_row.addStretch()

        self.bonus_button = QPushButton(RESULTS_BONUS_BUTTON, self)
        self.bonus_button.clicked.connect(self.on_bonus_round)
        button_row.addWidget(self.bonus_button)
        layout.addLayout(button_row)

    def refresh_results(self) -> None:
        for label in self._row_labels:
            self.rows_layout.removeWidget(label)
            label.deleteLater()
        self._row_labels = []

        standings = self.quiz_manager.get_standings()
        states = {state.group_id: state for state in self.quiz_manager.get_group_states()}
        size = self._game_font_size

        if not standings.applicable:
            # A single group still gets its score, just without a ranking.
            for state in states.values():
                self._add_row(
                    RESULTS_ROW_TEMPLATE.format(
                        rank="-",
                        name=state.name,
                        score=state.score,
                        correct=state.correct_count,
                        passes=state.pass_count,
                    ),
                    Styles.get_result_row_style(0, size),
                )
            self.tie_label.setText(RESULTS_NOT_APPLICABLE)
            self.bonus_button.setVisible(False)
            return

        for entry in standings.entries:
            state = states[entry.group_id]
            text = RESULTS_ROW_TEMPLATE.format(
                rank=entry.rank,
                name=entry.name,
                score=entry.score,
                correct=state.correct_count,
                passes=state.pass_count,
            )
            if entry.position <= MEDAL_POSITIONS and entry.position in _MEDALS:
                text = f"{_MEDALS[entry.position]}  {text}"
            if not state.played:
                text += "  (did not play)"
            self._add_row(text, Styles.get_result_row_style(entry.position, size))

        offer = self.quiz_manager.get_bonus_round_offer()
        if offer:
            names = ", ".join(states[group_id].name for group_id in offer)
            self.tie_label.setText(RESULTS_TIE_TEMPLATE.format(names=names))
        else:
            self.tie_label.setText(self._describe_last_bonus(states))
        self.bonus_button.setVisible(offer is not None)

    def _describe_last_bonus(self, states: dict) -> str:
        result = self.quiz_manager.get_last_bonus_result()
        if result is None or result.winner_id is None:
            return ""
        return f"{states[result.winner_id].name} won the last bonus round."

    def _add_row(self, text: str, style: str) -> None:
        label = QLabel(text, self)
        label.setStyleSheet(style)
        self.rows_layout.addWidget(label)
        self._row_labels.append(label)

    def apply_font_size(self, font_size: int) -> None:
        self._game_font_size = font_size
        self.title_label.setStyleSheet(Styles.get_title_style(font_size))
        self.tie_label.setStyleSheet(f"font-size: {font_size}pt; font-weight: bold;")
        for button in (self.library_button, self.restart_button, self.bonus_button):
            button.setStyleSheet(f"font-size: {font_size}pt;")
