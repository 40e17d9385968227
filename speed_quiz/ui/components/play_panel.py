"""Component for the timed turn: countdown, word card and judgment buttons."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from speed_quiz.constants.ui_constants import (
    BONUS_CORRECT_TEMPLATE,
    PLAY_ABORT_BUTTON,
    PLAY_CONTINUE_BUTTON,
    PLAY_CORRECT_BUTTON,
    PLAY_GET_READY_TEMPLATE,
    PLAY_PASS_TEMPLATE,
    PLAY_TIME_UP,
    PLAY_WRONG_BUTTON,
)
from speed_quiz.core.events import GameEvent, GameEventType
from speed_quiz.core.models import JudgmentOutcome, TurnEndReason, TurnPhase, TurnResult
from speed_quiz.core.quiz_manager import QuizManager
from speed_quiz.styling.styles import Styles
from speed_quiz.ui.dialog_helpers import confirm_abort_bonus_round, confirm_abort_turn

_CORRECT_KEYS = ("Space", "Up")
_WRONG_KEYS = ("X", "Down")
_PASS_KEYS = ("P", "Right")
_BONUS_KEYS = ("1", "2")

_END_REASON_TEXT = {
    TurnEndReason.TIME_UP: PLAY_TIME_UP,
    TurnEndReason.WORDS_EXHAUSTED: "All words done!",
    TurnEndReason.SUDDEN_DEATH: "We have a winner!",
    TurnEndReason.ABORTED: "Turn stopped.",
}


class PlayPanel(QWidget):
    """UI component that mirrors the running turn and forwards host verdicts."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        on_continue: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.on_continue = on_continue

        self._game_font_size: int = 14
        self._bonus_participants: tuple[str, str] | None = None
        self._names: dict[str, str] = {}

        self._build_ui()
        self._build_shortcuts()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header = QHBoxLayout()
        self.group_label = QLabel("", self)
        header.addWidget(self.group_label)
        header.addStretch()
        self.score_label = QLabel("", self)
        header.addWidget(self.score_label)
        header.addSpacing(24)
        self.timer_label = QLabel("", self)
        header.addWidget(self.timer_label)
        layout.addLayout(header)

        self.view_stack = QStackedWidget(self)
        layout.addWidget(self.view_stack, stretch=1)

        # Countdown view
        self.countdown_label = QLabel("", self)
        self.countdown_label.setAlignment(Qt.AlignCenter)
        self.view_stack.addWidget(self.countdown_label)

        # Word view
        word_view = QWidget(self)
        word_layout = QVBoxLayout()
        word_view.setLayout(word_layout)
        self.word_label = QLabel("", word_view)
        self.word_label.setAlignment(Qt.AlignCenter)
        self.word_label.setWordWrap(True)
        word_layout.addWidget(self.word_label, stretch=1)

        button_row = QHBoxLayout()
        self.correct_button = QPushButton(PLAY_CORRECT_BUTTON, word_view)
        self.correct_button.clicked.connect(lambda: self._judge(JudgmentOutcome.CORRECT))
        button_row.addWidget(self.correct_button)

        self.bonus_buttons: list[QPushButton] = []
        for side in range(len(_BONUS_KEYS)):
            button = QPushButton("", word_view)
            button.clicked.connect(lambda _checked=False, side=side: self._judge_bonus(side))
            button.setVisible(False)
            self.bonus_buttons.append(button)
            button_row.addWidget(button)

        self.wrong_button = QPushButton(PLAY_WRONG_BUTTON, word_view)
        self.wrong_button.clicked.connect(lambda: self._judge(JudgmentOutcome.WRONG))
        button_row.addWidget(self.wrong_button)

        self.pass_button = QPushButton(PLAY_PASS_TEMPLATE.format(count=0), word_view)
        self.pass_button.clicked.connect(lambda: self._judge(JudgmentOutcome.PASS))
        button_row.addWidget(self.pass_button)
        word_layout.addLayout(button_row)
        self.view_stack.addWidget(word_view)

        # Turn result view
        result_view = QWidget(self)
        result_layout = QVBoxLayout()
        result_view.setLayout(result_layout)
        self.result_title_label = QLabel("", result_view)
        self.result_title_label.setAlignment(Qt.AlignCenter)
        result_layout.addWidget(self.result_title_label)
        self.result_detail_label = QLabel("", result_view)
        self.result_detail_label.setAlignment(Qt.AlignCenter)
        self.result_detail_label.setWordWrap(True)
        result_layout.addWidget(self.result_detail_label, stretch=1)
        self.continue_button = QPushButton(PLAY_CONTINUE_BUTTON, result_view)
        self.continue_button.clicked.connect(self.on_continue)
        result_layout.addWidget(self.continue_button, alignment=Qt.AlignCenter)
        self.view_stack.addWidget(result_view)

        footer = QHBoxLayout()
        footer.addStretch()
        self.abort_button = QPushButton(PLAY_ABORT_BUTTON, self)
        self.abort_button.clicked.connect(self._handle_abort)
        footer.addWidget(self.abort_button)
        layout.addLayout(footer)

        self._apply_game_styles(final_seconds=False)

    def _build_shortcuts(self) -> None:
        # Shortcuts only fire while this panel is the visible page.
        bindings = [(key, lambda: self._judge(JudgmentOutcome.CORRECT)) for key in _CORRECT_KEYS]
        bindings += [(key, lambda: self._judge(JudgmentOutcome.WRONG)) for key in _WRONG_KEYS]
        bindings += [(key, lambda: self._judge(JudgmentOutcome.PASS)) for key in _PASS_KEYS]
        bindings += [
            (key, lambda side=side: self._judge_bonus(side)) for side, key in enumerate(_BONUS_KEYS)
        ]
        self._shortcuts: list[QShortcut] = []
        for key, handler in bindings:
            shortcut = QShortcut(QKeySequence(key), self)
            shortcut.activated.connect(handler)
            self._shortcuts.append(shortcut)

    # --- Turn lifecycle ---

    def begin_turn(self) -> None:
        """Prepare the view for a turn the manager has just started."""
        quiz = self.quiz_manager.get_active_quiz()
        self._names = {group.id: group.name for group in quiz.groups} if quiz else {}
        self._bonus_participants = self.quiz_manager.get_bonus_participants()

        state = self.quiz_manager.get_turn_state()
        participants = state.participants if state else ()
        names = " vs ".join(self._names.get(group_id, group_id) for group_id in participants)
        self.group_label.setText(names)

        bonus = self._bonus_participants is not None
        self.correct_button.setVisible(not bonus)
        for side, button in enumerate(self.bonus_buttons):
            button.setVisible(bonus)
            if bonus:
                name = self._names.get(self._bonus_participants[side], "")
                button.setText(BONUS_CORRECT_TEMPLATE.format(name=name, key=_BONUS_KEYS[side]))
        self.countdown_label.setText(PLAY_GET_READY_TEMPLATE.format(name=names))
        self.abort_button.setEnabled(True)
        self.refresh()

    def refresh(self) -> None:
        state = self.quiz_manager.get_turn_state()
        if state is None or state.phase is TurnPhase.ENDED:
            return

        self.score_label.setText(f"Score: {state.session_score}")
        self.pass_button.setText(PLAY_PASS_TEMPLATE.format(count=state.passes_remaining))
        self.pass_button.setEnabled(state.passes_remaining > 0)

        if state.phase is TurnPhase.COUNTDOWN:
            if state.countdown_remaining > 0:
                self.countdown_label.setText(str(state.countdown_remaining))
            self.timer_label.setText("")
            self.view_stack.setCurrentIndex(0)
            return

        self.word_label.setText(state.current_word or "")
        self.timer_label.setText(f"{state.time_remaining}s")
        self.view_stack.setCurrentIndex(1)

    def handle_event(self, event: GameEvent) -> None:
        if event.type is GameEventType.TIMER_TICK:
            self._apply_game_styles(final_seconds=event.payload["final_seconds"])
            self.refresh()
        elif event.type in (
            GameEventType.COUNTDOWN_TICK,
            GameEventType.PHASE_CHANGED,
            GameEventType.JUDGMENT_RECORDED,
        ):
            self.refresh()
        elif event.type is GameEventType.TURN_ENDED:
            self.show_turn_result(event.payload["result"])

    def show_turn_result(self, result: TurnResult) -> None:
        self._apply_game_styles(final_seconds=False)
        self.abort_button.setEnabled(False)
        self.timer_label.setText("")
        self.result_title_label.setText(_END_REASON_TEXT[result.reason])

        if self._bonus_participants is not None:
            if result.winner_id is not None:
                detail = f"{self._names.get(result.winner_id, result.winner_id)} wins the tie-break."
            else:
                detail = "No winner this time. The tie stays as it is."
        else:
            correct = sum(1 for entry in result.history if entry.outcome is JudgmentOutcome.CORRECT)
            passes = sum(1 for entry in result.history if entry.outcome is JudgmentOutcome.PASS)
            detail = f"{result.score} point(s)\ncorrect: {correct}  passes: {passes}"
        self.result_detail_label.setText(detail)
        self.view_stack.setCurrentIndex(2)
        self.continue_button.setFocus()

    # --- Host input ---

    def _judge(self, outcome: JudgmentOutcome) -> None:
        if outcome is JudgmentOutcome.CORRECT and self._bonus_participants is not None:
            # Bonus rounds need to know which side answered.
            return
        self.quiz_manager.judge(outcome)

    def _judge_bonus(self, side: int) -> None:
        if self._bonus_participants is None:
            return
        self.quiz_manager.judge(JudgmentOutcome.CORRECT, self._bonus_participants[side])

    def _handle_abort(self) -> None:
        if not self.quiz_manager.has_active_turn():
            return
        if self._bonus_participants is not None:
            confirmed = confirm_abort_bonus_round(self)
        else:
            confirmed = confirm_abort_turn(self, self.group_label.text())
        if confirmed:
            self.quiz_manager.abort_turn()

    # --- Styling ---

    def set_game_font_size(self, font_size: int) -> None:
        self._game_font_size = font_size
        self._apply_game_styles(final_seconds=False)

    def _apply_game_styles(self, final_seconds: bool) -> None:
        size = self._game_font_size
        self.group_label.setStyleSheet(Styles.get_title_style(size))
        self.score_label.setStyleSheet(f"font-size: {size + 4}pt; font-weight: bold;")
        self.timer_label.setStyleSheet(Styles.get_timer_style(size, final_seconds))
        self.countdown_label.setStyleSheet(Styles.get_countdown_style(size))
        self.word_label.setStyleSheet(Styles.get_word_style(size))
        self.correct_button.setStyleSheet(Styles.get_judgment_button_style("correct", size))
        for button in self.bonus_buttons:
            button.setStyleSheet(Styles.get_judgment_button_style("correct", size))
        self.wrong_button.setStyleSheet(Styles.get_judgment_button_style("wrong", size))
        self.pass_button.setStyleSheet(Styles.get_judgment_button_style("pass", size))
        self.result_title_label.setStyleSheet(Styles.get_title_style(size))
        self.result_detail_label.setStyleSheet(f"font-size: {size + 6}pt;")
