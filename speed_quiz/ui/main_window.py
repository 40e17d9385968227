"""Qt main window driving the library, group selection, play and results screens."""

from __future__ import annotations

from enum import Enum, auto
import logging
from pathlib import Path

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from speed_quiz.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from speed_quiz.constants.ui_constants import (
    EXPORT_DIALOG_TITLE,
    EXPORT_FILE_FILTER,
    IMPORT_DIALOG_TITLE,
    IMPORT_FILE_FILTER,
    LIBRARY_REFRESH_INTERVAL_MS,
    MODE_BUTTON_EXPORT,
    MODE_BUTTON_IMPORT,
    MODE_BUTTON_LIBRARY,
    NO_QUIZ_SELECTED_MESSAGE,
    WINDOW_TITLE,
)
from speed_quiz.core.events import GameEvent
from speed_quiz.core.exceptions import InvalidQuizError, SpeedQuizError
from speed_quiz.core.quiz_exporter import export_file_name
from speed_quiz.core.quiz_importer import QuizImportError
from speed_quiz.core.quiz_manager import QuizManager
from speed_quiz.styling.styles import Styles
from speed_quiz.ui.components.group_select_panel import GroupSelectPanel
from speed_quiz.ui.components.library_panel import LibraryPanel
from speed_quiz.ui.components.play_panel import PlayPanel
from speed_quiz.ui.components.results_panel import ResultsPanel
from speed_quiz.ui.dialog_helpers import confirm_leave_game, show_error, show_info, show_warning
from speed_quiz.ui.qt_ticker import QtTickScheduler
from speed_quiz.ui.settings_dialog import SettingsDialog

logger = logging.getLogger(__name__)

DEFAULT_QUIZ_FILE = Path("speed_quiz.json")


class HostMode(Enum):
    """Screen currently shown on the shared display."""

    LIBRARY = auto()
    GROUP_SELECT = auto()
    PLAYING = auto()
    RESULTS = auto()


class HostMainWindow(QMainWindow):
    """Main Qt window: timer source, input source and presentation sink of the game."""

    def __init__(self, quiz_manager: QuizManager, api_url: str | None = None) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE if api_url is None else f"{WINDOW_TITLE}  ({api_url})")

        self.quiz_manager = quiz_manager
        self._mode = HostMode.LIBRARY

        self._ui_font_size: int = 10
        self._game_font_size: int = 14
        self._shuffle_seed: int | None = None
        self._last_export_dir: Path | None = None

        self._build_ui()
        self._configure_refresh_timer()
        self._apply_styles()

        self.quiz_manager.set_tick_scheduler(QtTickScheduler(self))
        self.quiz_manager.set_shuffle_seed(self._shuffle_seed)
        self.quiz_manager.subscribe(self._handle_game_event)
        self._auto_load_default_quiz()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_mode_buttons(root_layout)

        self.mode_stack = QStackedWidget(self)

        self.library_panel = LibraryPanel(self.quiz_manager, on_play_quiz=self._start_game, parent=self)
        self.group_select_panel = GroupSelectPanel(
            self.quiz_manager,
            on_group_selected=self._start_group_turn,
            on_end_early=self._end_game_early,
            parent=self,
        )
        self.play_panel = PlayPanel(self.quiz_manager, on_continue=self._handle_turn_continue, parent=self)
        self.results_panel = ResultsPanel(
            self.quiz_manager,
            on_bonus_round=self._start_bonus_round,
            on_back_to_library=self._leave_game,
            on_play_again=self._play_again,
            parent=self,
        )

        self.mode_stack.addWidget(self.library_panel)
        self.mode_stack.addWidget(self.group_select_panel)
        self.mode_stack.addWidget(self.play_panel)
        self.mode_stack.addWidget(self.results_panel)

        root_layout.addWidget(self.mode_stack)

        self._set_mode(HostMode.LIBRARY)

    def _build_mode_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.library_mode_button = QPushButton(MODE_BUTTON_LIBRARY, self)
        self.library_mode_button.setCheckable(True)
        self.library_mode_button.clicked.connect(self._handle_library_button)
        button_row.addWidget(self.library_mode_button)

        self.import_button = QPushButton(MODE_BUTTON_IMPORT, self)
        self.import_button.clicked.connect(self._handle_import_quiz)
        button_row.addWidget(self.import_button)

        self.export_button = QPushButton(MODE_BUTTON_EXPORT, self)
        self.export_button.clicked.connect(self._handle_export_quiz)
        button_row.addWidget(self.export_button)

        button_row.addStretch()

        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        self.settings_button = QPushButton("Settings", self)
        self.settings_button.clicked.connect(self._handle_settings)
        button_row.addWidget(self.settings_button)

        layout.addLayout(button_row)

    def _configure_refresh_timer(self) -> None:
        self.refresh_timer = QTimer(self)
        self.refresh_timer.setInterval(LIBRARY_REFRESH_INTERVAL_MS)
        self.refresh_timer.timeout.connect(self._refresh_state)
        self.refresh_timer.start()

    def _refresh_state(self) -> None:
        if self._mode == HostMode.LIBRARY:
            self.library_panel.refresh_quizzes()

    def _set_mode(self, mode: HostMode) -> None:
        self._mode = mode
        self.library_mode_button.setChecked(mode == HostMode.LIBRARY)

        in_library = mode == HostMode.LIBRARY
        self.import_button.setEnabled(in_library)
        self.export_button.setEnabled(in_library)
        self.settings_button.setEnabled(mode != HostMode.PLAYING)
        self.library_mode_button.setEnabled(mode != HostMode.PLAYING)

        index_map = {
            HostMode.LIBRARY: 0,
            HostMode.GROUP_SELECT: 1,
            HostMode.PLAYING: 2,
            HostMode.RESULTS: 3,
        }
        self.mode_stack.setCurrentIndex(index_map[mode])

        if mode == HostMode.LIBRARY:
            self.library_panel.refresh_quizzes()
        elif mode == HostMode.GROUP_SELECT:
            self.group_select_panel.refresh_groups()
        elif mode == HostMode.RESULTS:
            self.results_panel.refresh_results()

    # --- Game flow ---

    def _handle_game_event(self, event: GameEvent) -> None:
        if self._mode == HostMode.PLAYING:
            self.play_panel.handle_event(event)

    def _start_game(self, quiz_id: int) -> None:
        try:
            self.quiz_manager.start_session(quiz_id)
        except SpeedQuizError as exc:
            show_error(self, "Cannot start quiz", str(exc))
            self.library_panel.refresh_quizzes()
            return
        self._set_mode(HostMode.GROUP_SELECT)

    def _start_group_turn(self, group_id: str) -> None:
        try:
            self.quiz_manager.select_group(group_id)
        except SpeedQuizError as exc:
            show_warning(self, "Cannot start turn", str(exc))
            self.group_select_panel.refresh_groups()
            return
        self._set_mode(HostMode.PLAYING)
        self.play_panel.begin_turn()

    def _start_bonus_round(self) -> None:
        try:
            self.quiz_manager.start_bonus_round()
        except SpeedQuizError as exc:
            show_warning(self, "Cannot start bonus round", str(exc))
            self.results_panel.refresh_results()
            return
        self._set_mode(HostMode.PLAYING)
        self.play_panel.begin_turn()

    def _handle_turn_continue(self) -> None:
        if self.quiz_manager.has_active_turn():
            return
        if self.quiz_manager.is_session_finished():
            self._set_mode(HostMode.RESULTS)
        else:
            self._set_mode(HostMode.GROUP_SELECT)

    def _end_game_early(self) -> None:
        try:
            self.quiz_manager.end_session_early()
        except SpeedQuizError as exc:
            show_warning(self, "Cannot end game", str(exc))
            return
        self._set_mode(HostMode.RESULTS)

    def _play_again(self) -> None:
        try:
            self.quiz_manager.restart_session()
        except SpeedQuizError as exc:
            show_error(self, "Cannot restart", str(exc))
            return
        self._set_mode(HostMode.GROUP_SELECT)

    def _leave_game(self) -> None:
        if self.quiz_manager.get_bonus_round_offer():
            self.quiz_manager.skip_bonus_round()
        self.quiz_manager.stop_session()
        self._set_mode(HostMode.LIBRARY)

    def _handle_library_button(self) -> None:
        if self._mode == HostMode.LIBRARY:
            self.library_mode_button.setChecked(True)
            return
        if self._mode == HostMode.GROUP_SELECT and not confirm_leave_game(self):
            self.library_mode_button.setChecked(False)
            return
        self.quiz_manager.stop_session()
        self._set_mode(HostMode.LIBRARY)

    # --- Files ---

    def _handle_import_quiz(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            IMPORT_DIALOG_TITLE,
            str(Path.home()),
            IMPORT_FILE_FILTER,
        )
        if not file_path:
            return

        try:
            quiz = self.quiz_manager.import_quiz_file(Path(file_path))
        except (OSError, QuizImportError) as exc:
            show_error(self, "Import failed", str(exc))
            return
        except InvalidQuizError as exc:
            show_error(self, "Quiz rejected", str(exc))
            return

        self.library_panel.select_quiz(quiz.id)
        show_info(
            self,
            "Quiz imported",
            f'Imported "{quiz.title}" with {len(quiz.groups)} group(s) and {quiz.total_word_count()} word(s).',
        )

    def _handle_export_quiz(self) -> None:
        quiz_id = self.library_panel.selected_quiz_id()
        quiz = self.quiz_manager.get_quiz(quiz_id) if quiz_id is not None else None
        if quiz is None:
            show_warning(self, "No quiz", NO_QUIZ_SELECTED_MESSAGE)
            return

        default_dir = self._last_export_dir or Path.cwd()
        file_path, _ = QFileDialog.getSaveFileName(
            self,
            EXPORT_DIALOG_TITLE,
            str(default_dir / export_file_name(quiz)),
            EXPORT_FILE_FILTER,
        )
        if not file_path:
            return

        try:
            self.quiz_manager.export_quiz_file(quiz.id, Path(file_path))
        except (OSError, SpeedQuizError) as exc:
            show_error(self, "Export failed", str(exc))
            return

        self._last_export_dir = Path(file_path).parent
        show_info(self, "Quiz saved", f"Quiz exported to {file_path}.")

    def _auto_load_default_quiz(self) -> None:
        if not DEFAULT_QUIZ_FILE.exists():
            return
        try:
            quiz = self.quiz_manager.import_quiz_file(DEFAULT_QUIZ_FILE)
        except (OSError, QuizImportError, InvalidQuizError) as exc:
            logger.warning("Could not auto-load %s: %s", DEFAULT_QUIZ_FILE, exc)
            return
        self.library_panel.select_quiz(quiz.id)

    # --- Menus ---

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def _handle_settings(self) -> None:
        dialog = SettingsDialog(
            self,
            self._ui_font_size,
            self._game_font_size,
            self._shuffle_seed,
        )
        if dialog.exec():
            self._ui_font_size = dialog.get_ui_font_size()
            self._game_font_size = dialog.get_game_font_size()
            self._shuffle_seed = dialog.get_shuffle_seed()

            self.quiz_manager.set_shuffle_seed(self._shuffle_seed)
            self._apply_styles()

    def _apply_styles(self) -> None:
        self.setStyleSheet(Styles.get_main_window_style())

        ui_style = f"font-size: {self._ui_font_size}pt;"
        buttons = [
            self.library_mode_button,
            self.import_button,
            self.export_button,
            self.about_button,
            self.help_button,
            self.settings_button,
        ]
        for button in buttons:
            button.setStyleSheet(ui_style)

        self.library_panel.apply_font_size(self._ui_font_size)
        self.group_select_panel.apply_font_size(self._game_font_size)
        self.play_panel.set_game_font_size(self._game_font_size)
        self.results_panel.apply_font_size(self._game_font_size)

    def closeEvent(self, event) -> None:
        self.quiz_manager.unsubscribe(self._handle_game_event)
        self.quiz_manager.stop_session()
        self.quiz_manager.set_tick_scheduler(None)
        super().closeEvent(event)
