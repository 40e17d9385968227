"""Qt UI components for the host application."""

from .dialog_helpers import (
    confirm_abort_bonus_round,
    confirm_abort_turn,
    confirm_delete_quiz,
    confirm_leave_game,
    show_error,
    show_info,
    show_warning,
)
from .main_window import HostMainWindow
from .qt_ticker import QtTickScheduler

__all__ = [
    "HostMainWindow",
    "QtTickScheduler",
    "confirm_abort_bonus_round",
    "confirm_abort_turn",
    "confirm_delete_quiz",
    "confirm_leave_game",
    "show_error",
    "show_info",
    "show_warning",
]
