"""Helper functions for common dialog patterns in the host UI."""

from __future__ import annotations

from PySide6.QtGui import QFont
from PySide6.QtWidgets import QMessageBox, QWidget


def _apply_optional_font(widget: QWidget, font_point_size: int | None) -> None:
    """Apply font size to a widget when requested."""
    if font_point_size is None or font_point_size <= 0:
        return

    font: QFont = widget.font()
    font.setPointSize(font_point_size)
    widget.setFont(font)


def confirm_delete_quiz(parent: QWidget, quiz_title: str) -> bool:
    """Show confirmation dialog for deleting a quiz.

    Args:
        parent: Parent widget for the dialog
        quiz_title: Title of the quiz that would be removed

    Returns:
        True if user confirmed, False otherwise
    """
    reply = QMessageBox.question(
        parent,
        "Delete Quiz?",
        f'This cannot be undone. "{quiz_title}" will be deleted permanently.',
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def confirm_abort_turn(parent: QWidget, group_name: str) -> bool:
    """Ask before stopping a running turn; the group keeps its points so far."""
    reply = QMessageBox.question(
        parent,
        "Stop Turn",
        f"Stop the turn of {group_name}? The points scored so far are kept and the group counts as played.",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def confirm_abort_bonus_round(parent: QWidget) -> bool:
    reply = QMessageBox.question(
        parent,
        "Stop Bonus Round",
        "Stop the bonus round without a winner? This tie will not be offered again.",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def confirm_leave_game(parent: QWidget) -> bool:
    reply = QMessageBox.question(
        parent,
        "Leave Game",
        "Leave the current game? Scores of this game will be lost.",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def show_error(parent: QWidget, title: str, message: str) -> None:
    """Show error dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Error message
    """
    QMessageBox.critical(parent, title, message)


def show_info(
    parent: QWidget,
    title: str,
    message: str,
    *,
    font_point_size: int | None = None,
) -> None:
    """Show information dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Information message
    """
    msg_box = QMessageBox(parent)
    msg_box.setIcon(QMessageBox.Information)
    msg_box.setWindowTitle(title)
    msg_box.setText(message)
    msg_box.setStandardButtons(QMessageBox.Ok)
    _apply_optional_font(msg_box, font_point_size)
    if font_point_size is not None and font_point_size > 0:
        msg_box.setStyleSheet(
            f"QLabel {{ font-size: {font_point_size}pt; }}\n"
            f"QPushButton {{ font-size: {font_point_size}pt; }}"
        )
    msg_box.exec()


def show_warning(parent: QWidget, title: str, message: str) -> None:
    """Show warning dialog."""
    QMessageBox.warning(parent, title, message)
