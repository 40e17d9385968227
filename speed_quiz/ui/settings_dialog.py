"""Settings dialog for configuring Speed Quiz preferences."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)


class SettingsDialog(QDialog):
    """Dialog for configuring application settings."""

    def __init__(
        self,
        parent=None,
        ui_font_size: int = 10,
        game_font_size: int = 14,
        shuffle_seed: int | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.setMinimumWidth(400)

        self._ui_font_size = ui_font_size
        self._game_font_size = game_font_size
        self._shuffle_seed = shuffle_seed

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        # Font settings group
        font_group = QGroupBox("Font Sizes")
        font_layout = QVBoxLayout()
        font_group.setLayout(font_layout)

        ui_font_row = QHBoxLayout()
        ui_font_label = QLabel("UI Font Size (buttons, menus):")
        self.ui_font_spinbox = QSpinBox()
        self.ui_font_spinbox.setRange(8, 24)
        self.ui_font_spinbox.setValue(self._ui_font_size)
        self.ui_font_spinbox.setSuffix(" pt")
        ui_font_row.addWidget(ui_font_label)
        ui_font_row.addStretch()
        ui_font_row.addWidget(self.ui_font_spinbox)
        font_layout.addLayout(ui_font_row)

        game_font_row = QHBoxLayout()
        game_font_label = QLabel("Game Font Size (words, timer, results):")
        game_font_label.setToolTip("Base font size of the play screen; the current word is drawn larger.")
        self.game_font_spinbox = QSpinBox()
        self.game_font_spinbox.setRange(10, 48)
        self.game_font_spinbox.setValue(self._game_font_size)
        self.game_font_spinbox.setSuffix(" pt")
        game_font_row.addWidget(game_font_label)
        game_font_row.addStretch()
        game_font_row.addWidget(self.game_font_spinbox)
        font_layout.addLayout(game_font_row)

        layout.addWidget(font_group)

        # Randomness group
        random_group = QGroupBox("Shuffling")
        random_layout = QVBoxLayout()
        random_group.setLayout(random_layout)

        self.fixed_seed_checkbox = QCheckBox("Use a fixed shuffle seed (repeatable word order)")
        self.fixed_seed_checkbox.setToolTip(
            "Word order and bonus round pairings become repeatable. Useful for rehearsals."
        )
        self.fixed_seed_checkbox.setChecked(self._shuffle_seed is not None)
        random_layout.addWidget(self.fixed_seed_checkbox)

        seed_row = QHBoxLayout()
        seed_label = QLabel("Seed:")
        self.seed_spinbox = QSpinBox()
        self.seed_spinbox.setRange(0, 999_999)
        self.seed_spinbox.setValue(self._shuffle_seed or 0)
        self.seed_spinbox.setEnabled(self._shuffle_seed is not None)
        self.fixed_seed_checkbox.toggled.connect(self.seed_spinbox.setEnabled)
        seed_row.addWidget(seed_label)
        seed_row.addStretch()
        seed_row.addWidget(self.seed_spinbox)
        random_layout.addLayout(seed_row)

        layout.addWidget(random_group)

        # Buttons
        button_row = QHBoxLayout()
        button_row.addStretch()

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)

        self.apply_button = QPushButton("Apply")
        self.apply_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        self.apply_button.setDefault(True)
        button_row.addWidget(self.apply_button)

        layout.addLayout(button_row)

    def get_ui_font_size(self) -> int:
        """Get the selected UI font size."""
        return self.ui_font_spinbox.value()

    def get_game_font_size(self) -> int:
        """Get the selected game font size."""
        return self.game_font_spinbox.value()

    def get_shuffle_seed(self) -> int | None:
        """Get the fixed seed, or None for fresh randomness."""
        if not self.fixed_seed_checkbox.isChecked():
            return None
        return self.seed_spinbox.value()
