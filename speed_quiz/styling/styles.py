"""Centralized styles and font definitions for the application."""

from .color_palette import ColorPalette, Theme

_MEDAL_COLORS = (ColorPalette.MEDAL_GOLD, ColorPalette.MEDAL_SILVER, ColorPalette.MEDAL_BRONZE)


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_SECONDARY_BG.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 6px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:checked {{
                background-color: {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
                color: {ColorPalette.TEXT_ON_ACCENT.get(theme)};
                border: 1px solid {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
            }}
            QPushButton:disabled {{
                background-color: {ColorPalette.BUTTON_DISABLED_BG.get(theme)};
                color: {ColorPalette.TEXT_MUTED.get(theme)};
            }}
            QListWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 6px;
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
        """

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"

    @staticmethod
    def get_title_style(font_size: int) -> str:
        return f"font-size: {font_size + 10}pt; font-weight: 800;"

    @staticmethod
    def get_word_style(font_size: int, theme: Theme = Theme.LIGHT) -> str:
        return (
            f"font-size: {font_size * 4}pt; font-weight: 900; "
            f"background-color: {ColorPalette.BACKGROUND_CARD.get(theme)}; "
            f"border: 2px solid {ColorPalette.BORDER_PRIMARY.get(theme)}; border-radius: 16px;"
        )

    @staticmethod
    def get_countdown_style(font_size: int, theme: Theme = Theme.LIGHT) -> str:
        return (
            f"font-size: {font_size * 6}pt; font-weight: 900; "
            f"color: {ColorPalette.ACCENT_PRIMARY.get(theme)};"
        )

    @staticmethod
    def get_timer_style(font_size: int, final_seconds: bool, theme: Theme = Theme.LIGHT) -> str:
        color = ColorPalette.TIMER_FINAL_SECONDS if final_seconds else ColorPalette.TIMER_NORMAL
        return f"font-size: {font_size * 2}pt; font-weight: 900; font-family: monospace; color: {color.get(theme)};"

    @staticmethod
    def get_judgment_button_style(kind: str, font_size: int, theme: Theme = Theme.LIGHT) -> str:
        background = {
            "correct": ColorPalette.CORRECT,
            "wrong": ColorPalette.WRONG,
            "pass": ColorPalette.PASS,
        }[kind]
        text = ColorPalette.PASS_TEXT if kind == "pass" else ColorPalette.TEXT_ON_ACCENT
        return (
            f"QPushButton {{ background-color: {background.get(theme)}; color: {text.get(theme)}; "
            f"font-size: {font_size + 4}pt; font-weight: bold; border-radius: 12px; min-height: 90px; }}"
            f"QPushButton:disabled {{ background-color: {ColorPalette.BUTTON_DISABLED_BG.get(theme)}; "
            f"color: {ColorPalette.TEXT_MUTED.get(theme)}; }}"
        )

    @staticmethod
    def get_result_row_style(position: int, font_size: int, theme: Theme = Theme.LIGHT) -> str:
        style = f"font-size: {font_size}pt; padding: 8px; border-radius: 8px;"
        if 1 <= position <= len(_MEDAL_COLORS):
            medal = _MEDAL_COLORS[position - 1].get(theme)
            style += f" border: 2px solid {medal}; font-weight: bold;"
        else:
            style += f" border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};"
        return style
