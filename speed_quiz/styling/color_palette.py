"""Color palette for Speed Quiz supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    # Text colors
    TEXT_PRIMARY = ThemeColors(light="#1B1B1F", dark="#F5F5F5")
    TEXT_MUTED = ThemeColors(light="#6B6B76", dark="#A0A0AA")
    TEXT_ON_ACCENT = ThemeColors(light="#FFFFFF", dark="#101014")

    # Background colors
    BACKGROUND_PRIMARY = ThemeColors(light="#FFFFFF", dark="#1E1E1E")
    BACKGROUND_CARD = ThemeColors(light="#F4F2FB", dark="#2A2833")

    # Accent colors
    ACCENT_PRIMARY = ThemeColors(light="#6D28D9", dark="#A78BFA")   # Purple
    BORDER_PRIMARY = ThemeColors(light="#D6D3E0", dark="#4A4755")

    # Judgment buttons
    CORRECT = ThemeColors(light="#16A34A", dark="#4ADE80")          # Green
    WRONG = ThemeColors(light="#DC2626", dark="#F87171")            # Red
    PASS = ThemeColors(light="#FACC15", dark="#FDE047")             # Yellow
    PASS_TEXT = ThemeColors(light="#422006", dark="#422006")

    # Timer
    TIMER_NORMAL = ThemeColors(light="#6D28D9", dark="#A78BFA")
    TIMER_FINAL_SECONDS = ThemeColors(light="#DC2626", dark="#F87171")

    # Medals
    MEDAL_GOLD = ThemeColors(light="#F59E0B", dark="#FBBF24")
    MEDAL_SILVER = ThemeColors(light="#9CA3AF", dark="#D1D5DB")
    MEDAL_BRONZE = ThemeColors(light="#C2410C", dark="#FB923C")

    # Button colors
    BUTTON_PRIMARY_BG = ThemeColors(light="#6D28D9", dark="#A78BFA")
    BUTTON_SECONDARY_BG = ThemeColors(light="#F5F5F5", dark="#3A3A3A")
    BUTTON_HOVER_BG = ThemeColors(light="#E8E8E8", dark="#505050")
    BUTTON_DISABLED_BG = ThemeColors(light="#E5E5E5", dark="#2F2F2F")
