"""QTimer-backed tick source for the turn engine."""

from __future__ import annotations

from PySide6.QtCore import QObject, QTimer

from speed_quiz.constants.game_constants import TICK_INTERVAL_MS
from speed_quiz.core.ticker import TickCallback


class QtTimerHandle:
    """Owns one repeating QTimer; cancelling stops and disposes of it."""

    def __init__(self, timer: QTimer) -> None:
        self._timer = timer

    @property
    def active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None


class QtTickScheduler:
    """Hands out one-second repeating timers parented to ``parent``."""

    def __init__(self, parent: QObject | None = None, interval_ms: int = TICK_INTERVAL_MS) -> None:
        self._parent = parent
        self._interval_ms = interval_ms

    def schedule(self, callback: TickCallback) -> QtTimerHandle:
        timer = QTimer(self._parent)
        timer.setInterval(self._interval_ms)
        timer.timeout.connect(callback)
        timer.start()
        return QtTimerHandle(timer)
