"""Tick scheduling contract between the game core and its timer source.

The turn engine never sleeps or reads the wall clock. It asks a scheduler for
a periodic tick and gets back a handle it must cancel when the turn ends.
The desktop host backs this with a ``QTimer``; tests and headless callers use
:class:`ManualTickScheduler` and advance time explicitly.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

TickCallback = Callable[[], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...

    @property
    def active(self) -> bool: ...


class TickScheduler(Protocol):
    def schedule(self, callback: TickCallback) -> TimerHandle: ...


class ManualTimerHandle:
    """Handle returned by :class:`ManualTickScheduler`."""

    def __init__(self, scheduler: ManualTickScheduler, callback: TickCallback) -> None:
        self._scheduler = scheduler
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        self._scheduler._release(self)

    def fire(self) -> None:
        if self._active:
            self._callback()


class ManualTickScheduler:
    """Scheduler whose ticks are delivered by calling :meth:`advance`."""

    def __init__(self) -> None:
        self._handles: list[ManualTimerHandle] = []
        self.cancelled_count: int = 0

    def schedule(self, callback: TickCallback) -> ManualTimerHandle:
        handle = ManualTimerHandle(self, callback)
        self._handles.append(handle)
        return handle

    def advance(self, ticks: int = 1) -> None:
        """Deliver ``ticks`` ticks to every live handle, in scheduling order."""
        for _ in range(ticks):
            for handle in list(self._handles):
                handle.fire()

    def active_count(self) -> int:
        return len(self._handles)

    def _release(self, handle: ManualTimerHandle) -> None:
        if handle in self._handles:
            self._handles.remove(handle)
            self.cancelled_count += 1
