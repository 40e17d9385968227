"""State-change notifications delivered to the presentation layer."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class GameEventType(str, Enum):
    TURN_STARTED = "turn_started"
    PHASE_CHANGED = "phase_changed"
    COUNTDOWN_TICK = "countdown_tick"
    TIMER_TICK = "timer_tick"
    JUDGMENT_RECORDED = "judgment_recorded"
    TURN_ENDED = "turn_ended"
    SESSION_STARTED = "session_started"
    SESSION_COMPLETE = "session_complete"
    STANDINGS_UPDATED = "standings_updated"
    TIE_DETECTED = "tie_detected"
    BONUS_ROUND_STARTED = "bonus_round_started"
    BONUS_ROUND_ENDED = "bonus_round_ended"


@dataclass(slots=True, frozen=True)
class GameEvent:
    type: GameEventType
    payload: dict[str, Any] = field(default_factory=dict)


EventListener = Callable[[GameEvent], None]


def emit_nothing(event: GameEvent) -> None:
    """Default emitter used when nobody listens."""
