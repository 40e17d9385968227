"""Service driving a single timed turn: countdown, play and turn end."""

from __future__ import annotations

from collections.abc import Callable, Sequence
import logging
import random

from speed_quiz.constants.game_constants import COUNTDOWN_STEPS, FINAL_SECONDS_WINDOW
from speed_quiz.core.events import EventListener, GameEvent, GameEventType, emit_nothing
from speed_quiz.core.exceptions import TurnRejectedError
from speed_quiz.core.models import (
    HistoryEntry,
    JudgmentOutcome,
    TurnConfig,
    TurnEndReason,
    TurnPhase,
    TurnResult,
    TurnState,
)
from speed_quiz.core.ticker import TickScheduler, TimerHandle

logger = logging.getLogger(__name__)

JudgmentCallback = Callable[[HistoryEntry], None]
TurnEndCallback = Callable[[TurnResult], None]


class TurnEngine:
    """Runs one turn at a time over a shuffled copy of a word list.

    A turn owns exactly one tick handle from the scheduler. The handle is
    acquired in :meth:`start_turn` and cancelled on every path into
    ``TurnPhase.ENDED`` (time-out, last word judged, sudden-death win, abort),
    so no stale tick can reach a finished turn.
    """

    def __init__(
        self,
        scheduler: TickScheduler | None = None,
        rng: random.Random | None = None,
        emit: EventListener = emit_nothing,
    ) -> None:
        self._scheduler = scheduler
        self._rng = rng or random.Random()
        self._emit = emit
        self._timer_handle: TimerHandle | None = None
        self._on_judgment: JudgmentCallback | None = None
        self._on_turn_end: TurnEndCallback | None = None

        self._participants: tuple[str, ...] = ()
        self._words: list[str] = []
        self._config: TurnConfig | None = None
        self._phase: TurnPhase | None = None
        self._current_index: int = 0
        self._passes_remaining: int = 0
        self._time_remaining: int = 0
        self._countdown_remaining: int = 0
        self._session_score: int = 0
        self._history: list[HistoryEntry] = []

    def set_scheduler(self, scheduler: TickScheduler | None) -> None:
        if self.is_active():
            raise TurnRejectedError("Cannot swap the timer source during a turn.")
        self._scheduler = scheduler

    @property
    def phase(self) -> TurnPhase | None:
        return self._phase

    def is_active(self) -> bool:
        return self._phase in (TurnPhase.COUNTDOWN, TurnPhase.PLAYING)

    @property
    def state(self) -> TurnState | None:
        if self._phase is None:
            return None
        return TurnState(
            participants=self._participants,
            words=tuple(self._words),
            current_index=self._current_index,
            passes_remaining=self._passes_remaining,
            time_remaining=self._time_remaining,
            countdown_remaining=self._countdown_remaining,
            session_score=self._session_score,
            phase=self._phase,
        )

    def start_turn(
        self,
        participants: Sequence[str],
        words: Sequence[str],
        config: TurnConfig,
        *,
        on_judgment: JudgmentCallback | None = None,
        on_turn_end: TurnEndCallback | None = None,
    ) -> TurnState:
        """Shuffle the words and enter the countdown."""
        if self.is_active():
            raise TurnRejectedError("A turn is already in progress.")
        participants = tuple(participants)
        expected = 2 if config.sudden_death else 1
        if len(participants) != expected:
            raise TurnRejectedError(
                f"A {'sudden-death' if config.sudden_death else 'regular'} turn needs "
                f"exactly {expected} participant(s), got {len(participants)}."
            )
        if not words:
            raise TurnRejectedError("Cannot start a turn without words.")

        shuffled = list(words)
        self._rng.shuffle(shuffled)

        self._participants = participants
        self._words = shuffled
        self._config = config
        self._phase = TurnPhase.COUNTDOWN
        self._current_index = 0
        self._passes_remaining = config.pass_limit
        self._time_remaining = config.time_per_quiz
        self._countdown_remaining = COUNTDOWN_STEPS
        self._session_score = 0
        self._history = []
        self._on_judgment = on_judgment
        self._on_turn_end = on_turn_end

        if self._scheduler is not None:
            self._timer_handle = self._scheduler.schedule(self.tick)

        logger.info(
            "Turn started for %s with %d word(s), %ds, %d pass(es)%s",
            ", ".join(participants),
            len(shuffled),
            config.time_per_quiz,
            config.pass_limit,
            " (sudden death)" if config.sudden_death else "",
        )
        self._emit(GameEvent(GameEventType.TURN_STARTED, {"participants": participants}))
        self._emit_phase()
        return self.state

    def tick(self) -> None:
        """Advance the turn clock by one second."""
        if not self.is_active():
            logger.debug("Ignoring late tick; no turn is running.")
            return

        if self._phase is TurnPhase.COUNTDOWN:
            self._countdown_remaining -= 1
            self._emit(GameEvent(GameEventType.COUNTDOWN_TICK, {"remaining": self._countdown_remaining}))
            if self._countdown_remaining <= 0:
                self._countdown_remaining = 0
                self._phase = TurnPhase.PLAYING
                self._time_remaining = self._config.time_per_quiz
                self._emit_phase()
            return

        self._time_remaining -= 1
        self._emit(
            GameEvent(
                GameEventType.TIMER_TICK,
                {
                    "time_remaining": self._time_remaining,
                    "final_seconds": 0 < self._time_remaining <= FINAL_SECONDS_WINDOW,
                },
            )
        )
        if self._time_remaining <= 0:
            self._time_remaining = 0
            self._end_turn(TurnEndReason.TIME_UP)

    def judge(self, outcome: JudgmentOutcome | str, group_id: str | None = None) -> bool:
        """Apply a judgment to the current word. Returns False when ignored."""
        outcome = JudgmentOutcome(outcome)
        if self._phase is not TurnPhase.PLAYING:
            logger.info("Ignoring %s judgment while turn phase is %s", outcome.value, self._phase)
            return False
        if outcome is JudgmentOutcome.PASS and self._passes_remaining <= 0:
            logger.debug("Pass rejected; no passes remaining")
            return False

        side = self._resolve_side(outcome, group_id)
        entry = HistoryEntry(word=self._words[self._current_index], outcome=outcome, group_id=side)
        self._history.append(entry)
        if self._on_judgment is not None:
            self._on_judgment(entry)

        if outcome is JudgmentOutcome.CORRECT:
            self._session_score += 1
        elif outcome is JudgmentOutcome.PASS:
            self._passes_remaining -= 1

        self._emit(
            GameEvent(
                GameEventType.JUDGMENT_RECORDED,
                {
                    "word": entry.word,
                    "outcome": outcome,
                    "group_id": side,
                    "session_score": self._session_score,
                    "passes_remaining": self._passes_remaining,
                },
            )
        )

        if self._config.sudden_death and outcome is JudgmentOutcome.CORRECT:
            self._current_index += 1
            self._end_turn(TurnEndReason.SUDDEN_DEATH, winner_id=side)
        elif self._current_index >= len(self._words) - 1:
            self._current_index = len(self._words)
            self._end_turn(TurnEndReason.WORDS_EXHAUSTED)
        else:
            self._current_index += 1
        return True

    def abort(self) -> TurnResult | None:
        """End the running turn early on behalf of the host."""
        if not self.is_active():
            logger.debug("Abort requested with no turn running")
            return None
        return self._end_turn(TurnEndReason.ABORTED)

    def _resolve_side(self, outcome: JudgmentOutcome, group_id: str | None) -> str | None:
        if group_id is not None:
            if group_id not in self._participants:
                raise ValueError(f"Group {group_id!r} is not playing this turn.")
            return group_id
        if len(self._participants) == 1:
            return self._participants[0]
        if outcome is JudgmentOutcome.CORRECT:
            raise ValueError("A correct answer in a bonus round must name the scoring group.")
        return None

    def _end_turn(self, reason: TurnEndReason, winner_id: str | None = None) -> TurnResult:
        self._release_timer()
        self._phase = TurnPhase.ENDED
        result = TurnResult(
            participants=self._participants,
            score=self._session_score,
            history=tuple(self._history),
            reason=reason,
            winner_id=winner_id,
        )
        logger.info(
            "Turn for %s ended (%s) with score %d after %d judgment(s)",
            ", ".join(self._participants),
            reason.value,
            result.score,
            len(result.history),
        )
        self._emit_phase()

        # The turn-end callback settles scores before TURN_ENDED goes out.
        callback = self._on_turn_end
        self._on_judgment = None
        self._on_turn_end = None
        if callback is not None:
            callback(result)
        self._emit(GameEvent(GameEventType.TURN_ENDED, {"result": result}))
        return result

    def _release_timer(self) -> None:
        if self._timer_handle is not None:
            self._timer_handle.cancel()
            self._timer_handle = None

    def _emit_phase(self) -> None:
        self._emit(GameEvent(GameEventType.PHASE_CHANGED, {"phase": self._phase}))
