"""Service coordinating the groups of one play-through of a quiz."""

from __future__ import annotations

import logging

from speed_quiz.core.events import EventListener, GameEvent, GameEventType, emit_nothing
from speed_quiz.core.exceptions import TurnRejectedError
from speed_quiz.core.models import (
    GroupSessionState,
    HistoryEntry,
    Quiz,
    QuizGroup,
    TurnConfig,
    TurnResult,
    TurnState,
)
from speed_quiz.core.services.quiz_repository import validate_quiz
from speed_quiz.core.services.turn_engine import TurnEngine

logger = logging.getLogger(__name__)


class GameSession:
    """Owns the per-group score sheets and hands turns to the turn engine.

    Groups are identified by their stable quiz group id, never by position.
    Score sheets are only mutated from the engine's judgment and turn-end
    callbacks, one active turn at a time.
    """

    def __init__(self, engine: TurnEngine, emit: EventListener = emit_nothing) -> None:
        self._engine = engine
        self._emit = emit
        self._quiz: Quiz | None = None
        self._states: dict[str, GroupSessionState] = {}
        self._active_group_id: str | None = None
        self._turn_end_count: int = 0
        self._ended_early: bool = False

    def init_session(self, quiz: Quiz) -> None:
        """Start a brand-new session, discarding any previous state."""
        validate_quiz(quiz)
        if self._engine.is_active():
            self._engine.abort()
        self._quiz = quiz
        self._states = {
            group.id: GroupSessionState(group_id=group.id, name=group.name) for group in quiz.groups
        }
        self._active_group_id = None
        self._turn_end_count = 0
        self._ended_early = False
        logger.info("Session started for quiz %d (%s) with %d group(s)", quiz.id, quiz.title, len(quiz.groups))
        self._emit(GameEvent(GameEventType.SESSION_STARTED, {"quiz_id": quiz.id}))

    def is_active(self) -> bool:
        return self._quiz is not None

    @property
    def quiz(self) -> Quiz | None:
        return self._quiz

    @property
    def active_group_id(self) -> str | None:
        return self._active_group_id

    @property
    def turn_end_count(self) -> int:
        return self._turn_end_count

    def select_group(self, group_id: str) -> TurnState:
        """Start the turn of an unplayed group."""
        quiz = self._require_quiz()
        state = self._states.get(group_id)
        group = quiz.get_group(group_id)
        if state is None or group is None:
            raise TurnRejectedError(f"Unknown group {group_id!r}.")
        if state.played:
            raise TurnRejectedError(f"{state.name} has already played.")
        if self._ended_early:
            raise TurnRejectedError("The session was ended early.")
        if self._engine.is_active():
            raise TurnRejectedError("Another turn is still in progress.")
        if not group.words:
            raise TurnRejectedError(f"{state.name} has no words to play.")

        turn_state = self._engine.start_turn(
            (group.id,),
            group.words,
            TurnConfig(time_per_quiz=quiz.time_per_quiz, pass_limit=quiz.pass_limit),
            on_judgment=self._record_judgment,
            on_turn_end=self.on_turn_end,
        )
        self._active_group_id = group.id
        return turn_state

    def abort_turn(self) -> TurnResult | None:
        """Stop the running turn; the group keeps the score it reached."""
        return self._engine.abort()

    def on_turn_end(self, result: TurnResult) -> None:
        group_id = result.participants[0]
        state = self._states.get(group_id)
        if state is None:
            logger.warning("Turn end for unknown group %s ignored", group_id)
            return
        if state.played:
            logger.warning("Repeated turn end for %s rejected; score left at %d", state.name, state.score)
            return

        state.played = True
        state.score += result.score
        self._turn_end_count += 1
        self._active_group_id = None
        logger.info("%s finished with %d point(s); total %d", state.name, result.score, state.score)

        if self.is_session_complete():
            logger.info("All %d group(s) have played", len(self._states))
            self._emit(GameEvent(GameEventType.SESSION_COMPLETE, {"ended_early": False}))

    def is_session_complete(self) -> bool:
        return bool(self._states) and all(state.played for state in self._states.values())

    def end_session_early(self) -> None:
        """Stop handing out turns; the standings use the scores so far."""
        if not any(state.played for state in self._states.values()):
            raise TurnRejectedError("At least one group must play before the game can end.")
        if self._engine.is_active():
            raise TurnRejectedError("Finish or stop the running turn first.")
        if self._ended_early or self.is_session_complete():
            return
        self._ended_early = True
        logger.info("Session ended early after %d turn(s)", self._turn_end_count)
        self._emit(GameEvent(GameEventType.SESSION_COMPLETE, {"ended_early": True}))

    def is_finished(self) -> bool:
        return self._ended_early or self.is_session_complete()

    def group_states(self) -> list[GroupSessionState]:
        """Score sheets in quiz order."""
        return list(self._states.values())

    def group_state(self, group_id: str) -> GroupSessionState | None:
        return self._states.get(group_id)

    def selectable_groups(self) -> list[QuizGroup]:
        """Groups that may still take a turn. Played groups disappear."""
        if self._quiz is None or self._ended_early:
            return []
        return [group for group in self._quiz.groups if not self._states[group.id].played]

    def _record_judgment(self, entry: HistoryEntry) -> None:
        state = self._states.get(entry.group_id) if entry.group_id else None
        if state is None:
            logger.warning("Judgment for unknown group %s dropped", entry.group_id)
            return
        state.history.append(entry)

    def _require_quiz(self) -> Quiz:
        if self._quiz is None:
            raise TurnRejectedError("No session has been started.")
        return self._quiz
