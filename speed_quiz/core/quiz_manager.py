"""Business logic for the game shared between the desktop host and the API."""

from __future__ import annotations

import logging
from pathlib import Path
import random
from threading import RLock

from speed_quiz.core.events import EventListener, GameEvent, GameEventType
from speed_quiz.core.exceptions import QuizNotFoundError, TieBreakError, TurnRejectedError
from speed_quiz.core.models import (
    BonusRoundResult,
    GroupInput,
    GroupSessionState,
    JudgmentOutcome,
    Quiz,
    QuizGroup,
    QuizInput,
    Standings,
    TurnResult,
    TurnState,
)
from speed_quiz.core.quiz_exporter import save_quiz_to_file
from speed_quiz.core.quiz_importer import load_quiz_from_file
from speed_quiz.core.services.game_session import GameSession
from speed_quiz.core.services.quiz_repository import QuizRepository
from speed_quiz.core.services.ranking import BonusRoundPlan, RankingResolver
from speed_quiz.core.services.turn_engine import TurnEngine
from speed_quiz.core.ticker import TickCallback, TickScheduler, TimerHandle

logger = logging.getLogger(__name__)


class _LockedScheduler:
    """Delivers scheduler ticks while holding the manager lock."""

    def __init__(self, inner: TickScheduler, lock: RLock) -> None:
        self._inner = inner
        self._lock = lock

    def schedule(self, callback: TickCallback) -> TimerHandle:
        def locked_callback() -> None:
            with self._lock:
                callback()

        return self._inner.schedule(locked_callback)


class QuizManager:
    """Facade for quiz services: Repository, GameSession, TurnEngine and RankingResolver.

    The lock is re-entrant because event listeners run inside manager calls
    and usually read state back through the manager.
    """

    def __init__(self, scheduler: TickScheduler | None = None, rng: random.Random | None = None) -> None:
        self._lock = RLock()
        self._listeners: list[EventListener] = []
        self._rng = rng or random.Random()

        # Services
        self._repository = QuizRepository()
        self._engine = TurnEngine(
            scheduler=_LockedScheduler(scheduler, self._lock) if scheduler else None,
            rng=self._rng,
            emit=self._dispatch,
        )
        self._session = GameSession(self._engine, emit=self._dispatch)
        self._ranking = RankingResolver(rng=self._rng, emit=self._dispatch)

        self._bonus_plan: BonusRoundPlan | None = None
        self._last_bonus_result: BonusRoundResult | None = None
        self._last_turn_result: TurnResult | None = None

    # --- Wiring ---

    def set_tick_scheduler(self, scheduler: TickScheduler | None) -> None:
        with self._lock:
            self._engine.set_scheduler(_LockedScheduler(scheduler, self._lock) if scheduler else None)

    def set_shuffle_seed(self, seed: int | None) -> None:
        with self._lock:
            self._rng.seed(seed)

    def subscribe(self, listener: EventListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _dispatch(self, event: GameEvent) -> None:
        if event.type is GameEventType.TURN_ENDED:
            self._last_turn_result = event.payload["result"]
        for listener in list(self._listeners):
            listener(event)

    # --- Quiz Repository Delegation ---

    def list_quizzes(self) -> list[Quiz]:
        with self._lock:
            return self._repository.list()

    def get_quiz(self, quiz_id: int) -> Quiz | None:
        with self._lock:
            return self._repository.get(quiz_id)

    def create_quiz(self, payload: QuizInput) -> Quiz:
        with self._lock:
            return self._repository.create(payload)

    def update_quiz(
        self,
        quiz_id: int,
        *,
        title: str | None = None,
        groups: list[GroupInput] | None = None,
        time_per_quiz: int | None = None,
        pass_limit: int | None = None,
    ) -> Quiz:
        with self._lock:
            return self._repository.update(
                quiz_id,
                title=title,
                groups=groups,
                time_per_quiz=time_per_quiz,
                pass_limit=pass_limit,
            )

    def delete_quiz(self, quiz_id: int) -> None:
        with self._lock:
            self._repository.delete(quiz_id)

    def import_quiz_file(self, file_path: Path) -> Quiz:
        imported = load_quiz_from_file(file_path)
        with self._lock:
            quiz = self._repository.create(imported.quiz)
        logger.info("Imported quiz %d from %s", quiz.id, file_path)
        return quiz

    def export_quiz_file(self, quiz_id: int, file_path: Path) -> None:
        with self._lock:
            quiz = self._repository.get(quiz_id)
            if quiz is None:
                raise QuizNotFoundError(quiz_id)
        save_quiz_to_file(file_path, quiz)
        logger.info("Exported quiz %d to %s", quiz_id, file_path)

    # --- Game Session Delegation ---

    def start_session(self, quiz_id: int) -> None:
        with self._lock:
            quiz = self._repository.get(quiz_id)
            if quiz is None:
                raise QuizNotFoundError(quiz_id)
            self._begin_session(quiz)

    def restart_session(self) -> None:
        """Play the same quiz again from scratch."""
        with self._lock:
            quiz = self._session.quiz
            if quiz is None:
                raise TurnRejectedError("No session to restart.")
            self._begin_session(quiz)

    def _begin_session(self, quiz: Quiz) -> None:
        self._session.init_session(quiz)
        self._ranking.reset()
        self._bonus_plan = None
        self._last_bonus_result = None
        self._last_turn_result = None

    def stop_session(self) -> None:
        with self._lock:
            if self._engine.is_active():
                self._engine.abort()
            self._bonus_plan = None

    def get_active_quiz(self) -> Quiz | None:
        with self._lock:
            return self._session.quiz

    def select_group(self, group_id: str) -> TurnState:
        with self._lock:
            return self._session.select_group(group_id)

    def tick(self) -> None:
        with self._lock:
            self._engine.tick()

    def judge(self, outcome: JudgmentOutcome | str, group_id: str | None = None) -> bool:
        with self._lock:
            return self._engine.judge(outcome, group_id)

    def abort_turn(self) -> TurnResult | None:
        with self._lock:
            return self._engine.abort()

    def end_session_early(self) -> None:
        with self._lock:
            self._session.end_session_early()

    def get_turn_state(self) -> TurnState | None:
        with self._lock:
            return self._engine.state

    def has_active_turn(self) -> bool:
        with self._lock:
            return self._engine.is_active()

    def get_last_turn_result(self) -> TurnResult | None:
        with self._lock:
            return self._last_turn_result

    def get_group_states(self) -> list[GroupSessionState]:
        with self._lock:
            return self._session.group_states()

    def get_group_state(self, group_id: str) -> GroupSessionState | None:
        with self._lock:
            return self._session.group_state(group_id)

    def get_selectable_groups(self) -> list[QuizGroup]:
        with self._lock:
            return self._session.selectable_groups()

    def is_session_complete(self) -> bool:
        with self._lock:
            return self._session.is_session_complete()

    def is_session_finished(self) -> bool:
        with self._lock:
            return self._session.is_finished()

    # --- Ranking Delegation ---

    def get_standings(self) -> Standings:
        with self._lock:
            standings = self._ranking.compute_standings(self._session.group_states())
            self._dispatch(GameEvent(GameEventType.STANDINGS_UPDATED, {"standings": standings}))
            offer = self._ranking.bonus_round_offer(standings) if standings.applicable else None
            if offer:
                self._dispatch(GameEvent(GameEventType.TIE_DETECTED, {"group_ids": offer}))
            return standings

    def get_bonus_round_offer(self) -> tuple[str, ...] | None:
        with self._lock:
            standings = self._ranking.compute_standings(self._session.group_states())
            if not standings.applicable:
                return None
            return self._ranking.bonus_round_offer(standings)

    def start_bonus_round(self) -> TurnState:
        with self._lock:
            quiz = self._session.quiz
            if quiz is None or not self._session.is_finished():
                raise TieBreakError("Bonus rounds are only available once the game is over.")
            if self._engine.is_active():
                raise TieBreakError("A bonus round is already running.")
            offer = self.get_bonus_round_offer()
            if offer is None:
                raise TieBreakError("There is no tie to break.")
            plan = self._ranking.create_bonus_round(quiz, offer)
            self._bonus_plan = plan
            return self._ranking.start_bonus_round(self._engine, plan, on_settled=self._on_bonus_settled)

    def _on_bonus_settled(self, result: BonusRoundResult) -> None:
        self._bonus_plan = None
        self._last_bonus_result = result

    def skip_bonus_round(self) -> None:
        with self._lock:
            if self._engine.is_active() and self._bonus_plan is not None:
                raise TieBreakError("A bonus round is already running.")
            self._ranking.skip_bonus_round()

    def get_bonus_participants(self) -> tuple[str, str] | None:
        with self._lock:
            return self._bonus_plan.participants if self._bonus_plan else None

    def is_bonus_round_active(self) -> bool:
        with self._lock:
            return self._bonus_plan is not None and self._engine.is_active()

    def get_last_bonus_result(self) -> BonusRoundResult | None:
        with self._lock:
            return self._last_bonus_result
