"""Service ranking the groups at the end of a session and settling medal ties."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
import logging
import random

from speed_quiz.constants.game_constants import BONUS_ROUND_PARTICIPANTS, MEDAL_POSITIONS
from speed_quiz.core.events import EventListener, GameEvent, GameEventType, emit_nothing
from speed_quiz.core.exceptions import TieBreakError
from speed_quiz.core.models import (
    BonusRoundResult,
    GroupSessionState,
    Quiz,
    RankingEntry,
    Standings,
    TurnConfig,
    TurnResult,
    TurnState,
)
from speed_quiz.core.services.turn_engine import TurnEngine

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class BonusRoundPlan:
    """A sudden-death round between two of the tied groups."""

    tied_group_ids: frozenset[str]
    participants: tuple[str, str]
    words: tuple[str, ...]
    config: TurnConfig


class RankingResolver:
    """Orders groups by score and remembers bonus-round verdicts.

    Bonus rounds never touch scores. A decisive round only records that the
    winner beats the loser, which orders those two groups within their score
    tier. An undecided round marks the tie as attempted so it is not offered
    again.
    """

    def __init__(self, rng: random.Random | None = None, emit: EventListener = emit_nothing) -> None:
        self._rng = rng or random.Random()
        self._emit = emit
        self._tie_break_wins: dict[str, set[str]] = {}
        self._attempted_ties: set[frozenset[str]] = set()

    def reset(self) -> None:
        """Forget all tie-break verdicts (new session)."""
        self._tie_break_wins.clear()
        self._attempted_ties.clear()

    def compute_standings(self, states: Sequence[GroupSessionState]) -> Standings:
        if len(states) < 2:
            logger.info("Standings not applicable with %d group(s)", len(states))
            return Standings(applicable=False)

        keyed = [(state, (state.score, self._tier_wins(state, states))) for state in states]
        # sorted() is stable, so equal keys keep session order
        ordered = sorted(keyed, key=lambda item: (-item[1][0], -item[1][1]))

        key_counts: dict[tuple[int, int], int] = {}
        for _, key in ordered:
            key_counts[key] = key_counts.get(key, 0) + 1

        entries: list[RankingEntry] = []
        rank = 0
        previous_key: tuple[int, int] | None = None
        for position, (state, key) in enumerate(ordered, start=1):
            if key != previous_key:
                rank = position
                previous_key = key
            entries.append(
                RankingEntry(
                    group_id=state.group_id,
                    name=state.name,
                    score=state.score,
                    position=position,
                    rank=rank,
                    tied=key_counts[key] > 1,
                )
            )

        medal_ties: list[tuple[str, ...]] = []
        for boundary in range(1, MEDAL_POSITIONS + 1):
            if boundary >= len(ordered):
                break
            key = ordered[boundary - 1][1]
            if key != ordered[boundary][1]:
                continue
            tied = tuple(state.group_id for state, other in ordered if other == key)
            if tied not in medal_ties:
                medal_ties.append(tied)

        standings = Standings(applicable=True, entries=tuple(entries), medal_ties=tuple(medal_ties))
        if medal_ties:
            logger.info("Medal ties detected: %s", medal_ties)
        return standings

    def bonus_round_offer(self, standings: Standings) -> tuple[str, ...] | None:
        """Return the best tied set that has not had an undecided bonus round."""
        for tied in standings.medal_ties:
            if frozenset(tied) not in self._attempted_ties:
                return tied
        return None

    def create_bonus_round(self, quiz: Quiz, tied_group_ids: Sequence[str]) -> BonusRoundPlan:
        """Pick two tied groups at random and pool every word of the quiz."""
        if len(quiz.groups) < 2:
            raise TieBreakError("A bonus round needs a quiz with at least two groups.")
        tied = tuple(dict.fromkeys(tied_group_ids))
        if len(tied) < BONUS_ROUND_PARTICIPANTS:
            raise TieBreakError("A bonus round needs at least two tied groups.")
        unknown = [group_id for group_id in tied if quiz.get_group(group_id) is None]
        if unknown:
            raise TieBreakError(f"Unknown group(s) in tie: {', '.join(unknown)}.")

        first, second = self._rng.sample(tied, BONUS_ROUND_PARTICIPANTS)
        pooled = tuple(word for group in quiz.groups for word in group.words)
        return BonusRoundPlan(
            tied_group_ids=frozenset(tied),
            participants=(first, second),
            words=pooled,
            config=TurnConfig(
                time_per_quiz=quiz.time_per_quiz,
                pass_limit=quiz.pass_limit,
                sudden_death=True,
            ),
        )

    def start_bonus_round(
        self,
        engine: TurnEngine,
        plan: BonusRoundPlan,
        on_settled: Callable[[BonusRoundResult], None] | None = None,
    ) -> TurnState:
        def finish(turn_result: TurnResult) -> None:
            result = self.settle_bonus_round(plan, turn_result)
            if on_settled is not None:
                on_settled(result)

        turn_state = engine.start_turn(plan.participants, plan.words, plan.config, on_turn_end=finish)
        logger.info("Bonus round started between %s and %s", *plan.participants)
        self._emit(GameEvent(GameEventType.BONUS_ROUND_STARTED, {"participants": plan.participants}))
        return turn_state

    def settle_bonus_round(self, plan: BonusRoundPlan, turn_result: TurnResult) -> BonusRoundResult:
        result = BonusRoundResult(
            participants=plan.participants,
            winner_id=turn_result.winner_id,
            history=turn_result.history,
            reason=turn_result.reason,
        )
        if result.decisive:
            winner, loser = result.winner_id, result.loser_id
            self._tie_break_wins.setdefault(winner, set()).add(loser)
            self._tie_break_wins.get(loser, set()).discard(winner)
            logger.info("Bonus round won by %s over %s", winner, loser)
        else:
            self._attempted_ties.add(plan.tied_group_ids)
            logger.info("Bonus round ended without a winner (%s); tie stands", result.reason.value)
        self._emit(GameEvent(GameEventType.BONUS_ROUND_ENDED, {"result": result}))
        return result

    def skip_bonus_round(self) -> None:
        """Decline the offered tie; standings and scores stay as they are."""
        logger.info("Bonus round skipped; standings unchanged")

    def _tier_wins(self, state: GroupSessionState, states: Sequence[GroupSessionState]) -> int:
        """Count same-score groups this group beat, directly or through another winner."""
        tier = {other.group_id for other in states if other.score == state.score}
        beaten: set[str] = set()
        pending = [state.group_id]
        while pending:
            for loser in self._tie_break_wins.get(pending.pop(), ()):
                if loser in tier and loser not in beaten:
                    beaten.add(loser)
                    pending.append(loser)
        beaten.discard(state.group_id)
        return len(beaten)
