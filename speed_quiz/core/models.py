"""Domain models for the speed quiz game."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class JudgmentOutcome(str, Enum):
    """Host verdict for the word currently on screen."""

    CORRECT = "correct"
    WRONG = "wrong"
    PASS = "pass"


class TurnPhase(str, Enum):
    COUNTDOWN = "countdown"
    PLAYING = "playing"
    ENDED = "ended"


class TurnEndReason(str, Enum):
    TIME_UP = "time_up"
    WORDS_EXHAUSTED = "words_exhausted"
    SUDDEN_DEATH = "sudden_death"
    ABORTED = "aborted"


@dataclass(slots=True, frozen=True)
class QuizGroup:
    """A team and the words it has to explain during its turn."""

    id: str
    name: str
    words: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class Quiz:
    """Validated quiz definition. Immutable for the duration of a session."""

    id: int
    title: str
    groups: tuple[QuizGroup, ...]
    time_per_quiz: int
    pass_limit: int

    def get_group(self, group_id: str) -> QuizGroup | None:
        return next((group for group in self.groups if group.id == group_id), None)

    def total_word_count(self) -> int:
        return sum(len(group.words) for group in self.groups)


@dataclass(slots=True)
class GroupInput:
    """Unvalidated group payload. ``id`` keeps a group's identity across edits."""

    name: str
    words: list[str]
    id: str | None = None


@dataclass(slots=True)
class QuizInput:
    """Unvalidated quiz payload used for create, update and import."""

    title: str
    groups: list[GroupInput]
    time_per_quiz: int
    pass_limit: int


@dataclass(slots=True, frozen=True)
class HistoryEntry:
    """One accepted judgment."""

    word: str
    outcome: JudgmentOutcome
    group_id: str | None = None


@dataclass(slots=True)
class GroupSessionState:
    """Per-group score sheet owned by the session coordinator."""

    group_id: str
    name: str
    score: int = 0
    played: bool = False
    history: list[HistoryEntry] = field(default_factory=list)

    def count(self, outcome: JudgmentOutcome) -> int:
        return sum(1 for entry in self.history if entry.outcome is outcome)

    @property
    def correct_count(self) -> int:
        return self.count(JudgmentOutcome.CORRECT)

    @property
    def wrong_count(self) -> int:
        return self.count(JudgmentOutcome.WRONG)

    @property
    def pass_count(self) -> int:
        return self.count(JudgmentOutcome.PASS)


@dataclass(slots=True, frozen=True)
class TurnConfig:
    time_per_quiz: int
    pass_limit: int
    sudden_death: bool = False

    def __post_init__(self) -> None:
        if self.time_per_quiz <= 0:
            raise ValueError("Time per quiz must be a positive number of seconds.")
        if self.pass_limit < 0:
            raise ValueError("Pass limit cannot be negative.")


@dataclass(slots=True, frozen=True)
class TurnState:
    """Read-only snapshot of the active turn."""

    participants: tuple[str, ...]
    words: tuple[str, ...]
    current_index: int
    passes_remaining: int
    time_remaining: int
    countdown_remaining: int
    session_score: int
    phase: TurnPhase

    @property
    def current_word(self) -> str | None:
        if self.phase is TurnPhase.ENDED or self.current_index >= len(self.words):
            return None
        return self.words[self.current_index]


@dataclass(slots=True, frozen=True)
class TurnResult:
    """Final outcome of a turn handed back to the coordinator."""

    participants: tuple[str, ...]
    score: int
    history: tuple[HistoryEntry, ...]
    reason: TurnEndReason
    winner_id: str | None = None


@dataclass(slots=True, frozen=True)
class RankingEntry:
    group_id: str
    name: str
    score: int
    position: int
    rank: int
    tied: bool = False


@dataclass(slots=True, frozen=True)
class Standings:
    """Final ordering of a session.

    ``medal_ties`` holds every set of groups sharing a medal-relevant
    position, best first. When fewer than two groups took part the standings
    are not applicable and carry no entries.
    """

    applicable: bool
    entries: tuple[RankingEntry, ...] = ()
    medal_ties: tuple[tuple[str, ...], ...] = ()

    @property
    def has_medal_tie(self) -> bool:
        return bool(self.medal_ties)

    def entry_for(self, group_id: str) -> RankingEntry | None:
        return next((entry for entry in self.entries if entry.group_id == group_id), None)


@dataclass(slots=True, frozen=True)
class BonusRoundResult:
    participants: tuple[str, str]
    winner_id: str | None
    history: tuple[HistoryEntry, ...]
    reason: TurnEndReason

    @property
    def decisive(self) -> bool:
        return self.winner_id is not None

    @property
    def loser_id(self) -> str | None:
        if self.winner_id is None:
            return None
        return next(group_id for group_id in self.participants if group_id != self.winner_id)
