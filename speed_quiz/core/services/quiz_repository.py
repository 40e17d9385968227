"""Service for managing the library of quiz definitions."""

from __future__ import annotations

import logging
from uuid import uuid4

from speed_quiz.constants.game_constants import (
    MAX_GROUPS,
    MAX_WORDS_PER_GROUP,
    MIN_GROUPS,
    MIN_WORDS_PER_GROUP,
)
from speed_quiz.core.exceptions import InvalidQuizError, QuizNotFoundError
from speed_quiz.core.models import GroupInput, Quiz, QuizGroup, QuizInput

logger = logging.getLogger(__name__)


class QuizRepository:
    """In-memory store of validated quizzes keyed by an integer id."""

    def __init__(self) -> None:
        self._quizzes: dict[int, Quiz] = {}
        self._quiz_counter: int = 0

    def get(self, quiz_id: int) -> Quiz | None:
        return self._quizzes.get(quiz_id)

    def list(self) -> list[Quiz]:
        """Return all quizzes in creation order."""
        return list(self._quizzes.values())

    def has_quizzes(self) -> bool:
        return bool(self._quizzes)

    def create(self, payload: QuizInput) -> Quiz:
        quiz = self._prepare_quiz(self._next_quiz_id(), payload)
        self._quizzes[quiz.id] = quiz
        logger.info("Created quiz %d (%s)", quiz.id, quiz.title)
        return quiz

    def update(
        self,
        quiz_id: int,
        *,
        title: str | None = None,
        groups: list[GroupInput] | None = None,
        time_per_quiz: int | None = None,
        pass_limit: int | None = None,
    ) -> Quiz:
        """Apply a partial update. Omitted fields keep their current value."""
        existing = self._quizzes.get(quiz_id)
        if existing is None:
            raise QuizNotFoundError(quiz_id)

        merged = QuizInput(
            title=existing.title if title is None else title,
            groups=(
                [GroupInput(name=g.name, words=list(g.words), id=g.id) for g in existing.groups]
                if groups is None
                else groups
            ),
            time_per_quiz=existing.time_per_quiz if time_per_quiz is None else time_per_quiz,
            pass_limit=existing.pass_limit if pass_limit is None else pass_limit,
        )
        # Preserve the original ID
        prepared = self._prepare_quiz(quiz_id, merged)
        self._quizzes[quiz_id] = prepared
        logger.info("Updated quiz %d (%s)", quiz_id, prepared.title)
        return prepared

    def delete(self, quiz_id: int) -> None:
        if self._quizzes.pop(quiz_id, None) is None:
            raise QuizNotFoundError(quiz_id)
        logger.info("Deleted quiz %d", quiz_id)

    def _next_quiz_id(self) -> int:
        self._quiz_counter += 1
        return self._quiz_counter

    def _prepare_quiz(self, quiz_id: int, payload: QuizInput) -> Quiz:
        """Validate and normalize a quiz before storage."""
        cleaned_title = (payload.title or "").strip()
        if not cleaned_title:
            raise InvalidQuizError("Quiz title must not be empty.")

        if not MIN_GROUPS <= len(payload.groups) <= MAX_GROUPS:
            raise InvalidQuizError(f"A quiz needs between {MIN_GROUPS} and {MAX_GROUPS} groups.")

        groups: list[QuizGroup] = []
        seen_ids: set[str] = set()
        for group in payload.groups:
            prepared = self._prepare_group(group)
            if prepared.id in seen_ids:
                raise InvalidQuizError(f"Duplicate group id {prepared.id!r}.")
            seen_ids.add(prepared.id)
            groups.append(prepared)

        quiz = Quiz(
            id=quiz_id,
            title=cleaned_title,
            groups=tuple(groups),
            time_per_quiz=_normalize_time_per_quiz(payload.time_per_quiz),
            pass_limit=_normalize_pass_limit(payload.pass_limit),
        )
        return quiz

    @staticmethod
    def _prepare_group(group: GroupInput) -> QuizGroup:
        name = (group.name or "").strip()
        if not name:
            raise InvalidQuizError("Group name must not be empty.")
        words = [word.strip() for word in group.words]
        if any(not word for word in words):
            raise InvalidQuizError(f"Group {name!r} contains an empty word.")
        if not MIN_WORDS_PER_GROUP <= len(words) <= MAX_WORDS_PER_GROUP:
            raise InvalidQuizError(
                f"Group {name!r} needs between {MIN_WORDS_PER_GROUP} and {MAX_WORDS_PER_GROUP} words."
            )
        return QuizGroup(id=group.id or uuid4().hex, name=name, words=tuple(words))


def validate_quiz(quiz: Quiz) -> None:
    """Check an already-built quiz against the quiz rules.

    Used before a session starts so that a malformed quiz never reaches the
    game state.
    """
    if not quiz.title.strip():
        raise InvalidQuizError("Quiz title must not be empty.")
    if not MIN_GROUPS <= len(quiz.groups) <= MAX_GROUPS:
        raise InvalidQuizError(f"A quiz needs between {MIN_GROUPS} and {MAX_GROUPS} groups.")
    if len({group.id for group in quiz.groups}) != len(quiz.groups):
        raise InvalidQuizError("Group ids must be unique within a quiz.")
    for group in quiz.groups:
        if not group.name.strip():
            raise InvalidQuizError("Group name must not be empty.")
        if not MIN_WORDS_PER_GROUP <= len(group.words) <= MAX_WORDS_PER_GROUP:
            raise InvalidQuizError(
                f"Group {group.name!r} needs between {MIN_WORDS_PER_GROUP} and {MAX_WORDS_PER_GROUP} words."
            )
        if any(not word.strip() for word in group.words):
            raise InvalidQuizError(f"Group {group.name!r} contains an empty word.")
    _normalize_time_per_quiz(quiz.time_per_quiz)
    _normalize_pass_limit(quiz.pass_limit)


def _normalize_time_per_quiz(time_per_quiz: int) -> int:
    if not isinstance(time_per_quiz, int) or isinstance(time_per_quiz, bool):
        raise InvalidQuizError("Time per quiz must be provided as an integer number of seconds.")
    if time_per_quiz <= 0:
        raise InvalidQuizError("Time per quiz must be a positive integer.")
    return time_per_quiz


def _normalize_pass_limit(pass_limit: int) -> int:
    if not isinstance(pass_limit, int) or isinstance(pass_limit, bool):
        raise InvalidQuizError("Pass limit must be an integer.")
    if pass_limit < 0:
        raise InvalidQuizError("Pass limit cannot be negative.")
    return pass_limit
