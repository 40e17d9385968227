"""Pydantic schema for quiz documents, shared by the HTTP API and file import.

Wire names follow the web client (camelCase); snake_case field names are
accepted as well.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from speed_quiz.constants.game_constants import (
    DEFAULT_PASS_LIMIT,
    DEFAULT_TIME_PER_QUIZ_SECONDS,
    MAX_GROUPS,
    MAX_WORDS_PER_GROUP,
    MIN_GROUPS,
    MIN_WORDS_PER_GROUP,
)
from speed_quiz.core.models import GroupInput, QuizInput


class GroupPayload(BaseModel):
    """Schema for one group of a quiz."""

    id: str | None = None
    name: str = Field(min_length=1)
    words: list[str] = Field(min_length=MIN_WORDS_PER_GROUP, max_length=MAX_WORDS_PER_GROUP)

    def to_input(self) -> GroupInput:
        return GroupInput(name=self.name, words=list(self.words), id=self.id)


class QuizPayload(BaseModel):
    """Schema for a complete quiz. A top-level ``id`` is ignored."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1)
    groups: list[GroupPayload] = Field(min_length=MIN_GROUPS, max_length=MAX_GROUPS)
    time_per_quiz: int = Field(default=DEFAULT_TIME_PER_QUIZ_SECONDS, gt=0, strict=True, alias="timePerQuiz")
    pass_limit: int = Field(default=DEFAULT_PASS_LIMIT, ge=0, strict=True, alias="passLimit")

    def to_input(self) -> QuizInput:
        return QuizInput(
            title=self.title,
            groups=[group.to_input() for group in self.groups],
            time_per_quiz=self.time_per_quiz,
            pass_limit=self.pass_limit,
        )


class QuizUpdatePayload(BaseModel):
    """Schema for partial updates; omitted fields stay unchanged."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(default=None, min_length=1)
    groups: list[GroupPayload] | None = Field(default=None, min_length=MIN_GROUPS, max_length=MAX_GROUPS)
    time_per_quiz: int | None = Field(default=None, gt=0, strict=True, alias="timePerQuiz")
    pass_limit: int | None = Field(default=None, ge=0, strict=True, alias="passLimit")

    def group_inputs(self) -> list[GroupInput] | None:
        if self.groups is None:
            return None
        return [group.to_input() for group in self.groups]
