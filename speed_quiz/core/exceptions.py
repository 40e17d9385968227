"""Exceptions raised by the game core."""

from __future__ import annotations


class SpeedQuizError(Exception):
    """Base class for errors raised by the game core."""


class InvalidQuizError(SpeedQuizError, ValueError):
    """Raised when a quiz definition does not satisfy the quiz rules."""


class QuizNotFoundError(SpeedQuizError, LookupError):
    """Raised when a quiz id is not present in the repository."""

    def __init__(self, quiz_id: int) -> None:
        super().__init__(f"Quiz {quiz_id} not found.")
        self.quiz_id = quiz_id


class TurnRejectedError(SpeedQuizError, RuntimeError):
    """Raised when a turn cannot start (precondition failure, not fatal)."""


class TieBreakError(SpeedQuizError, RuntimeError):
    """Raised when a bonus round is requested without a valid tie."""
