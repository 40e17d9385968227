"""Utilities for importing quizzes from JSON files.

File format (the same document :mod:`speed_quiz.core.quiz_exporter` writes):

    {
      "title": "Friday Night",
      "timePerQuiz": 60,
      "passLimit": 3,
      "groups": [
        {"name": "Group A", "words": ["apple", "banana", "cherry"]},
        {"name": "Group B", "words": ["dog", "cat", "elephant"]}
      ]
    }

The document is checked against :class:`~speed_quiz.core.quiz_schema.QuizPayload`,
the schema the HTTP API accepts. Ids are ignored: importing always creates a
new quiz with fresh group ids.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from speed_quiz.core.exceptions import SpeedQuizError
from speed_quiz.core.models import QuizInput
from speed_quiz.core.quiz_schema import QuizPayload


class QuizImportError(SpeedQuizError, ValueError):
    """Raised when a quiz definition cannot be parsed."""


@dataclass(slots=True)
class ImportedQuiz:
    """Container for the parsed quiz and where it came from."""

    source_path: Path
    quiz: QuizInput


def load_quiz_from_file(file_path: Path) -> ImportedQuiz:
    text = file_path.read_text(encoding="utf-8")
    return ImportedQuiz(source_path=file_path, quiz=parse_quiz_document(text))


def parse_quiz_document(text: str) -> QuizInput:
    try:
        payload = QuizPayload.model_validate_json(text)
    except ValidationError as exc:
        raise QuizImportError(_describe(exc)) from exc

    quiz = payload.to_input()
    for group in quiz.groups:
        group.id = None
    return quiz


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    where = ".".join(str(part) for part in first["loc"])
    if where:
        return f"Invalid quiz file at '{where}': {first['msg']}."
    return f"Invalid quiz file: {first['msg']}."
