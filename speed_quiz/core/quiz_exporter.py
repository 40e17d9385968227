"""Utilities for exporting quizzes to the JSON format used for imports."""

from __future__ import annotations

import json
from pathlib import Path
import re

from speed_quiz.core.models import Quiz

_WHITESPACE = re.compile(r"\s+")


def save_quiz_to_file(file_path: Path, quiz: Quiz) -> None:
    """Persist the quiz to disk in the import format."""

    file_path = file_path.resolve()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(serialize_quiz(quiz), encoding="utf-8")


def serialize_quiz(quiz: Quiz) -> str:
    document = {
        "id": quiz.id,
        "title": quiz.title,
        "timePerQuiz": quiz.time_per_quiz,
        "passLimit": quiz.pass_limit,
        "groups": [{"name": group.name, "words": list(group.words)} for group in quiz.groups],
    }
    return json.dumps(document, ensure_ascii=False, indent=2) + "\n"


def export_file_name(quiz: Quiz) -> str:
    """Default file name: the title with whitespace runs turned into underscores."""
    stem = _WHITESPACE.sub("_", quiz.title.strip())
    return f"{stem}_export.json"
