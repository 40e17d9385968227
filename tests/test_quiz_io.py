"""
Tests for speed_quiz/core/quiz_importer.py and speed_quiz/core/quiz_exporter.py
"""

import json

import pytest

from conftest import build_quiz
from speed_quiz.core.exceptions import InvalidQuizError
from speed_quiz.core.quiz_exporter import export_file_name, save_quiz_to_file, serialize_quiz
from speed_quiz.core.quiz_importer import QuizImportError, load_quiz_from_file, parse_quiz_document
from speed_quiz.core.quiz_manager import QuizManager

DOCUMENT = {
    "id": 99,
    "title": "Friday Night",
    "timePerQuiz": 45,
    "passLimit": 2,
    "groups": [
        {"name": "Group A", "words": ["apple", "banana", "cherry"]},
        {"name": "Group B", "words": ["dog", "cat", "elephant"]},
    ],
}


class TestParseQuizDocument:
    """Tests for parsing quiz JSON."""

    def test_parses_camel_case_document(self):
        quiz = parse_quiz_document(json.dumps(DOCUMENT))

        assert quiz.title == "Friday Night"
        assert quiz.time_per_quiz == 45
        assert quiz.pass_limit == 2
        assert [group.name for group in quiz.groups] == ["Group A", "Group B"]
        assert quiz.groups[1].words == ["dog", "cat", "elephant"]
        assert all(group.id is None for group in quiz.groups)

    def test_accepts_snake_case_and_defaults(self):
        quiz = parse_quiz_document(json.dumps({
            "title": "T",
            "time_per_quiz": 20,
            "groups": [{"name": "G", "words": ["w"]}],
        }))
        assert quiz.time_per_quiz == 20
        assert quiz.pass_limit == 3

    def test_ignores_group_ids_from_the_file(self):
        quiz = parse_quiz_document(json.dumps({
            "title": "T",
            "groups": [{"id": "kept-elsewhere", "name": "G", "words": ["w"]}],
        }))
        assert quiz.groups[0].id is None

    def test_blank_words_reach_repository_validation(self, tmp_path):
        path = tmp_path / "blank.json"
        path.write_text(json.dumps({"title": "T", "groups": [{"name": "G", "words": ["w", "   "]}]}), encoding="utf-8")

        assert parse_quiz_document(path.read_text(encoding="utf-8")).groups[0].words == ["w", "   "]
        with pytest.raises(InvalidQuizError):
            QuizManager().import_quiz_file(path)

    @pytest.mark.parametrize("text", [
        "not json",
        "[]",
        json.dumps({"groups": [{"name": "G", "words": ["w"]}]}),
        json.dumps({"title": "T", "groups": []}),
        json.dumps({"title": "T", "groups": ["G"]}),
        json.dumps({"title": "T", "groups": [{"words": ["w"]}]}),
        json.dumps({"title": "T", "groups": [{"name": "G", "words": [1, 2]}]}),
        json.dumps({"title": "T", "timePerQuiz": "60", "groups": [{"name": "G", "words": ["w"]}]}),
        json.dumps({"title": "T", "passLimit": True, "groups": [{"name": "G", "words": ["w"]}]}),
        json.dumps({"title": "T", "timePerQuiz": 0, "groups": [{"name": "G", "words": ["w"]}]}),
        json.dumps({"title": "T", "groups": [{"name": "G", "words": [f"w{i}" for i in range(41)]}]}),
    ])
    def test_rejects_malformed_documents(self, text):
        with pytest.raises(QuizImportError):
            parse_quiz_document(text)


class TestFiles:
    """Tests for reading and writing quiz files."""

    def test_export_then_import(self, tmp_path):
        quiz = build_quiz({"Group A": ["äpple", "banana"], "Group B": ["dog"]}, time_per_quiz=45, pass_limit=2)
        path = tmp_path / "nested" / export_file_name(quiz)

        save_quiz_to_file(path, quiz)
        imported = load_quiz_from_file(path)

        assert imported.source_path == path
        assert imported.quiz.title == quiz.title
        assert imported.quiz.time_per_quiz == 45
        assert imported.quiz.groups[0].words == ["äpple", "banana"]

    def test_serialized_document_uses_wire_names(self):
        quiz = build_quiz({"A": ["x"], "B": ["y"]}, time_per_quiz=30, pass_limit=1, quiz_id=5)

        document = json.loads(serialize_quiz(quiz))

        assert document == {
            "id": 5,
            "title": "Friday Night",
            "timePerQuiz": 30,
            "passLimit": 1,
            "groups": [{"name": "A", "words": ["x"]}, {"name": "B", "words": ["y"]}],
        }

    def test_missing_file_raises_os_error(self, tmp_path):
        with pytest.raises(OSError):
            load_quiz_from_file(tmp_path / "absent.json")


class TestExportFileName:
    """Tests for the default export file name."""

    @pytest.mark.parametrize("title,expected", [
        ("Friday Night", "Friday_Night_export.json"),
        ("  Animals   and\tPlants ", "Animals_and_Plants_export.json"),
        ("Solo", "Solo_export.json"),
    ])
    def test_whitespace_becomes_underscores(self, title, expected):
        quiz = build_quiz({"A": ["x"]}, title=title)
        assert export_file_name(quiz) == expected
