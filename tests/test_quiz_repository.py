"""
Tests for speed_quiz/core/services/quiz_repository.py
"""

import pytest

from conftest import build_quiz_input
from speed_quiz.core.exceptions import InvalidQuizError, QuizNotFoundError
from speed_quiz.core.models import GroupInput
from speed_quiz.core.services.quiz_repository import QuizRepository


@pytest.fixture
def repository():
    return QuizRepository()


class TestCreate:
    """Tests for creating quizzes."""

    def test_assigns_ids_and_normalizes(self, repository):
        payload = build_quiz_input(title="  Friday Night  ")
        payload.groups[0].words = ["  apple ", "banana"]

        quiz = repository.create(payload)

        assert quiz.id == 1
        assert quiz.title == "Friday Night"
        assert quiz.groups[0].words == ("apple", "banana")
        assert all(group.id for group in quiz.groups)
        assert len({group.id for group in quiz.groups}) == 2
        assert repository.create(build_quiz_input()).id == 2

    def test_list_keeps_creation_order(self, repository):
        first = repository.create(build_quiz_input(title="First"))
        second = repository.create(build_quiz_input(title="Second"))

        assert [quiz.id for quiz in repository.list()] == [first.id, second.id]
        assert repository.has_quizzes()

    def test_get_missing_returns_none(self, repository):
        assert repository.get(42) is None

    @pytest.mark.parametrize("changes", [
        {"title": "   "},
        {"time_per_quiz": 0},
        {"time_per_quiz": True},
        {"pass_limit": -1},
        {"groups": {}},
        {"groups": {f"G{i}": ["w"] for i in range(11)}},
        {"groups": {"A": []}},
        {"groups": {"A": [f"w{i}" for i in range(41)]}},
        {"groups": {"A": ["ok", "  "]}},
        {"groups": {"   ": ["w"]}},
    ])
    def test_rejects_invalid_input(self, repository, changes):
        changes = dict(changes)
        payload = build_quiz_input()
        if "groups" in changes:
            payload.groups = [GroupInput(name=name, words=words) for name, words in changes.pop("groups").items()]
        for field, value in changes.items():
            setattr(payload, field, value)

        with pytest.raises(InvalidQuizError):
            repository.create(payload)
        assert repository.list() == []

    def test_accepts_limits(self, repository):
        groups = {f"G{i}": [f"w{j}" for j in range(40)] for i in range(10)}
        quiz = repository.create(build_quiz_input(groups=groups, pass_limit=0))
        assert len(quiz.groups) == 10
        assert quiz.total_word_count() == 400

    def test_rejects_duplicate_group_ids(self, repository):
        payload = build_quiz_input()
        payload.groups[0].id = "same"
        payload.groups[1].id = "same"
        with pytest.raises(InvalidQuizError):
            repository.create(payload)


class TestUpdate:
    """Tests for partial updates."""

    def test_partial_update_keeps_other_fields(self, repository):
        quiz = repository.create(build_quiz_input(time_per_quiz=45))

        updated = repository.update(quiz.id, title="Renamed")

        assert updated.id == quiz.id
        assert updated.title == "Renamed"
        assert updated.time_per_quiz == 45
        assert updated.groups == quiz.groups
        assert repository.get(quiz.id) == updated

    def test_group_ids_survive_edits(self, repository):
        quiz = repository.create(build_quiz_input())
        kept = quiz.groups[0]

        updated = repository.update(
            quiz.id,
            groups=[GroupInput(name="Renamed", words=["new"], id=kept.id), GroupInput(name="Fresh", words=["w"])],
        )

        assert updated.groups[0].id == kept.id
        assert updated.groups[0].name == "Renamed"
        assert updated.groups[1].id not in (kept.id, "")

    def test_invalid_update_leaves_quiz_untouched(self, repository):
        quiz = repository.create(build_quiz_input())
        with pytest.raises(InvalidQuizError):
            repository.update(quiz.id, pass_limit=-3)
        assert repository.get(quiz.id) == quiz

    def test_update_missing(self, repository):
        with pytest.raises(QuizNotFoundError) as excinfo:
            repository.update(7, title="x")
        assert excinfo.value.quiz_id == 7


class TestDelete:
    """Tests for deletion."""

    def test_delete_removes_quiz(self, repository):
        quiz = repository.create(build_quiz_input())
        repository.delete(quiz.id)
        assert repository.get(quiz.id) is None
        assert not repository.has_quizzes()

    def test_delete_missing(self, repository):
        with pytest.raises(QuizNotFoundError):
            repository.delete(1)
