"""
Tests for speed_quiz/server/api_server.py
"""

import pytest
from fastapi.testclient import TestClient

from speed_quiz.core.quiz_manager import QuizManager
from speed_quiz.server.api_server import create_api_app

PAYLOAD = {
    "title": "Friday Night",
    "timePerQuiz": 45,
    "passLimit": 2,
    "groups": [
        {"name": "Group A", "words": ["apple", "banana"]},
        {"name": "Group B", "words": ["dog", "cat"]},
    ],
}


@pytest.fixture
def api_manager():
    return QuizManager()


@pytest.fixture
def client(api_manager):
    return TestClient(create_api_app(api_manager))


@pytest.fixture
def created(client):
    response = client.post("/api/quizzes", json=PAYLOAD)
    assert response.status_code == 201
    return response.json()


class TestCreateQuiz:
    """Tests for POST /api/quizzes."""

    def test_returns_camel_case_quiz(self, created, api_manager):
        assert created["title"] == "Friday Night"
        assert created["timePerQuiz"] == 45
        assert created["passLimit"] == 2
        assert [group["name"] for group in created["groups"]] == ["Group A", "Group B"]
        assert all(group["id"] for group in created["groups"])
        assert api_manager.get_quiz(created["id"]) is not None

    def test_defaults_for_optional_settings(self, client):
        response = client.post("/api/quizzes", json={"title": "T", "groups": [{"name": "G", "words": ["w"]}]})
        assert response.status_code == 201
        assert response.json()["timePerQuiz"] == 60
        assert response.json()["passLimit"] == 3

    @pytest.mark.parametrize("changes", [
        {"title": ""},
        {"groups": []},
        {"timePerQuiz": 0},
        {"passLimit": -1},
        {"groups": [{"name": "G", "words": []}]},
        {"groups": [{"name": "G", "words": [f"w{i}" for i in range(41)]}]},
    ])
    def test_schema_violations_are_400(self, client, changes):
        response = client.post("/api/quizzes", json={**PAYLOAD, **changes})

        assert response.status_code == 400
        assert "message" in response.json()

    def test_domain_violations_are_400(self, client):
        payload = {**PAYLOAD, "groups": [{"name": "G", "words": ["ok", "   "]}]}
        response = client.post("/api/quizzes", json=payload)
        assert response.status_code == 400


class TestReadQuizzes:
    """Tests for GET endpoints."""

    def test_list(self, client, created):
        response = client.get("/api/quizzes")
        assert response.status_code == 200
        assert response.json() == [created]

    def test_get_one(self, client, created):
        response = client.get(f"/api/quizzes/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

    def test_get_missing(self, client):
        assert client.get("/api/quizzes/999").status_code == 404


class TestUpdateQuiz:
    """Tests for PUT /api/quizzes/{id}."""

    def test_partial_update(self, client, created):
        response = client.put(f"/api/quizzes/{created['id']}", json={"passLimit": 0})

        assert response.status_code == 200
        body = response.json()
        assert body["passLimit"] == 0
        assert body["title"] == created["title"]
        assert body["groups"] == created["groups"]

    def test_group_ids_round_trip(self, client, created):
        groups = [{**created["groups"][0], "words": ["pear"]}]
        response = client.put(f"/api/quizzes/{created['id']}", json={"groups": groups})

        assert response.status_code == 200
        assert response.json()["groups"] == [{"id": created["groups"][0]["id"], "name": "Group A", "words": ["pear"]}]

    def test_update_missing(self, client):
        assert client.put("/api/quizzes/999", json={"title": "x"}).status_code == 404

    def test_invalid_update(self, client, created):
        response = client.put(f"/api/quizzes/{created['id']}", json={"timePerQuiz": -5})
        assert response.status_code == 400


class TestDeleteQuiz:
    """Tests for DELETE /api/quizzes/{id}."""

    def test_delete(self, client, created):
        response = client.delete(f"/api/quizzes/{created['id']}")
        assert response.status_code == 204
        assert client.get(f"/api/quizzes/{created['id']}").status_code == 404

    def test_delete_missing(self, client):
        assert client.delete("/api/quizzes/999").status_code == 404
