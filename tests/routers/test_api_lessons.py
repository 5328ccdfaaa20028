"""Tests for GET /api/lessons."""

import pytest

from showcase.repositories.base import StoreError
from showcase.repositories.memory_store import InMemoryLessonStore


class BrokenStore:
    def fetch(self, query):
        raise StoreError("Hosted store unreachable: connection refused")


def lesson_ids(data):
    return [lesson["_id"] for lesson in data["lessons"]]


class TestListLessons:
    """Paging through five lessons A..E with the default page size of 3."""

    def test_first_page(self, client):
        response = client.get("/api/lessons")
        assert response.status_code == 200

        data = response.json()
        assert lesson_ids(data) == ["A", "B", "C"]
        assert data["perPage"] == 3
        assert data["hasPrev"] is False
        assert data["prevCursor"] is None
        assert data["hasNext"] is True
        assert data["nextCursor"]["lastId"] == "C"
        assert data["nextCursor"]["lastPublishedAt"].endswith("Z")
        assert data["lessons"][0]["title"] == "Lesson A"

    def test_next_then_prev(self, client):
        first = client.get("/api/lessons").json()

        second = client.get("/api/lessons", params=first["nextCursor"]).json()
        assert lesson_ids(second) == ["D", "E"]
        assert second["hasPrev"] is True
        assert second["hasNext"] is False
        assert second["nextCursor"] is None
        assert second["prevCursor"]["firstId"] == "D"

        back = client.get("/api/lessons", params=second["prevCursor"]).json()
        assert lesson_ids(back) == ["A", "B", "C"]
        assert back["hasPrev"] is False
        assert back["hasNext"] is True

    def test_per_page(self, client):
        data = client.get("/api/lessons", params={"perPage": 2}).json()

        assert lesson_ids(data) == ["A", "B"]
        assert data["perPage"] == 2

    @pytest.mark.parametrize("per_page", ["0", "-2", "51"])
    def test_out_of_range_per_page_is_400(self, client, per_page):
        response = client.get("/api/lessons", params={"perPage": per_page})

        assert response.status_code == 400

    def test_non_integer_per_page_is_422(self, client):
        response = client.get("/api/lessons", params={"perPage": "lots"})

        assert response.status_code == 422
        assert response.json()["detail"][0]["loc"] == ["query", "perPage"]

    def test_incomplete_cursor_is_400(self, client):
        response = client.get("/api/lessons", params={"lastId": "B"})

        assert response.status_code == 400
        assert "lastPublishedAt" in response.json()["detail"]

    @pytest.mark.parametrize("published_at", ["12", "May"])
    def test_non_iso_cursor_timestamp_is_400(self, client, published_at):
        response = client.get(
            "/api/lessons", params={"lastId": "x", "lastPublishedAt": published_at}
        )

        assert response.status_code == 400
        assert "Invalid lastPublishedAt" in response.json()["detail"]


class TestStoreStates:
    """An empty store."""

    @pytest.fixture
    def client_store(self):
        return InMemoryLessonStore()

    def test_empty_store(self, client):
        data = client.get("/api/lessons").json()

        assert data["lessons"] == []
        assert data["hasPrev"] is False
        assert data["hasNext"] is False
        assert data["prevCursor"] is None
        assert data["nextCursor"] is None


class TestStoreFailure:
    @pytest.fixture
    def client_store(self):
        return BrokenStore()

    def test_store_error_is_502(self, client):
        response = client.get("/api/lessons")

        assert response.status_code == 502
        assert response.json()["detail"] == "Lesson store unavailable"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
