"""Tests for error rendering: JSON envelope vs. HTML error page."""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_quiz_service


@pytest.fixture
def page_client(app) -> TestClient:
    """A browser-like client (no JSON Accept header)."""
    return TestClient(app, raise_server_exceptions=False, headers={"Accept": "text/html"})


class TestUnknownRoutes:
    def test_json_404(self, client):
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": "Route /nowhere not found",
            "error": "Route /nowhere not found",
        }

    def test_html_404(self, page_client):
        response = page_client.get("/nowhere")

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/html")
        assert "Route /nowhere not found" in response.text
        assert "404" in response.text

    def test_api_prefix_always_json(self, page_client):
        response = page_client.get("/api/nowhere")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_xhr_is_json(self, page_client):
        response = page_client.get("/nowhere", headers={"X-Requested-With": "XMLHttpRequest"})
        assert response.json()["message"] == "Route /nowhere not found"


class TestApplicationErrors:
    def test_html_validation_page_lists_details(self, page_client, make_user):
        _, headers = make_user("alice123")

        response = page_client.post("/resource", json={"title": "Go"}, headers=headers)

        assert response.status_code == 400
        assert "Validation failed" in response.text
        assert "questions" in response.text

    def test_html_unauthenticated(self, page_client):
        response = page_client.get("/users/profile")

        assert response.status_code == 401
        assert "Access denied. No token provided." in response.text

    def test_malformed_json_body(self, client):
        response = client.post(
            "/login",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["message"] == "Request body must be a JSON object"


class TestUnexpectedErrors:
    def test_internal_error_envelope(self, app, client, make_user):
        _, headers = make_user("alice123")

        class BrokenService:
            async def list_quizzes(self, user):
                raise RuntimeError("store exploded")

        app.dependency_overrides[get_quiz_service] = lambda: BrokenService()

        response = client.get("/resource", headers=headers)

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Internal server error"
        assert body["error"] == "store exploded"

    def test_internal_error_hidden_in_production(self, app, client, make_user, monkeypatch):
        from shared.config import get_settings

        _, headers = make_user("alice123")

        class BrokenService:
            async def list_quizzes(self, user):
                raise RuntimeError("secret details")

        app.dependency_overrides[get_quiz_service] = lambda: BrokenService()
        monkeypatch.setenv("ENVIRONMENT", "production")
        get_settings.cache_clear()

        response = client.get("/resource", headers=headers)

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"
        assert "secret details" not in response.text
