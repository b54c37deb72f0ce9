"""Tests for the credential endpoint rate limiter."""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_auth_service


@pytest.fixture
def limited_client(monkeypatch, auth_service) -> TestClient:
    monkeypatch.setenv("RATE_LIMIT_REQUESTS", "3")
    monkeypatch.setenv("RATE_LIMIT_WINDOW", "60")
    from shared.config import get_settings
    get_settings.cache_clear()

    app = create_app()
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    return TestClient(app, headers={"Accept": "application/json"})


class TestRateLimit:
    def test_limits_login(self, limited_client):
        body = {"email": "nobody@x.com", "password": "whatever1A"}
        statuses = [limited_client.post("/login", json=body).status_code for _ in range(4)]

        assert statuses == [401, 401, 401, 429]

    def test_limited_response(self, limited_client):
        for _ in range(3):
            limited_client.post("/login", json={})

        response = limited_client.post("/login", json={})

        assert response.status_code == 429
        assert response.json() == {
            "success": False,
            "message": "Too many requests, please try again later.",
            "error": "Too many requests, please try again later.",
            "code": "RATE_LIMITED",
        }
        assert 1 <= int(response.headers["retry-after"]) <= 60

    def test_register_and_login_share_the_window(self, limited_client):
        for _ in range(3):
            limited_client.post("/register", json={})

        assert limited_client.post("/login", json={}).status_code == 429

    def test_other_routes_not_limited(self, limited_client):
        for _ in range(5):
            assert limited_client.get("/api/health").status_code == 200
