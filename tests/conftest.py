"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
token helpers, in-memory stores that honor the unique constraints, and an
application wired to them through dependency overrides.
"""

import copy
import pytest
from datetime import datetime, timezone, timedelta
from typing import Any, Iterable, Optional
from unittest.mock import MagicMock

import jwt  # PyJWT
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_auth_service, get_quiz_service, reset_container
from shared.config import get_settings
from shared.database import reset_client_cache
from shared.models import AuthenticatedUser, OwnerSummary, Role
from modules.auth.exceptions import DuplicateIdentityError
from modules.auth.models import IdentityRecord
from modules.auth.repository import IdentityRepository
from modules.auth.security import create_access_token, get_password_hash
from modules.auth.service import AuthService
from modules.notifications import reset_notifier
from modules.quizzes.models import Quiz
from modules.quizzes.repository import QuizRepository
from modules.quizzes.service import QuizService


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_PASSWORD = "Passw0rd"


def create_test_token(
    user_id: str = "a" * 32,
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a test session token.

    Args:
        user_id: Identity ID to put in ``sub``
        expired: If True, creates an expired token
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)
    payload = {
        "sub": user_id,
        "iat": int((now - timedelta(hours=2)).timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def quiz_payload(**overrides: Any) -> dict[str, Any]:
    """A valid quiz-create body (camelCase, as sent by clients)."""
    payload = {
        "title": "Geo Quiz",
        "questions": [
            {"text": "Capital of France?", "options": ["Paris", "Lyon"], "correctIndex": 0},
        ],
    }
    payload.update(overrides)
    return payload


# -----------------------------------------------------------------------------
# In-memory stores
# -----------------------------------------------------------------------------


class InMemoryIdentityRepository(IdentityRepository):
    """Credential store backed by a dict; username and email stay unique."""

    def __init__(self) -> None:
        super().__init__(db=None)
        self.rows: dict[str, dict[str, Any]] = {}

    def _check_unique(self, row: dict[str, Any], exclude_id: Optional[str] = None) -> None:
        for other in self.rows.values():
            if other["id"] == exclude_id:
                continue
            if other["email"] == row.get("email"):
                raise DuplicateIdentityError("email")
            if other["username"] == row.get("username"):
                raise DuplicateIdentityError("username")

    async def create(self, data: dict[str, Any]) -> IdentityRecord:
        row = {"id": self.new_id(), "role": Role.USER.value, "created_at": self.now(), **data}
        self._check_unique(row)
        self.rows[row["id"]] = row
        return self._map_to_identity(dict(row))

    def add(
        self,
        username: str,
        email: str,
        password_hash: str = "not-a-real-hash",
        role: Role = Role.USER,
    ) -> IdentityRecord:
        """Seed an identity synchronously."""
        row = {
            "id": self.new_id(),
            "username": username,
            "email": email,
            "password_hash": password_hash,
            "role": role.value,
            "created_at": self.now(),
        }
        self._check_unique(row)
        self.rows[row["id"]] = row
        return self._map_to_identity(dict(row))

    async def get_by_id(self, user_id: str) -> Optional[IdentityRecord]:
        row = self.rows.get(user_id)
        return self._map_to_identity(dict(row)) if row else None

    async def get_by_email(self, email: str) -> Optional[IdentityRecord]:
        return self._find("email", email)

    async def get_by_username(self, username: str) -> Optional[IdentityRecord]:
        return self._find("username", username)

    async def update(self, user_id: str, changes: dict[str, Any]) -> Optional[IdentityRecord]:
        row = self.rows.get(user_id)
        if row is None:
            return None
        merged = {**row, **changes}
        self._check_unique(merged, exclude_id=user_id)
        self.rows[user_id] = merged
        return self._map_to_identity(dict(merged))

    async def get_summaries(self, user_ids: Iterable[str]) -> dict[str, OwnerSummary]:
        return {
            uid: OwnerSummary(id=uid, username=self.rows[uid]["username"], email=self.rows[uid]["email"])
            for uid in set(user_ids)
            if uid in self.rows
        }

    def _find(self, field: str, value: str) -> Optional[IdentityRecord]:
        for row in self.rows.values():
            if row[field] == value:
                return self._map_to_identity(dict(row))
        return None


class InMemoryQuizRepository(QuizRepository):
    """Quiz store backed by a dict. Timestamps strictly increase per write."""

    def __init__(self) -> None:
        super().__init__(db=None)
        self.rows: dict[str, dict[str, Any]] = {}
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def now(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    async def create(self, data: dict[str, Any]) -> Quiz:
        now = self.now()
        row = {
            **copy.deepcopy(data),
            "id": self.new_id(),
            "questions": self.with_question_ids(data.get("questions", [])),
            "created_at": now,
            "updated_at": now,
        }
        self.rows[row["id"]] = row
        return self._map_to_quiz(copy.deepcopy(row))

    async def get_by_id(self, quiz_id: str) -> Optional[Quiz]:
        row = self.rows.get(quiz_id)
        return self._map_to_quiz(copy.deepcopy(row)) if row else None

    async def list_quizzes(self, owner: Optional[str] = None) -> list[Quiz]:
        rows = [r for r in self.rows.values() if owner is None or r["owner"] == owner]
        return self._newest_first(rows)

    async def list_public(self) -> list[Quiz]:
        return self._newest_first([r for r in self.rows.values() if r.get("is_public")])

    async def update(self, quiz_id: str, changes: dict[str, Any]) -> Optional[Quiz]:
        row = self.rows.get(quiz_id)
        if row is None:
            return None
        data = copy.deepcopy(changes)
        if "questions" in data:
            data["questions"] = self.with_question_ids(data["questions"])
        row.update(data, updated_at=self.now())
        return self._map_to_quiz(copy.deepcopy(row))

    async def delete(self, quiz_id: str) -> Optional[Quiz]:
        row = self.rows.pop(quiz_id, None)
        return self._map_to_quiz(row) if row else None

    def _newest_first(self, rows: list[dict[str, Any]]) -> list[Quiz]:
        ordered = sorted(rows, key=lambda r: r["created_at"], reverse=True)
        return [self._map_to_quiz(copy.deepcopy(r)) for r in ordered]


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Deterministic settings and clean process-wide state for every test."""
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("RATE_LIMIT_REQUESTS", "1000")
    monkeypatch.setenv("SUPABASE_URL", "")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "")
    monkeypatch.setenv("MAIL_FROM", "")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "")
    get_settings.cache_clear()
    reset_container()
    reset_notifier()
    reset_client_cache()
    yield
    get_settings.cache_clear()
    reset_container()
    reset_notifier()
    reset_client_cache()


@pytest.fixture(scope="session")
def password_hash() -> str:
    """bcrypt hash of TEST_PASSWORD, computed once."""
    return get_password_hash(TEST_PASSWORD)


@pytest.fixture
def identity_repo() -> InMemoryIdentityRepository:
    return InMemoryIdentityRepository()


@pytest.fixture
def quiz_repo() -> InMemoryQuizRepository:
    return InMemoryQuizRepository()


@pytest.fixture
def notifier() -> MagicMock:
    """Stand-in notifier recording sends."""
    mock = MagicMock()
    mock.configured = False
    return mock


@pytest.fixture
def auth_service(identity_repo, notifier) -> AuthService:
    return AuthService(repository=identity_repo, notifier=notifier, settings=get_settings())


@pytest.fixture
def quiz_service(quiz_repo, identity_repo, notifier) -> QuizService:
    return QuizService(repository=quiz_repo, identities=identity_repo, notifier=notifier)


@pytest.fixture
def make_user(identity_repo, password_hash):
    """
    Factory seeding an identity and returning (user, auth headers).

    Usage:
        alice, alice_headers = make_user("alice123")
    """

    def _make(username: str, role: Role = Role.USER) -> tuple[AuthenticatedUser, dict[str, str]]:
        record = identity_repo.add(username, f"{username}@x.com", password_hash, role=role)
        token = create_access_token(record.id, get_settings())
        return record.to_public(), {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def app(auth_service, quiz_service):
    """Application wired to the in-memory stores."""
    application = create_app()
    application.dependency_overrides[get_auth_service] = lambda: auth_service
    application.dependency_overrides[get_quiz_service] = lambda: quiz_service
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    """JSON client; unhandled errors come back as 500 responses."""
    return TestClient(app, raise_server_exceptions=False, headers={"Accept": "application/json"})
