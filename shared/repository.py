"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and the translation of raw PostgREST errors into
the application's exception taxonomy.
"""

import uuid
from datetime import datetime, timezone
from typing import TypeVar, Generic, Optional

from postgrest.exceptions import APIError
from supabase import AsyncClient

from .exceptions import ExternalServiceError


T = TypeVar("T")

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Id and timestamp generation
    - Store error translation

    Subclasses implement domain-specific data access methods and handle
    dict-to-Pydantic model mapping internally. Repositories never perform
    authorization checks; that is the service layer's job.
    """

    table_name: str = ""

    def __init__(self, db: AsyncClient) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase async client instance for database operations.
        """
        self._db = db

    def _table(self):
        return self._db.table(self.table_name)

    @staticmethod
    def new_id() -> str:
        """Generate a 32-character hexadecimal record id."""
        return uuid.uuid4().hex

    @staticmethod
    def now() -> str:
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def is_unique_violation(error: APIError) -> bool:
        return error.code == UNIQUE_VIOLATION

    def _store_error(self, error: APIError) -> ExternalServiceError:
        return ExternalServiceError(
            f"Store request on '{self.table_name}' failed",
            service="supabase",
            code="STORE_ERROR",
            details={"store_code": error.code, "store_message": error.message},
        )

    @staticmethod
    def _first(data: Optional[list]) -> Optional[dict]:
        if not data:
            return None
        return data[0]
