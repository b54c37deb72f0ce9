"""
Credential store.

Encapsulates all Supabase queries and data mapping for the ``identities``
table. Username and email carry unique constraints in the database; a
collision is reported as DuplicateIdentityError regardless of any
pre-check the service performed.
"""

import re
from typing import Any, Iterable, Optional

from postgrest.exceptions import APIError

from shared.models import OwnerSummary, Role
from shared.repository import BaseRepository

from .exceptions import DuplicateIdentityError
from .models import IdentityRecord

UNIQUE_KEY_PATTERN = re.compile(r"identities_(username|email)_key|Key \((username|email)\)=")


class IdentityRepository(BaseRepository[IdentityRecord]):
    """
    Repository for identity data access.

    All methods return Pydantic models mapped from database rows.
    """

    table_name = "identities"

    async def create(self, data: dict[str, Any]) -> IdentityRecord:
        """
        Insert a new identity.

        Args:
            data: username, email, password_hash and optionally role.

        Returns:
            The stored identity with generated id and timestamp.

        Raises:
            DuplicateIdentityError: If username or email already exists.
        """
        row = {
            "id": self.new_id(),
            "role": Role.USER.value,
            "created_at": self.now(),
            **data,
        }
        try:
            result = await self._table().insert(row).execute()
        except APIError as e:
            raise self._translate(e) from e
        return self._map_to_identity(result.data[0])

    async def get_by_id(self, user_id: str) -> Optional[IdentityRecord]:
        result = await self._table().select("*").eq("id", user_id).limit(1).execute()
        row = self._first(result.data)
        return self._map_to_identity(row) if row else None

    async def get_by_email(self, email: str) -> Optional[IdentityRecord]:
        result = await self._table().select("*").eq("email", email).limit(1).execute()
        row = self._first(result.data)
        return self._map_to_identity(row) if row else None

    async def get_by_username(self, username: str) -> Optional[IdentityRecord]:
        result = await self._table().select("*").eq("username", username).limit(1).execute()
        row = self._first(result.data)
        return self._map_to_identity(row) if row else None

    async def find_conflict(
        self,
        username: Optional[str] = None,
        email: Optional[str] = None,
        exclude_id: Optional[str] = None,
    ) -> Optional[str]:
        """
        Advisory uniqueness check.

        Returns:
            "email" or "username" for the first field already used by
            another identity, or None.
        """
        if email:
            existing = await self.get_by_email(email)
            if existing and existing.id != exclude_id:
                return "email"
        if username:
            existing = await self.get_by_username(username)
            if existing and existing.id != exclude_id:
                return "username"
        return None

    async def update(self, user_id: str, changes: dict[str, Any]) -> Optional[IdentityRecord]:
        """
        Write only the supplied fields.

        Returns:
            The updated identity, or None if it doesn't exist.

        Raises:
            DuplicateIdentityError: If the new username or email is taken.
        """
        if not changes:
            return await self.get_by_id(user_id)
        try:
            result = await self._table().update(changes).eq("id", user_id).execute()
        except APIError as e:
            raise self._translate(e) from e
        row = self._first(result.data)
        return self._map_to_identity(row) if row else None

    async def get_summaries(self, user_ids: Iterable[str]) -> dict[str, OwnerSummary]:
        """Resolve many identities to owner summaries in one round trip."""
        ids = sorted(set(user_ids))
        if not ids:
            return {}
        result = await self._table().select("id, username, email").in_("id", ids).execute()
        return {
            str(row["id"]): OwnerSummary(
                id=str(row["id"]),
                username=row["username"],
                email=row.get("email"),
            )
            for row in result.data
        }

    def _translate(self, error: APIError) -> Exception:
        if not self.is_unique_violation(error):
            return self._store_error(error)
        text = f"{error.message or ''} {error.details or ''}"
        match = UNIQUE_KEY_PATTERN.search(text)
        field = (match.group(1) or match.group(2)) if match else "username"
        return DuplicateIdentityError(field)

    @staticmethod
    def _map_to_identity(data: dict) -> IdentityRecord:
        """Map database row to IdentityRecord model."""
        return IdentityRecord(
            id=str(data["id"]),
            username=data["username"],
            email=data["email"],
            password_hash=data["password_hash"],
            role=Role(data.get("role") or Role.USER.value),
            created_at=data.get("created_at"),
        )
