"""
Quiz store.

Encapsulates all Supabase queries and data mapping for the ``quizzes``
table. Questions are embedded as a jsonb array on the quiz row.
"""

from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.repository import BaseRepository
from .models import Question, Quiz


class QuizRepository(BaseRepository[Quiz]):
    """
    Repository for quiz data access.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for ownership and visibility.
    """

    table_name = "quizzes"

    async def create(self, data: dict[str, Any]) -> Quiz:
        """
        Insert a new quiz.

        Args:
            data: title, description, is_public, owner and questions
                (list of dicts with text, options, correct_index).

        Returns:
            The stored quiz with generated ids and timestamps.
        """
        now = self.now()
        row = {
            **data,
            "id": self.new_id(),
            "questions": self.with_question_ids(data.get("questions", [])),
            "created_at": now,
            "updated_at": now,
        }
        try:
            result = await self._table().insert(row).execute()
        except APIError as e:
            raise self._store_error(e) from e
        return self._map_to_quiz(result.data[0])

    async def get_by_id(self, quiz_id: str) -> Optional[Quiz]:
        result = await self._table().select("*").eq("id", quiz_id).limit(1).execute()
        row = self._first(result.data)
        return self._map_to_quiz(row) if row else None

    async def list_quizzes(self, owner: Optional[str] = None) -> list[Quiz]:
        """
        List quizzes, newest first.

        Args:
            owner: Restrict to one owner's quizzes; None lists all.
        """
        query = self._table().select("*")
        if owner is not None:
            query = query.eq("owner", owner)
        result = await query.order("created_at", desc=True).execute()
        return [self._map_to_quiz(row) for row in result.data]

    async def list_public(self) -> list[Quiz]:
        """List public quizzes, newest first."""
        result = await (
            self._table()
            .select("*")
            .eq("is_public", True)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_quiz(row) for row in result.data]

    async def update(self, quiz_id: str, changes: dict[str, Any]) -> Optional[Quiz]:
        """
        Write only the supplied fields and refresh updated_at.

        Returns:
            The updated quiz, or None if it doesn't exist.
        """
        data = dict(changes)
        if "questions" in data:
            data["questions"] = self.with_question_ids(data["questions"])
        data["updated_at"] = self.now()
        try:
            result = await self._table().update(data).eq("id", quiz_id).execute()
        except APIError as e:
            raise self._store_error(e) from e
        row = self._first(result.data)
        return self._map_to_quiz(row) if row else None

    async def delete(self, quiz_id: str) -> Optional[Quiz]:
        """
        Remove a quiz.

        Returns:
            The removed quiz, or None if nothing matched.
        """
        result = await self._table().delete().eq("id", quiz_id).execute()
        row = self._first(result.data)
        return self._map_to_quiz(row) if row else None

    def with_question_ids(self, questions: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Give each embedded question its own id, keeping order."""
        return [
            {
                "id": self.new_id(),
                "text": q["text"],
                "options": list(q["options"]),
                "correct_index": q["correct_index"],
            }
            for q in questions
        ]

    @staticmethod
    def _map_to_quiz(data: dict) -> Quiz:
        """Map database row to Quiz model."""
        return Quiz(
            id=str(data["id"]),
            title=data["title"],
            description=data.get("description") or "",
            owner=str(data["owner"]),
            is_public=bool(data.get("is_public", False)),
            questions=[
                Question(
                    id=str(q["id"]),
                    text=q["text"],
                    options=q["options"],
                    correct_index=q["correct_index"],
                )
                for q in data.get("questions") or []
            ],
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )
