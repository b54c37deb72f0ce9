"""Tests for the quiz repository against a mocked Supabase client."""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from postgrest.exceptions import APIError

from shared.exceptions import ExternalServiceError
from modules.quizzes.repository import QuizRepository


def create_mock_quiz_data(
    quiz_id: str = "1" * 32,
    owner: str = "a" * 32,
    title: str = "Geo Quiz",
    is_public: bool = False,
) -> dict:
    """Helper to create a mock quizzes row."""
    now = datetime.now(timezone.utc).isoformat()
    return {
        "id": quiz_id,
        "title": title,
        "description": None,
        "owner": owner,
        "is_public": is_public,
        "questions": [
            {"id": "2" * 32, "text": "Capital of France?", "options": ["Paris", "Lyon"], "correct_index": 0},
        ],
        "created_at": now,
        "updated_at": now,
    }


def result(data: list) -> AsyncMock:
    return AsyncMock(return_value=MagicMock(data=data))


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_assigns_ids_and_timestamps(self):
        mock_db = MagicMock()
        repo = QuizRepository(mock_db)
        insert = mock_db.table.return_value.insert
        insert.return_value.execute = result([create_mock_quiz_data()])

        quiz = await repo.create({
            "title": "Geo Quiz",
            "description": "",
            "is_public": False,
            "owner": "a" * 32,
            "questions": [{"text": "Capital of France?", "options": ["Paris", "Lyon"], "correct_index": 0}],
        })

        mock_db.table.assert_called_with("quizzes")
        row = insert.call_args[0][0]
        assert len(row["id"]) == 32
        assert row["created_at"] == row["updated_at"]
        assert len(row["questions"][0]["id"]) == 32
        assert row["questions"][0]["options"] == ["Paris", "Lyon"]
        assert quiz.description == ""
        assert quiz.question_count == 1

    @pytest.mark.asyncio
    async def test_store_error(self):
        mock_db = MagicMock()
        repo = QuizRepository(mock_db)
        mock_db.table.return_value.insert.return_value.execute = AsyncMock(
            side_effect=APIError({"code": "23503", "message": "foreign key violation"})
        )

        with pytest.raises(ExternalServiceError):
            await repo.create({"title": "Geo Quiz", "owner": "a" * 32, "questions": []})


class TestReads:
    @pytest.mark.asyncio
    async def test_get_by_id(self):
        mock_db = MagicMock()
        repo = QuizRepository(mock_db)
        chain = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        chain.execute = result([create_mock_quiz_data()])

        quiz = await repo.get_by_id("1" * 32)

        assert quiz.id == "1" * 32
        assert quiz.questions[0].correct_index == 0

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self):
        mock_db = MagicMock()
        repo = QuizRepository(mock_db)
        chain = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        chain.execute = result([])

        assert await repo.get_by_id("f" * 32) is None

    @pytest.mark.asyncio
    async def test_list_by_owner(self):
        mock_db = MagicMock()
        repo = QuizRepository(mock_db)
        select = mock_db.table.return_value.select
        select.return_value.eq.return_value.order.return_value.execute = result([create_mock_quiz_data()])

        quizzes = await repo.list_quizzes(owner="a" * 32)

        assert len(quizzes) == 1
        select.return_value.eq.assert_called_once_with("owner", "a" * 32)
        select.return_value.eq.return_value.order.assert_called_once_with("created_at", desc=True)

    @pytest.mark.asyncio
    async def test_list_all(self):
        mock_db = MagicMock()
        repo = QuizRepository(mock_db)
        select = mock_db.table.return_value.select
        select.return_value.order.return_value.execute = result([])

        assert await repo.list_quizzes() == []
        select.return_value.eq.assert_not_called()

    @pytest.mark.asyncio
    async def test_list_public(self):
        mock_db = MagicMock()
        repo = QuizRepository(mock_db)
        select = mock_db.table.return_value.select
        select.return_value.eq.return_value.order.return_value.execute = result([
            create_mock_quiz_data(is_public=True)
        ])

        quizzes = await repo.list_public()

        assert quizzes[0].is_public is True
        select.return_value.eq.assert_called_once_with("is_public", True)


class TestWrites:
    @pytest.mark.asyncio
    async def test_update_refreshes_timestamp(self):
        mock_db = MagicMock()
        repo = QuizRepository(mock_db)
        update = mock_db.table.return_value.update
        update.return_value.eq.return_value.execute = result([create_mock_quiz_data(title="New")])

        quiz = await repo.update("1" * 32, {"title": "New"})

        assert quiz.title == "New"
        written = update.call_args[0][0]
        assert set(written) == {"title", "updated_at"}

    @pytest.mark.asyncio
    async def test_update_missing(self):
        mock_db = MagicMock()
        repo = QuizRepository(mock_db)
        mock_db.table.return_value.update.return_value.eq.return_value.execute = result([])

        assert await repo.update("f" * 32, {"title": "New"}) is None

    @pytest.mark.asyncio
    async def test_delete(self):
        mock_db = MagicMock()
        repo = QuizRepository(mock_db)
        mock_db.table.return_value.delete.return_value.eq.return_value.execute = result([
            create_mock_quiz_data()
        ])

        removed = await repo.delete("1" * 32)

        assert removed.id == "1" * 32
        mock_db.table.return_value.delete.return_value.eq.assert_called_once_with("id", "1" * 32)

    def test_with_question_ids_keeps_order(self):
        repo = QuizRepository(MagicMock())
        questions = [
            {"text": f"Q{i}", "options": ["A", "B"], "correct_index": i % 2}
            for i in range(5)
        ]

        stored = repo.with_question_ids(questions)

        assert [q["text"] for q in stored] == [f"Q{i}" for i in range(5)]
        assert len({q["id"] for q in stored}) == 5
