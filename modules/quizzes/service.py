"""
Quiz service: the resource pipeline.

Payloads arrive already validated. Each operation loads the target
first (so a missing quiz is reported as not found before anything else),
applies its authorization predicate, then touches the store.
"""

import logging
from typing import Optional

from shared.models import AuthenticatedUser, OwnerSummary
from modules.auth.permissions import can_view, is_owner_or_admin
from modules.auth.repository import IdentityRepository
from modules.notifications.interfaces import INotifier
from modules.validation.schemas import QuizCreateRequest, QuizUpdateRequest

from .exceptions import QuizAccessDeniedError, QuizNotFoundError
from .interfaces import IQuizService
from .models import PlayableQuiz, PlayQuestion, PublicQuizItem, Quiz
from .repository import QuizRepository

logger = logging.getLogger(__name__)


class QuizService(IQuizService):
    """
    Quiz service over the quiz store.

    Owner summaries are resolved through the credential store with one
    batched lookup per call.
    """

    def __init__(
        self,
        repository: QuizRepository,
        identities: IdentityRepository,
        notifier: Optional[INotifier] = None,
    ):
        self._repository = repository
        self._identities = identities
        self._notifier = notifier

    async def create_quiz(self, user: AuthenticatedUser, request: QuizCreateRequest) -> Quiz:
        data = request.model_dump()
        data["owner"] = user.id
        quiz = await self._repository.create(data)
        logger.debug("Quiz %s created by %s", quiz.id, user.id)

        if self._notifier is not None:
            self._notifier.send_quiz_created(
                user,
                quiz.title,
                quiz.description,
                quiz.question_count,
                quiz.is_public,
            )
        return quiz

    async def list_quizzes(self, user: AuthenticatedUser) -> list[Quiz]:
        owner = None if user.is_admin else user.id
        quizzes = await self._repository.list_quizzes(owner=owner)
        profiles = await self._identities.get_summaries(q.owner for q in quizzes)
        return [
            q.model_copy(update={"owner_profile": profiles.get(q.owner)})
            for q in quizzes
        ]

    async def get_quiz(self, quiz_id: str, user: AuthenticatedUser) -> Quiz:
        quiz = await self._load(quiz_id)
        if not can_view(user, quiz.owner, quiz.is_public):
            raise QuizAccessDeniedError(quiz_id, user.id)
        profiles = await self._identities.get_summaries([quiz.owner])
        return quiz.model_copy(update={"owner_profile": profiles.get(quiz.owner)})

    async def update_quiz(
        self,
        quiz_id: str,
        user: AuthenticatedUser,
        request: QuizUpdateRequest,
    ) -> Quiz:
        quiz = await self._load(quiz_id)
        if not is_owner_or_admin(user, quiz.owner):
            raise QuizAccessDeniedError(quiz_id, user.id)

        updated = await self._repository.update(quiz_id, request.changes())
        if updated is None:
            # Deleted between the read and the write
            raise QuizNotFoundError(quiz_id)
        profiles = await self._identities.get_summaries([updated.owner])
        return updated.model_copy(update={"owner_profile": profiles.get(updated.owner)})

    async def delete_quiz(self, quiz_id: str, user: AuthenticatedUser) -> Quiz:
        quiz = await self._load(quiz_id)
        if not is_owner_or_admin(user, quiz.owner):
            raise QuizAccessDeniedError(quiz_id, user.id)

        removed = await self._repository.delete(quiz_id)
        if removed is None:
            raise QuizNotFoundError(quiz_id)
        return removed

    async def list_public(self) -> list[PublicQuizItem]:
        quizzes = await self._repository.list_public()
        profiles = await self._identities.get_summaries(q.owner for q in quizzes)
        return [
            PublicQuizItem(
                id=q.id,
                title=q.title,
                description=q.description,
                owner=q.owner,
                owner_profile=self._public_profile(profiles.get(q.owner)),
                created_at=q.created_at,
                question_count=q.question_count,
            )
            for q in quizzes
        ]

    async def get_playable(
        self,
        quiz_id: str,
        user: Optional[AuthenticatedUser],
    ) -> PlayableQuiz:
        quiz = await self._load(quiz_id)
        if not can_view(user, quiz.owner, quiz.is_public):
            raise QuizAccessDeniedError(
                quiz_id,
                user.id if user else None,
                message="This quiz is not available for playing",
            )

        profiles = await self._identities.get_summaries([quiz.owner])
        # Correct indices are included: scoring happens on the client.
        return PlayableQuiz(
            id=quiz.id,
            title=quiz.title,
            description=quiz.description,
            owner_profile=self._public_profile(profiles.get(quiz.owner)),
            questions=[
                PlayQuestion(
                    id=q.id,
                    text=q.text,
                    options=q.options,
                    correct_index=q.correct_index,
                )
                for q in quiz.questions
            ],
            question_count=quiz.question_count,
        )

    async def _load(self, quiz_id: str) -> Quiz:
        quiz = await self._repository.get_by_id(quiz_id)
        if quiz is None:
            raise QuizNotFoundError(quiz_id)
        return quiz

    @staticmethod
    def _public_profile(profile: Optional[OwnerSummary]) -> Optional[OwnerSummary]:
        if profile is None:
            return None
        return OwnerSummary(id=profile.id, username=profile.username)
