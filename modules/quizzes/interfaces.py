"""
Quizzes module interface.

The API layer depends on IQuizService for every quiz operation.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser
from modules.validation.schemas import QuizCreateRequest, QuizUpdateRequest

from .models import PlayableQuiz, PublicQuizItem, Quiz


@runtime_checkable
class IQuizService(Protocol):
    """
    Interface for quiz operations.

    Every operation that takes a quiz id raises QuizNotFoundError when
    the id matches nothing, before any authorization check.
    """

    async def create_quiz(self, user: AuthenticatedUser, request: QuizCreateRequest) -> Quiz:
        """
        Create a quiz owned by ``user`` and queue the created notification.
        """
        ...

    async def list_quizzes(self, user: AuthenticatedUser) -> list[Quiz]:
        """
        The caller's own quizzes (every quiz for an admin), newest first.
        """
        ...

    async def get_quiz(self, quiz_id: str, user: AuthenticatedUser) -> Quiz:
        """
        Raises:
            QuizNotFoundError: If the quiz doesn't exist
            QuizAccessDeniedError: If private and caller is neither owner nor admin
        """
        ...

    async def update_quiz(
        self,
        quiz_id: str,
        user: AuthenticatedUser,
        request: QuizUpdateRequest,
    ) -> Quiz:
        """
        Merge the supplied fields into the quiz.

        Raises:
            QuizNotFoundError: If the quiz doesn't exist
            QuizAccessDeniedError: If caller is neither owner nor admin
        """
        ...

    async def delete_quiz(self, quiz_id: str, user: AuthenticatedUser) -> Quiz:
        """
        Remove the quiz and return it as it was.

        Raises:
            QuizNotFoundError: If the quiz doesn't exist
            QuizAccessDeniedError: If caller is neither owner nor admin
        """
        ...

    async def list_public(self) -> list[PublicQuizItem]:
        """All public quizzes, newest first, with question counts."""
        ...

    async def get_playable(
        self,
        quiz_id: str,
        user: Optional[AuthenticatedUser],
    ) -> PlayableQuiz:
        """
        The play projection of a quiz. ``user`` is None for anonymous callers.

        Raises:
            QuizNotFoundError: If the quiz doesn't exist
            QuizAccessDeniedError: If private and caller is neither owner nor admin
        """
        ...
