"""
Quizzes module.

Handles quiz creation, ownership-scoped CRUD, the public listing and the
play projection.

Public API:
- IQuizService: Interface for quiz operations
- Quiz: Full quiz with embedded questions
- PublicQuizItem / PlayableQuiz: Read projections
"""

from .interfaces import IQuizService
from .models import (
    Question,
    Quiz,
    PublicQuizItem,
    PlayQuestion,
    PlayableQuiz,
)
from .exceptions import (
    QuizNotFoundError,
    QuizAccessDeniedError,
)

__all__ = [
    # Interface
    "IQuizService",
    # Models
    "Question",
    "Quiz",
    "PublicQuizItem",
    "PlayQuestion",
    "PlayableQuiz",
    # Exceptions
    "QuizNotFoundError",
    "QuizAccessDeniedError",
]
