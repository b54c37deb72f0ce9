"""
Quizzes module exceptions.
"""

from shared.exceptions import AuthorizationError, NotFoundError


class QuizNotFoundError(NotFoundError):
    """Raised when a quiz is not found."""

    def __init__(self, quiz_id: str):
        super().__init__(
            "Quiz not found",
            code="QUIZ_NOT_FOUND",
            details={"quiz_id": quiz_id},
        )


class QuizAccessDeniedError(AuthorizationError):
    """Raised when an identity may not read or change a quiz."""

    def __init__(
        self,
        quiz_id: str,
        user_id: str | None,
        message: str = "Access denied. You do not own this resource.",
    ):
        super().__init__(
            message,
            code="QUIZ_ACCESS_DENIED",
            details={"quiz_id": quiz_id, "user_id": user_id},
        )
