"""
Base exception classes for the Quiz backend.

Each module defines its own exceptions that inherit from these bases.
The API layer maps each base to one HTTP status, so a module only has to
pick the right parent.
"""

from typing import Optional, Any


class QuizAppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(QuizAppError):
    """Input validation failed."""

    status_code = 400


class ConflictError(QuizAppError):
    """A unique field collides with an existing record."""

    status_code = 400


class AuthenticationError(QuizAppError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class AuthorizationError(QuizAppError):
    """Authorization failed (insufficient permissions)."""

    status_code = 403


class NotFoundError(QuizAppError):
    """Resource not found."""

    status_code = 404


class ExternalServiceError(QuizAppError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
