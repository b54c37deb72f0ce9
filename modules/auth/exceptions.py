"""
Authentication module exceptions.

These exceptions are raised by the auth module and mapped to HTTP
responses by the API error handlers.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a token is invalid or malformed."""

    def __init__(self, message: str = "Invalid token."):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a token has expired."""

    def __init__(self, message: str = "Token expired."):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no bearer token is provided."""

    def __init__(self, message: str = "Access denied. No token provided."):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidCredentialsError(AuthenticationError):
    """Raised when login email/password do not match."""

    def __init__(self):
        super().__init__("Invalid email or password", code="INVALID_CREDENTIALS")


class IdentityNotFoundError(NotFoundError):
    """Raised when an identity doesn't exist in the credential store."""

    def __init__(self, user_id: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class DuplicateIdentityError(ConflictError):
    """Raised when a username or email is already taken."""

    MESSAGES = {
        "username": "Username already taken",
        "email": "Email already registered",
    }

    def __init__(self, field: str, message: str | None = None):
        super().__init__(
            message or self.MESSAGES.get(field, f"{field.capitalize()} already exists."),
            code="DUPLICATE_KEY",
            details={"field": field},
        )
        self.field = field


class InsufficientPermissionsError(AuthorizationError):
    """Raised when an identity lacks a required role."""

    def __init__(self, required_roles: list[str], user_role: str):
        super().__init__(
            "Access denied. Insufficient permissions.",
            code="INSUFFICIENT_PERMISSIONS",
            details={"required_roles": required_roles, "user_role": user_role},
        )
