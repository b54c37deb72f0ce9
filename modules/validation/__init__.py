"""
Validation module.

Checks request payloads against fixed schemas before they reach business
logic.

Public API:
- validate / validate_or_raise: named-schema validation
- Request schemas: RegisterRequest, LoginRequest, ProfileUpdateRequest,
  QuizCreateRequest, QuizUpdateRequest, QuestionInput, IdentifierParam
- ValidationFailedError
"""

from .exceptions import ValidationFailedError, UnknownSchemaError
from .models import FieldViolation, ValidationResult
from .schemas import (
    RegisterRequest,
    LoginRequest,
    ProfileUpdateRequest,
    QuestionInput,
    QuizCreateRequest,
    QuizUpdateRequest,
    IdentifierParam,
)
from .validator import (
    IDENTITY_CREATE,
    IDENTITY_UPDATE,
    LOGIN,
    QUIZ_CREATE,
    QUIZ_UPDATE,
    IDENTIFIER,
    validate,
    validate_or_raise,
)

__all__ = [
    "ValidationFailedError",
    "UnknownSchemaError",
    "FieldViolation",
    "ValidationResult",
    "RegisterRequest",
    "LoginRequest",
    "ProfileUpdateRequest",
    "QuestionInput",
    "QuizCreateRequest",
    "QuizUpdateRequest",
    "IdentifierParam",
    "IDENTITY_CREATE",
    "IDENTITY_UPDATE",
    "LOGIN",
    "QUIZ_CREATE",
    "QUIZ_UPDATE",
    "IDENTIFIER",
    "validate",
    "validate_or_raise",
]
