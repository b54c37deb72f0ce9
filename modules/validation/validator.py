"""
Named-schema validator.

validate() never raises for malformed input: it returns either the
sanitized payload or every violation found, so callers can show a complete
error list in one round trip. Only an unknown schema name raises.
"""

from typing import Any

from pydantic import BaseModel, ValidationError as PydanticValidationError

from .exceptions import UnknownSchemaError, ValidationFailedError
from .models import FieldViolation, ValidationResult
from .schemas import (
    IdentifierParam,
    LoginRequest,
    ProfileUpdateRequest,
    QuizCreateRequest,
    QuizUpdateRequest,
    RegisterRequest,
)

IDENTITY_CREATE = "identity_create"
IDENTITY_UPDATE = "identity_update"
LOGIN = "login"
QUIZ_CREATE = "quiz_create"
QUIZ_UPDATE = "quiz_update"
IDENTIFIER = "identifier"

SCHEMAS: dict[str, type[BaseModel]] = {
    IDENTITY_CREATE: RegisterRequest,
    IDENTITY_UPDATE: ProfileUpdateRequest,
    LOGIN: LoginRequest,
    QUIZ_CREATE: QuizCreateRequest,
    QUIZ_UPDATE: QuizUpdateRequest,
    IDENTIFIER: IdentifierParam,
}

# (last field name, pydantic error type) -> message
MESSAGES: dict[tuple[str, str], str] = {
    ("username", "string_too_short"): "Username must be at least 3 characters",
    ("username", "string_too_long"): "Username cannot exceed 30 characters",
    ("username", "string_pattern_mismatch"): "Username can only contain letters, numbers, and underscores",
    ("email", "value_error"): "Please enter a valid email address",
    ("password", "string_too_short"): "Password must be at least 8 characters",
    ("password", "string_too_long"): "Password cannot exceed 128 characters",
    ("title", "string_too_short"): "Title must be at least 3 characters",
    ("title", "string_too_long"): "Title cannot exceed 100 characters",
    ("description", "string_too_long"): "Description cannot exceed 500 characters",
    ("isPublic", "bool_parsing"): "isPublic must be a boolean",
    ("questions", "too_short"): "Quiz must have at least 1 question",
    ("questions", "too_long"): "Quiz cannot have more than 100 questions",
    ("text", "string_too_short"): "Question text is required",
    ("text", "string_too_long"): "Question text cannot exceed 500 characters",
    ("options", "too_short"): "Each question must have at least 2 options",
    ("options", "too_long"): "Each question can have at most 6 options",
    ("options", "string_too_short"): "Option text cannot be empty",
    ("options", "string_too_long"): "Option text cannot exceed 200 characters",
    ("correctIndex", "greater_than_equal"): "Correct index must be at least 0",
    ("id", "string_pattern_mismatch"): "Invalid ID format",
}

_VALUE_ERROR_PREFIX = "Value error, "


def _field_path(loc: tuple) -> str:
    if not loc:
        return "body"
    return ".".join(str(part) for part in loc)


def _message(loc: tuple, error_type: str, default: str) -> str:
    names = [part for part in loc if isinstance(part, str)]
    if names:
        name = names[-1]
        if error_type == "missing":
            return f"{name} is required"
        if (name, error_type) in MESSAGES:
            return MESSAGES[(name, error_type)]
    if default.startswith(_VALUE_ERROR_PREFIX):
        return default[len(_VALUE_ERROR_PREFIX):]
    return default


def format_errors(exc: PydanticValidationError) -> list[FieldViolation]:
    """Convert a pydantic error into field violations, preserving order."""
    return [
        FieldViolation(
            field=_field_path(err["loc"]),
            message=_message(err["loc"], err["type"], err["msg"]),
            type=err["type"],
        )
        for err in exc.errors()
    ]


def validate(schema_name: str, payload: Any) -> ValidationResult:
    """
    Validate a payload against a named schema.

    Args:
        schema_name: One of the names registered in SCHEMAS.
        payload: Arbitrary decoded JSON.

    Returns:
        ValidationResult with the sanitized model in ``value`` or the
        violations in ``violations``.

    Raises:
        UnknownSchemaError: If schema_name is not registered.
    """
    schema = SCHEMAS.get(schema_name)
    if schema is None:
        raise UnknownSchemaError(schema_name)

    if not isinstance(payload, dict):
        return ValidationResult(violations=[
            FieldViolation(
                field="body",
                message="Request body must be a JSON object",
                type="object.base",
            )
        ])

    try:
        value = schema.model_validate(payload)
    except PydanticValidationError as exc:
        return ValidationResult(violations=format_errors(exc))

    return ValidationResult(value=value)


def validate_or_raise(schema_name: str, payload: Any) -> Any:
    """Like validate(), but raise ValidationFailedError on violations."""
    result = validate(schema_name, payload)
    if not result.ok:
        message = "Invalid parameters" if schema_name == IDENTIFIER else "Validation failed"
        raise ValidationFailedError(result.violations, message=message)
    return result.value
