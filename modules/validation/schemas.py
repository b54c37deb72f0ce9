"""
Request schemas.

Every payload that reaches business logic is first parsed by one of these
models. Strings are trimmed (except passwords), emails are case-folded,
defaults are applied and unknown fields are dropped.
"""

import re
from typing import Annotated, Optional

from pydantic import (
    AfterValidator,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from shared.models import ApiModel

USERNAME_PATTERN = r"^[A-Za-z0-9_]+$"
IDENTIFIER_PATTERN = r"^[0-9a-fA-F]{32}$"

MAX_QUESTIONS = 100
MIN_OPTIONS = 2
MAX_OPTIONS = 6


def _strip(value):
    if isinstance(value, str):
        return value.strip()
    return value


Username = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=3, max_length=30, pattern=USERNAME_PATTERN),
]
Email = Annotated[EmailStr, BeforeValidator(_strip), AfterValidator(str.lower)]
Password = Annotated[str, Field(min_length=8, max_length=128)]

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=100)]
Description = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]
QuestionText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)]
OptionText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]


class RequestSchema(ApiModel):
    """Base for request payloads: unknown fields are stripped."""

    model_config = ConfigDict(extra="ignore")


class PartialRequestSchema(RequestSchema):
    """
    Base for partial updates.

    Every field is optional, but a supplied field may not be null and at
    least one field must be supplied.
    """

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value, info: ValidationInfo):
        if value is None:
            raise ValueError(f"{to_camel(info.field_name)} cannot be null")
        return value

    @model_validator(mode="after")
    def _require_one_field(self):
        if not self.model_fields_set:
            raise ValueError(self._empty_message())
        return self

    @classmethod
    def _empty_message(cls) -> str:
        return "At least one field must be provided for update"

    def changes(self) -> dict:
        """Only the fields the caller supplied."""
        return self.model_dump(exclude_unset=True)


# -----------------------------------------------------------------------------
# Identity
# -----------------------------------------------------------------------------

def _check_password_strength(value: str) -> str:
    if not (
        re.search(r"[a-z]", value)
        and re.search(r"[A-Z]", value)
        and re.search(r"\d", value)
    ):
        raise ValueError(
            "Password must contain at least one uppercase letter, "
            "one lowercase letter, and one number"
        )
    return value


class RegisterRequest(RequestSchema):
    """Identity-create payload."""

    username: Username
    email: Email
    password: Password

    @field_validator("password")
    @classmethod
    def _password_strength(cls, value: str) -> str:
        return _check_password_strength(value)


class LoginRequest(RequestSchema):
    """Login payload. The password is checked, never normalised."""

    email: Email
    password: Annotated[str, Field(min_length=1, max_length=128)]

    @field_validator("password")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Password is required")
        return value


class ProfileUpdateRequest(PartialRequestSchema):
    """Identity-update payload."""

    username: Optional[Username] = None
    email: Optional[Email] = None

    @classmethod
    def _empty_message(cls) -> str:
        return "At least one field (username or email) must be provided"


# -----------------------------------------------------------------------------
# Quiz
# -----------------------------------------------------------------------------

class QuestionInput(RequestSchema):
    """A single question as supplied by the client."""

    text: QuestionText
    options: Annotated[list[OptionText], Field(min_length=MIN_OPTIONS, max_length=MAX_OPTIONS)]
    correct_index: Annotated[int, Field(ge=0)]

    @model_validator(mode="after")
    def _index_within_options(self):
        if self.correct_index >= len(self.options):
            raise ValueError("Correct index must be less than the number of options")
        return self


Questions = Annotated[list[QuestionInput], Field(min_length=1, max_length=MAX_QUESTIONS)]


class QuizCreateRequest(RequestSchema):
    """Quiz-create payload."""

    title: Title
    description: Description = ""
    is_public: bool = False
    questions: Questions


class QuizUpdateRequest(PartialRequestSchema):
    """Quiz-update payload; same per-field rules as create."""

    title: Optional[Title] = None
    description: Optional[Description] = None
    is_public: Optional[bool] = None
    questions: Optional[Questions] = None


class IdentifierParam(RequestSchema):
    """Path identifier."""

    id: Annotated[str, StringConstraints(strip_whitespace=True, pattern=IDENTIFIER_PATTERN)]
