"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models stay in their respective module directories.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """
    Base for every model that crosses the HTTP boundary.

    Fields are snake_case in Python and camelCase on the wire
    (``is_public`` <-> ``isPublic``). Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Role(str, Enum):
    """Identity roles."""
    USER = "user"
    ADMIN = "admin"


class AuthenticatedUser(ApiModel):
    """
    Represents the identity attached to a request.

    Populated by the authenticator from the credential store and made
    available to route handlers via dependency injection. It never
    carries the password hash.
    """

    id: str = Field(..., description="Identity ID")
    username: str = Field(..., description="Unique username")
    email: str = Field(..., description="Case-folded email address")
    role: Role = Field(default=Role.USER, description="Identity role")
    created_at: Optional[datetime] = Field(None, description="Account creation time")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class OwnerSummary(ApiModel):
    """Public-facing summary of a quiz owner."""

    id: str
    username: str
    email: Optional[str] = None
