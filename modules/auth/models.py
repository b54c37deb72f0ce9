"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import ApiModel, AuthenticatedUser, Role


class TokenPayload(BaseModel):
    """Decoded session token claims."""

    sub: str = Field(..., description="Subject (identity ID)")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")


class IdentityRecord(BaseModel):
    """
    An identity as stored in the credential store.

    This is the only model carrying the password hash; it never leaves
    the auth module. Use to_public() for anything returned to a caller.
    """

    id: str
    username: str
    email: str
    password_hash: str
    role: Role = Role.USER
    created_at: Optional[datetime] = None

    def to_public(self) -> AuthenticatedUser:
        return AuthenticatedUser(
            id=self.id,
            username=self.username,
            email=self.email,
            role=self.role,
            created_at=self.created_at,
        )


class AuthResult(ApiModel):
    """Identity plus a freshly issued session token."""

    user: AuthenticatedUser
    token: str
