"""
Authentication module.

Handles registration, login, session tokens, the credential store and
the authorization predicates used by other modules.

Public API:
- IAuthService: Interface for auth operations
- Permission predicates: has_role, is_owner_or_admin, can_view, require_role
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService
from .models import AuthResult, IdentityRecord, TokenPayload
from .permissions import has_role, is_owner_or_admin, can_view, require_role
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    IdentityNotFoundError,
    DuplicateIdentityError,
    InsufficientPermissionsError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "AuthResult",
    "IdentityRecord",
    "TokenPayload",
    # Permissions
    "has_role",
    "is_owner_or_admin",
    "can_view",
    "require_role",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "IdentityNotFoundError",
    "DuplicateIdentityError",
    "InsufficientPermissionsError",
]
