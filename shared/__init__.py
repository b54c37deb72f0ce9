"""
Shared infrastructure for the Quiz backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client lifecycle
- exceptions: Base exception classes
- repository: Base repository with store error translation

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import (
    init_supabase_client,
    get_supabase_client,
    is_connected,
    reset_client_cache,
)
from .exceptions import (
    QuizAppError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ExternalServiceError,
)
from .models import ApiModel, AuthenticatedUser, OwnerSummary, Role

__all__ = [
    "Settings",
    "get_settings",
    "init_supabase_client",
    "get_supabase_client",
    "is_connected",
    "reset_client_cache",
    "QuizAppError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ExternalServiceError",
    "ApiModel",
    "AuthenticatedUser",
    "OwnerSummary",
    "Role",
]
