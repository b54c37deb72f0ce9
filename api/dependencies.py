"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Tests swap implementations through ``app.dependency_overrides`` on the
get_* functions below.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.auth.repository import IdentityRepository
    from modules.notifications.interfaces import INotifier
    from modules.quizzes.interfaces import IQuizService
    from modules.quizzes.repository import QuizRepository


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._identity_repository: "IdentityRepository | None" = None
        self._quiz_repository: "QuizRepository | None" = None
        self._auth_service: "IAuthService | None" = None
        self._quiz_service: "IQuizService | None" = None

    @property
    def notifier(self) -> "INotifier":
        """Get the process-wide notifier."""
        from modules.notifications.service import get_notifier
        return get_notifier()

    @property
    def identity_repository(self) -> "IdentityRepository":
        """Get the credential store."""
        if self._identity_repository is None:
            from modules.auth.repository import IdentityRepository
            from shared.database import get_supabase_client
            self._identity_repository = IdentityRepository(get_supabase_client())
        return self._identity_repository

    @property
    def quiz_repository(self) -> "QuizRepository":
        """Get the quiz store."""
        if self._quiz_repository is None:
            from modules.quizzes.repository import QuizRepository
            from shared.database import get_supabase_client
            self._quiz_repository = QuizRepository(get_supabase_client())
        return self._quiz_repository

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                repository=self.identity_repository,
                notifier=self.notifier,
            )
        return self._auth_service

    @property
    def quizzes(self) -> "IQuizService":
        """Get the quiz service instance."""
        if self._quiz_service is None:
            from modules.quizzes.service import QuizService
            self._quiz_service = QuizService(
                repository=self.quiz_repository,
                identities=self.identity_repository,
                notifier=self.notifier,
            )
        return self._quiz_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._identity_repository = None
        self._quiz_repository = None
        self._auth_service = None
        self._quiz_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_quiz_service() -> "IQuizService":
    """FastAPI dependency for quiz service."""
    return get_container().quizzes
