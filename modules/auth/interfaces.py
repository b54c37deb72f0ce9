"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser
from modules.validation.schemas import LoginRequest, ProfileUpdateRequest, RegisterRequest

from .models import AuthResult


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def register(self, request: RegisterRequest) -> AuthResult:
        """
        Create an identity and issue its first token.

        Raises:
            DuplicateIdentityError: If the username or email is taken
        """
        ...

    async def login(self, request: LoginRequest) -> AuthResult:
        """
        Exchange email and password for a token.

        Raises:
            InvalidCredentialsError: If either value is wrong
        """
        ...

    async def authenticate(self, token: str) -> AuthenticatedUser:
        """
        Resolve a bearer token to the identity it encodes.

        Performs exactly one credential store lookup.

        Raises:
            MissingTokenError: If the token is empty
            InvalidTokenError: If the signature/format is bad or the identity is gone
            ExpiredTokenError: If the token's expiry has passed
        """
        ...

    async def get_profile(self, user_id: str) -> AuthenticatedUser:
        """
        Raises:
            IdentityNotFoundError: If the identity doesn't exist
        """
        ...

    async def update_profile(
        self,
        user: AuthenticatedUser,
        request: ProfileUpdateRequest,
    ) -> AuthenticatedUser:
        """
        Change the caller's own username and/or email.

        Raises:
            DuplicateIdentityError: If the new value is taken
            IdentityNotFoundError: If the identity disappeared
        """
        ...
