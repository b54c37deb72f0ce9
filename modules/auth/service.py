"""
Authentication service implementation.

Registers identities, verifies passwords, issues and validates session
tokens, and manages the caller's own profile.
"""

import asyncio
from typing import Optional

from shared.config import Settings, get_settings
from shared.models import AuthenticatedUser
from modules.notifications.interfaces import INotifier
from modules.validation.schemas import LoginRequest, ProfileUpdateRequest, RegisterRequest

from .exceptions import (
    DuplicateIdentityError,
    IdentityNotFoundError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
)
from .interfaces import IAuthService
from .models import AuthResult
from .repository import IdentityRepository
from .security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Identities live in the credential store; tokens are stateless HS256
    JWTs whose only lifecycle bound is their expiry.
    """

    def __init__(
        self,
        repository: IdentityRepository,
        notifier: Optional[INotifier] = None,
        settings: Optional[Settings] = None,
    ):
        self._repository = repository
        self._notifier = notifier
        self._settings = settings or get_settings()

    async def register(self, request: RegisterRequest) -> AuthResult:
        """Create an identity, queue the welcome mail and issue a token."""
        # Friendlier message up front; the store's unique constraint still decides.
        conflict = await self._repository.find_conflict(
            username=request.username,
            email=request.email,
        )
        if conflict:
            raise DuplicateIdentityError(conflict)

        password_hash = await asyncio.to_thread(get_password_hash, request.password)
        record = await self._repository.create({
            "username": request.username,
            "email": request.email,
            "password_hash": password_hash,
        })
        user = record.to_public()

        if self._notifier is not None:
            self._notifier.send_welcome(user)

        return AuthResult(user=user, token=self.issue_token(user.id))

    async def login(self, request: LoginRequest) -> AuthResult:
        record = await self._repository.get_by_email(request.email)
        if record is None:
            raise InvalidCredentialsError()

        matches = await asyncio.to_thread(verify_password, request.password, record.password_hash)
        if not matches:
            raise InvalidCredentialsError()

        return AuthResult(user=record.to_public(), token=self.issue_token(record.id))

    async def authenticate(self, token: str) -> AuthenticatedUser:
        if not token:
            raise MissingTokenError()

        payload = decode_access_token(token, self._settings)
        record = await self._repository.get_by_id(payload.sub)
        if record is None:
            raise InvalidTokenError("Invalid token. User not found.")
        return record.to_public()

    async def get_profile(self, user_id: str) -> AuthenticatedUser:
        record = await self._repository.get_by_id(user_id)
        if record is None:
            raise IdentityNotFoundError(user_id)
        return record.to_public()

    async def update_profile(
        self,
        user: AuthenticatedUser,
        request: ProfileUpdateRequest,
    ) -> AuthenticatedUser:
        changes = {
            field: value
            for field, value in request.changes().items()
            if value != getattr(user, field)
        }

        conflict = await self._repository.find_conflict(
            username=changes.get("username"),
            email=changes.get("email"),
            exclude_id=user.id,
        )
        if conflict == "email":
            raise DuplicateIdentityError("email", "Email already in use")
        if conflict:
            raise DuplicateIdentityError(conflict)

        record = await self._repository.update(user.id, changes)
        if record is None:
            raise IdentityNotFoundError(user.id)
        return record.to_public()

    def issue_token(self, user_id: str) -> str:
        return create_access_token(user_id, self._settings)
