"""
User-related endpoints.

Provides endpoints for the caller's own profile.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from shared.models import AuthenticatedUser
from modules.auth.interfaces import IAuthService
from modules.validation import IDENTITY_UPDATE
from modules.validation.schemas import ProfileUpdateRequest

from ..dependencies import get_auth_service
from ..middleware.auth import get_current_user
from ..models.envelope import respond
from ..validation import validated_body

router = APIRouter()


@router.get("/profile", response_model=None)
async def get_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
) -> JSONResponse:
    """
    Get the current user's profile.

    Requires authentication.
    """
    profile = await auth.get_profile(user.id)
    return respond({"user": profile})


@router.put("/profile", response_model=None)
async def update_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    request: ProfileUpdateRequest = Depends(validated_body(IDENTITY_UPDATE)),
    auth: IAuthService = Depends(get_auth_service),
) -> JSONResponse:
    """
    Change the current user's username and/or email.

    Requires authentication. At least one field must be supplied.
    """
    profile = await auth.update_profile(user, request)
    return respond({"user": profile}, message="Profile updated successfully")
