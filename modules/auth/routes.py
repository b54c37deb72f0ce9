"""
Registration and login endpoints.

Mounted at the application root (``/register``, ``/login``).
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_auth_service
from api.models.envelope import respond
from api.validation import validated_body
from modules.validation import IDENTITY_CREATE, LOGIN
from modules.validation.schemas import LoginRequest, RegisterRequest

from .interfaces import IAuthService

router = APIRouter()


@router.post("/register", status_code=201, response_model=None)
async def register(
    request: RegisterRequest = Depends(validated_body(IDENTITY_CREATE)),
    auth: IAuthService = Depends(get_auth_service),
) -> JSONResponse:
    """
    Create an account and return it with a session token.

    A welcome mail is queued; delivery never affects this response.
    """
    result = await auth.register(request)
    return respond(result, message="Registration successful", status_code=201)


@router.post("/login", response_model=None)
async def login(
    request: LoginRequest = Depends(validated_body(LOGIN)),
    auth: IAuthService = Depends(get_auth_service),
) -> JSONResponse:
    """Exchange email and password for a session token."""
    result = await auth.login(request)
    return respond(result, message="Login successful")
