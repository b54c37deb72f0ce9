"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings
from shared.database import is_connected
from modules.notifications import get_notifier

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    mail: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    The service is ready once the store client exists. Mail is optional
    and only reported.
    """
    database = "connected" if is_connected() else "disconnected"
    mail = "configured" if get_notifier().configured else "disabled"
    return ReadinessResponse(
        status="ready" if database == "connected" else "not_ready",
        database=database,
        mail=mail,
    )
