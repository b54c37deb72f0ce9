"""
Exception handlers.

Maps application exceptions to HTTP responses. API callers get the JSON
envelope; browsers get the rendered error page with the same status and
message.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.config import get_settings
from shared.exceptions import ConflictError, QuizAppError
from modules.validation.exceptions import ValidationFailedError

from .models.envelope import error_body

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

INTERNAL_ERROR_MESSAGE = "Internal server error"


def wants_json(request: Request) -> bool:
    """True for API-style callers (JSON or XHR), False for page requests."""
    if request.url.path.startswith("/api"):
        return True
    if request.headers.get("x-requested-with", "").lower() == "xmlhttprequest":
        return True
    return "application/json" in request.headers.get("accept", "")


def render_error(
    request: Request,
    status_code: int,
    message: str,
    error: Optional[str] = None,
    code: Optional[str] = None,
    details: Optional[list[dict[str, Any]]] = None,
    headers: Optional[dict[str, str]] = None,
) -> Response:
    """Answer with the envelope or the error page, depending on the caller."""
    if wants_json(request):
        return JSONResponse(
            status_code=status_code,
            content=error_body(message, error=error, code=code, details=details),
            headers=headers,
        )

    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "title": "Error",
            "status_code": status_code,
            "message": message,
            "details": details or [],
        },
        status_code=status_code,
        headers=headers,
    )


async def app_error_handler(request: Request, exc: QuizAppError) -> Response:
    details = None
    if isinstance(exc, ValidationFailedError):
        details = [v.model_dump() for v in exc.violations]
    elif isinstance(exc, ConflictError) and "field" in exc.details:
        details = [{"field": exc.details["field"], "message": exc.message, "type": "unique"}]

    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
    else:
        logger.debug("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)

    return render_error(
        request,
        exc.status_code,
        exc.message,
        code=exc.code,
        details=details,
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = f"Route {request.url.path} not found"
    else:
        message = str(exc.detail)
    return render_error(
        request,
        exc.status_code,
        message,
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"][1:]) or "body",
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    return render_error(
        request,
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        code="VALIDATION_FAILED",
        details=details,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    error = None if get_settings().is_production() else str(exc)
    return render_error(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        INTERNAL_ERROR_MESSAGE,
        error=error,
        code="INTERNAL_ERROR",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler to the application."""
    app.add_exception_handler(QuizAppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
