"""
Response envelope.

Every JSON answer has the same outer shape:
``{success, message?, data?, error?, code?, details?}``.

On failure ``error`` repeats the human readable message and ``code``
carries the machine readable error code.
"""

from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class Envelope(BaseModel):
    """Uniform response wrapper."""

    success: bool
    message: Optional[str] = None
    data: Optional[Any] = None
    error: Optional[str] = None
    code: Optional[str] = None
    details: Optional[list[dict[str, Any]]] = None


def respond(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = 200,
) -> JSONResponse:
    """
    Build a success response.

    ``data`` may hold pydantic models; they are serialized with their
    camelCase aliases and unset optional fields dropped.
    """
    envelope = Envelope(
        success=True,
        message=message,
        data=jsonable_encoder(data, by_alias=True, exclude_none=True),
    )
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(exclude_none=True),
    )


def error_body(
    message: str,
    error: Optional[str] = None,
    code: Optional[str] = None,
    details: Optional[list[dict[str, Any]]] = None,
) -> dict[str, Any]:
    """
    Build the failure envelope as a plain dict.

    ``error`` defaults to ``message``.
    """
    envelope = Envelope(
        success=False,
        message=message,
        error=error or message,
        code=code,
        details=details,
    )
    return envelope.model_dump(exclude_none=True)
