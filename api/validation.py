"""
Request validation dependencies.

Route handlers receive sanitized schema instances from these dependencies.
Declare them after the authentication dependency so an unauthenticated
caller is rejected before the payload is inspected.
"""

import logging
from typing import Any, Callable

from fastapi import Request

from modules.validation import IDENTIFIER, validate_or_raise

logger = logging.getLogger(__name__)


async def read_json(request: Request) -> Any:
    """Decoded JSON body, or None when the body is empty or not JSON."""
    try:
        return await request.json()
    except ValueError:
        logger.debug("Request body for %s is not valid JSON", request.url.path)
        return None


def validated_body(schema_name: str) -> Callable:
    """
    Build a dependency that validates the JSON body against a named schema.

    Raises ValidationFailedError listing every violation.
    """

    async def dependency(request: Request) -> Any:
        return validate_or_raise(schema_name, await read_json(request))

    return dependency


async def validated_quiz_id(quiz_id: str) -> str:
    """Path parameter dependency enforcing the identifier format."""
    return validate_or_raise(IDENTIFIER, {"id": quiz_id}).id
