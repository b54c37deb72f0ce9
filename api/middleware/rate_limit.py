"""
Rate limiting middleware for the credential endpoints.

Fixed-window counter per client address, held in process memory.
"""

import logging
import math
import time
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from shared.config import get_settings

from ..models.envelope import error_body

logger = logging.getLogger(__name__)

LIMITED_PATHS = frozenset({"/register", "/login"})
RATE_LIMIT_MESSAGE = "Too many requests, please try again later."


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Limit POST /register and POST /login to ``max_requests`` per
    ``window`` seconds for each client address.
    """

    def __init__(
        self,
        app,
        max_requests: Optional[int] = None,
        window: Optional[int] = None,
    ):
        super().__init__(app)
        settings = get_settings()
        self.max_requests = max_requests or settings.rate_limit_requests
        self.window = window or settings.rate_limit_window
        # client -> (window start, request count)
        self._windows: dict[str, tuple[float, int]] = {}

    def _client_key(self, request: Request) -> str:
        return request.client.host if request.client else "unknown"

    def _hit(self, key: str, now: float) -> Optional[int]:
        """
        Count one request. Returns seconds until the window resets when
        the client is over the limit, else None.
        """
        start, count = self._windows.get(key, (now, 0))
        if now - start >= self.window:
            start, count = now, 0

        if count >= self.max_requests:
            self._windows[key] = (start, count)
            return max(1, math.ceil(self.window - (now - start)))

        self._windows[key] = (start, count + 1)
        return None

    def _prune(self, now: float) -> None:
        expired = [k for k, (start, _) in self._windows.items() if now - start >= self.window]
        for key in expired:
            del self._windows[key]

    async def dispatch(self, request: Request, call_next):
        if request.method != "POST" or request.url.path not in LIMITED_PATHS:
            return await call_next(request)

        now = time.monotonic()
        self._prune(now)
        key = self._client_key(request)
        retry_after = self._hit(key, now)
        if retry_after is not None:
            logger.warning("Rate limit exceeded for %s on %s", key, request.url.path)
            return JSONResponse(
                status_code=429,
                content=error_body(RATE_LIMIT_MESSAGE, code="RATE_LIMITED"),
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)
