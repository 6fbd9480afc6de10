"""
Catalog API — Login Throttling Middleware
===========================================

What:  Caps how often one client may POST to credential endpoints.
Why:   Every login attempt costs a bcrypt comparison; unthrottled, a single
       client can keep CPU busy and guess passwords at full speed.
Scope: Only POST requests to settings.rate_limited_paths (default
       "/auth/login"). Catalog routes are never throttled.

Each (client, path) pair keeps a deque of attempt times. Attempts older
than the window fall off the left end; once the deque holds
rate_limit_requests entries, further attempts get 429 with Retry-After
until the oldest one expires.

Counts live in process memory, so each worker throttles independently.
"""

import logging
import time
from collections import deque
from typing import Deque, Dict, Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from catalog_api.config import settings

logger = logging.getLogger(__name__)

TOO_MANY_ATTEMPTS = "Too many attempts. Try again later."


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding-window throttle for the credential endpoints."""

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self._attempts: Dict[Tuple[str, str], Deque[float]] = {}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if request.method != "POST" or path not in settings.rate_limited_paths_list:
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        key = (client, path)
        now = time.monotonic()
        window = settings.rate_limit_window

        attempts = self._attempts.setdefault(key, deque())
        while attempts and attempts[0] <= now - window:
            attempts.popleft()

        if len(attempts) >= settings.rate_limit_requests:
            retry_after = max(1, int(attempts[0] + window - now) + 1)
            logger.warning("Throttled %s on %s; retry in %ds", client, path, retry_after)
            return JSONResponse(
                status_code=429,
                content={"status": "error", "message": TOO_MANY_ATTEMPTS},
                headers={"Retry-After": str(retry_after)},
            )

        attempts.append(now)
        self._forget_idle(now - window)
        return await call_next(request)

    def _forget_idle(self, cutoff: float) -> None:
        # Drop clients whose newest attempt is already outside the window
        idle = [key for key, times in self._attempts.items() if not times or times[-1] <= cutoff]
        for key in idle:
            del self._attempts[key]
