"""
Catalog API — Route Dependencies (Access Guard)
=================================================

What:  The bearer-token guard placed in front of every protected route.
How:   Two pieces share one check:
       - TokenGuardedRoute: route class for guarded routers. Its handler
         checks the Authorization header before FastAPI reads or parses
         the request body, so an unauthenticated request is rejected with
         401 even when its body is malformed.
       - require_token: FastAPI dependency returning the authenticated
         user id to handlers that need the caller.
       Raising UnauthorizedError stops the request; the global handler
       turns it into a 401.

Guard Decision Table:
    Authorization header           → Outcome
    ─────────────────────────────────────────────────────────────
    absent                         → 401 "Token not informed"
    not "Bearer <token>"           → 401 "Invalid Token"
    bad signature / expired / junk → 401 "Invalid Token"
    valid                          → handler runs; subject (user id) injected
"""

import logging
from typing import Any, Callable, Coroutine, Optional

import jwt
from fastapi import Header, Request, Response
from fastapi.routing import APIRoute

from catalog_api.exceptions import UnauthorizedError
from catalog_api.security import decode_access_token

logger = logging.getLogger(__name__)

TOKEN_NOT_INFORMED = "Token not informed"
INVALID_TOKEN = "Invalid Token"


def authenticate_header(authorization: Optional[str]) -> str:
    """
    Verify an Authorization header value and return the token subject.

    Raises:
        UnauthorizedError: Header missing, wrong scheme, or token rejected.
    """
    if not authorization:
        raise UnauthorizedError(message=TOKEN_NOT_INFORMED)

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise UnauthorizedError(message=INVALID_TOKEN)

    try:
        return decode_access_token(token)
    except jwt.PyJWTError as e:
        # Logged with its type only; the client sees the same message for every cause
        logger.info("Rejected bearer token: %s", type(e).__name__)
        raise UnauthorizedError(message=INVALID_TOKEN)


class TokenGuardedRoute(APIRoute):
    """
    Route class that authenticates before the body is touched.

    Usage:
        router = APIRouter(route_class=TokenGuardedRoute, ...)

    The subject is left on request.state.user_id for require_token.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()

        async def guarded_handler(request: Request) -> Response:
            request.state.user_id = authenticate_header(request.headers.get("authorization"))
            return await handler(request)

        return guarded_handler


async def require_token(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> str:
    """
    Return the authenticated user id.

    On a TokenGuardedRoute the header was already verified; elsewhere the
    check runs here.

    Usage:
        async def handler(user_id: str = Depends(require_token)): ...
    """
    user_id = getattr(request.state, "user_id", None)
    if user_id is not None:
        return user_id
    return authenticate_header(authorization)
