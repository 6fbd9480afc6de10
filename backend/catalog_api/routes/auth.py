"""
Catalog API — Authentication Routes
=====================================

What:  POST /auth/register and POST /auth/login.

Access:
    Registration is itself a protected route: only an authenticated user
    can create another account (the first account comes from the seed
    command). Login is public.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.database import get_db_session
from catalog_api.dependencies import TokenGuardedRoute, require_token
from catalog_api.schemas.common import ErrorResponse
from catalog_api.schemas.user import (
    TokenResponse,
    UserCreatedResponse,
    UserCredentials,
)
from catalog_api.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

# Register is guarded, login is not; include_router keeps each route's class
_guarded = APIRouter(route_class=TokenGuardedRoute)


@_guarded.post(
    "/register",
    status_code=201,
    response_model=UserCreatedResponse,
    responses={
        400: {"description": "Invalid payload or email already registered", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def register(
    credentials: UserCredentials,
    user_id: str = Depends(require_token),
    db: AsyncSession = Depends(get_db_session),
) -> UserCreatedResponse:
    """Create an account; the response never contains the password hash."""
    logger.info("User registration requested by %s", user_id)
    user = await user_service.register(db, credentials)
    return UserCreatedResponse(data=user)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        400: {"description": "Invalid payload", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="Exchange credentials for an access token",
)
async def login(
    credentials: UserCredentials,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    """
    Returns a bearer token valid for one hour.

    Unknown email and wrong password both yield the same 401 body.
    """
    token = await user_service.authenticate(db, credentials)
    return TokenResponse(token=token)


router.include_router(_guarded)
