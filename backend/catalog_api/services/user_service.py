"""
Catalog API — User Service
============================

What:  Registration and login against the credential store.
Who:   Called by the /auth route handlers.

Login never reveals whether an account exists: an unknown email and a
wrong password produce the same UnauthorizedError, and an unknown email
still pays for one bcrypt comparison so both paths take similar time.

bcrypt is CPU-bound, so hashing and verification run in Starlette's
thread pool instead of blocking the event loop.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from catalog_api.exceptions import DatabaseError, UnauthorizedError, ValidationError
from catalog_api.models.user import User
from catalog_api.schemas.user import UserCredentials, UserResponse
from catalog_api.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

USER_EXISTS = "User Already Exists"
INVALID_CREDENTIALS = "The email address or password is incorrect."


class UserService:
    """Business logic layer for user accounts and authentication."""

    def __init__(self) -> None:
        self._dummy_hash: Optional[str] = None

    async def register(self, db: AsyncSession, credentials: UserCredentials) -> UserResponse:
        """
        Create a user with a bcrypt-hashed password.

        Raises:
            ValidationError: The email is already registered (→ 400)
            DatabaseError: The store failed (→ 500)
        """
        try:
            if await self._find_by_email(db, credentials.email) is not None:
                logger.warning("Registration rejected: email already registered")
                raise ValidationError(message=USER_EXISTS, field="email")

            password_hash = await run_in_threadpool(hash_password, credentials.password)
            user = User(email=credentials.email, password_hash=password_hash)
            db.add(user)
            await db.flush()
            logger.info("User registered: %s", user.id)
            return UserResponse.model_validate(user)

        except IntegrityError:
            # Unique index on users.email: a concurrent registration won the race
            raise ValidationError(message=USER_EXISTS, field="email")
        except SQLAlchemyError as e:
            logger.error("Database error registering user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not register the user. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def authenticate(self, db: AsyncSession, credentials: UserCredentials) -> str:
        """
        Check credentials and issue a one-hour access token.

        Returns:
            Signed token whose subject is the user's id.

        Raises:
            UnauthorizedError: Unknown email or wrong password (→ 401, same body)
            DatabaseError: The store failed (→ 500)
        """
        try:
            user = await self._find_by_email(db, credentials.email)
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not complete the login. Please try again.",
                context={"error_type": type(e).__name__},
            )

        stored_hash = user.password_hash if user is not None else await self._get_dummy_hash()
        password_ok = await run_in_threadpool(verify_password, credentials.password, stored_hash)

        if user is None or not password_ok:
            logger.info("Login failed")
            raise UnauthorizedError(message=INVALID_CREDENTIALS)

        logger.info("Login succeeded for user %s", user.id)
        return create_access_token(str(user.id))

    async def _find_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = await run_in_threadpool(hash_password, "not-a-real-password")
        return self._dummy_hash


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
