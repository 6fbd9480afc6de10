"""
Catalog API — Password Hashing & Access Tokens
================================================

What:  Thin wrappers around bcrypt (password hashing) and PyJWT (token
       signing/verification).
Who:   UserService (register/login) and the access guard in dependencies.py.

Passwords:
    bcrypt with a per-hash random salt and a configurable cost factor
    (settings.bcrypt_rounds, default 10). bcrypt only reads the first 72
    bytes of its input; longer passwords are truncated explicitly so every
    bcrypt release treats them the same way.

Tokens:
    HS256 JWT signed with settings.secret.
    Claims: sub (user id), iat (issued at), exp (iat + token_ttl_seconds).
    There is no refresh flow: once expired, the client logs in again.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from catalog_api.config import settings

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a plain-text password with a fresh salt.

    CPU-bound (~50-100ms at cost 10); async callers should run it in a
    thread pool.
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison of a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash (e.g. a corrupted row)
        logger.error("Stored password hash has an invalid format")
        return False


def create_access_token(subject: str, now: Optional[datetime] = None) -> str:
    """
    Issue a signed token for `subject` (the user id).

    Args:
        subject: Value of the `sub` claim.
        now: Issue time; defaults to the current UTC time. Tests pass a
             past time to mint already-expired tokens.
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(subject),
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=settings.token_ttl_seconds),
    }
    return jwt.encode(payload, settings.secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str:
    """
    Verify a token's signature and expiry and return its subject.

    Raises:
        jwt.PyJWTError: For any verification failure (expired, bad
            signature, malformed, missing claims). Callers must not
            distinguish between these in client-facing responses.
    """
    claims = jwt.decode(
        token,
        settings.secret,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["exp", "sub"]},
    )
    return claims["sub"]
