"""
Catalog API — Password Hashing & Token Tests
==============================================

What:  Tests for the bcrypt and JWT helpers in catalog_api.security.
How:   Pure function calls; no database, no HTTP.

What we test:
    ✅ Hashes are salted and verify against the right password only
    ✅ A corrupted stored hash fails verification instead of raising
    ✅ Tokens carry the user id and expire after the configured TTL
    ✅ Tampered, foreign-key and garbage tokens are rejected
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from catalog_api.config import settings
from catalog_api.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing:
    """Tests for hash_password / verify_password."""

    def test_hash_is_not_plain_text(self):
        hashed = hash_password("root")
        assert hashed != "root"
        assert hashed.startswith("$2")

    def test_same_password_hashes_differently(self):
        """Each hash gets its own salt."""
        assert hash_password("root") != hash_password("root")

    def test_verify_accepts_correct_password(self):
        hashed = hash_password("s3cret!")
        assert verify_password("s3cret!", hashed) is True

    def test_verify_rejects_wrong_password(self):
        hashed = hash_password("s3cret!")
        assert verify_password("S3cret!", hashed) is False

    def test_verify_with_corrupted_hash_returns_false(self):
        assert verify_password("root", "not-a-bcrypt-hash") is False

    def test_explicit_rounds_are_used(self):
        hashed = hash_password("root", rounds=5)
        assert hashed.split("$")[2] == "05"

    def test_long_passwords_are_accepted(self):
        """Inputs over bcrypt's 72-byte limit hash and verify without error."""
        password = "x" * 100
        hashed = hash_password(password)
        assert verify_password(password, hashed) is True


class TestAccessTokens:
    """Tests for create_access_token / decode_access_token."""

    def test_round_trip_returns_subject(self):
        token = create_access_token("5f1c6a0e-4f7e-4c55-9d1e-0c7f5d3b8a11")
        assert decode_access_token(token) == "5f1c6a0e-4f7e-4c55-9d1e-0c7f5d3b8a11"

    def test_token_expires_after_ttl(self):
        issued = datetime.now(timezone.utc)
        token = create_access_token("user-1", now=issued)
        claims = jwt.decode(token, settings.secret, algorithms=[settings.jwt_algorithm])
        assert claims["exp"] - claims["iat"] == settings.token_ttl_seconds

    def test_expired_token_is_rejected(self):
        issued = datetime.now(timezone.utc) - timedelta(seconds=settings.token_ttl_seconds + 60)
        token = create_access_token("user-1", now=issued)
        with pytest.raises(jwt.ExpiredSignatureError):
            decode_access_token(token)

    def test_token_signed_with_other_secret_is_rejected(self):
        token = jwt.encode(
            {"sub": "user-1", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            "some-other-secret",
            algorithm="HS256",
        )
        with pytest.raises(jwt.InvalidSignatureError):
            decode_access_token(token)

    def test_tampered_token_is_rejected(self):
        token = create_access_token("user-1")
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])
        with pytest.raises(jwt.PyJWTError):
            decode_access_token(tampered)

    def test_token_without_subject_is_rejected(self):
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            settings.secret,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(jwt.MissingRequiredClaimError):
            decode_access_token(token)

    def test_garbage_is_rejected(self):
        with pytest.raises(jwt.PyJWTError):
            decode_access_token("not.a.token")
