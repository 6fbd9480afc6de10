"""
Catalog API — User Service Unit Tests
=======================================

What:  Tests for UserService registration and login.
How:   Mock DB session; bcrypt runs for real at the low test cost factor.

What we test:
    ✅ Registration stores a hash, never the plain password
    ✅ Registering an existing email fails with "User Already Exists"
    ✅ Unknown email and wrong password raise the same error
    ✅ Successful login returns a token for the user's id
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from catalog_api.exceptions import UnauthorizedError, ValidationError
from catalog_api.models.user import User
from catalog_api.schemas.user import UserCredentials
from catalog_api.security import decode_access_token, hash_password
from catalog_api.services.user_service import (
    INVALID_CREDENTIALS,
    USER_EXISTS,
    UserService,
)


def _result(user=None):
    result = MagicMock()
    result.scalar_one_or_none.return_value = user
    return result


def _stored_user(email: str, password: str) -> User:
    return User(
        id=uuid.uuid4(),
        email=email,
        password_hash=hash_password(password),
        created_at=datetime.now(timezone.utc),
    )


class TestUserServiceRegister:
    """Tests for register."""

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_register_stores_hash(self, mock_db_session):
        mock_db_session.execute.return_value = _result(None)
        credentials = UserCredentials(email="Admin@Mail.com", password="root")

        # Column defaults are applied by the real flush
        def fake_flush():
            added = mock_db_session.add.call_args.args[0]
            added.id = uuid.uuid4()
            added.created_at = datetime.now(timezone.utc)
        mock_db_session.flush.side_effect = fake_flush

        result = await self.service.register(mock_db_session, credentials)

        stored = mock_db_session.add.call_args.args[0]
        assert stored.email == "admin@mail.com"
        assert stored.password_hash != "root"
        assert result.email == "admin@mail.com"
        assert not hasattr(result, "password_hash")

    @pytest.mark.asyncio
    async def test_existing_email_rejected(self, mock_db_session):
        mock_db_session.execute.return_value = _result(_stored_user("admin@mail.com", "root"))

        with pytest.raises(ValidationError) as exc_info:
            await self.service.register(
                mock_db_session, UserCredentials(email="admin@mail.com", password="x")
            )

        assert exc_info.value.message == USER_EXISTS
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrent_registration_rejected(self, mock_db_session):
        """The unique index on users.email catches a race the pre-check missed."""
        mock_db_session.execute.return_value = _result(None)
        mock_db_session.flush.side_effect = IntegrityError(
            "INSERT", {}, Exception("duplicate key value violates unique constraint")
        )

        with pytest.raises(ValidationError) as exc_info:
            await self.service.register(
                mock_db_session, UserCredentials(email="admin@mail.com", password="root")
            )

        assert exc_info.value.message == USER_EXISTS


class TestUserServiceAuthenticate:
    """Tests for authenticate."""

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_valid_credentials_return_token(self, mock_db_session):
        user = _stored_user("admin@mail.com", "root")
        mock_db_session.execute.return_value = _result(user)

        token = await self.service.authenticate(
            mock_db_session, UserCredentials(email="admin@mail.com", password="root")
        )

        assert decode_access_token(token) == str(user.id)

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(self, mock_db_session):
        mock_db_session.execute.return_value = _result(_stored_user("admin@mail.com", "root"))
        with pytest.raises(UnauthorizedError) as wrong_password:
            await self.service.authenticate(
                mock_db_session, UserCredentials(email="admin@mail.com", password="nope")
            )

        mock_db_session.execute.return_value = _result(None)
        with pytest.raises(UnauthorizedError) as unknown_email:
            await self.service.authenticate(
                mock_db_session, UserCredentials(email="ghost@mail.com", password="nope")
            )

        assert wrong_password.value.message == INVALID_CREDENTIALS
        assert unknown_email.value.to_response() == wrong_password.value.to_response()
