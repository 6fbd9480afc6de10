"""
Catalog API — Auth Endpoint Tests
===================================

What:  POST /auth/register and POST /auth/login end to end.

What we test:
    ✅ Register needs a token and never returns the password hash
    ✅ Registering the same email twice → 400 "User Already Exists"
    ✅ Login returns a token that opens protected routes
    ✅ Unknown email and wrong password produce identical 401 bodies
"""

import pytest


@pytest.fixture
def register(test_client, auth_headers):
    async def _register(email: str, password: str):
        return await test_client.post(
            "/auth/register",
            json={"email": email, "password": password},
            headers=auth_headers,
        )

    return _register


class TestRegister:
    """POST /auth/register."""

    @pytest.mark.asyncio
    async def test_register_returns_public_record(self, register):
        response = await register("admin@mail.com", "root")

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "success"
        assert body["data"]["email"] == "admin@mail.com"
        assert set(body["data"]) == {"id", "email", "created_at"}
        assert "root" not in response.text
        assert "$2" not in response.text

    @pytest.mark.asyncio
    async def test_register_twice_is_bad_request(self, register):
        await register("admin@mail.com", "root")

        response = await register("Admin@Mail.com", "other")

        assert response.status_code == 400
        assert response.json() == {"status": "error", "message": "User Already Exists"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {"email": "not-an-email", "password": "root"},
        {"email": "admin@mail.com", "password": ""},
        {"email": "admin@mail.com"},
    ])
    async def test_invalid_payload_is_bad_request(self, test_client, auth_headers, body):
        response = await test_client.post("/auth/register", json=body, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["errors"]


class TestLogin:
    """POST /auth/login."""

    @pytest.mark.asyncio
    async def test_login_token_opens_protected_routes(self, test_client, register):
        await register("admin@mail.com", "root")

        response = await test_client.post(
            "/auth/login", json={"email": "admin@mail.com", "password": "root"}
        )

        assert response.status_code == 200
        token = response.json()["token"]
        listing = await test_client.get(
            "/category", headers={"Authorization": f"Bearer {token}"}
        )
        assert listing.status_code == 200

    @pytest.mark.asyncio
    async def test_login_email_is_case_insensitive(self, test_client, register):
        await register("admin@mail.com", "root")

        response = await test_client.post(
            "/auth/login", json={"email": "ADMIN@mail.com", "password": "root"}
        )

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_failures_are_indistinguishable(self, test_client, register):
        await register("admin@mail.com", "root")

        wrong_password = await test_client.post(
            "/auth/login", json={"email": "admin@mail.com", "password": "nope"}
        )
        unknown_email = await test_client.post(
            "/auth/login", json={"email": "ghost@mail.com", "password": "nope"}
        )

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.content == unknown_email.content
        assert wrong_password.json()["message"] == "The email address or password is incorrect."

    @pytest.mark.asyncio
    async def test_login_without_body_is_bad_request(self, test_client):
        response = await test_client.post("/auth/login", json={})

        assert response.status_code == 400
