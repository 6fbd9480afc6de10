"""
Catalog API — Category Endpoint Tests
=======================================

What:  GET/POST /category against a real (in-memory SQLite) database.

What we test:
    ✅ Create returns 201 with the record wrapped in {status, data}
    ✅ Parent resolved one level deep on create, get and list
    ✅ Duplicate names → 409, malformed ids → 400, missing ids → 404
    ✅ Duplicate name is reported even when the parent is also bad
"""

import uuid

import pytest


class TestCreateCategory:
    """POST /category."""

    @pytest.mark.asyncio
    async def test_create_root_category(self, test_client, auth_headers):
        response = await test_client.post(
            "/category", json={"name": "Bebidas"}, headers=auth_headers
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "success"
        assert body["data"]["name"] == "Bebidas"
        assert body["data"]["parent"] is None
        uuid.UUID(body["data"]["id"])

    @pytest.mark.asyncio
    async def test_create_child_resolves_parent(self, create_category):
        parent = await create_category("Bebidas")

        child = await create_category("Sucos", parent_id=parent["id"])

        assert child["parent"]["id"] == parent["id"]
        assert child["parent"]["name"] == "Bebidas"

    @pytest.mark.asyncio
    async def test_duplicate_name_conflicts(self, test_client, auth_headers, create_category):
        await create_category("Pizzas")

        response = await test_client.post(
            "/category", json={"name": "Pizzas"}, headers=auth_headers
        )

        assert response.status_code == 409
        assert response.json() == {"status": "error", "message": "Category Already Exists"}

    @pytest.mark.asyncio
    async def test_duplicate_name_checked_before_parent(
        self, test_client, auth_headers, create_category
    ):
        await create_category("Pizzas")

        response = await test_client.post(
            "/category",
            json={"name": "Pizzas", "parent": {"id": "garbage"}},
            headers=auth_headers,
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_malformed_parent_is_bad_request(self, test_client, auth_headers):
        response = await test_client.post(
            "/category",
            json={"name": "Sucos", "parent": {"id": "garbage"}},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid ID"

    @pytest.mark.asyncio
    async def test_missing_parent_is_not_found(self, test_client, auth_headers):
        response = await test_client.post(
            "/category",
            json={"name": "Sucos", "parent": {"id": str(uuid.uuid4())}},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Parent Category Not Found"

        listing = await test_client.get("/category", headers=auth_headers)
        assert listing.json() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"name": ""}, {"name": 42}])
    async def test_invalid_payload_is_bad_request(self, test_client, auth_headers, body):
        response = await test_client.post("/category", json=body, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["errors"]


class TestReadCategories:
    """GET /category and GET /category/{id}."""

    @pytest.mark.asyncio
    async def test_empty_listing(self, test_client, auth_headers):
        response = await test_client.get("/category", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_listing_resolves_parents(self, test_client, auth_headers, create_category):
        root = await create_category("Pizzas")
        await create_category("Pizzas Doces", parent_id=root["id"])

        response = await test_client.get("/category", headers=auth_headers)

        by_name = {c["name"]: c for c in response.json()}
        assert set(by_name) == {"Pizzas", "Pizzas Doces"}
        assert by_name["Pizzas"]["parent"] is None
        assert by_name["Pizzas Doces"]["parent"]["id"] == root["id"]

    @pytest.mark.asyncio
    async def test_get_returns_bare_record(self, test_client, auth_headers, create_category):
        created = await create_category("Comida Japonesa")

        response = await test_client.get(f"/category/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_get_absent_is_not_found(self, test_client, auth_headers):
        response = await test_client.get(f"/category/{uuid.uuid4()}", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"status": "error", "message": "Category Not Found"}

    @pytest.mark.asyncio
    async def test_get_malformed_id_is_bad_request(self, test_client, auth_headers):
        response = await test_client.get("/category/not-an-id", headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"status": "error", "message": "Invalid ID"}
