"""API tests for categories, units and products."""

from httpx import AsyncClient


class TestCategoriesAPI:
    async def test_create_and_list(self, api_client: AsyncClient):
        response = await api_client.post("/api/categories", json={"name": "Tools"})
        assert response.status_code == 201

        listing = await api_client.get("/api/categories")
        assert [c["name"] for c in listing.json()] == ["Tools"]

    async def test_duplicate_is_conflict(self, api_client: AsyncClient, seeded):
        response = await api_client.post("/api/categories", json={"name": "Phone Parts"})

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "DUPLICATE_CATEGORY"
        assert body["hint"] == "Choose a different name."

    async def test_delete_in_use_is_precondition_failed(self, api_client: AsyncClient, seeded):
        response = await api_client.delete(f"/api/categories/{seeded.category_id}")

        assert response.status_code == 412
        assert response.json()["error_code"] == "CATEGORY_IN_USE"

    async def test_delete_returns_entity(self, api_client: AsyncClient):
        created = (await api_client.post("/api/categories", json={"name": "Spare"})).json()

        response = await api_client.delete(f"/api/categories/{created['id']}")

        assert response.status_code == 200
        assert response.json()["name"] == "Spare"
        assert (await api_client.get(f"/api/categories/{created['id']}")).status_code == 404

    async def test_blank_name_rejected(self, api_client: AsyncClient):
        response = await api_client.post("/api/categories", json={"name": ""})
        assert response.status_code == 422
        assert response.json()["error_code"] == "INVALID_ARGUMENT"


class TestUnitsAPI:
    async def test_rename(self, api_client: AsyncClient, seeded):
        response = await api_client.put(f"/api/units/{seeded.unit_id}", json={"name": "pcs"})
        assert response.status_code == 200
        assert response.json()["name"] == "pcs"

    async def test_missing(self, api_client: AsyncClient):
        response = await api_client.get("/api/units/404")
        assert response.status_code == 404
        assert response.json()["error_code"] == "UNIT_NOT_FOUND"


class TestProductsAPI:
    async def test_create_starts_with_no_stock(self, api_client: AsyncClient, seeded):
        response = await api_client.post(
            "/api/products",
            json={
                "name": "USB-C Port",
                "sale_price": "18.50",
                "category_id": seeded.category_id,
                "unit_id": seeded.unit_id,
                "quantity": 40,
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["quantity"] == 0
        assert body["sale_price"] == "18.50"
        assert body["category_name"] == "Phone Parts"

    async def test_create_unknown_category(self, api_client: AsyncClient, seeded):
        response = await api_client.post(
            "/api/products",
            json={"name": "X", "sale_price": "1", "category_id": 999, "unit_id": seeded.unit_id},
        )
        assert response.status_code == 404
        assert response.json()["error_code"] == "CATEGORY_NOT_FOUND"

    async def test_negative_price_rejected(self, api_client: AsyncClient, seeded):
        response = await api_client.post(
            "/api/products",
            json={
                "name": "X",
                "sale_price": "-1",
                "category_id": seeded.category_id,
                "unit_id": seeded.unit_id,
            },
        )
        assert response.status_code == 422

    async def test_total_value(self, api_client: AsyncClient, seeded, receive):
        await receive(seeded.screen_id, 10, "5.99")
        await receive(seeded.battery_id, 2, "20.00")

        response = await api_client.get("/api/products/total-value")

        assert response.status_code == 200
        assert response.json() == {"total_value": "99.90", "product_count": 2}

    async def test_purchase_history(self, api_client: AsyncClient, seeded, receive):
        await receive(seeded.screen_id, 10, "5.99")

        response = await api_client.get(f"/api/products/{seeded.screen_id}/purchases")

        assert [p["quantity"] for p in response.json()] == [10]
        missing = await api_client.get("/api/products/999/purchases")
        assert missing.status_code == 404

    async def test_delete_with_history_blocked(self, api_client: AsyncClient, seeded, receive):
        await receive(seeded.screen_id, 1, "5.99")

        response = await api_client.delete(f"/api/products/{seeded.screen_id}")

        assert response.status_code == 412
        assert response.json()["error_code"] == "PRODUCT_IN_USE"
