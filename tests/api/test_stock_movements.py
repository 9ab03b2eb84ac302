"""API tests for purchases, sales and repairs."""

from httpx import AsyncClient


class TestPurchasesAPI:
    async def test_record_purchase(self, api_client: AsyncClient, seeded):
        response = await api_client.post(
            "/api/purchases",
            json={"product_id": seeded.screen_id, "quantity": 10, "cost_per_unit": "5.99"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["purchase"]["total_cost"] == "59.90"
        assert body["product"]["quantity"] == 10
        assert body["product"]["average_cost"] == "5.99"

    async def test_zero_quantity_rejected(self, api_client: AsyncClient, seeded):
        response = await api_client.post(
            "/api/purchases",
            json={"product_id": seeded.screen_id, "quantity": 0, "cost_per_unit": "5.99"},
        )

        assert response.status_code == 422
        assert "quantity" in response.json()["detail"]

    async def test_huge_quantity_rejected(self, api_client: AsyncClient, seeded):
        response = await api_client.post(
            "/api/purchases",
            json={"product_id": seeded.screen_id, "quantity": 10**19, "cost_per_unit": "1"},
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "INVALID_ARGUMENT"
        product = (await api_client.get(f"/api/products/{seeded.screen_id}")).json()
        assert product["quantity"] == 0

    async def test_huge_sale_quantity_rejected(self, api_client: AsyncClient, seeded):
        response = await api_client.post(
            "/api/sales",
            json={
                "customer_id": seeded.customer_id,
                "items": [{"product_id": seeded.screen_id, "quantity": 10**19}],
            },
        )

        assert response.status_code == 422
        assert "quantity" in response.json()["detail"]

    async def test_unknown_product(self, api_client: AsyncClient, seeded):
        response = await api_client.post(
            "/api/purchases",
            json={"product_id": 999, "quantity": 1, "cost_per_unit": "1"},
        )
        assert response.status_code == 404

    async def test_list_filters_by_product(self, api_client: AsyncClient, seeded, receive):
        await receive(seeded.screen_id, 1, "80.00")
        await receive(seeded.battery_id, 1, "20.00")

        response = await api_client.get(
            "/api/purchases", params={"product_id": seeded.battery_id}
        )

        assert [p["product_name"] for p in response.json()] == ["Galaxy S21 Battery"]


class TestSalesAPI:
    async def test_create_sale(self, api_client: AsyncClient, seeded, receive):
        await receive(seeded.screen_id, 10, "80.00")

        response = await api_client.post(
            "/api/sales",
            json={
                "customer_id": seeded.customer_id,
                "items": [{"product_id": seeded.screen_id, "quantity": 2}],
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["customer_name"] == "Alice Martin"
        assert body["total_amount"] == "240.00"
        assert body["gross_profit"] == "80.00"
        product = (await api_client.get(f"/api/products/{seeded.screen_id}")).json()
        assert product["quantity"] == 8

    async def test_insufficient_stock_is_conflict(self, api_client: AsyncClient, seeded, receive):
        await receive(seeded.screen_id, 1, "80.00")

        response = await api_client.post(
            "/api/sales",
            json={
                "customer_id": seeded.customer_id,
                "items": [{"product_id": seeded.screen_id, "quantity": 2}],
            },
        )

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "INSUFFICIENT_STOCK"
        assert "Available: 1, Requested: 2" in body["message"]

    async def test_empty_items_rejected(self, api_client: AsyncClient, seeded):
        response = await api_client.post(
            "/api/sales", json={"customer_id": seeded.customer_id, "items": []}
        )
        assert response.status_code == 422

    async def test_get_missing(self, api_client: AsyncClient):
        response = await api_client.get("/api/sales/123")
        assert response.status_code == 404
        assert response.json()["error_code"] == "SALE_NOT_FOUND"


class TestRepairsAPI:
    async def test_create_repair(self, api_client: AsyncClient, seeded, receive):
        await receive(seeded.screen_id, 5, "40.00")

        response = await api_client.post(
            "/api/repairs",
            json={
                "customer_id": seeded.customer_id,
                "description": "Screen replacement",
                "total_cost": "200",
                "used_parts": [{"product_id": seeded.screen_id, "quantity": 2}],
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["parts_cost"] == "80.00"
        assert body["labor_cost"] == "120.00"
        assert body["used_parts"][0]["line_cost"] == "80.00"

    async def test_zero_price_rejected(self, api_client: AsyncClient, seeded):
        response = await api_client.post(
            "/api/repairs",
            json={
                "customer_id": seeded.customer_id,
                "description": "Free fix",
                "total_cost": "0",
                "used_parts": [{"product_id": seeded.screen_id, "quantity": 1}],
            },
        )
        assert response.status_code == 422

    async def test_list_and_analytics(self, api_client: AsyncClient, seeded, receive, repair):
        await receive(seeded.battery_id, 5, "20.00")
        await repair(seeded.customer_id, "60", (seeded.battery_id, 1))
        await repair(seeded.customer_id, "100", (seeded.battery_id, 2))

        listing = await api_client.get("/api/repairs", params={"date_range": "today"})
        analytics = await api_client.get("/api/repairs/analytics")

        assert len(listing.json()) == 2
        assert analytics.json() == {
            "total_repairs": 2,
            "total_revenue": "160",
            "average_repair_cost": "80",
            "total_labor_revenue": "100.00",
            "total_parts_cost": "60.00",
        }

    async def test_bad_date_range(self, api_client: AsyncClient):
        response = await api_client.get("/api/repairs", params={"date_range": "forever"})
        assert response.status_code == 422
