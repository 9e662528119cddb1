# ==============================================================================
# ORDER LOOKUP TESTS
# ==============================================================================
# Client order view and admin list/detail reads
# ==============================================================================

import pytest
from httpx import AsyncClient


class TestOrderView:
    """Tests for GET /api/v1/orders/{identifier}."""

    @pytest.mark.asyncio
    async def test_id_and_order_number_give_same_view(
        self, client: AsyncClient, placed_order: dict
    ):
        by_number = await client.get(f"/api/v1/orders/{placed_order['orderId']}")
        by_id = await client.get(f"/api/v1/orders/{placed_order['orderUuid']}")

        assert by_number.status_code == by_id.status_code == 200
        assert by_number.json() == by_id.json()
        assert by_id.json()["data"]["orderNumber"] == placed_order["orderId"]

    @pytest.mark.asyncio
    async def test_unknown_order(self, client: AsyncClient):
        response = await client.get("/api/v1/orders/does-not-exist")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_history_follows_status_events(
        self, client: AsyncClient, admin_headers: dict, placed_order: dict
    ):
        order_id = placed_order["orderId"]
        await client.put(
            f"/api/v1/admin/orders/{order_id}",
            json={"status": "processing"},
            headers=admin_headers,
        )
        await client.put(
            f"/api/v1/admin/orders/{order_id}",
            json={"status": "cancelled"},
            headers=admin_headers,
        )

        view = (await client.get(f"/api/v1/orders/{order_id}")).json()["data"]

        history = view["tracking"]["history"]
        assert [event["status"] for event in history] == [
            "pending", "processing", "cancelled",
        ]
        assert history[-1]["description"] == "Order cancelled"
        assert view["tracking"]["status"] == "cancelled"


class TestAdminOrderList:
    """Tests for GET /api/v1/admin/orders."""

    @pytest.mark.asyncio
    async def test_lists_newest_first_with_filter(
        self,
        client: AsyncClient,
        payment_gateway,
        admin_headers: dict,
        checkout_payload: dict,
    ):
        numbers = []
        for intent in ("pi_a", "pi_b"):
            payment_gateway.statuses[intent] = "succeeded"
            checkout_payload["paymentIntentId"] = intent
            response = await client.post("/api/v1/orders", json=checkout_payload)
            numbers.append(response.json()["data"]["orderId"])

        await client.put(
            f"/api/v1/admin/orders/{numbers[0]}",
            json={"status": "processing"},
            headers=admin_headers,
        )

        everything = (await client.get(
            "/api/v1/admin/orders", params={"status": "all"}, headers=admin_headers
        )).json()
        assert everything["total"] == 2
        assert [row["orderNumber"] for row in everything["data"]] == list(reversed(numbers))
        assert everything["data"][0]["customerName"] == "Jane Doe"
        assert everything["data"][0]["itemCount"] == 1

        processing = (await client.get(
            "/api/v1/admin/orders", params={"status": "processing"}, headers=admin_headers
        )).json()
        assert processing["total"] == 1
        assert processing["data"][0]["orderNumber"] == numbers[0]

    @pytest.mark.asyncio
    async def test_pagination(
        self,
        client: AsyncClient,
        payment_gateway,
        admin_headers: dict,
        checkout_payload: dict,
    ):
        for intent in ("pi_1", "pi_2", "pi_3"):
            payment_gateway.statuses[intent] = "succeeded"
            checkout_payload["paymentIntentId"] = intent
            await client.post("/api/v1/orders", json=checkout_payload)

        page = (await client.get(
            "/api/v1/admin/orders",
            params={"limit": 2, "offset": 2},
            headers=admin_headers,
        )).json()

        assert page["total"] == 3
        assert len(page["data"]) == 1

    @pytest.mark.asyncio
    async def test_unknown_status_filter(self, client: AsyncClient, admin_headers: dict):
        response = await client.get(
            "/api/v1/admin/orders", params={"status": "lost"}, headers=admin_headers
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_detail_includes_items_and_customer(
        self, client: AsyncClient, admin_headers: dict, placed_order: dict
    ):
        response = await client.get(
            f"/api/v1/admin/orders/{placed_order['orderUuid']}", headers=admin_headers
        )

        assert response.status_code == 200
        detail = response.json()["data"]
        assert detail["customer"]["email"] == "jane@example.com"
        assert detail["items"][0]["productSku"] == "ESP-12"
        assert detail["totalAmount"] == 24.99

    @pytest.mark.asyncio
    async def test_list_requires_admin(self, client: AsyncClient, customer_headers: dict):
        assert (await client.get("/api/v1/admin/orders")).status_code == 401
        response = await client.get("/api/v1/admin/orders", headers=customer_headers)
        assert response.status_code == 403
