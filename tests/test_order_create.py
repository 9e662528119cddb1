# ==============================================================================
# ORDER CREATION TESTS
# ==============================================================================
# Checkout: payment verification, totals, customer linking, recovery path
# ==============================================================================

import re

import pytest
from httpx import AsyncClient

from roastery.core.constants import ErrorMessages, OrderConstants, SuccessMessages
from roastery.database.repositories.order_repository import OrderRepository

ORDER_NUMBER = re.compile(r"^ORD-\d+-[0-9a-z]{9}$")


async def _order_count(client: AsyncClient, admin_headers: dict) -> int:
    response = await client.get("/api/v1/admin/orders", headers=admin_headers)
    assert response.status_code == 200
    return response.json()["total"]


class TestOrderCreate:
    """Tests for POST /api/v1/orders."""

    @pytest.mark.asyncio
    async def test_paid_checkout_creates_order(
        self, client: AsyncClient, payment_gateway, email_sender, checkout_payload: dict
    ):
        payment_gateway.statuses["pi_ok"] = "succeeded"

        response = await client.post("/api/v1/orders", json=checkout_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == SuccessMessages.ORDER_PLACED
        assert "warning" not in body
        assert ORDER_NUMBER.match(body["data"]["orderId"])
        assert body["data"]["orderUuid"]
        assert body["data"]["status"] == "pending"
        assert body["data"]["total"] == 24.99

        # Confirmation email goes to the checkout address
        assert len(email_sender.sent) == 1
        assert email_sender.sent[0].to == "jane@example.com"
        assert body["data"]["orderId"] in email_sender.sent[0].subject

    @pytest.mark.asyncio
    async def test_created_order_has_items_customer_and_first_event(
        self, client: AsyncClient, placed_order: dict
    ):
        response = await client.get(f"/api/v1/orders/{placed_order['orderId']}")

        assert response.status_code == 200
        view = response.json()["data"]
        assert view["status"] == "pending"
        assert view["paymentStatus"] == "paid"
        assert view["paymentIntentId"] == "pi_ok"
        assert view["customer"]["firstName"] == "Jane"
        assert view["customer"]["email"] == "jane@example.com"
        assert view["shipping"]["method"] == OrderConstants.DEFAULT_SHIPPING_METHOD
        assert view["billingAddress"] == view["shipping"]["address"]

        assert len(view["items"]) == 1
        item = view["items"][0]
        assert item["name"] == "Espresso Blend 12oz"
        assert item["price"] == 24.99
        assert item["total"] == 24.99

        history = view["tracking"]["history"]
        assert [event["status"] for event in history] == ["pending"]
        assert view["tracking"]["estimatedDelivery"] is None

    @pytest.mark.asyncio
    async def test_totals_are_computed_from_items(
        self, client: AsyncClient, payment_gateway, checkout_payload: dict
    ):
        payment_gateway.statuses["pi_ok"] = "succeeded"
        checkout_payload["items"] = [
            {"id": "a", "name": "House Blend", "price": 12.50, "quantity": 2},
            {"id": "b", "name": "Decaf", "price": 8.25, "quantity": 1},
        ]
        checkout_payload["shippingCost"] = 5.99
        checkout_payload["taxAmount"] = 2.74
        # Storefront total is off by a cent; the stored total is recomputed
        checkout_payload["totalAmount"] = 41.97

        response = await client.post("/api/v1/orders", json=checkout_payload)
        assert response.status_code == 201
        assert response.json()["data"]["total"] == 41.98

        order_id = response.json()["data"]["orderId"]
        view = (await client.get(f"/api/v1/orders/{order_id}")).json()["data"]
        assert view["totals"] == {
            "subtotal": 33.25,
            "shipping": 5.99,
            "tax": 2.74,
            "total": 41.98,
        }
        assert [item["total"] for item in view["items"]] == [25.0, 8.25]

    @pytest.mark.asyncio
    async def test_line_totals_round_half_up(
        self, client: AsyncClient, payment_gateway, checkout_payload: dict
    ):
        payment_gateway.statuses["pi_ok"] = "succeeded"
        checkout_payload["items"] = [
            {"id": "a", "name": "Sample", "price": "3.335", "quantity": 1},
        ]

        response = await client.post("/api/v1/orders", json=checkout_payload)

        assert response.status_code == 201
        assert response.json()["data"]["total"] == 3.34

    @pytest.mark.asyncio
    @pytest.mark.parametrize("intent_status", ["requires_payment_method", "processing"])
    async def test_unsettled_payment_is_rejected(
        self,
        client: AsyncClient,
        payment_gateway,
        email_sender,
        admin_headers: dict,
        checkout_payload: dict,
        intent_status: str,
    ):
        payment_gateway.statuses["pi_ok"] = intent_status

        response = await client.post("/api/v1/orders", json=checkout_payload)

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "PAYMENT_NOT_COMPLETED"
        assert error["message"] == ErrorMessages.PAYMENT_NOT_COMPLETED
        assert await _order_count(client, admin_headers) == 0
        assert email_sender.sent == []

    @pytest.mark.asyncio
    async def test_unknown_payment_intent_is_rejected(
        self, client: AsyncClient, admin_headers: dict, checkout_payload: dict
    ):
        checkout_payload["paymentIntentId"] = "pi_missing"

        response = await client.post("/api/v1/orders", json=checkout_payload)

        assert response.status_code == 400
        assert await _order_count(client, admin_headers) == 0

    @pytest.mark.asyncio
    async def test_empty_cart_is_invalid(self, client: AsyncClient, checkout_payload: dict):
        checkout_payload["items"] = []

        response = await client.post("/api/v1/orders", json=checkout_payload)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_repeat_customer_reuses_account(
        self,
        client: AsyncClient,
        payment_gateway,
        admin_headers: dict,
        checkout_payload: dict,
    ):
        payment_gateway.statuses["pi_ok"] = "succeeded"
        payment_gateway.statuses["pi_two"] = "succeeded"

        first = await client.post("/api/v1/orders", json=checkout_payload)
        checkout_payload["paymentIntentId"] = "pi_two"
        checkout_payload["customerInfo"]["email"] = "JANE@Example.com"
        second = await client.post("/api/v1/orders", json=checkout_payload)
        assert first.status_code == second.status_code == 201

        first_detail = (await client.get(
            f"/api/v1/admin/orders/{first.json()['data']['orderId']}",
            headers=admin_headers,
        )).json()["data"]
        second_detail = (await client.get(
            f"/api/v1/admin/orders/{second.json()['data']['orderId']}",
            headers=admin_headers,
        )).json()["data"]

        assert first_detail["customerId"] is not None
        assert first_detail["customerId"] == second_detail["customerId"]
        assert second_detail["customerEmail"] == "jane@example.com"

    @pytest.mark.asyncio
    async def test_write_failure_after_payment_returns_recovery_info(
        self,
        client: AsyncClient,
        payment_gateway,
        email_sender,
        admin_headers: dict,
        checkout_payload: dict,
        monkeypatch,
    ):
        payment_gateway.statuses["pi_ok"] = "succeeded"

        async def failing_save(self, instance):
            raise RuntimeError("disk full")

        monkeypatch.setattr(OrderRepository, "save", failing_save)

        response = await client.post("/api/v1/orders", json=checkout_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["warning"] == ErrorMessages.ORDER_RECORD_FAILED
        assert body["recovery"]["code"] == OrderConstants.RECORD_FAILED_CODE
        assert body["recovery"]["paymentIntentId"] == "pi_ok"
        assert body["recovery"]["orderNumber"] == body["data"]["orderId"]
        assert email_sender.sent == []

        monkeypatch.undo()
        assert await _order_count(client, admin_headers) == 0

    @pytest.mark.asyncio
    async def test_two_bags_scenario(
        self, client: AsyncClient, payment_gateway, admin_headers: dict, checkout_payload: dict
    ):
        payment_gateway.statuses["pi_ok"] = "succeeded"
        checkout_payload["items"][0]["price"] = 12.50
        checkout_payload["items"][0]["quantity"] = 2
        checkout_payload["shippingCost"] = 0

        response = await client.post("/api/v1/orders", json=checkout_payload)
        assert response.status_code == 201

        detail = (await client.get(
            f"/api/v1/admin/orders/{response.json()['data']['orderId']}",
            headers=admin_headers,
        )).json()["data"]
        assert detail["subtotal"] == 25.0
        assert detail["totalAmount"] == 25.0
        assert detail["status"] == "pending"
        assert detail["paymentStatus"] == "paid"
        assert detail["items"][0]["totalPrice"] == 25.0


class TestCustomerResolution:
    """Customer linking never blocks a paid order."""

    @pytest.mark.asyncio
    async def test_resolution_failure_records_guest_order(
        self,
        client: AsyncClient,
        payment_gateway,
        admin_headers: dict,
        checkout_payload: dict,
        monkeypatch,
    ):
        from roastery.services.customer_service import CustomerResolver

        async def failing_find_or_create(self, info):
            raise RuntimeError("customers table locked")

        monkeypatch.setattr(CustomerResolver, "find_or_create", failing_find_or_create)
        payment_gateway.statuses["pi_ok"] = "succeeded"

        response = await client.post("/api/v1/orders", json=checkout_payload)

        assert response.status_code == 201
        assert "warning" not in response.json()
        order_id = response.json()["data"]["orderId"]

        detail = (await client.get(
            f"/api/v1/admin/orders/{order_id}", headers=admin_headers
        )).json()["data"]
        assert detail["customerId"] is None
        assert detail["customer"] is None
        assert detail["customerEmail"] == "jane@example.com"

        view = (await client.get(f"/api/v1/orders/{order_id}")).json()["data"]
        assert view["customer"]["email"] == "jane@example.com"
        assert view["customer"]["firstName"] is None

    @pytest.mark.asyncio
    async def test_concurrent_insert_reuses_existing_customer(self, client, monkeypatch):
        from roastery.database.factory import DatabaseFactory
        from roastery.database.repositories.customer_repository import CustomerRepository
        from roastery.database.unit_of_work import UnitOfWork
        from roastery.schemas.order import CustomerInfo
        from roastery.services.customer_service import CustomerResolver

        adapter = DatabaseFactory.get_adapter()
        resolver = CustomerResolver(adapter)
        info = CustomerInfo(first_name="Jane", last_name="Doe", email="jane@example.com")
        existing = await resolver.find_or_create(info)

        # First lookup misses, as if another checkout inserted the row meanwhile
        real_find = CustomerRepository.find_by_email
        calls = {"count": 0}

        async def racing_find(self, email):
            calls["count"] += 1
            if calls["count"] == 1:
                return None
            return await real_find(self, email)

        monkeypatch.setattr(CustomerRepository, "find_by_email", racing_find)

        resolved = await resolver.find_or_create(info)

        assert resolved.id == existing.id
        assert calls["count"] == 2
        async with UnitOfWork(adapter) as uow:
            assert await uow.customers.count() == 1


class TestConfirmationEmail:

    @pytest.mark.asyncio
    async def test_template_error_does_not_fail_checkout(
        self,
        client: AsyncClient,
        payment_gateway,
        email_sender,
        checkout_payload: dict,
        monkeypatch,
    ):
        from roastery.services import email_templates

        def broken_template(*args, **kwargs):
            raise KeyError("missing address field")

        monkeypatch.setattr(email_templates, "render_order_confirmation", broken_template)
        payment_gateway.statuses["pi_ok"] = "succeeded"

        response = await client.post("/api/v1/orders", json=checkout_payload)

        assert response.status_code == 201
        assert "warning" not in response.json()
        assert email_sender.sent == []
