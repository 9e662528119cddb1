# ==============================================================================
# PAYMENT INTENT TESTS
# ==============================================================================

from decimal import Decimal

import pytest
from httpx import AsyncClient

from roastery.integrations.payments import to_minor_units


class TestPaymentIntents:
    """Tests for POST /api/v1/payments/intents."""

    @pytest.mark.asyncio
    async def test_create_intent(self, client: AsyncClient, payment_gateway):
        response = await client.post(
            "/api/v1/payments/intents",
            json={"amount": 24.99, "metadata": {"cart": "c-1"}},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["paymentIntentId"].startswith("pi_")
        assert body["clientSecret"].startswith(body["paymentIntentId"])
        assert payment_gateway.created[0]["amount"] == 2499
        assert payment_gateway.created[0]["metadata"] == {"cart": "c-1"}

    @pytest.mark.asyncio
    async def test_amount_below_minimum(self, client: AsyncClient, payment_gateway):
        response = await client.post("/api/v1/payments/intents", json={"amount": 0.49})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid amount. Minimum charge is $0.50"
        assert payment_gateway.created == []


class TestMinorUnits:

    def test_rounds_half_up(self):
        assert to_minor_units(Decimal("24.99")) == 2499
        assert to_minor_units(Decimal("0.505")) == 51
        assert to_minor_units(Decimal("10")) == 1000


class TestStripePaymentGateway:
    """Error mapping of the Stripe gateway (SDK calls patched out)."""

    @pytest.mark.asyncio
    async def test_unknown_intent_is_not_completed(self, monkeypatch):
        import stripe

        from roastery.core.exceptions import PaymentNotCompletedError
        from roastery.integrations.payments import StripePaymentGateway

        def retrieve(*args, **kwargs):
            raise stripe.InvalidRequestError("No such payment_intent", "id")

        monkeypatch.setattr(stripe.PaymentIntent, "retrieve", retrieve)

        with pytest.raises(PaymentNotCompletedError):
            await StripePaymentGateway(api_key="sk_test_x").get_payment_status("pi_nope")

    @pytest.mark.asyncio
    async def test_outage_is_provider_error(self, monkeypatch):
        import stripe

        from roastery.core.exceptions import PaymentProviderError
        from roastery.integrations.payments import StripePaymentGateway

        def retrieve(*args, **kwargs):
            raise stripe.APIConnectionError("network down")

        monkeypatch.setattr(stripe.PaymentIntent, "retrieve", retrieve)

        with pytest.raises(PaymentProviderError):
            await StripePaymentGateway(api_key="sk_test_x").get_payment_status("pi_1")

    @pytest.mark.asyncio
    async def test_status_is_passed_through(self, monkeypatch):
        import stripe

        from roastery.integrations.payments import StripePaymentGateway

        class Intent:
            status = "requires_action"

        monkeypatch.setattr(stripe.PaymentIntent, "retrieve", lambda *a, **k: Intent())

        status = await StripePaymentGateway(api_key="sk_test_x").get_payment_status("pi_1")

        assert status == "requires_action"
