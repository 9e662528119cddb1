# ==============================================================================
# CONFTEST - Pytest Fixtures and Configuration
# ==============================================================================
# Shared fixtures for all tests
# ==============================================================================

from __future__ import annotations

import os
from typing import AsyncGenerator, Dict, List, Optional
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

TEST_DB_PATH = "./test_roastery.db"

# Set test environment before importing app
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "false"
os.environ["DATABASE_TYPE"] = "sqlite"
os.environ["SQLITE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only-32chars!"
os.environ["EMAIL_ENABLED"] = "false"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_unused"
os.environ["SITE_URL"] = "https://shop.test"


# ==============================================================================
# FAKE COLLABORATORS
# ==============================================================================

class FakePaymentGateway:
    """
    In-memory stand-in for Stripe.

    ``statuses`` maps payment intent ids to processor status strings; an
    unknown id behaves like Stripe's "No such payment_intent".
    """

    def __init__(self) -> None:
        self.statuses: Dict[str, str] = {}
        self.created: List[dict] = []

    async def get_payment_status(self, payment_intent_id: str) -> str:
        from roastery.core.exceptions import PaymentNotCompletedError

        if payment_intent_id not in self.statuses:
            raise PaymentNotCompletedError(payment_intent_id=payment_intent_id)
        return self.statuses[payment_intent_id]

    async def create_payment_intent(self, amount, currency=None, metadata=None):
        from roastery.integrations.payments import CreatedPaymentIntent, to_minor_units

        intent_id = f"pi_{uuid4().hex[:16]}"
        self.created.append({
            "id": intent_id,
            "amount": to_minor_units(amount),
            "currency": currency,
            "metadata": metadata or {},
        })
        return CreatedPaymentIntent(
            client_secret=f"{intent_id}_secret",
            payment_intent_id=intent_id,
        )


class FakeEmailSender:
    """Records messages; raises ``error`` instead when one is set."""

    def __init__(self) -> None:
        self.sent: List = []
        self.error: Optional[Exception] = None

    async def send(self, message) -> bool:
        if self.error is not None:
            raise self.error
        self.sent.append(message)
        return True


# ==============================================================================
# HTTP CLIENT FIXTURES
# ==============================================================================

def _remove_test_db() -> None:
    if os.path.exists(TEST_DB_PATH):
        try:
            os.remove(TEST_DB_PATH)
        except (PermissionError, OSError):
            pass


@pytest.fixture
def payment_gateway() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture
def email_sender() -> FakeEmailSender:
    return FakeEmailSender()


@pytest_asyncio.fixture
async def client(
    payment_gateway: FakePaymentGateway,
    email_sender: FakeEmailSender,
) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client over a fresh SQLite database."""
    from roastery.database.factory import DatabaseFactory
    DatabaseFactory.reset()
    _remove_test_db()

    # Import app after environment is set
    from roastery.api.dependencies import get_email_sender, get_payment_gateway
    from roastery.main import app

    app.dependency_overrides[get_payment_gateway] = lambda: payment_gateway
    app.dependency_overrides[get_email_sender] = lambda: email_sender

    await DatabaseFactory.initialize()

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        timeout=30.0,
    ) as async_client:
        yield async_client

    app.dependency_overrides.clear()
    await DatabaseFactory.shutdown()
    DatabaseFactory.reset()
    _remove_test_db()


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    from roastery.core.security import create_access_token

    token = create_access_token(subject="ops-1", additional_claims={"role": "admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer_headers() -> Dict[str, str]:
    from roastery.core.security import create_access_token

    token = create_access_token(
        subject="cust-1",
        additional_claims={"role": "customer", "email": "jane@example.com"},
    )
    return {"Authorization": f"Bearer {token}"}


# ==============================================================================
# HELPER FIXTURES
# ==============================================================================

@pytest.fixture
def checkout_payload() -> dict:
    """One bag of coffee at 24.99, paid with ``pi_ok``."""
    return {
        "paymentIntentId": "pi_ok",
        "items": [
            {
                "id": "prod-espresso",
                "name": "Espresso Blend 12oz",
                "sku": "ESP-12",
                "price": 24.99,
                "quantity": 1,
                "image": "https://cdn.test/espresso.jpg",
            }
        ],
        "shippingAddress": {
            "street": "1 Main St",
            "city": "Austin",
            "state": "TX",
            "zipCode": "78701",
            "country": "US",
        },
        "customerInfo": {
            "firstName": "Jane",
            "lastName": "Doe",
            "email": "jane@example.com",
            "phone": "555-0100",
        },
        "totalAmount": 24.99,
    }


@pytest_asyncio.fixture
async def placed_order(
    client: AsyncClient,
    payment_gateway: FakePaymentGateway,
    checkout_payload: dict,
) -> dict:
    """Create-response ``data`` of a successfully placed order."""
    payment_gateway.statuses["pi_ok"] = "succeeded"
    response = await client.post("/api/v1/orders", json=checkout_payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]
