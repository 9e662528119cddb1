# ==============================================================================
# PAYMENT ENDPOINTS - Card Payment Intents
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter

from roastery.api.dependencies import PaymentGatewayDep
from roastery.integrations.payments import validate_charge_amount
from roastery.schemas.payment import PaymentIntentCreate, PaymentIntentResponse

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post(
    "/intents",
    response_model=PaymentIntentResponse,
    summary="Create payment intent",
    description="Open a card payment for the cart total. Minimum charge is $0.50.",
)
async def create_payment_intent(
    schema: PaymentIntentCreate,
    gateway: PaymentGatewayDep,
) -> PaymentIntentResponse:
    validate_charge_amount(schema.amount)
    intent = await gateway.create_payment_intent(
        schema.amount,
        currency=schema.currency,
        metadata=schema.metadata,
    )
    return PaymentIntentResponse(
        client_secret=intent.client_secret,
        payment_intent_id=intent.payment_intent_id,
    )
