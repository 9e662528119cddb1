# ==============================================================================
# PAYMENT SCHEMAS - Card Payment Intents
# ==============================================================================

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Optional

from pydantic import Field, field_validator

from roastery.schemas.base import CamelSchema


class PaymentIntentCreate(CamelSchema):
    """Request to open a card payment for the cart total (in dollars)."""

    amount: Decimal = Field(..., description="Amount in major currency units")
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    metadata: Dict[str, str] = Field(default_factory=dict)

    @field_validator("currency")
    @classmethod
    def lower_currency(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v


class PaymentIntentResponse(CamelSchema):
    success: bool = True
    client_secret: str
    payment_intent_id: str
