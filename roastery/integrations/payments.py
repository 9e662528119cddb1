# ==============================================================================
# PAYMENT GATEWAY - Stripe Payment Intents
# ==============================================================================
# Verifies settled payments and opens new card payment intents
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional, Protocol, runtime_checkable

import stripe

from roastery.core.constants import ErrorMessages
from roastery.core.exceptions import (
    BadRequestError,
    PaymentNotCompletedError,
    PaymentProviderError,
)
from roastery.core.settings import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreatedPaymentIntent:
    client_secret: str
    payment_intent_id: str


@runtime_checkable
class PaymentGateway(Protocol):
    """Card payment processor as seen by the order flow."""

    async def get_payment_status(self, payment_intent_id: str) -> str:
        """
        Return the processor's status string for a payment intent.

        Raises:
            PaymentNotCompletedError: If the processor does not know the id
            PaymentProviderError: If the processor cannot be reached
        """
        ...

    async def create_payment_intent(
        self,
        amount: Decimal,
        currency: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ) -> CreatedPaymentIntent:
        ...


def to_minor_units(amount: Decimal) -> int:
    """Dollars to cents, rounding half-up."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def validate_charge_amount(amount: Decimal) -> None:
    """
    Reject amounts below the processor's minimum charge.

    Raises:
        BadRequestError: If amount is below ``MIN_CHARGE_AMOUNT``
    """
    if amount is None or amount < settings.MIN_CHARGE_AMOUNT:
        raise BadRequestError(
            message=ErrorMessages.AMOUNT_TOO_SMALL.format(
                amount=f"{settings.MIN_CHARGE_AMOUNT:.2f}"
            )
        )


class StripePaymentGateway:
    """
    Stripe implementation of ``PaymentGateway``.

    The Stripe SDK is synchronous, so each call runs in a worker thread.
    Every call is attempted once.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_version: Optional[str] = None,
    ) -> None:
        self._api_key = api_key or settings.STRIPE_SECRET_KEY
        self._api_version = api_version or settings.STRIPE_API_VERSION

    def _request_options(self) -> Dict[str, Any]:
        if not self._api_key:
            raise PaymentProviderError(message="Stripe is not configured")
        options: Dict[str, Any] = {"api_key": self._api_key}
        if self._api_version:
            options["stripe_version"] = self._api_version
        return options

    async def get_payment_status(self, payment_intent_id: str) -> str:
        options = self._request_options()
        try:
            intent = await asyncio.to_thread(
                stripe.PaymentIntent.retrieve,
                payment_intent_id,
                **options,
            )
        except stripe.InvalidRequestError as e:
            logger.warning(f"Unknown payment intent {payment_intent_id}: {e}")
            raise PaymentNotCompletedError(
                message=ErrorMessages.PAYMENT_NOT_COMPLETED,
                payment_intent_id=payment_intent_id,
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe error retrieving {payment_intent_id}: {e}")
            raise PaymentProviderError(message=f"Payment verification failed: {e}")

        return intent.status

    async def create_payment_intent(
        self,
        amount: Decimal,
        currency: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ) -> CreatedPaymentIntent:
        options = self._request_options()

        try:
            intent = await asyncio.to_thread(
                stripe.PaymentIntent.create,
                amount=to_minor_units(amount),
                currency=(currency or settings.DEFAULT_CURRENCY).lower(),
                metadata=metadata or {},
                automatic_payment_methods={"enabled": True},
                **options,
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe error creating payment intent: {e}")
            raise PaymentProviderError(message=f"Failed to create payment intent: {e}")

        logger.info(f"Created payment intent {intent.id} for {amount}")
        return CreatedPaymentIntent(
            client_secret=intent.client_secret,
            payment_intent_id=intent.id,
        )
