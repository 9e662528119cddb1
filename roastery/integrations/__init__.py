# ==============================================================================
# INTEGRATIONS PACKAGE
# ==============================================================================

"""
External Integrations
=====================

Thin clients for the collaborators this service does not own:
- payments: Stripe payment intents
- email: Transactional email HTTP API
"""

from roastery.integrations.email import EmailMessage, EmailSender, HttpEmailSender
from roastery.integrations.payments import (
    CreatedPaymentIntent,
    PaymentGateway,
    StripePaymentGateway,
)

__all__ = [
    "CreatedPaymentIntent",
    "EmailMessage",
    "EmailSender",
    "HttpEmailSender",
    "PaymentGateway",
    "StripePaymentGateway",
]
