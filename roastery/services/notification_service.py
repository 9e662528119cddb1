# ==============================================================================
# NOTIFICATION SERVICE - Order Lifecycle Emails
# ==============================================================================
# Confirmation, shipped and delivered emails are best effort; the operator
# triggered review request is not
# ==============================================================================

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Callable, Optional, Tuple

from roastery.core.constants import ErrorMessages
from roastery.core.exceptions import BadRequestError
from roastery.core.settings import settings
from roastery.domain_models.order import Order, OrderStatus
from roastery.integrations.email import EmailMessage, EmailSender
from roastery.services import email_templates
from roastery.utils.helpers import as_utc, utc_now

logger = logging.getLogger(__name__)


def recipient_for(order: Order) -> Tuple[Optional[str], str]:
    """
    Email address and greeting name for an order.

    Prefers the linked customer and falls back to the checkout snapshot.
    """
    customer = order.customer
    email = (customer.email if customer else None) or order.customer_email
    name = (customer.full_name if customer else "") or "there"
    return email, name


class OrderNotifier:
    """
    Sends order lifecycle emails through an ``EmailSender``.

    Lifecycle notifications never raise: a failed send is logged and
    reported as ``False`` so the order write that triggered it stands.
    """

    def __init__(self, sender: EmailSender) -> None:
        self._sender = sender

    async def _send_best_effort(
        self,
        render: Callable[[], EmailMessage],
        order: Order,
        kind: str,
    ) -> bool:
        try:
            message = render()
            return await self._sender.send(message)
        except Exception:
            logger.exception(f"Failed to send {kind} email for order {order.order_number}")
            return False

    async def send_confirmation(self, order: Order) -> bool:
        email, name = recipient_for(order)
        if not email:
            logger.warning(f"No email for order {order.order_number}; skipping confirmation")
            return False

        def render() -> EmailMessage:
            created_at = as_utc(order.created_at) or utc_now()
            return email_templates.render_order_confirmation(
                order,
                to=email,
                customer_name=name,
                estimated_delivery=created_at + timedelta(days=settings.CONFIRMATION_DELIVERY_DAYS),
            )

        return await self._send_best_effort(render, order, "confirmation")

    async def notify_status_change(
        self,
        order: Order,
        previous_status: OrderStatus,
        new_status: OrderStatus,
    ) -> bool:
        """
        Send at most one email for a status transition.

        Only transitions into ``shipped`` or ``delivered`` notify the
        customer. Returns whether an email was sent.
        """
        if previous_status == new_status:
            return False
        if new_status not in (OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            return False

        email, name = recipient_for(order)
        if not email:
            logger.warning(
                f"No email for order {order.order_number}; skipping {new_status.value} notice"
            )
            return False

        def render() -> EmailMessage:
            if new_status == OrderStatus.SHIPPED:
                shipped_at = as_utc(order.shipped_at) or utc_now()
                return email_templates.render_order_shipped(
                    order,
                    to=email,
                    customer_name=name,
                    estimated_delivery=shipped_at + timedelta(days=settings.SHIPPING_DELIVERY_DAYS),
                )
            return email_templates.render_order_delivered(
                order, to=email, customer_name=name
            )

        return await self._send_best_effort(render, order, new_status.value)

    async def send_review_request(self, order: Order) -> bool:
        """
        Ask the customer to review a delivered order.

        Raises:
            BadRequestError: If the order is not delivered or has no email
            NotificationError: If the email provider fails
        """
        if order.status != OrderStatus.DELIVERED:
            raise BadRequestError(message=ErrorMessages.REVIEW_REQUIRES_DELIVERY)

        email, name = recipient_for(order)
        if not email:
            raise BadRequestError(message=ErrorMessages.CUSTOMER_EMAIL_MISSING)

        message = email_templates.render_review_request(order, to=email, customer_name=name)
        sent = await self._sender.send(message)
        logger.info(f"Review request for order {order.order_number} sent={sent}")
        return sent
