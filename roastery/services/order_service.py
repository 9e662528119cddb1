# ==============================================================================
# ORDER SERVICE - Checkout, Fulfillment and Order Reads
# ==============================================================================
# Business logic for the order lifecycle
# ==============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from roastery.core.constants import (
    ErrorMessages,
    OrderConstants,
    SuccessMessages,
)
from roastery.core.exceptions import (
    BadRequestError,
    InvalidStatusTransitionError,
    NotFoundError,
    PaymentNotCompletedError,
)
from roastery.core.settings import settings
from roastery.database.adapters.base_adapter import BaseDatabaseAdapter
from roastery.database.unit_of_work import UnitOfWork
from roastery.domain_models.order import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
)
from roastery.integrations.payments import PaymentGateway
from roastery.schemas.base import ListResponse
from roastery.schemas.order import (
    AccountOrder,
    AccountOrdersResponse,
    OrderCreatedData,
    OrderCreateRequest,
    OrderCreateResponse,
    OrderDetail,
    OrderRecoveryInfo,
    OrderResponse,
    OrderStatusUpdate,
    OrderSummary,
    OrderUpdateResponse,
    OrderView,
)
from roastery.services.customer_service import CustomerResolver, normalize_email
from roastery.services.notification_service import OrderNotifier
from roastery.services.order_export import ExportRow, build_export_rows
from roastery.utils.helpers import generate_order_number, to_money, utc_now

logger = logging.getLogger(__name__)


@dataclass
class OrderTotals:
    """Server-side money for a checkout."""

    lines: List[Dict[str, Any]] = field(default_factory=list)
    subtotal: Decimal = Decimal("0.00")
    tax: Decimal = Decimal("0.00")
    shipping: Decimal = Decimal("0.00")

    @property
    def total(self) -> Decimal:
        return to_money(self.subtotal + self.tax + self.shipping)


def compute_totals(request: OrderCreateRequest) -> OrderTotals:
    """
    Price every line and the order from the submitted items.

    Each line total is ``unit_price * quantity`` rounded half-up to cents;
    the subtotal is the sum of line totals.
    """
    totals = OrderTotals(
        tax=to_money(request.tax_amount),
        shipping=to_money(request.shipping_cost),
    )
    for item in request.items:
        unit_price = to_money(item.price)
        line_total = to_money(unit_price * item.quantity)
        totals.lines.append({
            "product_id": item.id,
            "product_name": item.name,
            "product_sku": item.sku,
            "product_image": item.image,
            "quantity": item.quantity,
            "unit_price": unit_price,
            "total_price": line_total,
        })
        totals.subtotal += line_total
    totals.subtotal = to_money(totals.subtotal)
    return totals


def parse_status_filter(status: Optional[str]) -> Optional[OrderStatus]:
    """``None``/``"all"`` mean no filter; anything else must be a status."""
    if not status or status == "all":
        return None
    try:
        return OrderStatus(status)
    except ValueError:
        raise BadRequestError(
            message=f"Unknown order status '{status}'",
            details={"allowed": [s.value for s in OrderStatus]},
        )


class OrderService:
    """
    Order lifecycle service.

    Create: payment check (hard) -> customer resolution (soft) -> one
    transaction for header, items and first status event -> confirmation
    email (best effort).

    Update: transition check -> one transaction for the field changes and
    the status event -> status email (best effort).
    """

    def __init__(
        self,
        adapter: BaseDatabaseAdapter,
        gateway: PaymentGateway,
        notifier: OrderNotifier,
        customers: Optional[CustomerResolver] = None,
    ) -> None:
        self._adapter = adapter
        self._gateway = gateway
        self._notifier = notifier
        self._customers = customers or CustomerResolver(adapter)

    # ==========================================================================
    # CREATE
    # ==========================================================================

    async def verify_payment(self, payment_intent_id: str) -> None:
        """
        Raises:
            PaymentNotCompletedError: Unless the processor reports ``succeeded``
        """
        payment_status = await self._gateway.get_payment_status(payment_intent_id)
        if payment_status != OrderConstants.PAYMENT_SUCCEEDED:
            logger.warning(
                f"Payment {payment_intent_id} not completed (status={payment_status})"
            )
            raise PaymentNotCompletedError(
                message=ErrorMessages.PAYMENT_NOT_COMPLETED,
                payment_intent_id=payment_intent_id,
                payment_status=payment_status,
            )

    async def create_order(self, request: OrderCreateRequest) -> OrderCreateResponse:
        """
        Record a paid order.

        Once the payment check passes the caller always gets a 201 answer:
        if the write fails, the response carries a warning and the
        references operators need to reconcile the charge.
        """
        await self.verify_payment(request.payment_intent_id)

        totals = compute_totals(request)
        if to_money(request.total_amount) != totals.total:
            logger.warning(
                f"Client total {request.total_amount} differs from computed "
                f"{totals.total} for payment {request.payment_intent_id}"
            )

        customer = await self._customers.resolve(request.customer_info)
        order_number = generate_order_number()
        shipping_address = request.shipping_address.model_dump(by_alias=True)
        billing_address = (
            request.billing_address.model_dump(by_alias=True)
            if request.billing_address else shipping_address
        )

        try:
            async with UnitOfWork(self._adapter) as uow:
                order = Order(
                    order_number=order_number,
                    customer_id=customer.id if customer else None,
                    customer_email=normalize_email(request.customer_info.email),
                    status=OrderStatus.PENDING,
                    payment_status=PaymentStatus.PAID,
                    subtotal=totals.subtotal,
                    tax_amount=totals.tax,
                    shipping_amount=totals.shipping,
                    total_amount=totals.total,
                    currency=settings.DEFAULT_CURRENCY,
                    payment_intent_id=request.payment_intent_id,
                    payment_method=OrderConstants.DEFAULT_PAYMENT_METHOD,
                    shipping_address=shipping_address,
                    billing_address=billing_address,
                    shipping_method=(
                        request.shipping_method or OrderConstants.DEFAULT_SHIPPING_METHOD
                    ),
                    items=[
                        OrderItem(position=position, **line)
                        for position, line in enumerate(totals.lines)
                    ],
                    status_events=[],
                )
                uow.status_events.append(
                    order,
                    OrderStatus.PENDING,
                    description=OrderConstants.STATUS_DESCRIPTIONS[OrderStatus.PENDING.value],
                )
                await uow.orders.save(order)
                await uow.session.refresh(order, attribute_names=["customer"])
        except Exception:
            logger.exception(
                f"Order write failed after payment {request.payment_intent_id} "
                f"(order number {order_number})"
            )
            return OrderCreateResponse(
                data=OrderCreatedData(
                    order_id=order_number,
                    status=OrderStatus.PENDING.value,
                    total=totals.total,
                    created_at=utc_now(),
                ),
                message=SuccessMessages.ORDER_PLACED,
                warning=ErrorMessages.ORDER_RECORD_FAILED,
                recovery=OrderRecoveryInfo(
                    code=OrderConstants.RECORD_FAILED_CODE,
                    payment_intent_id=request.payment_intent_id,
                    order_number=order_number,
                ),
            )

        logger.info(f"Order {order.order_number} created for payment {request.payment_intent_id}")
        await self._notifier.send_confirmation(order)

        return OrderCreateResponse(
            data=OrderCreatedData(
                order_id=order.order_number,
                order_uuid=order.id,
                status=OrderStatus(order.status).value,
                total=order.total_amount,
                created_at=order.created_at,
            ),
            message=SuccessMessages.ORDER_PLACED,
        )

    # ==========================================================================
    # UPDATE
    # ==========================================================================

    async def update_order(
        self,
        identifier: str,
        update: OrderStatusUpdate,
    ) -> OrderUpdateResponse:
        """
        Apply an operator update.

        Raises:
            BadRequestError: If the body has no fields
            NotFoundError: If no order matches the identifier
            InvalidStatusTransitionError: If the status change is not allowed
        """
        data = update.model_dump(exclude_unset=True)
        # A null status or payment status means "leave unchanged"
        for key in ("status", "payment_status"):
            if key in data and data[key] is None:
                data.pop(key)
        if not data:
            raise BadRequestError(message=ErrorMessages.NO_FIELDS_TO_UPDATE)

        requested = data.pop("status", None)
        if "payment_status" in data:
            data["payment_status"] = PaymentStatus(data["payment_status"])

        async with UnitOfWork(self._adapter) as uow:
            order = await uow.orders.get_by_identifier(identifier)
            if order is None:
                raise NotFoundError(
                    message=ErrorMessages.ORDER_NOT_FOUND,
                    resource_type="order",
                    resource_id=identifier,
                )

            previous = OrderStatus(order.status)
            new_status = previous
            if requested is not None:
                new_status = OrderStatus(requested)
                if not previous.can_transition_to(new_status):
                    raise InvalidStatusTransitionError(
                        current_status=previous.value,
                        requested_status=new_status.value,
                        allowed=[s.value for s in previous.allowed_transitions],
                    )

            status_changed = new_status != previous
            if status_changed:
                data["status"] = new_status
                if (
                    new_status == OrderStatus.SHIPPED
                    and data.get("shipped_at") is None
                    and order.shipped_at is None
                ):
                    data["shipped_at"] = utc_now()
                if (
                    new_status == OrderStatus.DELIVERED
                    and data.get("delivered_at") is None
                    and order.delivered_at is None
                ):
                    data["delivered_at"] = utc_now()
                uow.status_events.append(
                    order,
                    new_status,
                    from_status=previous,
                    description=OrderConstants.STATUS_DESCRIPTIONS[new_status.value],
                )

            await uow.orders.update(order, data)
            row = OrderResponse.model_validate(order)

        if status_changed:
            logger.info(
                f"Order {order.order_number} status {previous.value} -> {new_status.value}"
            )

        email_sent = False
        if status_changed:
            email_sent = await self._notifier.notify_status_change(order, previous, new_status)

        return OrderUpdateResponse(
            data=row,
            email_sent=email_sent,
            message=SuccessMessages.ORDER_UPDATED,
        )

    # ==========================================================================
    # READS
    # ==========================================================================

    async def _get_loaded(self, uow: UnitOfWork, identifier: str) -> Order:
        order = await uow.orders.get_by_identifier(identifier)
        if order is None:
            raise NotFoundError(
                message=ErrorMessages.ORDER_NOT_FOUND,
                resource_type="order",
                resource_id=identifier,
            )
        return order

    async def get_view(self, identifier: str) -> OrderView:
        async with UnitOfWork(self._adapter) as uow:
            order = await self._get_loaded(uow, identifier)
            return OrderView.from_order(order)

    async def get_detail(self, identifier: str) -> OrderDetail:
        async with UnitOfWork(self._adapter) as uow:
            order = await self._get_loaded(uow, identifier)
            return OrderDetail.model_validate(order)

    async def list_orders(
        self,
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> ListResponse[OrderSummary]:
        status_filter = parse_status_filter(status)
        async with UnitOfWork(self._adapter) as uow:
            orders, total = await uow.orders.list_orders(
                status=status_filter, limit=limit, offset=offset
            )
            return ListResponse[OrderSummary](
                data=[OrderSummary.from_order(order) for order in orders],
                total=total,
            )

    async def account_orders(self, email: str) -> AccountOrdersResponse:
        async with UnitOfWork(self._adapter) as uow:
            customer = await uow.customers.find_by_email(email)
            if customer is None:
                return AccountOrdersResponse(message=SuccessMessages.NO_ACCOUNT)

            orders = await uow.orders.list_for_customer(customer)
            if not orders:
                return AccountOrdersResponse(message=SuccessMessages.NO_ORDERS)

            return AccountOrdersResponse(
                data=[AccountOrder.from_order(order) for order in orders]
            )

    async def export_rows(
        self,
        status: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: int = 10000,
    ) -> List[ExportRow]:
        status_filter = parse_status_filter(status)
        async with UnitOfWork(self._adapter) as uow:
            orders = await uow.orders.list_for_export(
                status=status_filter,
                start_date=start_date,
                end_date=end_date,
                limit=limit,
            )
            rows = build_export_rows(orders)
        logger.info(f"Exported {len(orders)} orders ({len(rows)} rows)")
        return rows

    # ==========================================================================
    # REVIEW REQUEST
    # ==========================================================================

    async def send_review_request(self, identifier: str) -> bool:
        async with UnitOfWork(self._adapter) as uow:
            order = await self._get_loaded(uow, identifier)
        return await self._notifier.send_review_request(order)
