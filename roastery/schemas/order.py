# ==============================================================================
# ORDER SCHEMAS - Checkout, Fulfillment and Order Views
# ==============================================================================
# Request/Response schemas for order management
# ==============================================================================

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import EmailStr, Field, field_validator

from roastery.core.constants import ExportConstants
from roastery.core.settings import settings
from roastery.domain_models.order import Order, OrderStatus, PaymentStatus
from roastery.schemas.base import CamelSchema, Money
from roastery.utils.helpers import as_utc


class UTCSchema(CamelSchema):
    """Attaches UTC to naive datetimes read back from SQLite."""

    @field_validator("*", mode="after")
    @classmethod
    def _attach_utc(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return as_utc(value)
        return value


# ==============================================================================
# CHECKOUT (REQUEST)
# ==============================================================================

class AddressSchema(CamelSchema):
    """Postal address as sent by the storefront."""

    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    zip_code: Optional[str] = Field(None, max_length=20)
    country: str = Field("US", max_length=100)


class CheckoutItem(CamelSchema):
    """One cart line at checkout."""

    id: str = Field(..., min_length=1, description="Catalog product id")
    name: str = Field(..., min_length=1, max_length=255)
    sku: Optional[str] = Field(None, max_length=100)
    price: Decimal = Field(..., ge=0, description="Unit price")
    quantity: int = Field(..., ge=1)
    image: Optional[str] = Field(None, max_length=500)


class CustomerInfo(CamelSchema):
    """Contact details captured at checkout."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=50)


class OrderCreateRequest(CamelSchema):
    """
    Checkout request sent after the card payment was confirmed client-side.

    ``total_amount`` is what the storefront displayed; the stored total is
    recomputed from the items.
    """

    payment_intent_id: str = Field(..., min_length=1, max_length=255)
    items: List[CheckoutItem] = Field(..., min_length=1)
    shipping_address: AddressSchema
    billing_address: Optional[AddressSchema] = None
    customer_info: CustomerInfo
    total_amount: Decimal = Field(..., ge=0)
    shipping_method: Optional[str] = Field(None, max_length=50)
    shipping_cost: Decimal = Field(Decimal("0.00"), ge=0)
    tax_amount: Decimal = Field(Decimal("0.00"), ge=0)


# ==============================================================================
# CHECKOUT (RESPONSE)
# ==============================================================================

class OrderCreatedData(UTCSchema):
    order_id: str = Field(..., description="Human-facing order number")
    order_uuid: Optional[str] = Field(None, description="Internal order id")
    status: str
    total: Money
    created_at: datetime


class OrderRecoveryInfo(CamelSchema):
    """Reference data for reconciling a paid order that was not recorded."""

    code: str
    payment_intent_id: str
    order_number: str


class OrderCreateResponse(CamelSchema):
    success: bool = True
    data: OrderCreatedData
    message: str
    warning: Optional[str] = None
    recovery: Optional[OrderRecoveryInfo] = None


# ==============================================================================
# STATUS UPDATE
# ==============================================================================

class OrderStatusUpdate(CamelSchema):
    """
    Operator update. Only fields present in the body are written.
    """

    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None
    notes: Optional[str] = Field(None, max_length=5000)
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    tracking_number: Optional[str] = Field(None, max_length=100)
    tracking_url: Optional[str] = Field(None, max_length=500)


# ==============================================================================
# ORDER ROWS (ADMIN)
# ==============================================================================

class OrderItemResponse(UTCSchema):
    id: str
    product_id: Optional[str] = None
    product_name: str
    product_sku: Optional[str] = None
    product_image: Optional[str] = None
    quantity: int
    unit_price: Money
    total_price: Money


class OrderStatusEventResponse(UTCSchema):
    from_status: Optional[OrderStatus] = None
    to_status: OrderStatus
    description: Optional[str] = None
    created_at: datetime


class CustomerResponse(UTCSchema):
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None


class OrderResponse(UTCSchema):
    """Order header row."""

    id: str
    order_number: str
    customer_id: Optional[str] = None
    customer_email: Optional[str] = None
    status: OrderStatus
    payment_status: PaymentStatus
    subtotal: Money
    tax_amount: Money
    shipping_amount: Money
    total_amount: Money
    currency: str
    payment_intent_id: Optional[str] = None
    payment_method: Optional[str] = None
    shipping_address: Optional[Dict[str, Any]] = None
    billing_address: Optional[Dict[str, Any]] = None
    shipping_method: str
    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None


class OrderDetail(OrderResponse):
    """Order row with its customer, items and status history."""

    customer: Optional[CustomerResponse] = None
    items: List[OrderItemResponse] = Field(default_factory=list)
    status_events: List[OrderStatusEventResponse] = Field(default_factory=list)


class OrderUpdateResponse(CamelSchema):
    success: bool = True
    data: OrderResponse
    email_sent: bool = False
    message: Optional[str] = None


class OrderSummary(UTCSchema):
    """Admin list row."""

    id: str
    order_number: str
    status: OrderStatus
    payment_status: PaymentStatus
    total_amount: Money
    currency: str
    item_count: int
    customer_email: Optional[str] = None
    customer_name: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_order(cls, order: Order) -> "OrderSummary":
        customer = order.customer
        return cls(
            id=order.id,
            order_number=order.order_number,
            status=order.status,
            payment_status=order.payment_status,
            total_amount=order.total_amount,
            currency=order.currency,
            item_count=order.item_count,
            customer_email=customer.email if customer else order.customer_email,
            customer_name=(
                customer.full_name if customer and customer.full_name
                else ExportConstants.GUEST_NAME
            ),
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


# ==============================================================================
# CLIENT VIEW
# ==============================================================================

class ViewItem(CamelSchema):
    product_id: Optional[str] = None
    name: str
    sku: Optional[str] = None
    price: Money
    quantity: int
    total: Money
    image: Optional[str] = None


class ViewCustomer(CamelSchema):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class ViewShipping(CamelSchema):
    address: Optional[Dict[str, Any]] = None
    method: str
    cost: Money
    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None


class ViewTotals(CamelSchema):
    subtotal: Money
    shipping: Money
    tax: Money
    total: Money


class TrackingEvent(UTCSchema):
    status: OrderStatus
    timestamp: datetime
    description: Optional[str] = None


class ViewTracking(UTCSchema):
    status: OrderStatus
    estimated_delivery: Optional[datetime] = None
    history: List[TrackingEvent] = Field(default_factory=list)


class OrderView(UTCSchema):
    """
    Client-facing order view.

    Built from the order, its items, its customer and the status-event
    log. The same order renders identically whether it was looked up by
    internal id or by order number.
    """

    id: str
    order_number: str
    status: OrderStatus
    payment_status: PaymentStatus
    payment_intent_id: Optional[str] = None
    items: List[ViewItem]
    customer: ViewCustomer
    shipping: ViewShipping
    billing_address: Optional[Dict[str, Any]] = None
    totals: ViewTotals
    tracking: ViewTracking
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None

    @classmethod
    def from_order(cls, order: Order) -> "OrderView":
        customer = order.customer
        if customer is not None:
            view_customer = ViewCustomer(
                first_name=customer.first_name,
                last_name=customer.last_name,
                email=customer.email,
                phone=customer.phone,
            )
        else:
            view_customer = ViewCustomer(email=order.customer_email)

        shipped_at = as_utc(order.shipped_at)
        estimated_delivery = None
        if order.status == OrderStatus.SHIPPED and shipped_at is not None:
            estimated_delivery = shipped_at + timedelta(
                days=settings.SHIPPING_DELIVERY_DAYS
            )

        return cls(
            id=order.id,
            order_number=order.order_number,
            status=order.status,
            payment_status=order.payment_status,
            payment_intent_id=order.payment_intent_id,
            items=[
                ViewItem(
                    product_id=item.product_id,
                    name=item.product_name,
                    sku=item.product_sku,
                    price=item.unit_price,
                    quantity=item.quantity,
                    total=item.total_price,
                    image=item.product_image,
                )
                for item in order.items
            ],
            customer=view_customer,
            shipping=ViewShipping(
                address=order.shipping_address,
                method=order.shipping_method,
                cost=order.shipping_amount,
                tracking_number=order.tracking_number,
                tracking_url=order.tracking_url,
            ),
            billing_address=order.billing_address,
            totals=ViewTotals(
                subtotal=order.subtotal,
                shipping=order.shipping_amount,
                tax=order.tax_amount,
                total=order.total_amount,
            ),
            tracking=ViewTracking(
                status=order.status,
                estimated_delivery=estimated_delivery,
                history=[
                    TrackingEvent(
                        status=event.to_status,
                        timestamp=event.created_at,
                        description=event.description,
                    )
                    for event in order.status_events
                ],
            ),
            notes=order.notes,
            created_at=order.created_at,
            updated_at=order.updated_at,
            shipped_at=order.shipped_at,
            delivered_at=order.delivered_at,
        )


# ==============================================================================
# ACCOUNT HISTORY
# ==============================================================================

class AccountOrderItem(CamelSchema):
    name: str
    quantity: int
    price: Money
    image: Optional[str] = None


class AccountOrder(UTCSchema):
    id: str
    order_number: str
    status: OrderStatus
    payment_status: PaymentStatus
    total: Money
    item_count: int
    items: List[AccountOrderItem]
    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None
    created_at: datetime
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None

    @classmethod
    def from_order(cls, order: Order) -> "AccountOrder":
        return cls(
            id=order.id,
            order_number=order.order_number,
            status=order.status,
            payment_status=order.payment_status,
            total=order.total_amount,
            item_count=order.item_count,
            items=[
                AccountOrderItem(
                    name=item.product_name,
                    quantity=item.quantity,
                    price=item.unit_price,
                    image=item.product_image,
                )
                for item in order.items
            ],
            tracking_number=order.tracking_number,
            tracking_url=order.tracking_url,
            created_at=order.created_at,
            shipped_at=order.shipped_at,
            delivered_at=order.delivered_at,
        )


class AccountOrdersResponse(CamelSchema):
    success: bool = True
    data: List[AccountOrder] = Field(default_factory=list)
    message: Optional[str] = None


# ==============================================================================
# REVIEW REQUEST
# ==============================================================================

class ReviewRequest(CamelSchema):
    order_id: str = Field(
        ...,
        min_length=1,
        description="Internal order id or order number",
    )
