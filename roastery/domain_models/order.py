# ==============================================================================
# ORDER MODELS - Checkout Transactions
# ==============================================================================
# Order header, line items and the append-only status log
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional
import enum

from sqlalchemy import (
    JSON,
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roastery.core.constants import DatabaseConstants, OrderConstants
from roastery.domain_models.base import SQLBase, TimestampMixin
from roastery.utils.helpers import utc_now

if TYPE_CHECKING:
    from roastery.domain_models.customer import Customer


class OrderStatus(str, enum.Enum):
    """Fulfillment lifecycle states."""
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"

    @property
    def allowed_transitions(self) -> frozenset["OrderStatus"]:
        return frozenset(
            OrderStatus(value)
            for value in OrderConstants.STATUS_TRANSITIONS[self.value]
        )

    def can_transition_to(self, target: "OrderStatus") -> bool:
        return target == self or target in self.allowed_transitions


class PaymentStatus(str, enum.Enum):
    """Payment states, tracked separately from fulfillment."""
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


def _enum_column(enum_cls: type[enum.Enum]) -> SQLEnum:
    # Store the lower-case values, not the member names
    return SQLEnum(
        enum_cls,
        values_callable=lambda e: [member.value for member in e],
        native_enum=False,
        length=20,
    )


def _money_column(**kwargs: Any) -> Mapped[Decimal]:
    return mapped_column(Numeric(precision=18, scale=2), nullable=False, **kwargs)


class Order(SQLBase, TimestampMixin):
    """
    Order header for one checkout.

    Money columns satisfy ``total_amount = subtotal + tax_amount +
    shipping_amount`` at creation. Addresses are kept as JSON blobs
    (``street, city, state, zipCode, country``).

    Relationships:
        customer: Linked customer, absent for unresolved guest orders
        items: Line items (owned, cascade delete)
        status_events: Append-only log of status changes
    """

    __tablename__ = DatabaseConstants.ORDERS_TABLE

    order_number: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
    )
    customer_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("customers.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
    )
    customer_email: Mapped[Optional[str]] = mapped_column(
        String(255),
        index=True,
        nullable=True,
    )

    # Status
    status: Mapped[OrderStatus] = mapped_column(
        _enum_column(OrderStatus),
        default=OrderStatus.PENDING,
        index=True,
        nullable=False,
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        _enum_column(PaymentStatus),
        default=PaymentStatus.PENDING,
        nullable=False,
    )

    # Money
    subtotal: Mapped[Decimal] = _money_column()
    tax_amount: Mapped[Decimal] = _money_column(default=Decimal("0.00"))
    shipping_amount: Mapped[Decimal] = _money_column(default=Decimal("0.00"))
    total_amount: Mapped[Decimal] = _money_column()
    currency: Mapped[str] = mapped_column(
        String(3),
        default="USD",
        nullable=False,
    )

    # Payment
    payment_intent_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        index=True,
        nullable=True,
    )
    payment_method: Mapped[Optional[str]] = mapped_column(
        String(50),
        default=OrderConstants.DEFAULT_PAYMENT_METHOD,
        nullable=True,
    )

    # Shipping
    shipping_address: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        JSON,
        nullable=True,
    )
    billing_address: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        JSON,
        nullable=True,
    )
    shipping_method: Mapped[str] = mapped_column(
        String(50),
        default=OrderConstants.DEFAULT_SHIPPING_METHOD,
        nullable=False,
    )
    tracking_number: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    tracking_url: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
    )

    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    shipped_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    delivered_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Relationships
    customer: Mapped[Optional["Customer"]] = relationship(
        "Customer",
        back_populates="orders",
    )
    items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
    )
    status_events: Mapped[List["OrderStatusEvent"]] = relationship(
        "OrderStatusEvent",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderStatusEvent.sequence",
    )

    @property
    def item_count(self) -> int:
        """Get total number of units in the order."""
        return sum(item.quantity for item in self.items)

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, order_number={self.order_number}, status={self.status})>"


class OrderItem(SQLBase, TimestampMixin):
    """
    Order line item.

    Product fields are a snapshot taken at checkout so the line survives
    catalog edits. ``total_price`` is computed once at insert.
    """

    __tablename__ = DatabaseConstants.ORDER_ITEMS_TABLE

    order_id: Mapped[str] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    position: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    # Snapshot of the catalog entry
    product_id: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    product_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    product_sku: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    product_image: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
    )

    quantity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    unit_price: Mapped[Decimal] = _money_column()
    total_price: Mapped[Decimal] = _money_column()

    order: Mapped["Order"] = relationship(
        "Order",
        back_populates="items",
    )

    def __repr__(self) -> str:
        return f"<OrderItem(id={self.id}, product={self.product_name}, qty={self.quantity})>"


class OrderStatusEvent(SQLBase):
    """
    One fulfillment status change.

    Rows are only ever appended, in the same transaction as the change
    they describe. ``from_status`` is empty for the creation event.
    """

    __tablename__ = DatabaseConstants.ORDER_STATUS_EVENTS_TABLE

    order_id: Mapped[str] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    sequence: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    from_status: Mapped[Optional[OrderStatus]] = mapped_column(
        _enum_column(OrderStatus),
        nullable=True,
    )
    to_status: Mapped[OrderStatus] = mapped_column(
        _enum_column(OrderStatus),
        nullable=False,
    )
    description: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

    order: Mapped["Order"] = relationship(
        "Order",
        back_populates="status_events",
    )

    def __repr__(self) -> str:
        return f"<OrderStatusEvent(order_id={self.order_id}, {self.from_status} -> {self.to_status})>"
