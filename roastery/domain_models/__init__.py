# ==============================================================================
# DOMAIN MODELS PACKAGE INITIALIZATION
# ==============================================================================

"""
Domain Models
=============

SQLAlchemy ORM models for database entities:
- Customer: People who place orders
- Order/OrderItem: Checkout header and line items
- OrderStatusEvent: Append-only fulfillment history

Importing this package registers every table on ``SQLBase.metadata``.
"""

from roastery.domain_models.base import SQLBase, TimestampMixin
from roastery.domain_models.customer import Customer
from roastery.domain_models.order import (
    Order,
    OrderItem,
    OrderStatus,
    OrderStatusEvent,
    PaymentStatus,
)

__all__ = [
    "SQLBase",
    "TimestampMixin",
    "Customer",
    "Order",
    "OrderItem",
    "OrderStatus",
    "OrderStatusEvent",
    "PaymentStatus",
]
