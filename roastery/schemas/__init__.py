# ==============================================================================
# SCHEMAS PACKAGE INITIALIZATION
# ==============================================================================

"""
Pydantic Schemas
================

Request/Response validation schemas for API endpoints:
- Base: Common schemas and response wrappers
- Order: Checkout, status updates, order rows and client views
- Payment: Payment intent creation
"""

from roastery.schemas.base import (
    APIResponse,
    BaseSchema,
    CamelSchema,
    HealthResponse,
    ListResponse,
    Money,
)
from roastery.schemas.order import (
    AccountOrder,
    AccountOrdersResponse,
    AddressSchema,
    CheckoutItem,
    CustomerInfo,
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
    ReviewRequest,
)
from roastery.schemas.payment import (
    PaymentIntentCreate,
    PaymentIntentResponse,
)

__all__ = [
    # Base
    "APIResponse",
    "BaseSchema",
    "CamelSchema",
    "HealthResponse",
    "ListResponse",
    "Money",
    # Order
    "AccountOrder",
    "AccountOrdersResponse",
    "AddressSchema",
    "CheckoutItem",
    "CustomerInfo",
    "OrderCreatedData",
    "OrderCreateRequest",
    "OrderCreateResponse",
    "OrderDetail",
    "OrderRecoveryInfo",
    "OrderResponse",
    "OrderStatusUpdate",
    "OrderSummary",
    "OrderUpdateResponse",
    "OrderView",
    "ReviewRequest",
    # Payment
    "PaymentIntentCreate",
    "PaymentIntentResponse",
]
