# ==============================================================================
# APPLICATION CONSTANTS - Centralized Configuration Values
# ==============================================================================
# Immutable constants used throughout the application
# Organized by category for easy maintenance
# ==============================================================================

from __future__ import annotations

from typing import Final, Mapping, Tuple


# ==============================================================================
# API CONSTANTS
# ==============================================================================

class APIConstants:
    """API-related constants."""

    # Pagination defaults
    DEFAULT_PAGE_SIZE: Final[int] = 50
    MAX_PAGE_SIZE: Final[int] = 200
    DEFAULT_EXPORT_LIMIT: Final[int] = 10000
    MAX_EXPORT_LIMIT: Final[int] = 50000

    # Response headers
    REQUEST_ID_HEADER: Final[str] = "X-Request-ID"
    RESPONSE_TIME_HEADER: Final[str] = "X-Response-Time"

    # Content types
    CSV_CONTENT_TYPE: Final[str] = "text/csv"


# ==============================================================================
# DATABASE CONSTANTS
# ==============================================================================

class DatabaseConstants:
    """Table names."""

    CUSTOMERS_TABLE: Final[str] = "customers"
    ORDERS_TABLE: Final[str] = "orders"
    ORDER_ITEMS_TABLE: Final[str] = "order_items"
    ORDER_STATUS_EVENTS_TABLE: Final[str] = "order_status_events"


# ==============================================================================
# SECURITY CONSTANTS
# ==============================================================================

class SecurityConstants:
    """Security-related constants."""

    ROLE_ADMIN: Final[str] = "admin"
    ROLE_CUSTOMER: Final[str] = "customer"


# ==============================================================================
# ORDER CONSTANTS
# ==============================================================================

class OrderConstants:
    """Order lifecycle constants."""

    # Order number format: ORD-<epoch millis>-<random base36>
    ORDER_NUMBER_PREFIX: Final[str] = "ORD"
    ORDER_NUMBER_RANDOM_LENGTH: Final[int] = 9
    ORDER_NUMBER_ALPHABET: Final[str] = "0123456789abcdefghijklmnopqrstuvwxyz"

    DEFAULT_SHIPPING_METHOD: Final[str] = "standard"
    DEFAULT_PAYMENT_METHOD: Final[str] = "card"
    PAYMENT_SUCCEEDED: Final[str] = "succeeded"

    # Fulfillment transitions. Writing the current status again is not a
    # transition and is always accepted.
    STATUS_TRANSITIONS: Final[Mapping[str, Tuple[str, ...]]] = {
        "pending": ("processing", "shipped", "cancelled"),
        "processing": ("shipped", "cancelled", "refunded"),
        "shipped": ("delivered", "refunded"),
        "delivered": ("refunded",),
        "cancelled": ("refunded",),
        "refunded": (),
    }

    STATUS_DESCRIPTIONS: Final[Mapping[str, str]] = {
        "pending": "Order confirmed",
        "processing": "Order is being prepared",
        "shipped": "Order shipped",
        "delivered": "Order delivered",
        "cancelled": "Order cancelled",
        "refunded": "Order refunded",
    }

    # Recovery code returned when payment settled but the order write failed
    RECORD_FAILED_CODE: Final[str] = "ORDER_RECORD_FAILED"


# ==============================================================================
# EXPORT CONSTANTS
# ==============================================================================

class ExportConstants:
    """CSV export layout."""

    HEADER: Final[Tuple[str, ...]] = (
        "Order Number",
        "Order Date",
        "Status",
        "Payment Status",
        "Customer Name",
        "Customer Email",
        "Customer Phone",
        "Shipping Address",
        "Billing Address",
        "Item Name",
        "Item SKU",
        "Quantity",
        "Unit Price",
        "Item Total",
        "Subtotal",
        "Tax",
        "Shipping",
        "Total",
        "Currency",
        "Payment Method",
        "Shipped Date",
        "Delivered Date",
        "Tracking Number",
        "Notes",
    )

    DATE_FORMAT: Final[str] = "%m/%d/%Y, %I:%M %p"
    FILENAME_TEMPLATE: Final[str] = "orders-export-{date}.csv"
    GUEST_NAME: Final[str] = "Guest"


# ==============================================================================
# ERROR MESSAGES
# ==============================================================================

class ErrorMessages:
    """Standardized error messages."""

    # Authentication
    TOKEN_EXPIRED: Final[str] = "Authentication token has expired"
    TOKEN_INVALID: Final[str] = "Invalid authentication token"
    UNAUTHORIZED: Final[str] = "Authentication required"
    ADMIN_REQUIRED: Final[str] = "Administrator access required"
    ACCOUNT_EMAIL_REQUIRED: Final[str] = (
        "Please log in or provide your email to view orders."
    )

    # Resources
    ORDER_NOT_FOUND: Final[str] = "Order not found"

    # Orders
    PAYMENT_NOT_COMPLETED: Final[str] = "Payment not completed"
    NO_FIELDS_TO_UPDATE: Final[str] = "No fields to update"
    ORDER_RECORD_FAILED: Final[str] = (
        "Your payment was received, but we could not save your order record. "
        "Our team has been notified and will contact you to confirm your order."
    )
    REVIEW_REQUIRES_DELIVERY: Final[str] = (
        "Review requests can only be sent for delivered orders"
    )
    CUSTOMER_EMAIL_MISSING: Final[str] = "Customer email not found for this order"

    # Payments
    AMOUNT_TOO_SMALL: Final[str] = "Invalid amount. Minimum charge is ${amount}"


# ==============================================================================
# SUCCESS MESSAGES
# ==============================================================================

class SuccessMessages:
    """Standardized success messages."""

    ORDER_PLACED: Final[str] = "Order placed successfully"
    ORDER_UPDATED: Final[str] = "Order updated successfully"
    REVIEW_REQUEST_SENT: Final[str] = "Review request email sent successfully"
    NO_ACCOUNT: Final[str] = (
        "No account found. Orders will appear here after your first purchase."
    )
    NO_ORDERS: Final[str] = (
        "No orders found. Your order history will appear here after you place an order."
    )
