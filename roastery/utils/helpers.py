# ==============================================================================
# HELPER UTILITIES
# ==============================================================================
# Common utility functions used across the application
# ==============================================================================

from __future__ import annotations

import secrets
import time
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, Union
from uuid import uuid4

from roastery.core.constants import OrderConstants

CENT = Decimal("0.01")


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid4())


def generate_order_number(now_ms: Optional[int] = None) -> str:
    """
    Generate a human-facing order number.

    Args:
        now_ms: Epoch milliseconds (defaults to the current time)

    Returns:
        Order number such as ``ORD-1760000000000-k3j9x0a1b``
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    random_part = "".join(
        secrets.choice(OrderConstants.ORDER_NUMBER_ALPHABET)
        for _ in range(OrderConstants.ORDER_NUMBER_RANDOM_LENGTH)
    )
    return f"{OrderConstants.ORDER_NUMBER_PREFIX}-{now_ms}-{random_part}"


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Attach UTC to naive datetimes.

    SQLite hands timezone-aware columns back without tzinfo; every value
    this service writes is UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_money(value: Union[Decimal, int, float, str, None]) -> Decimal:
    """Round a value half-up to cents."""
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value: Any) -> str:
    """Format a money value with two decimals ("" for missing values)."""
    if value is None or value == "":
        return ""
    return f"{to_money(value):.2f}"
