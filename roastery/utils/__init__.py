# ==============================================================================
# UTILS PACKAGE INITIALIZATION
# ==============================================================================

"""
Utilities Module
================

Helper functions and utilities:
- ID and order number generators
- Date/time utilities
- Money rounding and formatting
"""

from roastery.utils.helpers import (
    as_utc,
    format_money,
    generate_order_number,
    generate_uuid,
    to_money,
    utc_now,
)

__all__ = [
    "as_utc",
    "format_money",
    "generate_order_number",
    "generate_uuid",
    "to_money",
    "utc_now",
]
