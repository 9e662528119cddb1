# ==============================================================================
# API V1 ENDPOINTS PACKAGE
# ==============================================================================

"""
API V1 Endpoints
================

Version 1 API endpoint implementations.
"""

from roastery.api.v1.account import router as account_router
from roastery.api.v1.admin_orders import router as admin_orders_router
from roastery.api.v1.orders import router as orders_router
from roastery.api.v1.payments import router as payments_router

__all__ = [
    "account_router",
    "admin_orders_router",
    "orders_router",
    "payments_router",
]
