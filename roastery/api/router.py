# ==============================================================================
# MAIN API ROUTER - Route Aggregation
# ==============================================================================
# Combines all API version routers
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter

from roastery.core.settings import settings
from roastery.api.v1 import (
    account_router,
    admin_orders_router,
    orders_router,
    payments_router,
)

# Create main API router
api_router = APIRouter()

# Include v1 routers with API prefix
api_router.include_router(orders_router, prefix=settings.API_V1_PREFIX)
api_router.include_router(account_router, prefix=settings.API_V1_PREFIX)
api_router.include_router(payments_router, prefix=settings.API_V1_PREFIX)
api_router.include_router(admin_orders_router, prefix=settings.API_V1_PREFIX)
