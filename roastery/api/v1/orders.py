# ==============================================================================
# ORDER ENDPOINTS - Storefront Checkout & Lookup
# ==============================================================================
# Public order creation and client order view
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter, Path, status

from roastery.api.dependencies import OrderServiceDep
from roastery.schemas.base import APIResponse
from roastery.schemas.order import (
    OrderCreateRequest,
    OrderCreateResponse,
    OrderView,
)

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post(
    "",
    response_model=OrderCreateResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create order",
    description=(
        "Record an order after its card payment settled. The payment intent "
        "is verified with the processor before anything is written."
    ),
)
async def create_order(
    schema: OrderCreateRequest,
    service: OrderServiceDep,
) -> OrderCreateResponse:
    return await service.create_order(schema)


@router.get(
    "/{identifier}",
    response_model=APIResponse[OrderView],
    summary="Get order",
    description="Client view of an order by internal id or order number.",
)
async def get_order(
    service: OrderServiceDep,
    identifier: str = Path(..., min_length=1, max_length=100),
) -> APIResponse[OrderView]:
    view = await service.get_view(identifier)
    return APIResponse.ok(data=view)
