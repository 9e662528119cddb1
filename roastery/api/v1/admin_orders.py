# ==============================================================================
# ADMIN ORDER ENDPOINTS - Back-Office Order Management
# ==============================================================================
# Listing, CSV export, detail, status updates and review requests
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Path, Query
from fastapi.responses import StreamingResponse

from roastery.api.dependencies import AdminID, OrderServiceDep
from roastery.core.constants import APIConstants, SuccessMessages
from roastery.schemas.base import APIResponse, ListResponse
from roastery.schemas.order import (
    OrderDetail,
    OrderStatusUpdate,
    OrderSummary,
    OrderUpdateResponse,
    ReviewRequest,
)
from roastery.services.order_export import export_filename, iter_csv
from roastery.utils.helpers import utc_now

router = APIRouter(prefix="/admin/orders", tags=["Admin Orders"])


@router.get(
    "",
    response_model=ListResponse[OrderSummary],
    summary="List orders",
    description="Newest-first orders, optionally filtered by status.",
)
async def list_orders(
    admin_id: AdminID,
    service: OrderServiceDep,
    status_filter: Optional[str] = Query(None, alias="status"),
    limit: int = Query(APIConstants.DEFAULT_PAGE_SIZE, ge=1, le=APIConstants.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
) -> ListResponse[OrderSummary]:
    return await service.list_orders(status=status_filter, limit=limit, offset=offset)


# Declared before /{identifier} so "export" is not taken for an order id
@router.get(
    "/export",
    summary="Export orders as CSV",
    description="One row per line item; order totals only on each order's first row.",
    response_class=StreamingResponse,
)
async def export_orders(
    admin_id: AdminID,
    service: OrderServiceDep,
    status_filter: Optional[str] = Query(None, alias="status"),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    limit: int = Query(
        APIConstants.DEFAULT_EXPORT_LIMIT, ge=1, le=APIConstants.MAX_EXPORT_LIMIT
    ),
) -> StreamingResponse:
    rows = await service.export_rows(
        status=status_filter,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
    )
    filename = export_filename(utc_now())
    return StreamingResponse(
        iter_csv(rows),
        media_type=APIConstants.CSV_CONTENT_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post(
    "/send-review-request",
    response_model=APIResponse[dict],
    summary="Send review request",
    description="Email the customer of a delivered order asking for a review.",
)
async def send_review_request(
    admin_id: AdminID,
    schema: ReviewRequest,
    service: OrderServiceDep,
) -> APIResponse[dict]:
    sent = await service.send_review_request(schema.order_id)
    return APIResponse.ok(
        data={"emailSent": sent},
        message=SuccessMessages.REVIEW_REQUEST_SENT,
    )


@router.get(
    "/{identifier}",
    response_model=APIResponse[OrderDetail],
    summary="Get order detail",
    description="Order row with customer, line items and status history.",
)
async def get_order_detail(
    admin_id: AdminID,
    service: OrderServiceDep,
    identifier: str = Path(..., min_length=1, max_length=100),
) -> APIResponse[OrderDetail]:
    detail = await service.get_detail(identifier)
    return APIResponse.ok(data=detail)


@router.put(
    "/{identifier}",
    response_model=OrderUpdateResponse,
    summary="Update order",
    description=(
        "Update status, payment status, notes, fulfillment timestamps or "
        "tracking. Status changes must follow the fulfillment lifecycle."
    ),
)
async def update_order(
    admin_id: AdminID,
    schema: OrderStatusUpdate,
    service: OrderServiceDep,
    identifier: str = Path(..., min_length=1, max_length=100),
) -> OrderUpdateResponse:
    return await service.update_order(identifier, schema)
