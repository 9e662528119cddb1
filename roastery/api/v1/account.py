# ==============================================================================
# ACCOUNT ENDPOINTS - Customer Order History
# ==============================================================================

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query

from roastery.api.dependencies import OptionalTokenPayload, OrderServiceDep
from roastery.core.constants import ErrorMessages
from roastery.core.exceptions import AuthenticationError
from roastery.schemas.order import AccountOrdersResponse

router = APIRouter(prefix="/account", tags=["Account"])


@router.get(
    "/orders",
    response_model=AccountOrdersResponse,
    summary="Order history",
    description=(
        "Orders for the signed-in customer (``email`` claim of the bearer "
        "token) or for the ``email`` query parameter."
    ),
)
async def list_account_orders(
    service: OrderServiceDep,
    payload: OptionalTokenPayload,
    email: Optional[str] = Query(None, max_length=255),
) -> AccountOrdersResponse:
    lookup_email = (payload or {}).get("email") or email
    if not lookup_email or not lookup_email.strip():
        raise AuthenticationError(message=ErrorMessages.ACCOUNT_EMAIL_REQUIRED)

    return await service.account_orders(lookup_email)
