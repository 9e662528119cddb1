# ==============================================================================
# API DEPENDENCIES - Dependency Injection
# ==============================================================================
# FastAPI dependencies for authentication, database access and external
# collaborators
# ==============================================================================

from __future__ import annotations

from typing import Annotated, Any, Dict, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from roastery.core.constants import ErrorMessages, SecurityConstants
from roastery.core.exceptions import AuthenticationError
from roastery.core.security import require_role, verify_access_token
from roastery.core.settings import settings
from roastery.database.adapters.base_adapter import BaseDatabaseAdapter
from roastery.database.factory import DatabaseFactory
from roastery.integrations.email import EmailSender, HttpEmailSender
from roastery.integrations.payments import PaymentGateway, StripePaymentGateway
from roastery.services.notification_service import OrderNotifier
from roastery.services.order_service import OrderService

# Bearer tokens are issued by the storefront's auth service
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_PREFIX}/auth/login",
    auto_error=False,
)


# ==============================================================================
# DATABASE DEPENDENCIES
# ==============================================================================

async def get_adapter() -> BaseDatabaseAdapter:
    """
    Get database adapter dependency.

    Connects on first use; later requests share the same pool.
    """
    return await DatabaseFactory.get_or_initialize()


DatabaseDep = Annotated[BaseDatabaseAdapter, Depends(get_adapter)]


# ==============================================================================
# EXTERNAL COLLABORATORS
# ==============================================================================

def get_payment_gateway() -> PaymentGateway:
    return StripePaymentGateway()


def get_email_sender() -> EmailSender:
    return HttpEmailSender()


PaymentGatewayDep = Annotated[PaymentGateway, Depends(get_payment_gateway)]
EmailSenderDep = Annotated[EmailSender, Depends(get_email_sender)]


def get_notifier(sender: EmailSenderDep) -> OrderNotifier:
    return OrderNotifier(sender)


NotifierDep = Annotated[OrderNotifier, Depends(get_notifier)]


# ==============================================================================
# AUTHENTICATION DEPENDENCIES
# ==============================================================================

async def get_token_payload(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
) -> Dict[str, Any]:
    """
    Decode the bearer token.

    Raises:
        AuthenticationError: If no token was sent
        TokenExpiredError: If the token has expired
        InvalidTokenError: If the token is malformed or not an access token
    """
    if not token:
        raise AuthenticationError(message=ErrorMessages.UNAUTHORIZED)
    return verify_access_token(token)


async def get_optional_token_payload(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
) -> Optional[Dict[str, Any]]:
    """
    Decode the bearer token if one was sent.

    A bad token is still an error; only a missing one is optional.
    """
    if not token:
        return None
    return verify_access_token(token)


async def get_admin_id(
    payload: Annotated[Dict[str, Any], Depends(get_token_payload)],
) -> str:
    """
    Raises:
        AuthorizationError: If the token's role is not ``admin``
    """
    return require_role(payload, SecurityConstants.ROLE_ADMIN)


TokenPayload = Annotated[Dict[str, Any], Depends(get_token_payload)]
OptionalTokenPayload = Annotated[Optional[Dict[str, Any]], Depends(get_optional_token_payload)]
AdminID = Annotated[str, Depends(get_admin_id)]


# ==============================================================================
# SERVICE DEPENDENCIES
# ==============================================================================

async def get_order_service(
    adapter: DatabaseDep,
    gateway: PaymentGatewayDep,
    notifier: NotifierDep,
) -> OrderService:
    """Get order service instance."""
    return OrderService(adapter, gateway, notifier)


OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
