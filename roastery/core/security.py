# ==============================================================================
# SECURITY MODULE - Authentication & Authorization
# ==============================================================================
# JWT access tokens for the back-office and signed-in customers
# ==============================================================================

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from jose import JWTError, jwt

from roastery.core.constants import ErrorMessages, SecurityConstants
from roastery.core.settings import settings
from roastery.core.exceptions import (
    AuthorizationError,
    InvalidTokenError,
    TokenExpiredError,
)


# ==============================================================================
# JWT TOKEN MANAGEMENT
# ==============================================================================

class TokenType:
    """Token type constants."""
    ACCESS = "access"


def create_access_token(
    subject: Union[str, Any],
    expires_delta: Optional[timedelta] = None,
    additional_claims: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        subject: Token subject (operator or customer id)
        expires_delta: Custom expiration time (default from settings)
        additional_claims: Extra claims such as ``role`` or ``email``

    Returns:
        Encoded JWT access token string

    Example:
        >>> token = create_access_token("ops-1", additional_claims={"role": "admin"})
        >>> decode_token(token)["role"]
        'admin'
    """
    now = datetime.now(timezone.utc)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode: Dict[str, Any] = {
        "sub": str(subject),
        "exp": expire,
        "iat": now,
        "type": TokenType.ACCESS,
    }

    if additional_claims:
        to_encode.update(additional_claims)

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def decode_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a JWT token.

    Verifies the token signature and expiration time.

    Raises:
        TokenExpiredError: If token has expired
        InvalidTokenError: If token is invalid or malformed
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError(message=ErrorMessages.TOKEN_EXPIRED)
    except JWTError as e:
        raise InvalidTokenError(message=f"{ErrorMessages.TOKEN_INVALID}: {e}")


def verify_access_token(token: str) -> Dict[str, Any]:
    """
    Verify that a token is a valid access token.

    Raises:
        InvalidTokenError: If token is not an access token
        TokenExpiredError: If token has expired
    """
    payload = decode_token(token)

    if payload.get("type") != TokenType.ACCESS:
        raise InvalidTokenError(message="Invalid token type: expected access token")

    if not payload.get("sub"):
        raise InvalidTokenError(message="Invalid token payload")

    return payload


def require_role(payload: Dict[str, Any], role: str = SecurityConstants.ROLE_ADMIN) -> str:
    """
    Ensure a decoded token carries the given role.

    Returns:
        Token subject

    Raises:
        AuthorizationError: If the role claim does not match
    """
    if payload.get("role") != role:
        if role == SecurityConstants.ROLE_ADMIN:
            raise AuthorizationError(message=ErrorMessages.ADMIN_REQUIRED, required_role=role)
        raise AuthorizationError(required_role=role)
    return payload["sub"]
