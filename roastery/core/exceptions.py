# ==============================================================================
# CUSTOM EXCEPTIONS - Application Error Hierarchy
# ==============================================================================
# Structured exception classes for consistent error handling
# Each exception maps to appropriate HTTP status codes
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional


class AppException(Exception):
    """
    Base exception for all application errors.

    Provides a consistent interface for error handling with:
    - Error code for programmatic identification
    - HTTP status code mapping
    - Detailed message and optional context

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        status_code: HTTP status code to return
        details: Additional context dictionary
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary format for JSON response.

        Returns:
            Dictionary containing error details
        """
        return {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}', "
            f"status_code={self.status_code})"
        )


# ==============================================================================
# DATABASE EXCEPTIONS
# ==============================================================================

class DatabaseError(AppException):
    """
    Base exception for database-related errors.

    Raised when the storage layer cannot be reached or a query fails
    outside of a handled business path.
    """

    def __init__(
        self,
        message: str = "Database operation failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="DATABASE_ERROR",
            status_code=503,
            details=details,
        )


# ==============================================================================
# RESOURCE EXCEPTIONS
# ==============================================================================

class NotFoundError(AppException):
    """
    Raised when a requested resource does not exist.

    Maps to HTTP 404 Not Found.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
    ) -> None:
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = str(resource_id)

        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            status_code=404,
            details=details,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class BadRequestError(AppException):
    """
    Raised for malformed or invalid requests.

    Maps to HTTP 400 Bad Request.
    """

    def __init__(
        self,
        message: str = "Bad request",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="BAD_REQUEST",
            status_code=400,
            details=details,
        )


# ==============================================================================
# AUTHENTICATION & AUTHORIZATION EXCEPTIONS
# ==============================================================================

class AuthenticationError(AppException):
    """
    Raised when authentication fails.

    Maps to HTTP 401 Unauthorized.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="AUTHENTICATION_ERROR",
            status_code=401,
            details=details,
        )


class AuthorizationError(AppException):
    """
    Raised when the caller lacks permission for an action.

    Maps to HTTP 403 Forbidden.
    """

    def __init__(
        self,
        message: str = "Permission denied",
        required_role: Optional[str] = None,
    ) -> None:
        details = {}
        if required_role:
            details["required_role"] = required_role

        super().__init__(
            message=message,
            error_code="AUTHORIZATION_ERROR",
            status_code=403,
            details=details,
        )


class TokenExpiredError(AuthenticationError):
    """Raised when a JWT has expired."""

    def __init__(
        self,
        message: str = "Token has expired",
    ) -> None:
        super().__init__(message=message)
        self.error_code = "TOKEN_EXPIRED"


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT is invalid or malformed."""

    def __init__(
        self,
        message: str = "Invalid token",
    ) -> None:
        super().__init__(message=message)
        self.error_code = "INVALID_TOKEN"


# ==============================================================================
# PAYMENT EXCEPTIONS
# ==============================================================================

class PaymentNotCompletedError(AppException):
    """
    Raised when a payment intent has not settled.

    Covers every processor status other than ``succeeded`` as well as
    payment intent ids the processor does not know. Maps to HTTP 400.
    """

    def __init__(
        self,
        message: str = "Payment not completed",
        payment_intent_id: Optional[str] = None,
        payment_status: Optional[str] = None,
    ) -> None:
        details = {}
        if payment_intent_id:
            details["payment_intent_id"] = payment_intent_id
        if payment_status:
            details["payment_status"] = payment_status

        super().__init__(
            message=message,
            error_code="PAYMENT_NOT_COMPLETED",
            status_code=400,
            details=details,
        )


class PaymentProviderError(AppException):
    """
    Raised when the payment processor cannot be reached or errors out.

    Maps to HTTP 502 Bad Gateway.
    """

    def __init__(
        self,
        message: str = "Payment provider error",
        provider: str = "stripe",
    ) -> None:
        super().__init__(
            message=message,
            error_code="PAYMENT_PROVIDER_ERROR",
            status_code=502,
            details={"provider": provider},
        )


# ==============================================================================
# ORDER LIFECYCLE EXCEPTIONS
# ==============================================================================

class InvalidStatusTransitionError(AppException):
    """
    Raised when an order status change is not in the transition table.

    Maps to HTTP 409 Conflict.

    Attributes:
        current_status: Status the order is in
        requested_status: Status the caller asked for
        allowed: Statuses reachable from the current one
    """

    def __init__(
        self,
        current_status: str,
        requested_status: str,
        allowed: Iterable[str] = (),
    ) -> None:
        self.current_status = current_status
        self.requested_status = requested_status
        self.allowed = sorted(allowed)

        super().__init__(
            message=(
                f"Cannot change order status from '{current_status}' "
                f"to '{requested_status}'"
            ),
            error_code="INVALID_STATUS_TRANSITION",
            status_code=409,
            details={
                "current_status": current_status,
                "requested_status": requested_status,
                "allowed_statuses": self.allowed,
            },
        )


# ==============================================================================
# NOTIFICATION EXCEPTIONS
# ==============================================================================

class NotificationError(AppException):
    """
    Raised when a transactional email cannot be delivered.

    Order lifecycle notifications swallow this error; it only reaches the
    client for operator-triggered sends. Maps to HTTP 502.
    """

    def __init__(
        self,
        message: str = "Failed to send email",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="NOTIFICATION_ERROR",
            status_code=502,
            details=details,
        )
