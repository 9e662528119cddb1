# ==============================================================================
# CORE PACKAGE INITIALIZATION
# ==============================================================================
# Core utilities: Settings, Security, Exceptions, Constants
# ==============================================================================

"""
Core Module
===========

Contains core utilities and configurations for the application:
- settings: Environment configuration management
- security: JWT access tokens and role checks
- exceptions: Custom exception classes
- constants: Application-wide constants
"""

from roastery.core.settings import settings, get_settings, DatabaseType
from roastery.core.exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
    DatabaseError,
    InvalidStatusTransitionError,
    NotFoundError,
    NotificationError,
    PaymentNotCompletedError,
    PaymentProviderError,
)

__all__ = [
    "settings",
    "get_settings",
    "DatabaseType",
    "AppException",
    "AuthenticationError",
    "AuthorizationError",
    "BadRequestError",
    "DatabaseError",
    "InvalidStatusTransitionError",
    "NotFoundError",
    "NotificationError",
    "PaymentNotCompletedError",
    "PaymentProviderError",
]
