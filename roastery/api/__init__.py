# ==============================================================================
# API PACKAGE INITIALIZATION
# ==============================================================================

"""
API Module
==========

FastAPI routers and endpoint definitions:
- Dependencies: Authentication, database access, external collaborators
- Routers: Orders, Account, Payments, Admin Orders
"""

from roastery.api.router import api_router

__all__ = ["api_router"]
