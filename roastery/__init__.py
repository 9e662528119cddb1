# ==============================================================================
# ROASTERY PACKAGE INITIALIZATION
# ==============================================================================
# Order back-office for the Vendetta Roasting storefront
# Architecture: Repository Pattern, Unit of Work, Factory Pattern
# ==============================================================================

"""
Roastery Orders Service
=======================

FastAPI service covering the order lifecycle of a coffee-roaster
storefront.

Features:
---------
- Order creation after a settled card payment
- Customer find-or-create by email
- Operator status transitions with an append-only history
- Transactional emails (confirmation, shipped, delivered, review request)
- Client order lookup, account history, admin listing and CSV export

Usage:
------
    uvicorn roastery.main:app --reload
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
