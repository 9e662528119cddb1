# ==============================================================================
# UNIT OF WORK PACKAGE INITIALIZATION
# ==============================================================================

"""
Unit of Work Pattern Implementation
===================================

Provides transactional consistency across repository operations:
- UnitOfWork: One session shared by the customer, order and
  status-event repositories
"""

from roastery.database.unit_of_work.uow import AbstractUnitOfWork, UnitOfWork

__all__ = [
    "AbstractUnitOfWork",
    "UnitOfWork",
]
