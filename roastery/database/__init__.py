# ==============================================================================
# DATABASE PACKAGE INITIALIZATION
# ==============================================================================
# Database Abstraction Layer with SQLite and PostgreSQL support
# ==============================================================================

"""
Database Module
===============

Provides a unified database abstraction layer supporting:
- SQLite (development/testing)
- PostgreSQL (production)

Key Components:
- Adapters: Database-specific engines and sessions
- Factory: Lazy adapter instantiation
- Repositories: Data access abstraction
- Unit of Work: Transaction management
"""

from roastery.database.factory import DatabaseFactory
from roastery.database.adapters.base_adapter import BaseDatabaseAdapter
from roastery.database.unit_of_work import UnitOfWork

__all__ = [
    "DatabaseFactory",
    "BaseDatabaseAdapter",
    "UnitOfWork",
]
