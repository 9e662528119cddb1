# ==============================================================================
# DATABASE ADAPTERS PACKAGE
# ==============================================================================

"""
Database Adapters
=================

Provides unified interface implementations for different databases:
- BaseDatabaseAdapter: Abstract interface definition
- SQLAlchemyAdapter: Shared async engine and session handling
- PostgreSQLAdapter: PostgreSQL using asyncpg
- SQLiteAdapter: SQLite using aiosqlite
"""

from roastery.database.adapters.base_adapter import BaseDatabaseAdapter
from roastery.database.adapters.sql_adapter import SQLAlchemyAdapter
from roastery.database.adapters.postgresql_adapter import PostgreSQLAdapter
from roastery.database.adapters.sqlite_adapter import SQLiteAdapter

__all__ = [
    "BaseDatabaseAdapter",
    "SQLAlchemyAdapter",
    "PostgreSQLAdapter",
    "SQLiteAdapter",
]
