# ==============================================================================
# BASE DATABASE ADAPTER - Abstract Interface
# ==============================================================================
# Defines the contract for all database adapters
# Ensures consistent lifecycle and session API across SQLite and PostgreSQL
# ==============================================================================

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator


class BaseDatabaseAdapter(ABC):
    """
    Abstract Base Class for Database Adapters.

    An adapter owns the engine and connection pool for one backend and
    hands out transactional sessions. Row access itself lives in the
    repositories, which all share the session of one unit of work.

    Design Pattern:
        Implements the Adapter Pattern to provide a uniform interface
        for heterogeneous database systems.

    Example:
        >>> adapter = SQLiteAdapter()
        >>> await adapter.connect()
        >>> async with adapter.session() as session:
        ...     await session.execute(text("SELECT 1"))
        >>> await adapter.disconnect()
    """

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    @abstractmethod
    async def connect(self) -> None:
        """
        Establish database connection.

        Initializes the engine and connection pool and creates missing
        tables. Must be called before any database operations.

        Raises:
            DatabaseError: If connection cannot be established
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """
        Close database connection.

        Releases all connections in the pool and cleans up resources.
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if database connection is healthy.

        Returns:
            True if connection is healthy, False otherwise
        """
        pass

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether ``connect()`` has completed."""
        pass

    # ==========================================================================
    # SESSION MANAGEMENT
    # ==========================================================================

    @abstractmethod
    @asynccontextmanager
    async def session(self) -> AsyncIterator[Any]:
        """
        Provide a transactional session scope.

        Changes are committed on successful exit or rolled back on
        exception.

        Raises:
            RuntimeError: If database is not connected
        """
        yield
