# ==============================================================================
# DATABASE FACTORY - Adapter Instantiation & Lifecycle Management
# ==============================================================================
# Factory Pattern for creating and managing database adapters
# Singleton caching so the process shares one connection pool
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

from roastery.core.settings import settings, DatabaseType
from roastery.core.exceptions import DatabaseError
from roastery.database.adapters.base_adapter import BaseDatabaseAdapter
from roastery.database.adapters.postgresql_adapter import PostgreSQLAdapter
from roastery.database.adapters.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


class DatabaseFactory:
    """
    Factory class for creating and managing database adapters.

    Features:
        - Dynamic adapter creation based on configuration
        - Singleton caching for adapter instances
        - Lazy initialization on first use, guarded by a lock
        - Lifecycle management (initialize/shutdown)

    Class Attributes:
        _instances: Cache of adapter instances
        _lock: Serializes first-use initialization

    Example:
        >>> adapter = await DatabaseFactory.get_or_initialize()
        >>> async with UnitOfWork(adapter) as uow:
        ...     order = await uow.orders.get_by_identifier("ORD-...")
        >>> await DatabaseFactory.shutdown()
    """

    _instances: Dict[DatabaseType, BaseDatabaseAdapter] = {}
    _lock: Optional[asyncio.Lock] = None

    @classmethod
    def create_adapter(
        cls,
        db_type: Optional[DatabaseType] = None,
        database_url: Optional[str] = None,
    ) -> BaseDatabaseAdapter:
        """
        Create and return appropriate database adapter.

        Returns cached instance if available, otherwise creates new.

        Raises:
            ValueError: If database type is not supported
        """
        db_type = db_type or settings.DATABASE_TYPE

        if db_type in cls._instances:
            return cls._instances[db_type]

        adapter: BaseDatabaseAdapter

        if db_type == DatabaseType.SQLITE:
            adapter = SQLiteAdapter(database_url=database_url)
            logger.info("Created SQLite adapter")

        elif db_type == DatabaseType.POSTGRESQL:
            adapter = PostgreSQLAdapter(database_url=database_url)
            logger.info("Created PostgreSQL adapter")

        else:
            raise ValueError(f"Unsupported database type: {db_type}")

        cls._instances[db_type] = adapter
        return adapter

    @classmethod
    async def initialize(
        cls,
        db_type: Optional[DatabaseType] = None,
    ) -> BaseDatabaseAdapter:
        """
        Initialize database connection.

        Creates adapter and establishes database connection.

        Raises:
            DatabaseError: If connection fails
        """
        adapter = cls.create_adapter(db_type)

        try:
            await adapter.connect()
            logger.info(
                f"Database initialized: {db_type or settings.DATABASE_TYPE}"
            )
            return adapter
        except DatabaseError:
            cls._instances.pop(db_type or settings.DATABASE_TYPE, None)
            raise
        except Exception as e:
            cls._instances.pop(db_type or settings.DATABASE_TYPE, None)
            logger.error(f"Database initialization failed: {e}")
            raise DatabaseError(f"Failed to initialize database: {e}")

    @classmethod
    async def get_or_initialize(
        cls,
        db_type: Optional[DatabaseType] = None,
    ) -> BaseDatabaseAdapter:
        """
        Return the connected adapter, connecting on first use.

        Concurrent first requests wait on the same lock so only one
        engine is ever created per process.
        """
        db_type = db_type or settings.DATABASE_TYPE
        adapter = cls._instances.get(db_type)
        if adapter is not None and adapter.is_connected:
            return adapter

        if cls._lock is None:
            cls._lock = asyncio.Lock()

        async with cls._lock:
            adapter = cls._instances.get(db_type)
            if adapter is not None and adapter.is_connected:
                return adapter
            return await cls.initialize(db_type)

    @classmethod
    async def shutdown(cls) -> None:
        """
        Close all database connections.

        Releases all resources and clears adapter cache.
        """
        for db_type, adapter in cls._instances.items():
            try:
                await adapter.disconnect()
                logger.info(f"Disconnected: {db_type}")
            except Exception as e:
                logger.error(f"Error disconnecting {db_type}: {e}")

        cls._instances.clear()
        logger.info("All database connections closed")

    @classmethod
    def get_adapter(
        cls,
        db_type: Optional[DatabaseType] = None,
    ) -> BaseDatabaseAdapter:
        """
        Get existing adapter instance.

        Raises:
            RuntimeError: If adapter not initialized
        """
        db_type = db_type or settings.DATABASE_TYPE

        if db_type not in cls._instances:
            raise RuntimeError(
                f"Database adapter for {db_type} not initialized. "
                f"Call DatabaseFactory.initialize() first."
            )

        return cls._instances[db_type]

    @classmethod
    async def health_check(
        cls,
        db_type: Optional[DatabaseType] = None,
    ) -> bool:
        """
        Check database health, connecting first if needed.

        Returns:
            True if database is healthy
        """
        try:
            adapter = await cls.get_or_initialize(db_type)
            return await adapter.health_check()
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            return False

    @classmethod
    def reset(cls) -> None:
        """
        Reset factory state.

        Clears adapter cache without disconnecting.
        Primarily for testing purposes.
        """
        cls._instances.clear()
        cls._lock = None
