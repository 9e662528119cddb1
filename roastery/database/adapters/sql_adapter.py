# ==============================================================================
# SQL ADAPTER - Shared SQLAlchemy Async Engine Handling
# ==============================================================================
# Engine creation, table bootstrap and transactional sessions shared by the
# SQLite and PostgreSQL adapters
# ==============================================================================

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from roastery.core.settings import settings
from roastery.core.exceptions import DatabaseError
from roastery.database.adapters.base_adapter import BaseDatabaseAdapter

logger = logging.getLogger(__name__)


class SQLAlchemyAdapter(BaseDatabaseAdapter):
    """
    Database adapter backed by a SQLAlchemy async engine.

    Subclasses choose the URL and engine options for their backend.

    Attributes:
        _database_url: Async connection string
        _engine: SQLAlchemy async engine
        _session_factory: Session factory for creating sessions
    """

    backend_name: str = "sql"

    def __init__(self, database_url: str) -> None:
        self._database_url = database_url
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    def _engine_options(self) -> Dict[str, Any]:
        """Backend-specific keyword arguments for ``create_async_engine``."""
        return {}

    @property
    def engine(self) -> Optional[AsyncEngine]:
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._session_factory is not None

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    async def connect(self) -> None:
        """
        Initialize database engine and create tables.

        Tables for every model imported into ``SQLBase.metadata`` are created
        if they don't exist.
        """
        try:
            self._engine = create_async_engine(
                self._database_url,
                echo=settings.DEBUG,
                **self._engine_options(),
            )

            self._session_factory = async_sessionmaker(
                bind=self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )

            async with self._engine.begin() as conn:
                from roastery.domain_models import SQLBase
                await conn.run_sync(SQLBase.metadata.create_all)

            logger.info(f"{self.backend_name} adapter connected successfully")

        except Exception as e:
            logger.error(f"Failed to connect to {self.backend_name}: {e}")
            self._session_factory = None
            raise DatabaseError(f"{self.backend_name} connection failed: {e}")

    async def disconnect(self) -> None:
        """Close database connections and dispose engine."""
        if self._engine:
            await self._engine.dispose()
            logger.info(f"{self.backend_name} adapter disconnected")
        self._engine = None
        self._session_factory = None

    async def health_check(self) -> bool:
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"{self.backend_name} health check failed: {e}")
            return False

    # ==========================================================================
    # SESSION MANAGEMENT
    # ==========================================================================

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide transactional session scope.

        Commits on successful exit, rolls back on exception.

        Raises:
            RuntimeError: If database not connected
        """
        if not self._session_factory:
            raise RuntimeError(
                "Database not connected. Call connect() first."
            )

        session: AsyncSession = self._session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
