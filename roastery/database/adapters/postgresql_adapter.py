# ==============================================================================
# POSTGRESQL ADAPTER - SQLAlchemy Async with asyncpg
# ==============================================================================
# Production database adapter with a bounded connection pool
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, Optional

from roastery.core.settings import settings
from roastery.database.adapters.sql_adapter import SQLAlchemyAdapter


class PostgreSQLAdapter(SQLAlchemyAdapter):
    """
    PostgreSQL database adapter using SQLAlchemy async with asyncpg.

    Pool settings:
        pool_size: ``DB_POOL_SIZE`` persistent connections
        max_overflow: ``DB_MAX_OVERFLOW`` extra connections under load
        pool_timeout: ``DB_POOL_TIMEOUT`` seconds to wait for a connection
        pool_recycle: ``DB_POOL_RECYCLE`` seconds before a connection is replaced
    """

    backend_name = "PostgreSQL"

    def __init__(self, database_url: Optional[str] = None) -> None:
        super().__init__(database_url or settings.postgres_url)

    def _engine_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
            "pool_recycle": settings.DB_POOL_RECYCLE,
            "pool_pre_ping": True,
        }
        connect_args: Dict[str, Any] = {"timeout": settings.DB_POOL_TIMEOUT}
        if settings.POSTGRES_SSL:
            connect_args["ssl"] = "require"
        options["connect_args"] = connect_args
        return options
