# ==============================================================================
# SQLITE ADAPTER - SQLAlchemy Async with aiosqlite
# ==============================================================================
# Lightweight database adapter for development and testing
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, Optional

from roastery.core.settings import settings
from roastery.database.adapters.sql_adapter import SQLAlchemyAdapter


class SQLiteAdapter(SQLAlchemyAdapter):
    """
    SQLite database adapter using SQLAlchemy async with aiosqlite.

    Ideal for development and testing. File-based or in-memory database
    URLs are both accepted; plain ``sqlite://`` URLs are rewritten to the
    aiosqlite driver.

    Example:
        >>> adapter = SQLiteAdapter("sqlite:///./dev.db")
        >>> await adapter.connect()  # Creates tables automatically
    """

    backend_name = "SQLite"

    def __init__(self, database_url: Optional[str] = None) -> None:
        url = database_url or settings.sqlite_async_url
        if "sqlite://" in url and "aiosqlite" not in url:
            url = url.replace("sqlite://", "sqlite+aiosqlite://")
        super().__init__(url)

    def _engine_options(self) -> Dict[str, Any]:
        return {"connect_args": {"check_same_thread": False}}
