# ==============================================================================
# UNIT OF WORK - Transaction Coordination
# ==============================================================================
# Manages transactional boundaries across multiple repositories
# Ensures atomic operations and data consistency
# ==============================================================================

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Any, Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession

from roastery.database.adapters.base_adapter import BaseDatabaseAdapter
from roastery.database.factory import DatabaseFactory
from roastery.database.repositories import (
    CustomerRepository,
    OrderRepository,
    OrderStatusEventRepository,
)


class AbstractUnitOfWork(ABC):
    """
    Abstract Unit of Work pattern interface.

    Defines the contract for managing transactional boundaries
    and coordinating repository access.
    """

    @abstractmethod
    async def __aenter__(self) -> "AbstractUnitOfWork":
        pass

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Any,
    ) -> None:
        pass


class UnitOfWork(AbstractUnitOfWork):
    """
    Concrete Unit of Work implementation.

    Opens one session on entry and builds every repository on it, so all
    writes made inside the ``async with`` block commit or roll back
    together.

    Attributes:
        customers: Customer repository
        orders: Order repository
        status_events: Status-event log repository

    Example:
        >>> async with UnitOfWork(adapter) as uow:
        ...     order = await uow.orders.add(**header)
        ...     uow.status_events.append(order, OrderStatus.PENDING)
        ...     # Commits automatically on successful exit
    """

    def __init__(
        self,
        adapter: Optional[BaseDatabaseAdapter] = None,
    ) -> None:
        self._adapter = adapter
        self._context: Optional[AbstractAsyncContextManager] = None
        self._session: Optional[AsyncSession] = None
        self._is_active = False

    @property
    def adapter(self) -> BaseDatabaseAdapter:
        """Get database adapter, falling back to the factory's."""
        if self._adapter is None:
            self._adapter = DatabaseFactory.get_adapter()
        return self._adapter

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("Unit of work is not active")
        return self._session

    # ==========================================================================
    # CONTEXT MANAGEMENT
    # ==========================================================================

    async def __aenter__(self) -> "UnitOfWork":
        self._context = self.adapter.session()
        self._session = await self._context.__aenter__()

        self.customers = CustomerRepository(self._session)
        self.orders = OrderRepository(self._session)
        self.status_events = OrderStatusEventRepository(self._session)

        self._is_active = True
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Any,
    ) -> None:
        """
        Exit transactional context.

        The adapter session commits on clean exit and rolls back when an
        exception is propagating.
        """
        try:
            if self._context is not None:
                await self._context.__aexit__(exc_type, exc_val, exc_tb)
        finally:
            self._context = None
            self._session = None
            self._is_active = False

    @property
    def is_active(self) -> bool:
        return self._is_active
