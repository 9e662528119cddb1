# ==============================================================================
# ORDER REPOSITORIES
# ==============================================================================
# Orders, their line items and the status-event log
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import selectinload

from roastery.database.repositories.base_repository import BaseRepository
from roastery.domain_models.customer import Customer
from roastery.domain_models.order import (
    Order,
    OrderStatus,
    OrderStatusEvent,
)


def _with_children(query):
    return query.options(
        selectinload(Order.items),
        selectinload(Order.status_events),
        selectinload(Order.customer),
    )


class OrderRepository(BaseRepository[Order]):
    """
    Data access for orders.

    Every read that hands an order to a view eagerly loads its items,
    status events and customer, since async sessions cannot lazy-load.
    """

    model = Order

    async def get_by_identifier(self, identifier: str) -> Optional[Order]:
        """
        Look up an order by internal id or order number.

        Both forms resolve to the same row, so callers never need to know
        which one a client sent.
        """
        query = _with_children(
            select(Order).where(
                or_(Order.id == identifier, Order.order_number == identifier)
            )
        ).limit(1)
        result = await self._session.execute(query)
        return result.scalars().first()

    def _status_filter(self, status: Optional[OrderStatus]) -> List:
        return [Order.status == status] if status else []

    async def list_orders(
        self,
        status: Optional[OrderStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Order], int]:
        """
        Newest-first page of orders plus the total count for the filter.
        """
        conditions = self._status_filter(status)

        query = _with_children(select(Order))
        if conditions:
            query = query.where(and_(*conditions))
        query = query.order_by(Order.created_at.desc()).offset(offset).limit(limit)

        rows = (await self._session.execute(query)).scalars().all()
        total = await self.count({"status": status} if status else None)
        return list(rows), total

    async def list_for_export(
        self,
        status: Optional[OrderStatus] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: int = 10000,
    ) -> List[Order]:
        conditions = self._status_filter(status)
        if start_date is not None:
            conditions.append(Order.created_at >= start_date)
        if end_date is not None:
            conditions.append(Order.created_at <= end_date)

        query = _with_children(select(Order))
        if conditions:
            query = query.where(and_(*conditions))
        query = query.order_by(Order.created_at.desc()).limit(limit)

        result = await self._session.execute(query)
        return list(result.scalars().all())

    async def list_for_customer(self, customer: Customer) -> List[Order]:
        """
        Orders linked to the customer, plus guest orders placed with the
        same email before the link existed.
        """
        query = (
            _with_children(select(Order))
            .where(
                or_(
                    Order.customer_id == customer.id,
                    and_(
                        Order.customer_id.is_(None),
                        func.lower(Order.customer_email) == customer.email,
                    ),
                )
            )
            .order_by(Order.created_at.desc())
        )
        result = await self._session.execute(query)
        return list(result.scalars().all())


class OrderStatusEventRepository(BaseRepository[OrderStatusEvent]):
    """Append-only access to the status-event log."""

    model = OrderStatusEvent

    def append(
        self,
        order: Order,
        to_status: OrderStatus,
        from_status: Optional[OrderStatus] = None,
        description: Optional[str] = None,
    ) -> OrderStatusEvent:
        """
        Append an event to an order's loaded log.

        The event is flushed with the order, inside the caller's transaction.
        """
        event = OrderStatusEvent(
            sequence=len(order.status_events) + 1,
            from_status=from_status,
            to_status=to_status,
            description=description,
        )
        order.status_events.append(event)
        return event
