# ==============================================================================
# UNIT OF WORK TESTS
# ==============================================================================
# Transaction boundaries shared by the repositories
# ==============================================================================

from decimal import Decimal

import pytest

from roastery.database.factory import DatabaseFactory
from roastery.database.unit_of_work import UnitOfWork
from roastery.domain_models.order import Order, OrderItem, OrderStatus, PaymentStatus


def _order(number: str) -> Order:
    return Order(
        order_number=number,
        customer_email="guest@example.com",
        status=OrderStatus.PENDING,
        payment_status=PaymentStatus.PAID,
        subtotal=Decimal("10.00"),
        tax_amount=Decimal("0.00"),
        shipping_amount=Decimal("0.00"),
        total_amount=Decimal("10.00"),
        currency="USD",
        shipping_method="standard",
        items=[
            OrderItem(
                position=0,
                product_name="House Blend",
                quantity=1,
                unit_price=Decimal("10.00"),
                total_price=Decimal("10.00"),
            )
        ],
        status_events=[],
    )


class TestUnitOfWork:

    @pytest.mark.asyncio
    async def test_commits_order_items_and_event_together(self, client):
        async with UnitOfWork() as uow:
            assert uow.is_active
            order = _order("ORD-1-commit")
            uow.status_events.append(order, OrderStatus.PENDING)
            await uow.orders.save(order)
        assert not uow.is_active

        async with UnitOfWork(DatabaseFactory.get_adapter()) as uow:
            stored = await uow.orders.get_by_identifier("ORD-1-commit")
            assert stored is not None
            assert len(stored.items) == 1
            assert [e.to_status for e in stored.status_events] == [OrderStatus.PENDING]
            assert stored.status_events[0].sequence == 1

    @pytest.mark.asyncio
    async def test_rolls_back_everything_on_error(self, client):
        with pytest.raises(RuntimeError):
            async with UnitOfWork() as uow:
                order = _order("ORD-2-rollback")
                uow.status_events.append(order, OrderStatus.PENDING)
                await uow.orders.save(order)
                raise RuntimeError("boom")

        async with UnitOfWork() as uow:
            assert await uow.orders.get_by_identifier("ORD-2-rollback") is None
            assert await uow.orders.count() == 0

    @pytest.mark.asyncio
    async def test_session_outside_context(self, client):
        uow = UnitOfWork()

        with pytest.raises(RuntimeError):
            uow.session
