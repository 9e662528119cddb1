# ==============================================================================
# CUSTOMER SERVICE - Find-or-Create by Email
# ==============================================================================

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from roastery.core.constants import SecurityConstants
from roastery.database.adapters.base_adapter import BaseDatabaseAdapter
from roastery.database.unit_of_work import UnitOfWork
from roastery.domain_models.customer import Customer
from roastery.schemas.order import CustomerInfo

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class CustomerResolver:
    """
    Resolves the customer an order belongs to.

    Runs in its own transaction ahead of the order write. Two concurrent
    checkouts with the same new email race on the unique index; the loser
    re-reads the winner's row.
    """

    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        self._adapter = adapter

    async def find_or_create(self, info: CustomerInfo) -> Customer:
        email = normalize_email(info.email)

        try:
            async with UnitOfWork(self._adapter) as uow:
                existing = await uow.customers.find_by_email(email)
                if existing is not None:
                    return existing

                customer = await uow.customers.add(
                    email=email,
                    first_name=info.first_name,
                    last_name=info.last_name,
                    phone=info.phone,
                    role=SecurityConstants.ROLE_CUSTOMER,
                )
                logger.info(f"Created customer {customer.id} for {email}")
                return customer
        except IntegrityError:
            logger.info(f"Customer {email} created concurrently; re-reading")
            async with UnitOfWork(self._adapter) as uow:
                winner = await uow.customers.find_by_email(email)
            if winner is None:
                raise
            return winner

    async def resolve(self, info: CustomerInfo) -> Optional[Customer]:
        """
        Find or create the customer, or ``None`` if that fails.

        Failure here never blocks the order; it is recorded as a guest order.
        """
        try:
            return await self.find_or_create(info)
        except Exception:
            logger.exception(f"Customer resolution failed for {info.email}; continuing as guest")
            return None
