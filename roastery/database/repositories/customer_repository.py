# ==============================================================================
# CUSTOMER REPOSITORY
# ==============================================================================

from __future__ import annotations

from typing import Optional

from sqlalchemy import func, select

from roastery.database.repositories.base_repository import BaseRepository
from roastery.domain_models.customer import Customer


class CustomerRepository(BaseRepository[Customer]):
    """Data access for customers."""

    model = Customer

    async def find_by_email(self, email: str) -> Optional[Customer]:
        """Case-insensitive lookup by email address."""
        query = (
            select(Customer)
            .where(func.lower(Customer.email) == email.strip().lower())
            .limit(1)
        )
        result = await self._session.execute(query)
        return result.scalars().first()
