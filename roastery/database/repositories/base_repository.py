# ==============================================================================
# BASE REPOSITORY - Generic Data Access Abstraction
# ==============================================================================
# Repository Pattern implementation for consistent data access
# All repositories of one unit of work share its session
# ==============================================================================

from __future__ import annotations

from typing import (
    Any,
    Dict,
    Generic,
    List,
    Optional,
    Type,
    TypeVar,
)

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from roastery.domain_models.base import SQLBase

# Type variable for generic repository
ModelType = TypeVar("ModelType", bound=SQLBase)


class BaseRepository(Generic[ModelType]):
    """
    Base repository providing standard CRUD operations for one model.

    Repositories never commit. The unit of work that owns the session
    decides when the transaction ends, so several repositories can write
    atomically together.

    Generic Parameters:
        ModelType: SQLAlchemy model class

    Attributes:
        model: Mapped model class
        _session: Active database session

    Example:
        >>> class CustomerRepository(BaseRepository[Customer]):
        ...     model = Customer
        ...
        >>> repo = CustomerRepository(session)
        >>> customer = await repo.add(email="jane@example.com")
    """

    model: Type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    # ==========================================================================
    # FILTER HELPERS
    # ==========================================================================

    def _conditions(self, filters: Optional[Dict[str, Any]]) -> List[Any]:
        if not filters:
            return []
        return [
            getattr(self.model, key) == value
            for key, value in filters.items()
            if hasattr(self.model, key)
        ]

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    async def add(self, **data: Any) -> ModelType:
        """
        Stage a new row and flush it so generated values are populated.

        Returns:
            Created instance with its primary key set
        """
        return await self.save(self.model(**data))

    async def save(self, instance: ModelType) -> ModelType:
        """Stage an already-built instance (and its cascaded children)."""
        self._session.add(instance)
        await self._session.flush()
        return instance

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        query = select(func.count()).select_from(self.model)

        conditions = self._conditions(filters)
        if conditions:
            query = query.where(and_(*conditions))

        result = await self._session.execute(query)
        return result.scalar() or 0

    async def update(self, instance: ModelType, data: Dict[str, Any]) -> ModelType:
        """
        Apply a partial update to a loaded instance.

        Unknown keys are ignored.
        """
        for key, value in data.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        await self._session.flush()
        return instance
