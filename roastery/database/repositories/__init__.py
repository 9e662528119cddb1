# ==============================================================================
# REPOSITORIES PACKAGE
# ==============================================================================

from roastery.database.repositories.base_repository import BaseRepository
from roastery.database.repositories.customer_repository import CustomerRepository
from roastery.database.repositories.order_repository import (
    OrderRepository,
    OrderStatusEventRepository,
)

__all__ = [
    "BaseRepository",
    "CustomerRepository",
    "OrderRepository",
    "OrderStatusEventRepository",
]
