# ==============================================================================
# CUSTOMER MODEL - People Who Place Orders
# ==============================================================================
# Customer rows are created lazily on first guest checkout
# ==============================================================================

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roastery.core.constants import DatabaseConstants, SecurityConstants
from roastery.domain_models.base import SQLBase, TimestampMixin

if TYPE_CHECKING:
    from roastery.domain_models.order import Order


class Customer(SQLBase, TimestampMixin):
    """
    Customer keyed by email address.

    Emails are stored lower-cased; the unique index is what keeps two
    concurrent guest checkouts from creating duplicate rows.

    Attributes:
        email: Lower-cased unique email address
        first_name: Given name from checkout
        last_name: Family name from checkout
        phone: Optional contact phone
        role: Account role ("customer" for checkout-created rows)

    Relationships:
        orders: Orders linked to this customer
    """

    __tablename__ = DatabaseConstants.CUSTOMERS_TABLE

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    first_name: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    last_name: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    phone: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    role: Mapped[str] = mapped_column(
        String(20),
        default=SecurityConstants.ROLE_CUSTOMER,
        nullable=False,
    )

    orders: Mapped[List["Order"]] = relationship(
        "Order",
        back_populates="customer",
    )

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, email={self.email})>"
