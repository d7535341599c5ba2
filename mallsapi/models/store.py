"""
Malls API Backend — Store SQLAlchemy Model
============================================

What:  ORM model representing the `stores` table.
Who:   Used by StoreService and MallService.
"""

import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mallsapi.database import Base

if TYPE_CHECKING:
    from mallsapi.models.employee import Employee
    from mallsapi.models.mall import MallStore


class Store(Base):
    """
    A retail unit that may be present in zero or more malls.

    `mall_links` is the store side of `mall_stores`; its mall ids form the
    store's `malls` list. Store names are globally unique.
    """

    __tablename__ = "stores"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(75), nullable=False, unique=True, index=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False)

    mall_links: Mapped[List["MallStore"]] = relationship(
        back_populates="store",
        cascade="all, delete-orphan",
        order_by="MallStore.position",
        lazy="selectin",
    )

    employees: Mapped[List["Employee"]] = relationship(
        back_populates="store",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def mall_ids(self) -> List[uuid.UUID]:
        return [link.mall_id for link in self.mall_links]

    def __repr__(self) -> str:
        return f"<Store(id={self.id}, name='{self.name}')>"
