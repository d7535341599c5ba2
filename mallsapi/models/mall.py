"""
Malls API Backend — Mall and Mall↔Store SQLAlchemy Models
===========================================================

What:  ORM models for the `malls` table and the `mall_stores` association table.
Who:   Used by MallService and StoreService.

Association Design:
    A mall's `stores` list and a store's `malls` list are both projections of
    the rows in `mall_stores`:

        malls ──< mall_stores >── stores
                  (position, mall_id, store_id)

    One row is written per association, so the two sides cannot disagree.
    UNIQUE(mall_id, store_id) rejects a duplicate even if two requests race
    past the service-level check. `position` is an autoincrement key that
    keeps both lists in insertion order.
"""

import enum
import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import Enum, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mallsapi.database import Base

if TYPE_CHECKING:
    from mallsapi.models.employee import Employee
    from mallsapi.models.store import Store


class Province(str, enum.Enum):
    """The ten Belgian provinces a mall may be located in."""

    WEST_VLAANDEREN = "West-Vlaanderen"
    OOST_VLAANDEREN = "Oost-Vlaanderen"
    ANTWERPEN = "Antwerpen"
    LIMBURG = "Limburg"
    VLAAMS_BRABANT = "Vlaams-Brabant"
    WAALS_BRABANT = "Waals-Brabant"
    LUIK = "Luik"
    NAMEN = "Namen"
    HENEGOUWEN = "Henegouwen"
    LUXEMBURG = "Luxemburg"


class Mall(Base):
    """
    A physical shopping location.

    Collections:
        store_links: association rows, ordered by position (→ `stores`)
        employees:   Employee records owned by this mall (→ `employees`)

    Both collections load eagerly (selectin) so they can be read inside
    async code without lazy-load IO. Deleting a mall deletes its association
    rows and its employees; the stores themselves are untouched.
    """

    __tablename__ = "malls"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    province: Mapped[Province] = mapped_column(
        Enum(
            Province,
            native_enum=False,
            length=32,
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
    )
    postal_code: Mapped[str] = mapped_column(String(4), nullable=False)

    store_links: Mapped[List["MallStore"]] = relationship(
        back_populates="mall",
        cascade="all, delete-orphan",
        order_by="MallStore.position",
        lazy="selectin",
    )

    employees: Mapped[List["Employee"]] = relationship(
        back_populates="mall",
        cascade="all, delete-orphan",
        order_by="Employee.created_at",
        lazy="selectin",
    )

    @property
    def store_ids(self) -> List[uuid.UUID]:
        return [link.store_id for link in self.store_links]

    @property
    def employee_ids(self) -> List[uuid.UUID]:
        return [employee.id for employee in self.employees]

    def __repr__(self) -> str:
        return f"<Mall(id={self.id}, name='{self.name}', stores={len(self.store_links)})>"


class MallStore(Base):
    """One store carried by one mall."""

    __tablename__ = "mall_stores"

    position: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mall_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("malls.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    store_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("stores.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    mall: Mapped["Mall"] = relationship(back_populates="store_links")
    store: Mapped["Store"] = relationship(back_populates="mall_links")

    __table_args__ = (UniqueConstraint("mall_id", "store_id", name="uq_mall_store"),)

    def __repr__(self) -> str:
        return f"<MallStore(mall_id={self.mall_id}, store_id={self.store_id})>"
