"""
Malls API Backend — Employee SQLAlchemy Model
===============================================

What:  ORM model representing the `employees` table.
Who:   Used by MallService for the employee routes nested under a mall.

Ownership:
    store_id and mall_id are required and set once at creation. Updates
    replace the personal fields only. The employee's mall_id is the
    authoritative record of which mall lists it.
"""

import enum
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, Float, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mallsapi.database import Base

if TYPE_CHECKING:
    from mallsapi.models.mall import Mall
    from mallsapi.models.store import Store


class EmployeeType(str, enum.Enum):
    MANAGER = "Manager"
    EMPLOYEE = "Employee"
    INTERN = "Intern"


class Employee(Base):
    """A person working in one store of one mall."""

    __tablename__ = "employees"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    first_name: Mapped[str] = mapped_column(String(75), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    type: Mapped[EmployeeType] = mapped_column(
        Enum(
            EmployeeType,
            native_enum=False,
            length=16,
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
    )
    salary: Mapped[float] = mapped_column(Float, nullable=False)
    hire_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    store_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("stores.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    mall_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("malls.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Orders the mall's employee list by insertion
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    mall: Mapped["Mall"] = relationship(back_populates="employees")
    store: Mapped["Store"] = relationship(back_populates="employees")

    def __repr__(self) -> str:
        return (
            f"<Employee(id={self.id}, name='{self.first_name} {self.last_name}', "
            f"mall_id={self.mall_id}, store_id={self.store_id})>"
        )
