"""
Malls API Backend — User SQLAlchemy Model
===========================================

What:  ORM model representing the `users` table.
Who:   Used by UserService for registration, login and the admin CLI.

Lifecycle:
    1. Created on registration with is_admin = False
    2. Never edited through the API; is_admin is flipped out-of-band
       (scripts/promote_admin.py)
"""

import uuid

from sqlalchemy import Boolean, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from mallsapi.database import Base


class User(Base):
    """A registered account. `password` always holds a bcrypt hash."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(50), nullable=False)

    # Unique index backs the "User is already registered" check under races
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)

    password: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        comment="bcrypt hash (salt embedded)",
    )

    is_admin: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', is_admin={self.is_admin})>"
