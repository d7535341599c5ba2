"""Create malls schema

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates users, malls, stores, the mall_stores association and employees.
How:   Portable column types (sa.Uuid, non-native enums as VARCHAR) so the same
       migration runs on PostgreSQL and SQLite.

Rollback: downgrade() drops every table (destructive, all data lost).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

PROVINCES = (
    "West-Vlaanderen",
    "Oost-Vlaanderen",
    "Antwerpen",
    "Limburg",
    "Vlaams-Brabant",
    "Waals-Brabant",
    "Luik",
    "Namen",
    "Henegouwen",
    "Luxemburg",
)
EMPLOYEE_TYPES = ("Manager", "Employee", "Intern")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(1024), nullable=False, comment="bcrypt hash"),
        sa.Column(
            "is_admin",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
            comment="Set out-of-band via scripts/promote_admin.py",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "malls",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column(
            "province",
            sa.Enum(*PROVINCES, name="province", native_enum=False, length=32),
            nullable=False,
        ),
        sa.Column("postal_code", sa.String(4), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "stores",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(75), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_stores_name", "stores", ["name"], unique=True)

    # One row per association; both the mall's and the store's lists read it
    op.create_table(
        "mall_stores",
        sa.Column("position", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("mall_id", sa.Uuid(), nullable=False),
        sa.Column("store_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["mall_id"], ["malls.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["store_id"], ["stores.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("position"),
        sa.UniqueConstraint("mall_id", "store_id", name="uq_mall_store"),
    )
    op.create_index("ix_mall_stores_mall_id", "mall_stores", ["mall_id"])
    op.create_index("ix_mall_stores_store_id", "mall_stores", ["store_id"])

    op.create_table(
        "employees",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("first_name", sa.String(75), nullable=False),
        sa.Column("last_name", sa.String(50), nullable=False),
        sa.Column(
            "type",
            sa.Enum(*EMPLOYEE_TYPES, name="employeetype", native_enum=False, length=16),
            nullable=False,
        ),
        sa.Column("salary", sa.Float(), nullable=False),
        sa.Column("hire_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("store_id", sa.Uuid(), nullable=False),
        sa.Column("mall_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["store_id"], ["stores.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["mall_id"], ["malls.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_employees_store_id", "employees", ["store_id"])
    op.create_index("ix_employees_mall_id", "employees", ["mall_id"])


def downgrade() -> None:
    op.drop_index("ix_employees_mall_id", table_name="employees")
    op.drop_index("ix_employees_store_id", table_name="employees")
    op.drop_table("employees")
    op.drop_index("ix_mall_stores_store_id", table_name="mall_stores")
    op.drop_index("ix_mall_stores_mall_id", table_name="mall_stores")
    op.drop_table("mall_stores")
    op.drop_index("ix_stores_name", table_name="stores")
    op.drop_table("stores")
    op.drop_table("malls")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
