"""create orders and order_lines tables

Revision ID: 3f2a9c1d7e40
Revises:
Create Date: 2026-10-19 09:12:44.118203

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from tally.adapters.db.sa_types import DecimalString, UTCDateTime

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7e40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "orders",
        sa.Column(
            "order_id",
            sa.String(length=200),
            nullable=False,
            comment="Aggregate ID; assigned at creation and never reassigned.",
        ),
        sa.Column(
            "customer_ref",
            sa.String(length=200),
            nullable=False,
            comment="Opaque reference to the ordering customer.",
        ),
        sa.Column(
            "status",
            sa.String(length=20),
            nullable=False,
            comment="Status tag: draft, confirmed or cancelled.",
        ),
        sa.Column(
            "currency",
            sa.String(length=3),
            nullable=False,
            comment="ISO currency code of the total (and of every line).",
        ),
        sa.Column(
            "total_amount",
            DecimalString(),
            nullable=False,
            comment="Sum of line subtotals, stored as an exact decimal string.",
        ),
        sa.Column(
            "version",
            sa.Integer(),
            nullable=False,
            comment="Stored version; used for optimistic concurrency.",
        ),
        sa.Column(
            "updated_at",
            UTCDateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="UTC timestamp of the last successful save.",
        ),
        sa.PrimaryKeyConstraint("order_id", name=op.f("pk_orders")),
        sa.CheckConstraint("version >= 1", name=op.f("ck_orders_positive_version")),
        sa.CheckConstraint(
            "status IN ('draft', 'confirmed', 'cancelled')",
            name=op.f("ck_orders_known_status"),
        ),
        comment="Order aggregates. One row per order.",
    )

    op.create_table(
        "order_lines",
        sa.Column("order_id", sa.String(length=200), nullable=False),
        sa.Column(
            "position",
            sa.Integer(),
            nullable=False,
            comment="Zero-based insertion order of the line within its order.",
        ),
        sa.Column("product_ref", sa.String(length=200), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price_amount", DecimalString(), nullable=False),
        sa.Column("unit_price_currency", sa.String(length=3), nullable=False),
        sa.ForeignKeyConstraint(
            ["order_id"],
            ["orders.order_id"],
            name=op.f("fk_order_lines_order_id_orders"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("order_id", "position", name=op.f("pk_order_lines")),
        sa.CheckConstraint(
            "quantity > 0", name=op.f("ck_order_lines_positive_quantity")
        ),
        comment="Line items of an order, in insertion order.",
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("order_lines")
    op.drop_table("orders")
