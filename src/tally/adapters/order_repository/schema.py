"""Order persistence schema.

One row per order in ``orders`` plus its ordered line items in
``order_lines``. The whole aggregate is written in a single transaction by
`SqlAlchemyOrderRepository`.

Constraints (enforced here):

| Constraint                          | Purpose                              |
|-------------------------------------|--------------------------------------|
| PK(order_id)                        | one row per aggregate                |
| CHECK(version >= 1)                 | stored versions start at 1           |
| CHECK(status IN (...))              | only known status tags               |
| PK(order_id, position)              | lines keep their insertion order     |
| FK(order_lines.order_id)            | lines belong to an existing order    |
| CHECK(quantity > 0)                 | no empty or negative lines           |
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    String,
    Table,
    text,
)

from tally.adapters.db.metadata import metadata
from tally.adapters.db.sa_types import DecimalString, UTCDateTime

__all__ = ["orders", "order_lines"]

orders = Table(
    "orders",
    metadata,
    Column(
        "order_id",
        String(200),
        primary_key=True,
        comment="Aggregate ID; assigned at creation and never reassigned.",
    ),
    Column(
        "customer_ref",
        String(200),
        nullable=False,
        comment="Opaque reference to the ordering customer.",
    ),
    Column(
        "status",
        String(20),
        nullable=False,
        comment="Status tag: draft, confirmed or cancelled.",
    ),
    Column(
        "currency",
        String(3),
        nullable=False,
        comment="ISO currency code of the total (and of every line).",
    ),
    Column(
        "total_amount",
        DecimalString(),
        nullable=False,
        comment="Sum of line subtotals, stored as an exact decimal string.",
    ),
    Column(
        "version",
        Integer,
        nullable=False,
        comment="Stored version; used for optimistic concurrency.",
    ),
    Column(
        "updated_at",
        UTCDateTime(),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="UTC timestamp of the last successful save.",
    ),
    CheckConstraint("version >= 1", name="positive_version"),
    CheckConstraint(
        "status IN ('draft', 'confirmed', 'cancelled')", name="known_status"
    ),
    comment="Order aggregates. One row per order.",
)

order_lines = Table(
    "order_lines",
    metadata,
    Column(
        "order_id",
        String(200),
        ForeignKey("orders.order_id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "position",
        Integer,
        primary_key=True,
        comment="Zero-based insertion order of the line within its order.",
    ),
    Column("product_ref", String(200), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("unit_price_amount", DecimalString(), nullable=False),
    Column("unit_price_currency", String(3), nullable=False),
    CheckConstraint("quantity > 0", name="positive_quantity"),
    comment="Line items of an order, in insertion order.",
)
