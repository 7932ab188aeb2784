"""SQLAlchemy-backed OrderRepository adapter for TALLY.

Persists each Order as one ``orders`` row plus its ``order_lines`` rows (see
`schema`). All statements run on the connection owned by the unit of work, so
a save is atomic with respect to the enclosing commit/rollback.

Optimistic concurrency:
    - New orders (expected version 0) are INSERTed; an existing row for the
      same ID is a conflict.
    - Existing orders are UPDATEd ``WHERE version = :expected``; zero affected
      rows is a conflict. Lines are then replaced wholesale.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError

from tally.domain import errors
from tally.domain.aggregates import Order, OrderSnapshot
from tally.domain.value_objects import LineItem, Money, OrderStatus
from tally.interfaces.order_repository import (
    ConcurrencyConflictError,
    OrderNotFoundError,
    OrderRepository,
)

from .schema import order_lines, orders

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, RowMapping

logger = logging.getLogger(__name__)


class SqlAlchemyOrderRepository(OrderRepository):
    """SQLAlchemy-backed OrderRepository.

    - Uses the `orders` / `order_lines` tables (see adapters.order_repository.schema).
    - Never commits; the unit of work owns the transaction.
    """

    def __init__(self, connection: Connection):
        super().__init__()
        self.connection = connection

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def _find(self, order_id: str) -> Order:
        row = (
            self.connection.execute(select(orders).where(orders.c.order_id == order_id))
            .mappings()
            .one_or_none()
        )
        if row is None:
            raise OrderNotFoundError(order_id)

        line_rows = (
            self.connection.execute(
                select(order_lines)
                .where(order_lines.c.order_id == order_id)
                .order_by(order_lines.c.position.asc())
            )
            .mappings()
            .all()
        )
        return Order.rehydrate(self._to_snapshot(row, line_rows))

    def _save(self, order: Order, expected_version: int) -> int:
        snapshot = order.snapshot()
        new_version = expected_version + 1
        values = {
            "customer_ref": snapshot.customer_ref,
            "status": snapshot.status.value,
            "currency": snapshot.total.currency,
            "total_amount": snapshot.total.amount,
            "version": new_version,
            "updated_at": datetime.now(timezone.utc),
        }

        if expected_version == 0:
            self._insert_order(snapshot.order_id, values)
        else:
            self._update_order(snapshot.order_id, expected_version, values)

        self._replace_lines(snapshot)
        logger.debug("Saved order %s at version %d", snapshot.order_id, new_version)
        return new_version

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    def _insert_order(self, order_id: str, values: dict) -> None:
        if (stored := self._fetch_stored_version(order_id)) is not None:
            raise ConcurrencyConflictError(order_id, 0, stored)
        # A concurrent writer may still win between the check and the insert;
        # the primary key catches that. The transaction is unusable afterwards
        # and is rolled back by the unit of work.
        try:
            self.connection.execute(insert(orders).values(order_id=order_id, **values))
        except IntegrityError as e:
            raise ConcurrencyConflictError(order_id, 0, None) from e

    def _update_order(self, order_id: str, expected_version: int, values: dict) -> None:
        result = self.connection.execute(
            update(orders)
            .where(orders.c.order_id == order_id)
            .where(orders.c.version == expected_version)
            .values(**values)
        )
        if result.rowcount != 1:
            raise ConcurrencyConflictError(
                order_id, expected_version, self._fetch_stored_version(order_id)
            )

    def _replace_lines(self, snapshot: OrderSnapshot) -> None:
        self.connection.execute(
            delete(order_lines).where(order_lines.c.order_id == snapshot.order_id)
        )
        if not snapshot.lines:
            return
        rows = [
            {
                "order_id": snapshot.order_id,
                "position": position,
                "product_ref": line.product_ref,
                "quantity": line.quantity,
                "unit_price_amount": line.unit_price.amount,
                "unit_price_currency": line.unit_price.currency,
            }
            for position, line in enumerate(snapshot.lines)
        ]
        self.connection.execute(insert(order_lines), rows)

    def _fetch_stored_version(self, order_id: str) -> int | None:
        return self.connection.execute(
            select(orders.c.version).where(orders.c.order_id == order_id)
        ).scalar_one_or_none()

    @staticmethod
    def _to_snapshot(row: RowMapping, line_rows: list[RowMapping]) -> OrderSnapshot:
        """Map stored rows to a snapshot.

        Raises:
            CorruptedAggregateError: If a stored value cannot be mapped back
                (unknown status tag, invalid line).
        """
        order_id = row["order_id"]
        try:
            status = OrderStatus(row["status"])
            lines = tuple(
                LineItem(
                    product_ref=line["product_ref"],
                    quantity=line["quantity"],
                    unit_price=Money(
                        line["unit_price_amount"], line["unit_price_currency"]
                    ),
                )
                for line in line_rows
            )
            total = Money(row["total_amount"], row["currency"])
        except (ValueError, errors.ValidationError) as e:
            raise errors.CorruptedAggregateError(order_id, str(e)) from e

        return OrderSnapshot(
            order_id=order_id,
            customer_ref=row["customer_ref"],
            status=status,
            lines=lines,
            total=total,
            version=row["version"],
        )
