"""Order Aggregate"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from tally.domain import errors, events
from tally.domain.result import Err, Ok, Result
from tally.domain.value_objects import LineItem, Money, OrderStatus

from .base import Aggregate

# pylint: disable=too-many-arguments


class Action(Enum):
    """Mutations an order can undergo."""

    ADD_ITEM = "add item to"
    CONFIRM = "confirm"
    CANCEL = "cancel"


# Allowed edges of the order state machine. Any (status, action) pair missing
# from this table is rejected with a StateError.
TRANSITIONS: dict[tuple[OrderStatus, Action], OrderStatus] = {
    (OrderStatus.DRAFT, Action.ADD_ITEM): OrderStatus.DRAFT,
    (OrderStatus.DRAFT, Action.CONFIRM): OrderStatus.CONFIRMED,
    (OrderStatus.DRAFT, Action.CANCEL): OrderStatus.CANCELLED,
    (OrderStatus.CONFIRMED, Action.CANCEL): OrderStatus.CANCELLED,
}


@dataclass(frozen=True, slots=True)
class OrderSnapshot:
    """Immutable view of an order, laid out the way repositories persist it."""

    order_id: str
    customer_ref: str
    status: OrderStatus
    lines: tuple[LineItem, ...]
    total: Money
    version: int


class Order(Aggregate):
    """Aggregate root representing a customer order."""

    AGGREGATE_TYPE: ClassVar[str] = "Order"

    def __init__(self, aggregate_id: str, customer_ref: str, currency: str) -> None:
        super().__init__(aggregate_id)
        self.customer_ref: str = customer_ref
        self._status: OrderStatus = OrderStatus.DRAFT
        self._lines: list[LineItem] = []
        self._total: Money = Money.zero(currency)

    # --- Construction Paths ---

    @classmethod
    def create(cls, order_id: str, customer_ref: str, currency: str = "USD") -> Order:
        """Create a new, empty draft order.

        Args:
            order_id: The unique identifier for the order.
            customer_ref: Opaque reference to the ordering customer.
            currency: Currency of the empty total. The first line item added
                fixes the currency used by the order from then on.

        Returns:
            Order: a DRAFT order with no lines, a zero total and version 0.
        """
        return cls(order_id, customer_ref, currency)

    @classmethod
    def rehydrate(cls, snapshot: OrderSnapshot) -> Order:
        """Rebuild an order from persisted state.

        Raises:
            CorruptedAggregateError: if the snapshot breaks an order invariant.
        """
        order_id = snapshot.order_id
        if snapshot.version < 0:
            raise errors.CorruptedAggregateError(
                order_id, f"negative version {snapshot.version}"
            )
        try:
            total = cls._sum_lines(snapshot.lines, snapshot.total.currency)
        except errors.UnitMismatchError as e:
            raise errors.CorruptedAggregateError(order_id, str(e)) from e
        if total != snapshot.total:
            raise errors.CorruptedAggregateError(
                order_id, f"stored total {snapshot.total} != sum of lines {total}"
            )
        if snapshot.status is OrderStatus.CONFIRMED and not snapshot.lines:
            raise errors.CorruptedAggregateError(order_id, "confirmed order has no lines")

        order = cls(order_id, snapshot.customer_ref, snapshot.total.currency)
        order._status = snapshot.status
        order._lines = list(snapshot.lines)
        order._total = total
        order._version = snapshot.version
        return order

    # --- Read Accessors ---

    @property
    def status(self) -> OrderStatus:
        """Current status of the order."""
        return self._status

    @property
    def lines(self) -> tuple[LineItem, ...]:
        """Read-only view of the line items in insertion order."""
        return tuple(self._lines)

    @property
    def total(self) -> Money:
        """Sum of all line subtotals."""
        return self._total

    def snapshot(self) -> OrderSnapshot:
        """Capture the current state as an immutable snapshot."""
        return OrderSnapshot(
            order_id=self.aggregate_id,
            customer_ref=self.customer_ref,
            status=self._status,
            lines=tuple(self._lines),
            total=self._total,
            version=self._version,
        )

    # --- State Transitions ---

    def add_item(
        self, product_ref: str, quantity: int, unit_price: Money
    ) -> Result[OrderSnapshot]:
        """Append a line item to a draft order.

        No domain event is recorded; line-level changes are not independently
        notable.

        Returns:
            Ok(snapshot) on success, otherwise Err with a StateError (order not
            in DRAFT), ValidationError (non-positive quantity or a unit price
            that is not Money) or UnitMismatchError (currency differs from the
            existing lines).
        """

        if (next_status := self._next_status(Action.ADD_ITEM)) is None:
            return Err(self._state_error(Action.ADD_ITEM))
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            return Err(
                errors.ValidationError(f"Quantity must be an integer, got {quantity!r}")
            )
        if quantity <= 0:
            return Err(
                errors.ValidationError(f"Quantity must be positive, got {quantity}")
            )
        if not isinstance(unit_price, Money):
            return Err(
                errors.ValidationError(f"Unit price must be Money, got {unit_price!r}")
            )
        if self._lines and unit_price.currency != self._total.currency:
            return Err(
                errors.UnitMismatchError(self._total.currency, unit_price.currency)
            )

        line = LineItem(product_ref=product_ref, quantity=quantity, unit_price=unit_price)
        lines = [*self._lines, line]
        total = self._sum_lines(lines, unit_price.currency)

        # All checks passed; apply.
        self._lines = lines
        self._total = total
        self._status = next_status
        return Ok(self.snapshot())

    def confirm(
        self, customer_standing_ok: bool, credit_limit: Money
    ) -> Result[OrderSnapshot]:
        """Confirm a draft order.

        Args:
            customer_standing_ok: Whether the customer is in good standing,
                as resolved by the caller.
            credit_limit: The customer's credit limit, as resolved by the caller.

        Returns:
            Ok(snapshot) on success, otherwise Err with a StateError,
            ValidationError (no lines), UnitMismatchError (limit in another
            currency) or PolicyError (bad standing or over the credit limit).
        """

        if (next_status := self._next_status(Action.CONFIRM)) is None:
            return Err(self._state_error(Action.CONFIRM))
        if not self._lines:
            return Err(
                errors.ValidationError(f"Order {self.aggregate_id} has no lines.")
            )
        if not customer_standing_ok:
            return Err(
                errors.PolicyError(self.aggregate_id, "customer is not in good standing")
            )
        if credit_limit.currency != self._total.currency:
            return Err(
                errors.UnitMismatchError(self._total.currency, credit_limit.currency)
            )
        if self._total.is_greater_than(credit_limit):
            return Err(
                errors.PolicyError(
                    self.aggregate_id,
                    f"total {self._total} exceeds credit limit {credit_limit}",
                )
            )

        self._status = next_status
        total = self._total
        self._record(
            lambda seq: events.OrderConfirmed(
                order_id=self.aggregate_id,
                sequence=seq,
                total_amount=str(total.amount),
                currency=total.currency,
            )
        )
        return Ok(self.snapshot())

    def cancel(self) -> Result[OrderSnapshot]:
        """Cancel a draft or confirmed order.

        Returns:
            Ok(snapshot) on success, or Err(StateError) if the order is already
            cancelled.
        """

        if (next_status := self._next_status(Action.CANCEL)) is None:
            return Err(self._state_error(Action.CANCEL))

        previous = self._status
        self._status = next_status
        self._record(
            lambda seq: events.OrderCancelled(
                order_id=self.aggregate_id,
                sequence=seq,
                previous_status=previous.value,
            )
        )
        return Ok(self.snapshot())

    # --- Internal Helpers ---

    def _next_status(self, action: Action) -> OrderStatus | None:
        return TRANSITIONS.get((self._status, action))

    def _state_error(self, action: Action) -> errors.StateError:
        return errors.StateError(self.aggregate_id, self._status.value, action.value)

    @staticmethod
    def _sum_lines(lines, currency: str) -> Money:
        total = Money.zero(currency)
        for line in lines:
            total = total.add(line.subtotal)
        return total

    def __repr__(self) -> str:
        return (
            f"Order(id={self.aggregate_id!r}, status={self._status.value}, "
            f"lines={len(self._lines)}, total={self._total}, version={self._version})"
        )
