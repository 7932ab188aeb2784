"""Service layer handlers.

Command handlers follow one shape: load the order through the unit of work,
invoke exactly one aggregate operation, escalate an `Err` result by raising its
error, save with the version that was loaded, and commit. Version conflicts are
retried by reloading and reapplying, up to `KernelSettings.max_save_attempts`.

Event handlers run after the command's transaction has committed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from tally.domain import events
from tally.domain.aggregates import Order
from tally.domain.value_objects import Money
from tally.interfaces.order_repository import ConcurrencyConflictError

from . import commands

if TYPE_CHECKING:
    from tally.config import KernelSettings
    from tally.domain.aggregates import OrderSnapshot
    from tally.domain.result import Result
    from tally.interfaces.customer_directory import CustomerDirectory
    from tally.interfaces.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)

# ============================================================================
#                               Helpers
# ============================================================================


def apply_with_retry(
    order_id: str,
    operation: Callable[[Order], Result[OrderSnapshot]],
    uow: AbstractUnitOfWork,
    max_attempts: int,
) -> OrderSnapshot:
    """Load an order, apply one operation and save it, retrying on conflicts.

    Args:
        order_id: The order to mutate.
        operation: Invokes one aggregate operation and returns its result.
        uow: The unit of work providing the order repository.
        max_attempts: Total number of attempts before giving up.

    Returns:
        A snapshot of the saved order, carrying its new version.

    Raises:
        OrderNotFoundError: If the order does not exist.
        DomainError: The error carried by an `Err` result.
        ConcurrencyConflictError: If every attempt lost the version race.
    """

    attempt = 1
    while True:
        try:
            with uow:
                order = uow.orders.find(order_id)
                expected_version = order.version
                operation(order).unwrap()
                uow.orders.save(order, expected_version)
                uow.commit()
            return order.snapshot()
        except ConcurrencyConflictError as e:
            if attempt >= max_attempts:
                logger.error(
                    "Giving up on order %s after %d conflicting attempts",
                    order_id,
                    attempt,
                )
                raise
            logger.warning(
                "Version conflict on order %s (attempt %d/%d): %s; reloading",
                order_id,
                attempt,
                max_attempts,
                e,
            )
            attempt += 1


# ============================================================================
#                           Command Handlers
# ============================================================================


def create_order(
    cmd: commands.CreateOrder, uow: AbstractUnitOfWork, settings: KernelSettings
) -> None:
    """Open a new draft order and store it at version 1."""

    order = Order.create(
        order_id=cmd.order_id,
        customer_ref=cmd.customer_ref,
        currency=cmd.currency or settings.default_currency,
    )

    with uow:
        uow.orders.save(order, expected_version=0)
        uow.commit()

    logger.debug("Created order %s for customer %s", cmd.order_id, cmd.customer_ref)


def add_order_item(
    cmd: commands.AddOrderItem, uow: AbstractUnitOfWork, settings: KernelSettings
) -> None:
    """Add a line item to a draft order."""

    unit_price = Money.of(cmd.unit_price, cmd.currency)
    snapshot = apply_with_retry(
        cmd.order_id,
        lambda order: order.add_item(cmd.product_ref, cmd.quantity, unit_price),
        uow,
        settings.max_save_attempts,
    )
    logger.debug(
        "Added %d x %s to order %s; total now %s",
        cmd.quantity,
        cmd.product_ref,
        cmd.order_id,
        snapshot.total,
    )


def confirm_order(
    cmd: commands.ConfirmOrder,
    uow: AbstractUnitOfWork,
    customers: CustomerDirectory,
    settings: KernelSettings,
) -> None:
    """Confirm a draft order.

    The customer's standing and credit limit are resolved here, on every
    attempt, and passed to the aggregate as plain values.
    """

    def _confirm(order: Order) -> Result[OrderSnapshot]:
        standing = customers.lookup(order.customer_ref)
        return order.confirm(standing.standing_ok, standing.credit_limit)

    apply_with_retry(cmd.order_id, _confirm, uow, settings.max_save_attempts)


def cancel_order(
    cmd: commands.CancelOrder, uow: AbstractUnitOfWork, settings: KernelSettings
) -> None:
    """Cancel a draft or confirmed order."""

    apply_with_retry(
        cmd.order_id, lambda order: order.cancel(), uow, settings.max_save_attempts
    )


COMMAND_HANDLERS: dict[type[commands.Command], Callable[..., None]] = {
    commands.CreateOrder: create_order,
    commands.AddOrderItem: add_order_item,
    commands.ConfirmOrder: confirm_order,
    commands.CancelOrder: cancel_order,
}

# ============================================================================
#                            Event Handlers
# ============================================================================


def log_order_confirmed(event: events.OrderConfirmed) -> None:
    """Announce a confirmed order (stand-in for customer notification)."""
    logger.info(
        "Order %s confirmed with total %s %s",
        event.order_id,
        event.total_amount,
        event.currency,
    )


def log_order_cancelled(event: events.OrderCancelled) -> None:
    """Announce a cancelled order (stand-in for customer notification)."""
    logger.info(
        "Order %s cancelled (was %s)", event.order_id, event.previous_status
    )


EVENT_HANDLERS: dict[type[events.DomainEvent], list[Callable[..., None]]] = {
    events.OrderConfirmed: [log_order_confirmed],
    events.OrderCancelled: [log_order_cancelled],
}
