"""Unit of Work interface for TALLY.

Defines the AbstractUnitOfWork contract: a context-managed unit of work
with an OrderRepository, abstract commit/rollback methods, and a way to drain
the events of every order saved through it.
"""

from __future__ import annotations

import abc
from collections.abc import Iterator
from typing import TYPE_CHECKING

from .order_repository import OrderRepository

if TYPE_CHECKING:
    from tally.domain.events import DomainEvent


class AbstractUnitOfWork(abc.ABC):
    """Contract for a transactional unit of work."""

    orders: OrderRepository

    def __enter__(self) -> AbstractUnitOfWork:
        """Enter the unit of work context and return the unit.

        Implementations may acquire transactional resources here.
        """
        return self

    def __exit__(self, *args):
        """Exit the unit of work context.

        Default behavior is to roll back on exit.
        """
        self.rollback()

    def collect_new_events(self) -> Iterator[DomainEvent]:
        """Yield undispatched events from every order saved through this unit.

        Each event is yielded once; the orders mark them dispatched. Orders
        leave `seen` as they are drained, so a repository that outlives its
        `with` block does not accumulate them.
        """
        # `orders` is only bound once the unit has been entered.
        if (orders := getattr(self, "orders", None)) is None:
            return
        while orders.seen:
            yield from orders.seen.pop(0).collect_undispatched()

    @abc.abstractmethod
    def commit(self):
        """Persist changes and finalize the transaction."""

    @abc.abstractmethod
    def rollback(self):
        """Revert changes and clean up transactional resources."""
