"""Order repository port for TALLY.

This module defines:
- The `OrderRepository` port (framework-free ABC) for loading and saving whole
  Order aggregates.
- A small, adapter-agnostic exception hierarchy for precise error handling.

Contract overview
-----------------
Find:
- `find(order_id)` returns a fully rebuilt `Order` or raises `OrderNotFoundError`.

Save:
- The aggregate is the unit of consistency: status, lines, total and version
  are persisted together or not at all. Partial line persistence is forbidden.
- Optimistic concurrency: the write is rejected with `ConcurrencyConflictError`
  unless the stored version equals `expected_version` (a never-saved order has
  stored version 0). On success the stored version becomes
  `expected_version + 1` and the aggregate's `version` is updated to match.
- Every successfully saved aggregate is remembered in `seen` until the unit of
  work drains its events after commit.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tally.domain.aggregates import Order

# --- Exceptions to standardize adapter behavior ---


class RepositoryError(Exception):
    """Base class for repository-related errors."""


class OrderNotFoundError(RepositoryError):
    """Raised when an order cannot be found in its repository.

    Terminal for the current request: retrying without new input will not help.
    """

    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order with ID {order_id} not found.")
        self.order_id = order_id


class ConcurrencyConflictError(RepositoryError):
    """Stored version precondition failed (optimistic concurrency).

    Retryable: reload the order, reapply the change and save again.
    """

    def __init__(self, order_id: str, expected: int, actual: int | None) -> None:
        super().__init__(
            f"Order ({order_id}) version conflict: stored={actual}, expected={expected}"
        )
        self.order_id = order_id
        self.expected = expected
        self.actual = actual


# --- Repository Interface ---


class OrderRepository(abc.ABC):
    """An abstract base class for order repositories."""

    def __init__(self) -> None:
        self.seen: list[Order] = []

    def find(self, order_id: str) -> Order:
        """Load an order by ID.

        Args:
            order_id: The ID of the order to retrieve.

        Raises:
            OrderNotFoundError: If no order with that ID has been saved.
            CorruptedAggregateError: If the stored state breaks an order invariant.

        Returns:
            The order, with `version` set to the stored version.
        """
        return self._find(order_id)

    def save(self, order: Order, expected_version: int) -> int:
        """Persist the whole order atomically.

        Internal gate. Adapters implement `_save`; this method updates the
        aggregate's version and tracks it in `seen`.

        The version is updated as soon as the write succeeds, before the unit of
        work commits. If the commit fails, the aggregate reports a version that
        was never persisted and must be discarded; handlers reload it on the
        next attempt.

        Args:
            order: The order to persist.
            expected_version: The version the caller loaded (0 for a new order).

        Raises:
            ConcurrencyConflictError: If the stored version differs from
                `expected_version`.

        Returns:
            The new stored version (`expected_version + 1`).
        """
        new_version = self._save(order, expected_version)
        order.mark_persisted(new_version)
        if order not in self.seen:
            self.seen.append(order)
        return new_version

    @abc.abstractmethod
    def _find(self, order_id: str) -> Order:
        """Adapter-specific load; see `find`."""

    @abc.abstractmethod
    def _save(self, order: Order, expected_version: int) -> int:
        """Adapter-specific compare-and-set write; see `save`.

        Must not touch `order.version`; the caller does that after success.
        """
