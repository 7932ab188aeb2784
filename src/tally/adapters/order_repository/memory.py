"""In memory order repository implementation.

All orders are stored in memory and lost when the instance is discarded.
Use for unit tests, prototyping, or scenarios where durability is not required.

This implementation passes all contract tests for the OrderRepository interface.
"""

from __future__ import annotations

import threading
from dataclasses import replace

from tally.domain.aggregates import Order, OrderSnapshot
from tally.interfaces.order_repository import (
    ConcurrencyConflictError,
    OrderNotFoundError,
    OrderRepository,
)


class InMemoryOrderRepository(OrderRepository):
    """In-memory OrderRepository for testing and non-durable use cases.

    - Stores immutable snapshots, so callers never share state with the store.
    - The version compare-and-set is guarded by a lock, so concurrent saves from
      the same loaded version resolve to exactly one winner.
    """

    def __init__(self) -> None:
        super().__init__()
        self._snapshots: dict[str, OrderSnapshot] = {}
        self._lock = threading.Lock()

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def _find(self, order_id: str) -> Order:
        with self._lock:
            snapshot = self._snapshots.get(order_id)
        if snapshot is None:
            raise OrderNotFoundError(order_id)
        return Order.rehydrate(snapshot)

    def _save(self, order: Order, expected_version: int) -> int:
        snapshot = order.snapshot()
        with self._lock:
            stored = self._snapshots.get(order.aggregate_id)
            stored_version = 0 if stored is None else stored.version
            if stored_version != expected_version:
                raise ConcurrencyConflictError(
                    order.aggregate_id,
                    expected_version,
                    None if stored is None else stored_version,
                )
            new_version = expected_version + 1
            self._snapshots[order.aggregate_id] = replace(snapshot, version=new_version)
        return new_version

