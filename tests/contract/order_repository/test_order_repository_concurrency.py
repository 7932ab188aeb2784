"""Concurrency contracts for the OrderRepository port.

Writers that loaded the same version race to save; storage arbitrates and
exactly one of them wins.
"""

from __future__ import annotations

import threading
from typing import Literal

import pytest

from tally.adapters.order_repository import InMemoryOrderRepository
from tally.adapters.unit_of_work import SqlAlchemyUnitOfWork
from tally.domain.aggregates import Order
from tally.interfaces.order_repository import ConcurrencyConflictError
from tests.fixtures.orders import usd

# pylint: disable=magic-value-comparison

WRITERS = 8


def test_concurrent_saves_from_same_version_in_memory(make_order):
    """Threads saving from the same loaded version: one wins, the rest conflict."""
    repo = InMemoryOrderRepository()
    repo.save(make_order(), expected_version=0)

    barrier = threading.Barrier(WRITERS)
    results: list[tuple[Literal["ok", "err"], int | Exception]] = []
    lock = threading.Lock()  # protect results append

    def worker(n: int):
        order = repo.find("order-1")
        order.add_item(f"sku-{n}", 1, usd(n + 1)).unwrap()
        try:  # pylint: disable=too-many-try-statements
            barrier.wait(timeout=5)
            new_version = repo.save(order, expected_version=1)
            with lock:
                results.append(("ok", new_version))
        except ConcurrencyConflictError as e:
            with lock:
                results.append(("err", e))
        except threading.BrokenBarrierError as e:
            with lock:
                results.append(("err", e))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(WRITERS)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    oks = [r for tag, r in results if tag == "ok"]
    errs = [r for tag, r in results if tag == "err"]
    assert oks == [2]
    assert len(errs) == WRITERS - 1
    assert all(isinstance(e, ConcurrencyConflictError) for e in errs)

    stored = repo.find("order-1")
    assert stored.version == 2
    assert len(stored.lines) == 1


def test_interleaved_units_of_work_on_sqlite_file(sqlite_engine_file):
    """Two units of work load the same version; the later save conflicts."""
    setup = SqlAlchemyUnitOfWork(sqlite_engine_file)
    with setup:
        setup.orders.save(Order.create("order-1", "cust-1"), expected_version=0)
        setup.commit()

    uow_a = SqlAlchemyUnitOfWork(sqlite_engine_file)
    uow_b = SqlAlchemyUnitOfWork(sqlite_engine_file)
    with uow_a, uow_b:
        order_a = uow_a.orders.find("order-1")
        order_b = uow_b.orders.find("order-1")

        order_a.add_item("sku-a", 1, usd(1)).unwrap()
        uow_a.orders.save(order_a, expected_version=order_a.version)
        uow_a.commit()

        order_b.add_item("sku-b", 5, usd(5)).unwrap()
        with pytest.raises(ConcurrencyConflictError) as e:
            uow_b.orders.save(order_b, expected_version=order_b.version)

    assert e.value.expected == 1
    assert e.value.actual == 2
    assert order_b.version == 1

    with setup:
        stored = setup.orders.find("order-1")
    assert stored.version == 2
    assert stored.total == usd(1)
    assert [line.product_ref for line in stored.lines] == ["sku-a"]
