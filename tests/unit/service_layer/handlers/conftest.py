"""Pytest fixtures for service layer handler unit tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import pytest

from tally.service_layer import commands

from .fakes import GOOD_CUSTOMER, bootstrap_test_bus

if TYPE_CHECKING:
    from tally.service_layer.messagebus import MessageBus

# pylint: disable=redefined-outer-name


@pytest.fixture
def bus_params():
    """Default bus parameters. Classes can override this fixture"""
    return {}


@pytest.fixture
def make_test_bus(bus_params) -> Callable[..., MessageBus]:
    """Factory to create a message bus with in-memory fakes for testing."""

    def _make():
        return bootstrap_test_bus(**bus_params)

    return _make


@pytest.fixture
def bus_with_draft(make_test_bus) -> MessageBus:
    """A bus holding draft order-1 for the good customer, lines 2x10 + 3x5 USD."""
    bus = make_test_bus()
    bus.handle(commands.CreateOrder("order-1", GOOD_CUSTOMER))
    bus.handle(commands.AddOrderItem("order-1", "sku-a", 2, "10", "USD"))
    bus.handle(commands.AddOrderItem("order-1", "sku-b", 3, "5", "USD"))
    return bus
