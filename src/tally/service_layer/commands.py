"""Module defining Commands."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""


@dataclass(frozen=True)
class CreateOrder(Command):
    """Command to open a new draft order for a customer.

    `currency` defaults to the configured default currency when None.
    """

    order_id: str
    customer_ref: str
    currency: str | None = None


@dataclass(frozen=True)
class AddOrderItem(Command):
    """Command to add a line item to a draft order."""

    order_id: str
    product_ref: str
    quantity: int
    unit_price: Decimal | int | str
    currency: str


@dataclass(frozen=True)
class ConfirmOrder(Command):
    """Command to confirm a draft order after checking the customer's standing."""

    order_id: str


@dataclass(frozen=True)
class CancelOrder(Command):
    """Command to cancel a draft or confirmed order."""

    order_id: str
