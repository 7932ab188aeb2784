"""Customer directory port.

The directory answers the two questions an order needs before confirmation:
is the customer in good standing, and what is their credit limit. Handlers
resolve both here and hand them to `Order.confirm` as plain arguments.
"""

import abc
from dataclasses import dataclass

from tally.domain.value_objects import Money

# pylint: disable=too-few-public-methods


class CustomerNotFoundError(LookupError):
    """Raised when the directory has no entry for a customer."""

    def __init__(self, customer_ref: str) -> None:
        super().__init__(f"Customer ({customer_ref}) not found in directory")
        self.customer_ref = customer_ref


@dataclass(frozen=True, slots=True)
class CustomerStanding:
    """Already-resolved policy inputs for a customer."""

    customer_ref: str
    standing_ok: bool
    credit_limit: Money


class CustomerDirectory(abc.ABC):
    """Contract for looking up a customer's standing and credit limit."""

    @abc.abstractmethod
    def lookup(self, customer_ref: str) -> CustomerStanding:
        """Get the standing of a customer.

        Args:
            customer_ref: Opaque reference to the customer.

        Raises:
            CustomerNotFoundError: If the customer is unknown.
        """
