"""In-memory customer directory.

Stands in for the external customer/credit service. Entries are registered
up front (tests, demos, bootstrap) and looked up by customer reference.
"""

from tally.domain.value_objects import Money
from tally.interfaces.customer_directory import (
    CustomerDirectory,
    CustomerNotFoundError,
    CustomerStanding,
)


class InMemoryCustomerDirectory(CustomerDirectory):
    """Dictionary-backed `CustomerDirectory`."""

    def __init__(self, entries: dict[str, CustomerStanding] | None = None) -> None:
        self._entries: dict[str, CustomerStanding] = dict(entries or {})

    def register(
        self, customer_ref: str, *, standing_ok: bool, credit_limit: Money
    ) -> CustomerStanding:
        """Add or replace a customer's entry."""
        standing = CustomerStanding(
            customer_ref=customer_ref,
            standing_ok=standing_ok,
            credit_limit=credit_limit,
        )
        self._entries[customer_ref] = standing
        return standing

    def lookup(self, customer_ref: str) -> CustomerStanding:
        if (standing := self._entries.get(customer_ref)) is None:
            raise CustomerNotFoundError(customer_ref)
        return standing
