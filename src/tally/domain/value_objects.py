"""Module including value objects used across the domain layer."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

from .errors import UnitMismatchError, ValidationError

CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")


class OrderStatus(Enum):
    """Enumeration of possible Order statuses."""

    DRAFT = "draft"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


def _to_decimal(amount: Decimal | int | str) -> Decimal:
    # bool is an int subclass and floats are inexact; neither is an amount.
    if isinstance(amount, (bool, float)):
        raise ValidationError(f"Amount must be a Decimal, int or str, got {amount!r}")
    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, (int, str)):
        try:
            value = Decimal(amount)
        except InvalidOperation as e:
            raise ValidationError(f"Invalid amount: {amount!r}") from e
    else:
        raise ValidationError(f"Amount must be a Decimal, int or str, got {amount!r}")
    if not value.is_finite():
        raise ValidationError(f"Amount must be finite, got {amount!r}")
    return value


@dataclass(frozen=True, slots=True)
class Money:
    """An exact amount in a single currency.

    Two instances are equal iff their amounts and currencies are equal.
    Arithmetic and ordering are only defined between instances that share a
    currency; anything else raises `UnitMismatchError`.
    """

    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _to_decimal(self.amount))
        if not isinstance(self.currency, str):
            raise ValidationError(f"Currency must be a string, got {self.currency!r}")
        currency = self.currency.strip().upper()
        if not CURRENCY_PATTERN.match(currency):
            raise ValidationError(f"Invalid currency code: {self.currency!r}")
        object.__setattr__(self, "currency", currency)

    # --- Construction ---

    @classmethod
    def of(cls, amount: Decimal | int | str, currency: str) -> Money:
        """Build a Money value from a Decimal, int or numeric string."""
        return cls(amount=amount, currency=currency)  # type: ignore[arg-type]

    @classmethod
    def zero(cls, currency: str) -> Money:
        """Zero in the given currency, the seed when summing subtotals."""
        return cls(amount=Decimal(0), currency=currency)

    # --- Arithmetic ---

    def add(self, other: Money) -> Money:
        """Return the sum of two same-currency amounts.

        Raises:
            UnitMismatchError: if the currencies differ.
        """
        self._check_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: Money) -> Money:
        """Return the difference of two same-currency amounts.

        The result may be negative; callers enforce any domain floor.

        Raises:
            UnitMismatchError: if the currencies differ.
        """
        self._check_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def multiply(self, factor: int) -> Money:
        """Scale the amount by an integer factor (e.g. a line quantity)."""
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise ValidationError(f"Factor must be an integer, got {factor!r}")
        return Money(self.amount * factor, self.currency)

    def is_greater_than(self, other: Money) -> bool:
        """Compare amounts within a single currency.

        Raises:
            UnitMismatchError: if the currencies differ.
        """
        self._check_currency(other)
        return self.amount > other.amount

    def __add__(self, other: Money) -> Money:
        return self.add(other)

    def __sub__(self, other: Money) -> Money:
        return self.subtract(other)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    # --- Internal Helpers ---

    def _check_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise UnitMismatchError(self.currency, other.currency)


@dataclass(frozen=True, slots=True)
class LineItem:
    """A quantity of a product at a unit price.

    Line items are never mutated in place; the order replaces them wholesale.
    """

    product_ref: str
    quantity: int
    unit_price: Money

    def __post_init__(self) -> None:
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValidationError(f"Quantity must be an integer, got {self.quantity!r}")
        if self.quantity <= 0:
            raise ValidationError(f"Quantity must be positive, got {self.quantity}")

    @property
    def subtotal(self) -> Money:
        """The unit price multiplied by the quantity."""
        return self.unit_price.multiply(self.quantity)
