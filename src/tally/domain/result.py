"""Result type returned by aggregate operations.

Expected business failures (validation, state, policy, currency) travel back to
the caller as `Err` values instead of exceptions. The caller decides whether to
escalate them, typically via `unwrap()`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, TypeAlias, TypeVar

from .errors import DomainError

T = TypeVar("T")
E = TypeVar("E", bound=DomainError)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @staticmethod
    def is_ok() -> Literal[True]:
        """Always True for `Ok`."""
        return True

    @staticmethod
    def is_err() -> Literal[False]:
        """Always False for `Ok`."""
        return False

    def unwrap(self) -> T:
        """Return the carried value."""
        return self.value

    def unwrap_err(self) -> DomainError:
        """Raise, since there is no error to return."""
        raise ValueError(f"Called unwrap_err() on {self!r}")


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying a domain error instance."""

    error: E

    @staticmethod
    def is_ok() -> Literal[False]:
        """Always False for `Err`."""
        return False

    @staticmethod
    def is_err() -> Literal[True]:
        """Always True for `Err`."""
        return True

    def unwrap(self):
        """Raise the carried error.

        Raises:
            DomainError: the error held by this result.
        """
        raise self.error

    def unwrap_err(self) -> E:
        """Return the carried error."""
        return self.error


Result: TypeAlias = Ok[T] | Err[DomainError]
