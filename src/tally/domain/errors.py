"""Domain-layer error definitions.

Aggregate operations return these errors inside an `Err` result rather than
raising them. Only `CorruptedAggregateError` and `AggregateIdMismatchError` are
raised directly, since they signal a broken program or broken persisted state.
"""

# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors."""


class AggregateIdMismatchError(DomainError):
    """Raised when an event targets a different aggregate_id than the receiver."""

    def __init__(self, aggregate_id: str, event_aggregate_id: str) -> None:
        super().__init__(
            f"Event aggregate ID '{event_aggregate_id}' does not match "
            f"aggregate ID '{aggregate_id}'."
        )
        self.aggregate_id = aggregate_id
        self.event_aggregate_id = event_aggregate_id


class CorruptedAggregateError(DomainError):
    """Raised when persisted state cannot be turned back into a valid aggregate."""

    def __init__(self, aggregate_id: str, reason: str) -> None:
        super().__init__(f"Aggregate {aggregate_id} is corrupted: {reason}")
        self.aggregate_id = aggregate_id
        self.reason = reason


# ============================================================================
#                   Errors returned by aggregate operations
# ============================================================================


class ValidationError(DomainError):
    """Malformed input to an operation (bad quantity, empty order, ...)."""


class UnitMismatchError(DomainError):
    """Raised or returned when two amounts with different currencies meet."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"Currency mismatch: expected {expected}, got {actual}.")
        self.expected = expected
        self.actual = actual


class StateError(DomainError):
    """An operation was invoked from a status that does not permit it."""

    def __init__(self, aggregate_id: str, status: str, action: str) -> None:
        super().__init__(f"Cannot {action} order {aggregate_id} while {status}.")
        self.aggregate_id = aggregate_id
        self.status = status
        self.action = action


class PolicyError(DomainError):
    """A business policy (customer standing, credit limit) refused the operation."""

    def __init__(self, aggregate_id: str, reason: str) -> None:
        super().__init__(f"Order {aggregate_id} refused: {reason}")
        self.aggregate_id = aggregate_id
        self.reason = reason
