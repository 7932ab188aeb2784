"""Base class for all aggregates."""

import abc
from collections.abc import Callable
from typing import ClassVar, TypeVar

from tally.domain.errors import AggregateIdMismatchError
from tally.domain.events import DomainEvent

E = TypeVar("E", bound=DomainEvent)


class Aggregate(abc.ABC):
    """Generic base class for all aggregates.

    Owns the version marker used by repositories for optimistic concurrency and
    an append-only event log. Draining the log marks events as dispatched; it
    never removes them.
    """

    AGGREGATE_TYPE: ClassVar[str]
    """A string identifier for the aggregate type (used in logs and errors)."""

    def __init__(self, aggregate_id: str) -> None:
        self._aggregate_id: str = aggregate_id
        self._version: int = 0
        self._events: list[DomainEvent] = []
        self._dispatched: int = 0

    # --- Identity & Versioning ---

    @property
    def aggregate_id(self) -> str:
        """The aggregate ID, assigned at creation and never reassigned."""
        return self._aggregate_id

    @property
    def version(self) -> int:
        """The version of the aggregate as last persisted (0 if never saved)."""
        return self._version

    def mark_persisted(self, version: int) -> None:
        """Record the version assigned by a repository after a successful save.

        Only repositories should call this.
        """
        if version < self._version:
            raise ValueError(
                f"Version cannot move backwards ({self._version} -> {version})"
            )
        self._version = version

    # --- Event Log ---

    def _record(self, event_factory: Callable[[int], E]) -> E:
        """Internal gate. Do not override.

        Builds the event with the next sequence number, checks that it belongs
        to this aggregate and appends it to the log.
        """
        event = event_factory(len(self._events) + 1)
        if event.aggregate_id != self.aggregate_id:
            raise AggregateIdMismatchError(self.aggregate_id, event.aggregate_id)
        self._events.append(event)
        return event

    @property
    def events(self) -> tuple[DomainEvent, ...]:
        """Every event recorded by this instance, in order."""
        return tuple(self._events)

    def collect_undispatched(self) -> list[DomainEvent]:
        """Return the events recorded since the previous call and mark them dispatched.

        Note: This is NOT thread-safe. It is the caller's responsibility to ensure
        that no other operations are performed on the aggregate between calls to this
        method.
        """

        undispatched = self._events[self._dispatched :]
        self._dispatched = len(self._events)
        return undispatched
