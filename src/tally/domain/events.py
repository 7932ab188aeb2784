"""Events"""

from __future__ import annotations

import abc
from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class DomainEvent(abc.ABC):
    """Base class for all domain events.

    Every event carries a `sequence` assigned by the recording aggregate
    (1-based, monotonic per aggregate instance) and a way to determine the
    owning aggregate ID.
    """

    @property
    @abc.abstractmethod
    def aggregate_id(self) -> str:
        """Return the ID of the aggregate this event belongs to."""

    @property
    def kind(self) -> str:
        """The event kind tag, used as the key in `EVENT_REGISTRY`."""
        return type(self).__name__


@dataclass(frozen=True, slots=True)
class OrderConfirmed(DomainEvent):
    """Event indicating that an order has been confirmed."""

    order_id: str
    sequence: int
    total_amount: str  # Decimal rendered as a string to keep it exact
    currency: str

    @property
    def aggregate_id(self) -> str:
        return self.order_id


@dataclass(frozen=True, slots=True)
class OrderCancelled(DomainEvent):
    """Event indicating that an order has been cancelled."""

    order_id: str
    sequence: int
    previous_status: str

    @property
    def aggregate_id(self) -> str:
        return self.order_id


# Registry of domain event types for deserialization
EVENT_REGISTRY: dict[str, type[DomainEvent]] = {
    "OrderConfirmed": OrderConfirmed,
    "OrderCancelled": OrderCancelled,
}


class UnknownEventKindError(LookupError):
    """Raised when an event kind tag is not present in the registry."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"Unknown event kind: {kind}")
        self.kind = kind


def event_to_dict(event: DomainEvent) -> dict[str, Any]:
    """Serialize an event into a plain dict tagged with its kind."""
    return {"kind": event.kind, "payload": asdict(event)}


def event_from_dict(
    data: dict[str, Any], registry: dict[str, type[DomainEvent]] | None = None
) -> DomainEvent:
    """Rebuild an event from the output of `event_to_dict`.

    Raises:
        UnknownEventKindError: if the kind tag is not registered.
    """
    registry = registry if registry is not None else EVENT_REGISTRY
    if not (cls := registry.get(data["kind"])):
        raise UnknownEventKindError(data["kind"])
    return cls(**data["payload"])
