"""Bootstrap the message bus with handlers, unit of work and collaborators."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from tally import config
from tally.adapters.customer_directory import InMemoryCustomerDirectory
from tally.adapters.db.engine import make_engine
from tally.adapters.id_generators import ULIDGenerator
from tally.adapters.unit_of_work import SqlAlchemyUnitOfWork
from tally.service_layer.handlers import COMMAND_HANDLERS, EVENT_HANDLERS
from tally.service_layer.messagebus import MessageBus

if TYPE_CHECKING:
    from tally.domain.events import DomainEvent
    from tally.interfaces.customer_directory import CustomerDirectory
    from tally.interfaces.id_generator import IdGenerator
    from tally.interfaces.unit_of_work import AbstractUnitOfWork
    from tally.service_layer.commands import Command


@dataclass(frozen=True)
class AppContainer:
    """A class to hold application wiring constants."""

    message_bus: MessageBus
    id_generator: IdGenerator
    settings: config.KernelSettings

    def new_order_id(self) -> str:
        """Mint an ID for a `CreateOrder` command."""
        return self.id_generator.new_id()


def build_write_uow(url: str) -> AbstractUnitOfWork:
    """Build a new unit of work for write operations."""
    engine = make_engine(url)
    return SqlAlchemyUnitOfWork(engine)


def build_message_bus(
    uow: AbstractUnitOfWork,
    command_handlers: dict[type[Command], Callable[..., None]],
    event_handlers: dict[type[DomainEvent], list[Callable[..., None]]] | None = None,
    *,
    customers: CustomerDirectory | None = None,
    settings: config.KernelSettings | None = None,
) -> MessageBus:
    """Build a message bus with injected dependencies."""
    dependencies = {
        "uow": uow,
        "customers": customers if customers is not None else InMemoryCustomerDirectory(),
        "settings": settings if settings is not None else config.KernelSettings(),
    }
    injected_command_handlers = {
        command_type: inject_dependencies(handler, dependencies)
        for command_type, handler in command_handlers.items()
    }
    injected_event_handlers = {
        event_type: [inject_dependencies(handler, dependencies) for handler in handlers]
        for event_type, handlers in (event_handlers or {}).items()
    }

    return MessageBus(
        uow,
        command_handlers=injected_command_handlers,
        event_handlers=injected_event_handlers,
    )


def bootstrap(
    uow: AbstractUnitOfWork | None = None,
    customers: CustomerDirectory | None = None,
    settings: config.KernelSettings | None = None,
    id_generator: IdGenerator | None = None,
) -> AppContainer:
    """Bootstrap the message bus with handlers and unit of work.

    Any collaborator left as None is built from the environment: the unit of
    work from `TALLY_DB_URL`, settings via `config.load_settings()`, an empty
    in-memory customer directory and a ULID generator.
    """
    settings = settings if settings is not None else config.load_settings()
    uow = uow if uow is not None else build_write_uow(config.get_db_url())
    message_bus = build_message_bus(
        uow,
        COMMAND_HANDLERS,
        EVENT_HANDLERS,
        customers=customers,
        settings=settings,
    )

    return AppContainer(
        message_bus=message_bus,
        id_generator=id_generator if id_generator is not None else ULIDGenerator(),
        settings=settings,
    )


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Inject dependencies into a handler function based on its parameters."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return partial(handler, **deps)
