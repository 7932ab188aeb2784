"""Message bus implementation for handling commands and events."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from .commands import Command

if TYPE_CHECKING:
    from tally.domain.events import DomainEvent
    from tally.interfaces.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods


class NoHandlerForCommand(LookupError):
    """Exception raised when no handler is found for a command."""

    def __init__(self, cmd: Command) -> None:
        super().__init__(f"No handler found for command {type(cmd).__name__}")


class MessageBus:
    """A simple message bus for handling commands and the events they produce.

    The bus routes a command to its single handler. Once the handler returns
    (its transaction committed), the bus drains the events recorded by every
    order saved through the unit of work and routes each to its event handlers.
    Dispatch is at-least-once from the caller's point of view: nothing here
    deduplicates.

    Args:
        uow: An instance of AbstractUnitOfWork for managing transactional operations.
            This uow should still have been injected into the command handlers; the
            bus uses it to collect new events after each command.
        command_handlers: A mapping of command types to their handlers.
            Handlers should be callables that accept a single command argument.
            Additional dependencies (i.e. uow) should be injected via closures.
        event_handlers: A mapping of event types to lists of handlers accepting a
            single event argument.
    """

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        command_handlers: dict[type[Command], Callable[..., None]],
        event_handlers: dict[type[DomainEvent], list[Callable[..., None]]] | None = None,
    ) -> None:
        self.uow = uow
        self._command_handlers = command_handlers
        self._event_handlers = event_handlers or {}

    def handle(self, cmd: Command) -> None:
        """Handle a command, then dispatch any events it produced.

        Args:
            cmd: The command to handle.

        Raises:
            NoHandlerForCommand: If no handler is found for the command type.
            Exception: If a command or event handler raises an exception.
        """

        if not (handler := self._command_handlers.get(type(cmd))):
            logger.error("No handler found for command %s", type(cmd).__name__)
            raise NoHandlerForCommand(cmd)

        handler_name = self._get_handler_name(handler)
        logger.debug("Handling command %s with handler %s", cmd, handler_name)
        try:
            handler(cmd)
        except Exception:  # pylint: disable=broad-except
            logger.exception(
                "Exception handling command %s with handler %s", cmd, handler_name
            )
            raise

        for event in self.uow.collect_new_events():
            self._dispatch_event(event)

    def _dispatch_event(self, event: DomainEvent) -> None:
        if not (handlers := self._event_handlers.get(type(event))):
            logger.debug("No handlers for event %s; skipping", event.kind)
            return

        for handler in handlers:
            handler_name = self._get_handler_name(handler)
            logger.debug("Handling event %s with handler %s", event, handler_name)
            try:
                handler(event)
            except Exception:  # pylint: disable=broad-except
                logger.exception(
                    "Exception handling event %s with handler %s", event, handler_name
                )
                raise

    @staticmethod
    def _get_handler_name(fn: Callable[..., None]) -> str:
        if hasattr(fn, "__name__"):
            return fn.__name__
        if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
            return fn.func.__name__
        return repr(fn)
