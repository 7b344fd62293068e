"""Command dispatch for the service layer.

The bus is the single way the entrypoints change state: they build a command,
hand it to `MessageBus.handle`, and get back whatever the handler produced.
"""

import logging
from collections.abc import Callable, Mapping
from functools import partial
from typing import Any

from almanac.interfaces.calendar_store import CalendarStoreError
from almanac.interfaces.unit_of_work import AbstractUnitOfWork

from .commands import Command

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]

# pylint: disable=too-few-public-methods


class NoHandlerForCommand(LookupError):
    """Raised when a command type has no registered handler."""

    def __init__(self, cmd: Command) -> None:
        super().__init__(f"No handler found for command {type(cmd).__name__}")


def describe_handler(handler: Handler) -> str:
    """Name a handler for log lines, looking through `functools.partial`."""
    while isinstance(handler, partial):
        handler = handler.func
    return getattr(handler, "__name__", None) or repr(handler)


class MessageBus:
    """Routes each command to the one handler registered for its type.

    Handlers take the command as their only positional argument; anything
    else they need (the unit of work, the id generator) is bound by
    `almanac.bootstrap` before the bus is built.

    Store errors (conflicts, missing calendars) are outcomes the caller is
    expected to report, so they are logged briefly. Anything else is logged
    with its traceback. Either way the exception propagates unchanged.

    Args:
        uow: The unit of work the handlers were bound to. Kept here so
            queries can read from the same store.
        command_handlers: Command type to handler.
    """

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        command_handlers: Mapping[type[Command], Handler],
    ) -> None:
        self.uow = uow
        self._command_handlers = dict(command_handlers)

    def handle(self, cmd: Command) -> Any:
        """Run the handler for `cmd` and return its result.

        Raises:
            NoHandlerForCommand: If `type(cmd)` has no handler.
        """
        handler = self._command_handlers.get(type(cmd))
        if handler is None:
            logger.error("No handler found for command %s", type(cmd).__name__)
            raise NoHandlerForCommand(cmd)

        name = describe_handler(handler)
        logger.debug("Dispatching %s to %s", cmd, name)
        try:
            return handler(cmd)
        except CalendarStoreError as exc:
            logger.info("%s rejected %s: %s", name, type(cmd).__name__, exc)
            raise
        except Exception:
            logger.exception("%s failed on %s", name, type(cmd).__name__)
            raise
