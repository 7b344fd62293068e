"""Bootstrap the message bus with handlers, unit of work and id generator."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any

from almanac import config
from almanac.adapters.db.engine import make_engine
from almanac.adapters.id_generators import make_id_generator
from almanac.adapters.unit_of_work import SqlAlchemyUnitOfWork
from almanac.service_layer.handlers import COMMAND_HANDLERS
from almanac.service_layer.messagebus import MessageBus

if TYPE_CHECKING:
    from almanac.interfaces.id_generator import IdGenerator
    from almanac.interfaces.unit_of_work import AbstractUnitOfWork
    from almanac.service_layer.commands import Command


@dataclass(frozen=True)
class AppContainer:
    """A class to hold application wiring constants."""

    message_bus: MessageBus

    @property
    def uow(self) -> AbstractUnitOfWork:
        """The unit of work shared by the handlers, for running queries."""
        return self.message_bus.uow


def build_uow(url: str) -> AbstractUnitOfWork:
    """Build a new unit of work on a fresh engine for `url`."""
    return SqlAlchemyUnitOfWork(make_engine(url))


def build_id_generator(name: str | None = None) -> IdGenerator:
    """Build the id generator named `name` (default: from the environment)."""
    return make_id_generator(name or config.get_id_generator_name())


def build_message_bus(
    uow: AbstractUnitOfWork,
    command_handlers: Mapping[type[Command], Callable[..., Any]],
    id_generator: IdGenerator,
) -> MessageBus:
    """Build a message bus with injected dependencies."""
    dependencies = {"uow": uow, "id_generator": id_generator}
    injected_command_handlers = {
        command_type: inject_dependencies(handler, dependencies)
        for command_type, handler in command_handlers.items()
    }

    return MessageBus(
        uow,
        command_handlers=injected_command_handlers,
    )


def bootstrap(
    db_url: str | None = None, id_generator: IdGenerator | None = None
) -> AppContainer:
    """Bootstrap the message bus with handlers and unit of work.

    Args:
        db_url: Database URL; defaults to ``ALMANAC_DB_URL``.
        id_generator: Generator for new calendar ids; defaults to the one
            named by ``ALMANAC_ID_GENERATOR``.

    Raises:
        DatabaseUrlNotSetError: If no URL is given and none is configured.
        UnknownIdGeneratorError: If the configured generator is not supported.
    """
    uow = build_uow(db_url or config.get_db_url())
    message_bus = build_message_bus(
        uow, COMMAND_HANDLERS, id_generator or build_id_generator()
    )

    return AppContainer(
        message_bus=message_bus,
    )


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Bind the dependencies a handler declares in its signature."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return partial(handler, **deps)
