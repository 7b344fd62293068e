"""Unit tests for the MessageBus."""

import logging
from dataclasses import dataclass
from functools import partial

import pytest

from almanac.interfaces.calendar_store import CalendarNotFoundError
from almanac.service_layer.commands import Command, DeleteCalendar
from almanac.service_layer.messagebus import (
    MessageBus,
    NoHandlerForCommand,
    describe_handler,
)

from .handlers.fakes import FakeUoW

# pylint: disable=unused-argument, too-few-public-methods


@dataclass(frozen=True)
class Ping(Command):
    """Carries a number to the handler."""

    n: int = 0


@dataclass(frozen=True)
class Echo(Command):
    """Carries a word to the handler."""

    word: str = "hi"


def messages_at(caplog: pytest.LogCaptureFixture, level: int) -> list[str]:
    """Messages the bus logged at exactly `level`."""
    return [
        rec.getMessage()
        for rec in caplog.records
        if rec.name == "almanac.service_layer.messagebus" and rec.levelno == level
    ]


class TestDispatch:
    """Commands reach the right handler and results come back."""

    @staticmethod
    def test_only_the_matching_handler_runs(caplog):
        """A Ping goes to the Ping handler, once, and the dispatch is logged."""
        seen: list[tuple[str, Command]] = []

        def on_ping(cmd: Ping) -> None:
            seen.append(("ping", cmd))

        def on_echo(cmd: Echo) -> None:
            seen.append(("echo", cmd))

        bus = MessageBus(FakeUoW(), command_handlers={Ping: on_ping, Echo: on_echo})

        with caplog.at_level(logging.DEBUG):
            bus.handle(Ping(7))

        assert seen == [("ping", Ping(7))]
        assert messages_at(caplog, logging.DEBUG) == ["Dispatching Ping(n=7) to on_ping"]

    @staticmethod
    def test_result_is_returned():
        """Whatever the handler returns is handed back to the caller."""
        bus = MessageBus(FakeUoW(), command_handlers={Echo: lambda cmd: cmd.word * 2})
        assert bus.handle(Echo("ab")) == "abab"

    @staticmethod
    def test_subclasses_are_not_matched():
        """Dispatch is by exact type; a handler for Command does not catch Ping."""
        bus = MessageBus(FakeUoW(), command_handlers={Command: lambda cmd: "base"})
        with pytest.raises(NoHandlerForCommand):
            bus.handle(Ping())

    @staticmethod
    def test_uow_is_exposed():
        """Queries can reach the store through the bus."""
        uow = FakeUoW()
        assert MessageBus(uow, command_handlers={}).uow is uow


class TestFailures:
    """How the bus reports missing handlers and failing ones."""

    @staticmethod
    def test_unregistered_command(caplog):
        """An unknown command is logged and rejected with a LookupError."""
        bus = MessageBus(FakeUoW(), command_handlers={})

        with pytest.raises(LookupError, match="No handler found for command DeleteCalendar"):
            bus.handle(DeleteCalendar("cal-1"))

        assert messages_at(caplog, logging.ERROR) == [
            "No handler found for command DeleteCalendar"
        ]

    @staticmethod
    def test_unexpected_error_is_logged_with_traceback(caplog):
        """A crashing handler is logged with exc_info and re-raised unchanged."""
        boom = RuntimeError("disk on fire")

        def explode(cmd: Ping):
            raise boom

        bus = MessageBus(FakeUoW(), command_handlers={Ping: explode})

        with pytest.raises(RuntimeError) as excinfo:
            bus.handle(Ping())

        assert excinfo.value is boom
        (record,) = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert record.getMessage() == "explode failed on Ping"
        assert record.exc_info is not None

    @staticmethod
    def test_store_errors_are_logged_briefly(caplog):
        """Expected store outcomes are logged at INFO, not as crashes."""

        def missing(cmd: Ping):
            raise CalendarNotFoundError("cal-9")

        bus = MessageBus(FakeUoW(), command_handlers={Ping: missing})

        with caplog.at_level(logging.INFO), pytest.raises(CalendarNotFoundError):
            bus.handle(Ping())

        assert messages_at(caplog, logging.ERROR) == []
        (message,) = messages_at(caplog, logging.INFO)
        assert message.startswith("missing rejected Ping: ")
        assert "cal-9" in message


class TestDescribeHandler:
    """Handler names as they appear in the log."""

    @staticmethod
    def test_plain_function():
        def create_calendar(cmd):
            pass

        assert describe_handler(create_calendar) == "create_calendar"

    @staticmethod
    def test_nested_partials_use_the_wrapped_name():
        def create_calendar(cmd, uow, id_generator):
            pass

        bound = partial(partial(create_calendar, uow=None), id_generator=None)
        assert describe_handler(bound) == "create_calendar"

    @staticmethod
    def test_callable_object_falls_back_to_repr():
        class Handler:
            """Callable without a __name__."""

            def __call__(self, cmd):
                pass

            def __repr__(self):
                return "<Handler>"

        assert describe_handler(Handler()) == "<Handler>"
