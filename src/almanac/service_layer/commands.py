"""Module defining Commands."""

from dataclasses import dataclass

from almanac.domain.model import Calendar


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""


@dataclass(frozen=True)
class CreateCalendar(Command):
    """Command to create a calendar; the id is generated when not supplied."""

    calendar: Calendar


@dataclass(frozen=True)
class UpdateCalendar(Command):
    """Command to replace an existing calendar (root, metadata and events)."""

    calendar: Calendar


@dataclass(frozen=True)
class DeleteCalendar(Command):
    """Command to delete a calendar and its events; absent ids are a no-op."""

    calendar_id: str


@dataclass(frozen=True)
class DeleteAllCalendars(Command):
    """Command to delete every calendar and event."""
