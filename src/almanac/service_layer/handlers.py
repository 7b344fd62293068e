"""Service layer handlers.

Each handler runs in its own unit of work and commits only when everything it
did succeeded; leaving the ``with uow`` block rolls back the rest.
"""

import logging
from collections.abc import Callable
from typing import Any

from almanac.domain.model import Calendar
from almanac.interfaces.calendar_store import (
    CalendarAlreadyExistsError,
    CalendarNotFoundError,
)
from almanac.interfaces.id_generator import IdGenerator
from almanac.interfaces.unit_of_work import AbstractUnitOfWork

from . import commands
from .policies import apply_identity_and_defaults

logger = logging.getLogger(__name__)


def create_calendar(
    cmd: commands.CreateCalendar,
    uow: AbstractUnitOfWork,
    id_generator: IdGenerator,
) -> Calendar:
    """Create a calendar (absent → present).

    The row is inserted, never upserted, so a creator that loses a race for
    the same id fails instead of overwriting the winner.

    Raises:
        CalendarAlreadyExistsError: If the caller supplied an id that is taken.
        DuplicateKeyError: If the id was taken after the check above.
    """
    calendar = cmd.calendar
    logger.info("Creating calendar: id=%s, name=%s", calendar.id, calendar.name)

    with uow:
        if calendar.id and uow.calendars.exists_by_id(calendar.id):
            logger.warning("Calendar already exists: id=%s", calendar.id)
            raise CalendarAlreadyExistsError(calendar.id)

        calendar = apply_identity_and_defaults(calendar, id_generator)
        saved = uow.calendars.save(calendar, create=True)
        uow.commit()

    logger.info(
        "Calendar created successfully: id=%s, name=%s, events=%d",
        saved.id,
        saved.name,
        len(saved.events),
    )
    return saved


def update_calendar(cmd: commands.UpdateCalendar, uow: AbstractUnitOfWork) -> Calendar:
    """Replace an existing calendar wholesale (present → present).

    Raises:
        ValueError: If the calendar carries no id.
        CalendarNotFoundError: If no calendar has that id.
    """
    calendar = cmd.calendar
    if not calendar.id:
        raise ValueError("calendar id is required to update a calendar")

    with uow:
        if not uow.calendars.exists_by_id(calendar.id):
            raise CalendarNotFoundError(calendar.id)
        saved = uow.calendars.save(calendar)
        uow.commit()

    logger.info("Calendar updated successfully: id=%s", saved.id)
    return saved


def delete_calendar(cmd: commands.DeleteCalendar, uow: AbstractUnitOfWork) -> None:
    """Delete a calendar and its events (present → absent); idempotent."""
    logger.info("Deleting calendar: id=%s", cmd.calendar_id)
    with uow:
        if not uow.calendars.exists_by_id(cmd.calendar_id):
            logger.warning(
                "Attempted to delete non-existent calendar: id=%s", cmd.calendar_id
            )
            return
        uow.calendars.delete_by_id(cmd.calendar_id)
        uow.commit()


def delete_all_calendars(
    cmd: commands.DeleteAllCalendars,  # pylint: disable=unused-argument
    uow: AbstractUnitOfWork,
) -> None:
    """Delete every calendar and event."""
    logger.info("Deleting all calendars")
    with uow:
        uow.calendars.delete_all()
        uow.commit()
    logger.info("All calendars deleted successfully")


# ============================================================================
#                       Handler Registry
# ============================================================================


COMMAND_HANDLERS: dict[type, Callable[..., Any]] = {
    commands.CreateCalendar: create_calendar,
    commands.UpdateCalendar: update_calendar,
    commands.DeleteCalendar: delete_calendar,
    commands.DeleteAllCalendars: delete_all_calendars,
}
