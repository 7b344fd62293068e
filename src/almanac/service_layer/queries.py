"""Read-side use-cases.

Queries read through a unit of work but never commit; whatever they touched is
rolled back when the block exits.
"""

import logging

from almanac.domain.model import Calendar
from almanac.domain.pagination import Page, paginate
from almanac.interfaces.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)


def get_calendar(calendar_id: str, uow: AbstractUnitOfWork) -> Calendar | None:
    """Return the calendar with `calendar_id`, or None."""
    with uow:
        return uow.calendars.find_by_id(calendar_id)


def list_calendars(uow: AbstractUnitOfWork) -> list[Calendar]:
    """Return every calendar, newest first."""
    with uow:
        calendars = uow.calendars.find_all()
    logger.info("Found %d calendar(s)", len(calendars))
    return calendars


def list_calendar_page(
    page: int, size: int, uow: AbstractUnitOfWork
) -> Page[Calendar]:
    """Return one window of the calendar listing with its page metadata.

    `page` and `size` are expected to be validated (and clamped) by the caller.
    The total and the window are two separate reads.
    """
    with uow:
        total = uow.calendars.count()
        items = uow.calendars.find_all(page, size)

    result = paginate(items, page, size, total)
    logger.info(
        "Found %d calendar(s) on page %d of %d (total: %d)",
        len(result.items),
        page,
        result.total_pages,
        total,
    )
    return result
