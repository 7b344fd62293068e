"""Unit of Work port for Almanac.

A unit groups the calendar store operations of one use-case into a single
transaction::

    with uow:
        if not uow.calendars.exists_by_id(calendar_id):
            raise CalendarNotFoundError(calendar_id)
        uow.calendars.save(calendar)
        uow.commit()

Whatever was not committed when the block exits, normally or through an
exception, is rolled back.
"""

from __future__ import annotations

import abc

from .calendar_store import CalendarStore


class AbstractUnitOfWork(abc.ABC):
    """Transaction boundary around a CalendarStore.

    Attributes:
        calendars: The store to use inside the ``with`` block.
    """

    calendars: CalendarStore

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(self, *args):
        # committed work is unaffected; the rest is discarded
        self.rollback()

    @abc.abstractmethod
    def commit(self):
        """Keep everything done in the unit so far."""

    @abc.abstractmethod
    def rollback(self):
        """Discard everything done since the last commit."""
