"""In-memory calendar store implementation.

All calendars are kept in memory and lost when the instance is discarded.
Use for unit tests, prototyping, or scenarios where durability is not required.

Rows are kept in their encoded (storage) form and read back through the same
assembler as the SQL store, so both behave alike on drifted content. The raw
rows are public (`calendar_rows`, `event_rows`) for tests that need to plant
legacy values.

This implementation passes all contract tests for the CalendarStore interface.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from almanac.domain.model import Calendar
from almanac.interfaces.calendar_store import (
    CalendarStore,
    DuplicateKeyError,
    InvalidCalendarError,
    check_window,
)
from almanac.utils.clock import utc_now

from .assembler import assemble_calendar, attach_events, calendar_to_row, event_to_row

logger = logging.getLogger(__name__)

# kept from the first insert, never overwritten by a later save
PRESERVED_ON_UPDATE = ("created_timestamp", "created_at", "created_by")


class InMemoryCalendarStore(CalendarStore):
    """In-memory CalendarStore for testing and non-durable use cases.

    - Non-durable: all data is lost when the instance is discarded.
    - Writes validate everything before mutating anything, so a failed save
      leaves the store untouched.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self.calendar_rows: dict[str, dict[str, Any]] = {}
        self.event_rows: dict[str, dict[str, Any]] = {}
        self._clock = clock

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def save(self, calendar: Calendar, *, create: bool = False) -> Calendar:
        if not calendar.id:
            raise ValueError("calendar id must be assigned before saving")

        row = calendar_to_row(calendar)
        new_event_rows = [event_to_row(event, calendar.id) for event in calendar.events]
        existing = self.calendar_rows.get(calendar.id)
        if create and existing is not None:
            raise DuplicateKeyError(
                "calendars", f"duplicate calendar id {calendar.id!r}"
            )
        self._check_event_ids(calendar.id, new_event_rows)

        if existing:
            row.update({name: existing[name] for name in PRESERVED_ON_UPDATE})
        else:
            row["created_timestamp"] = self._clock()

        self.calendar_rows[calendar.id] = row
        self._delete_events_of(calendar.id)
        for event_row in new_event_rows:
            self.event_rows[event_row["id"]] = event_row

        logger.info(
            "Calendar saved successfully: id=%s, name=%s, events=%d",
            calendar.id,
            calendar.name,
            len(new_event_rows),
        )
        return calendar

    def find_by_id(self, calendar_id: str) -> Calendar | None:
        if (row := self.calendar_rows.get(calendar_id)) is None:
            return None
        return self._with_events(row)

    def find_all(
        self, page: int | None = None, size: int | None = None
    ) -> list[Calendar]:
        window = check_window(page, size)

        rows = sorted(
            self.calendar_rows.values(),
            key=lambda r: (r["created_timestamp"], r["id"]),
            reverse=True,
        )
        if window is not None:
            offset, limit = window
            rows = rows[offset : offset + limit]

        return [self._with_events(row) for row in rows]

    def exists_by_id(self, calendar_id: str) -> bool:
        return calendar_id in self.calendar_rows

    def count(self) -> int:
        return len(self.calendar_rows)

    def delete_by_id(self, calendar_id: str) -> None:
        self._delete_events_of(calendar_id)
        if self.calendar_rows.pop(calendar_id, None) is None:
            logger.warning("No calendar found to delete: id=%s", calendar_id)
        else:
            logger.info("Calendar deleted successfully: id=%s", calendar_id)

    def delete_all(self) -> None:
        self.event_rows.clear()
        self.calendar_rows.clear()

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    def _check_event_ids(
        self, calendar_id: str, new_event_rows: list[dict[str, Any]]
    ) -> None:
        """Rejects event ids repeated in the input or owned by another calendar.

        Raises:
            DuplicateKeyError: On the first colliding event id.
            InvalidCalendarError: If an event has no id.
        """
        seen: set[str] = set()
        for event_row in new_event_rows:
            event_id = event_row["id"]
            if event_id is None:
                raise InvalidCalendarError("event id must not be null")
            owner = self.event_rows.get(event_id, {}).get("calendar_id")
            if event_id in seen or owner not in (None, calendar_id):
                raise DuplicateKeyError("events", f"duplicate event id {event_id!r}")
            seen.add(event_id)

    def _delete_events_of(self, calendar_id: str) -> None:
        for event_id in [
            event_id
            for event_id, row in self.event_rows.items()
            if row["calendar_id"] == calendar_id
        ]:
            del self.event_rows[event_id]

    def _with_events(self, row: dict[str, Any]) -> Calendar:
        owned = [
            event_row
            for event_row in self.event_rows.values()
            if event_row["calendar_id"] == row["id"]
        ]
        return attach_events(assemble_calendar(row), owned)
