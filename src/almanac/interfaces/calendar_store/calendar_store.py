"""Calendar store port.

Defines the `CalendarStore` abstraction that persists the calendar aggregate
(a calendar, its embedded metadata and its owned events) across two relations.

Contract overview
-----------------
Writes:
- `save` upserts the calendar row (last write wins, no merge) and replaces its
  event set with the input's, atomically. Returns the input unchanged.
  `save(..., create=True)` inserts the row instead and never overwrites one.
- `delete_by_id` removes the events, then the calendar, atomically. Deleting an
  absent id is a no-op.
- `delete_all` removes every event, then every calendar, atomically.
- Children are always removed before their parent and inserted after it.

Reads:
- `find_by_id` returns None when absent. Events come back ordered by
  `start_datetime` ascending after decoding, undated events first, ties broken
  by event id.
- `find_all` orders calendars by creation time descending (newest first). With
  `page`/`size` it returns the window at offset ``page * size``.
- Reads are two-step (calendar rows, then events per calendar) and are not
  taken atomically: a concurrent `save` may be observed half-applied
  (read skew). Listing costs one extra round trip per calendar.

Decoding:
- Stored enum values outside the known set (or null) decode to the enum's
  default instead of failing.

Errors:
- `DuplicateKeyError`: an event id (or, on `create=True`, a calendar id)
  already exists.
- `CalendarConflictError`: on SQLite, another transaction committed first
  and this one can no longer write.
- `InvalidCalendarError`: the store rejected a value.
- `StoreUnavailableError`: transient driver/DB issues; callers may retry.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from almanac.domain.model import Calendar


class CalendarStore(abc.ABC):
    """An abstract base class for a calendar aggregate store."""

    @abc.abstractmethod
    def save(self, calendar: Calendar, *, create: bool = False) -> Calendar:
        """Upsert the calendar and replace its events, atomically.

        After a successful call the calendar's stored event set is exactly
        `calendar.events`; previously attached events not in that list are gone.

        Args:
            calendar: The aggregate to persist. Its `id` must be set.
            create: Insert only. A calendar already stored under the id is
                left alone and the call fails.

        Returns:
            The input aggregate, unchanged (the store does not re-read).

        Raises:
            DuplicateKeyError: An event id is already used by another calendar
                or appears twice in the input, or (with `create`) the calendar
                id is taken.
            CalendarConflictError: A concurrent transaction committed first
                and this one can no longer write (SQLite).
            InvalidCalendarError: The store rejected a value.
            StoreUnavailableError: For operational/timeout/connection errors.
        """

    @abc.abstractmethod
    def find_by_id(self, calendar_id: str) -> Calendar | None:
        """Load one calendar with its events ordered by start time.

        Args:
            calendar_id: The calendar id to look up.

        Returns:
            The aggregate, or None if no calendar has that id.
        """

    @abc.abstractmethod
    def find_all(
        self, page: int | None = None, size: int | None = None
    ) -> list[Calendar]:
        """List calendars newest first, each with its events attached.

        Args:
            page: 0-indexed page number. Must be given together with `size`.
            size: Page size. Must be given together with `page`.

        Returns:
            Every calendar when no window is given, otherwise at most `size`
            calendars starting at offset ``page * size``.

        Raises:
            ValueError: if only one of `page`/`size` is given, `page < 0`
                or `size < 1`.
        """

    @abc.abstractmethod
    def exists_by_id(self, calendar_id: str) -> bool:
        """Return True if a calendar with this id is stored."""

    @abc.abstractmethod
    def count(self) -> int:
        """Return the number of stored calendars."""

    @abc.abstractmethod
    def delete_by_id(self, calendar_id: str) -> None:
        """Delete a calendar and all of its events. No-op if absent."""

    @abc.abstractmethod
    def delete_all(self) -> None:
        """Delete every event and every calendar."""


def check_window(page: int | None, size: int | None) -> tuple[int, int] | None:
    """Validate an optional listing window.

    Returns:
        ``(offset, limit)`` for a window, or None when neither value is given.

    Raises:
        ValueError: if only one value is given, `page < 0` or `size < 1`.
    """
    if page is None and size is None:
        return None
    if page is None or size is None:
        raise ValueError("page and size must be given together")
    if page < 0:
        raise ValueError("page must be >= 0")
    if size < 1:
        raise ValueError("size must be >= 1")
    return page * size, size
