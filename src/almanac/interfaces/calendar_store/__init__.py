"""Almanac Calendar Store Interface Package"""

from .calendar_store import CalendarStore, check_window
from .errors import (
    CalendarAlreadyExistsError,
    CalendarConflictError,
    CalendarNotFoundError,
    CalendarStoreError,
    DuplicateKeyError,
    InvalidCalendarError,
    StoreUnavailableError,
)

__all__ = [
    "CalendarAlreadyExistsError",
    "CalendarConflictError",
    "CalendarNotFoundError",
    "CalendarStore",
    "CalendarStoreError",
    "DuplicateKeyError",
    "InvalidCalendarError",
    "StoreUnavailableError",
    "check_window",
]
