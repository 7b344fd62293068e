"""Exceptions for calendar store operations.

Hierarchy::

    CalendarStoreError
    ├── CalendarConflictError
    │   ├── CalendarAlreadyExistsError   (application pre-check on create)
    │   └── DuplicateKeyError            (uniqueness violation raised by the store)
    ├── CalendarNotFoundError
    ├── InvalidCalendarError
    └── StoreUnavailableError
"""


class CalendarStoreError(Exception):
    """Base class for calendar store errors."""


class CalendarConflictError(CalendarStoreError):
    """An identifier is already taken.

    Catch this to handle both detection paths (pre-check and storage
    constraint) uniformly.
    """


class CalendarAlreadyExistsError(CalendarConflictError):
    """Creation attempted for a calendar id that is already present.

    Attributes:
        calendar_id (str): The id that is already in use.
    """

    def __init__(self, calendar_id: str) -> None:
        super().__init__(f"Calendar with id {calendar_id} already exists")
        self.calendar_id = calendar_id


class DuplicateKeyError(CalendarConflictError):
    """The store rejected a write because a primary key is already in use.

    This slips past the creation pre-check when two writers race, or when an
    event id is already owned by another calendar.

    Attributes:
        relation (str): The relation whose key collided ("calendars" or "events").
        detail (str): The driver's message, for diagnostics.
    """

    def __init__(self, relation: str, detail: str) -> None:
        super().__init__(f"A record with the same key already exists in {relation}")
        self.relation = relation
        self.detail = detail


class CalendarNotFoundError(CalendarStoreError):
    """A calendar required to be present was not found.

    Attributes:
        calendar_id (str): The id that was looked up.
    """

    def __init__(self, calendar_id: str) -> None:
        super().__init__(f"Calendar with id {calendar_id} not found")
        self.calendar_id = calendar_id


class InvalidCalendarError(CalendarStoreError):
    """The store rejected the aggregate's data (value too long, bad type, ...)."""


class StoreUnavailableError(CalendarStoreError):
    """Operational/timeout/connection errors; callers may retry."""
