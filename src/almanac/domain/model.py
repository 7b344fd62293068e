"""Calendar aggregate: the calendar root, its embedded metadata and its events.

Conventions:
  - Enum member values are the lower-case member names; that is also the form
    written to storage.
  - `created_at` / `updated_at` are opaque, already-formatted strings. This
    layer never parses them.
  - Event `start_datetime` / `end_datetime` are wall-clock (naive) datetimes.
  - `CalendarMetadata.count` is a denormalized hint and is never reconciled
    with the real number of events.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

# pylint: disable=too-many-instance-attributes


class CalendarState(Enum):
    """Lifecycle status of a calendar."""

    UNKNOWN = "unknown"
    ACTIVE = "active"
    INACTIVE = "inactive"


class CalendarVisibility(Enum):
    """Sharing level of a calendar."""

    PERSONAL = "personal"
    SHARED = "shared"
    PRIVATE = "private"


class EventType(Enum):
    """Kind of calendar event."""

    HOLIDAY = "holiday"
    MEETING = "meeting"
    APPOINTMENT = "appointment"
    REMINDER = "reminder"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class CalendarMetadata:
    """Embedded value object describing a calendar. Has no identity of its own."""

    status: CalendarState | None = CalendarState.UNKNOWN
    visibility: CalendarVisibility | None = CalendarVisibility.PERSONAL
    created_at: str | None = None
    created_by: str | None = None
    updated_at: str | None = None
    updated_by: str | None = None
    count: int = 0


@dataclass(frozen=True, slots=True)
class CalendarEvent:
    """A single event owned by exactly one calendar.

    The owning calendar is not recorded on the event itself; ownership is
    expressed by membership in `Calendar.events`.
    """

    id: str
    name: str | None = None
    description: str | None = None
    type: EventType | None = EventType.OTHER
    disabled: bool = False
    all_day: bool = False
    start_datetime: datetime | None = None
    end_datetime: datetime | None = None
    location: str | None = None
    created_at: str | None = None
    created_by: str | None = None
    updated_at: str | None = None
    updated_by: str | None = None


@dataclass(frozen=True, slots=True)
class Calendar:
    """Root of the calendar aggregate.

    `id` may be empty before the identity policy has run; it is always set on
    anything read back from a store. `metadata` may be None on input only.
    """

    id: str | None
    name: str | None = None
    description: str | None = None
    metadata: CalendarMetadata | None = field(default_factory=CalendarMetadata)
    events: tuple[CalendarEvent, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "events", tuple(self.events))

    @property
    def event_ids(self) -> list[str]:
        """Ids of the events in their current order."""
        return [event.id for event in self.events]
