"""Domain layer: the calendar aggregate and pure helpers over it."""

from .model import (
    Calendar,
    CalendarEvent,
    CalendarMetadata,
    CalendarState,
    CalendarVisibility,
    EventType,
)
from .pagination import Page, paginate

__all__ = [
    "Calendar",
    "CalendarEvent",
    "CalendarMetadata",
    "CalendarState",
    "CalendarVisibility",
    "EventType",
    "Page",
    "paginate",
]
