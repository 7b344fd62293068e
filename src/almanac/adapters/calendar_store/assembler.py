"""Row assembler: flat storage rows <-> calendar aggregate values.

Pure functions without side effects. Reading tolerates None in every optional
field and delegates enum/timestamp handling to the codec, so a row never
fails to assemble because of drifted content. An event row carries no link to
its calendar; callers know the owner from the query they ran.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from datetime import datetime
from typing import Any

from almanac.domain.model import (
    Calendar,
    CalendarEvent,
    CalendarMetadata,
    CalendarState,
    CalendarVisibility,
    EventType,
)

from .codec import (
    decode_enum,
    decode_flag,
    decode_timestamp,
    encode_enum,
    encode_timestamp,
)

Row = Mapping[str, Any]


# --------------------------------------------------------------------- #
# Reading
# --------------------------------------------------------------------- #


def assemble_calendar(row: Row) -> Calendar:
    """Build a calendar (without events) from a ``calendars`` row."""
    metadata = CalendarMetadata(
        status=decode_enum(row.get("status"), CalendarState),
        visibility=decode_enum(row.get("visibility"), CalendarVisibility),
        created_at=row.get("created_at"),
        created_by=row.get("created_by"),
        updated_at=row.get("updated_at"),
        updated_by=row.get("updated_by"),
        count=row.get("count") or 0,
    )
    return Calendar(
        id=row["id"],
        name=row.get("name"),
        description=row.get("description"),
        metadata=metadata,
    )


def assemble_event(row: Row) -> CalendarEvent:
    """Build an event from an ``events`` row."""
    return CalendarEvent(
        id=row["id"],
        name=row.get("name"),
        description=row.get("description"),
        type=decode_enum(row.get("type"), EventType),
        disabled=decode_flag(row.get("disabled")),
        all_day=decode_flag(row.get("all_day")),
        start_datetime=decode_timestamp(row.get("start_datetime")),
        end_datetime=decode_timestamp(row.get("end_datetime")),
        location=row.get("location"),
        created_at=row.get("created_at"),
        created_by=row.get("created_by"),
        updated_at=row.get("updated_at"),
        updated_by=row.get("updated_by"),
    )


def event_order(event: CalendarEvent) -> tuple[bool, datetime, str]:
    """Sort key for a calendar's events: undated first, then by start, then by id.

    Works on decoded values, so text stored in any accepted form sorts by time.
    """
    start = encode_timestamp(event.start_datetime)
    return (start is not None, start or datetime.min, event.id)


def attach_events(calendar: Calendar, event_rows: Iterable[Row]) -> Calendar:
    """Return `calendar` with the events assembled from `event_rows`, in `event_order`."""
    assembled = sorted((assemble_event(row) for row in event_rows), key=event_order)
    return replace(calendar, events=tuple(assembled))


# --------------------------------------------------------------------- #
# Writing
# --------------------------------------------------------------------- #


def calendar_to_row(calendar: Calendar) -> dict[str, Any]:
    """Flatten a calendar (root and metadata only) into a ``calendars`` row."""
    metadata = calendar.metadata or CalendarMetadata(status=None, visibility=None)
    return {
        "id": calendar.id,
        "name": calendar.name,
        "description": calendar.description,
        "status": encode_enum(metadata.status, CalendarState),
        "visibility": encode_enum(metadata.visibility, CalendarVisibility),
        "created_at": metadata.created_at,
        "created_by": metadata.created_by,
        "updated_at": metadata.updated_at,
        "updated_by": metadata.updated_by,
        "count": metadata.count if metadata.count is not None else 0,
    }


def event_to_row(event: CalendarEvent, calendar_id: str) -> dict[str, Any]:
    """Flatten an event into an ``events`` row owned by `calendar_id`."""
    return {
        "id": event.id,
        "calendar_id": calendar_id,
        "name": event.name,
        "description": event.description,
        "type": encode_enum(event.type, EventType),
        "disabled": bool(event.disabled),
        "all_day": bool(event.all_day),
        "start_datetime": encode_timestamp(event.start_datetime),
        "end_datetime": encode_timestamp(event.end_datetime),
        "location": event.location,
        "created_at": event.created_at,
        "created_by": event.created_by,
        "updated_at": event.updated_at,
        "updated_by": event.updated_by,
    }
