"""JSON document format for calendars on the command line.

Documents use camelCase keys::

    {
      "id": "20dbf44a-b88b-4742-a0b0-1d6c7dece68d",
      "name": "Work Calendar",
      "description": "Work schedule and meetings",
      "metadata": {"status": "active", "visibility": "shared",
                   "createdAt": "11/13/2025 12:00:00", "createdBy": "John Doe",
                   "updatedAt": null, "updatedBy": null, "count": 1},
      "events": [
        {"id": "a1b2c3d4-e5f6-7890-abcd-111111111111", "name": "Team Standup",
         "type": "meeting", "disabled": false, "allDay": false,
         "startDateTime": "11/14/2025 09:00:00",
         "endDateTime": "2025-11-14T09:30:00", "location": "Zoom"}
      ]
    }

Reading is strict, unlike the store's defensive decoding: an unknown enum name
or an unparseable timestamp is the user's mistake and is reported as a
`DocumentError`. Event timestamps are accepted in ISO-8601 or the legacy
``MM/dd/yyyy HH:mm:ss`` form and always written back as ISO-8601.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any, TypeVar

from almanac.adapters.calendar_store.codec import LEGACY_TIMESTAMP_FORMAT
from almanac.domain.model import (
    Calendar,
    CalendarEvent,
    CalendarMetadata,
    CalendarState,
    CalendarVisibility,
    EventType,
)
from almanac.domain.pagination import Page

E = TypeVar("E", bound=Enum)


class DocumentError(ValueError):
    """A calendar document is malformed.

    Attributes:
        path (str): Where in the document the problem is (e.g. ``events[2].type``).
    """

    def __init__(self, path: str, problem: str) -> None:
        super().__init__(f"{path}: {problem}")
        self.path = path


# --------------------------------------------------------------------- #
# Reading
# --------------------------------------------------------------------- #


def calendar_from_document(doc: Any) -> Calendar:
    """Build a calendar from a parsed JSON document.

    A missing ``metadata`` object stays None (defaults are applied on create);
    missing fields inside it are None as well.

    Raises:
        DocumentError: If the document does not describe a calendar.
    """
    _require_mapping(doc, "calendar")

    events = doc.get("events") or []
    if not isinstance(events, list):
        raise DocumentError("events", "expected a list")

    return Calendar(
        id=_optional_str(doc, "id", "calendar"),
        name=_optional_str(doc, "name", "calendar"),
        description=_optional_str(doc, "description", "calendar"),
        metadata=_metadata_from_document(doc.get("metadata")),
        events=tuple(
            _event_from_document(event, f"events[{index}]")
            for index, event in enumerate(events)
        ),
    )


def _metadata_from_document(doc: Any) -> CalendarMetadata | None:
    if doc is None:
        return None
    _require_mapping(doc, "metadata")
    count = doc.get("count")
    if count is not None and (isinstance(count, bool) or not isinstance(count, int)):
        raise DocumentError("metadata.count", "expected an integer")
    return CalendarMetadata(
        status=_optional_enum(doc.get("status"), CalendarState, "metadata.status"),
        visibility=_optional_enum(
            doc.get("visibility"), CalendarVisibility, "metadata.visibility"
        ),
        created_at=_optional_str(doc, "createdAt", "metadata"),
        created_by=_optional_str(doc, "createdBy", "metadata"),
        updated_at=_optional_str(doc, "updatedAt", "metadata"),
        updated_by=_optional_str(doc, "updatedBy", "metadata"),
        count=count or 0,
    )


def _event_from_document(doc: Any, path: str) -> CalendarEvent:
    _require_mapping(doc, path)
    if not (event_id := _optional_str(doc, "id", path)):
        raise DocumentError(f"{path}.id", "every event needs an id")
    return CalendarEvent(
        id=event_id,
        name=_optional_str(doc, "name", path),
        description=_optional_str(doc, "description", path),
        type=_optional_enum(doc.get("type"), EventType, f"{path}.type"),
        disabled=_flag(doc, "disabled", path),
        all_day=_flag(doc, "allDay", path),
        start_datetime=parse_timestamp(doc.get("startDateTime"), f"{path}.startDateTime"),
        end_datetime=parse_timestamp(doc.get("endDateTime"), f"{path}.endDateTime"),
        location=_optional_str(doc, "location", path),
        created_at=_optional_str(doc, "createdAt", path),
        created_by=_optional_str(doc, "createdBy", path),
        updated_at=_optional_str(doc, "updatedAt", path),
        updated_by=_optional_str(doc, "updatedBy", path),
    )


def parse_timestamp(raw: Any, path: str = "timestamp") -> datetime | None:
    """Parse an ISO-8601 or ``MM/dd/yyyy HH:mm:ss`` timestamp (None passes through).

    Raises:
        DocumentError: If `raw` is neither.
    """
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise DocumentError(path, "expected a timestamp string")
    for parse in (datetime.fromisoformat, _parse_legacy):
        try:
            return parse(raw.strip())
        except ValueError:
            continue
    raise DocumentError(
        path, f"unrecognized timestamp {raw!r} (use ISO-8601 or MM/dd/yyyy HH:mm:ss)"
    )


def _parse_legacy(text: str) -> datetime:
    return datetime.strptime(text, LEGACY_TIMESTAMP_FORMAT)


def _require_mapping(doc: Any, path: str) -> None:
    if not isinstance(doc, Mapping):
        raise DocumentError(path, "expected a JSON object")


def _optional_str(doc: Mapping[str, Any], key: str, path: str) -> str | None:
    value = doc.get(key)
    if value is not None and not isinstance(value, str):
        raise DocumentError(f"{path}.{key}", "expected a string")
    return value


def _flag(doc: Mapping[str, Any], key: str, path: str) -> bool:
    value = doc.get(key)
    if value is not None and not isinstance(value, bool):
        raise DocumentError(f"{path}.{key}", "expected true or false")
    return bool(value)


def _optional_enum(raw: Any, enum_type: type[E], path: str) -> E | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        if (member := enum_type.__members__.get(raw.strip().upper())) is not None:
            return member
    choices = ", ".join(member.value for member in enum_type)
    raise DocumentError(path, f"expected one of {choices}, got {raw!r}")


# --------------------------------------------------------------------- #
# Writing
# --------------------------------------------------------------------- #


def calendar_to_document(calendar: Calendar) -> dict[str, Any]:
    """Render a calendar as a JSON-ready document."""
    metadata = calendar.metadata
    return {
        "id": calendar.id,
        "name": calendar.name,
        "description": calendar.description,
        "metadata": (
            None
            if metadata is None
            else {
                "status": _enum_value(metadata.status),
                "visibility": _enum_value(metadata.visibility),
                "createdAt": metadata.created_at,
                "createdBy": metadata.created_by,
                "updatedAt": metadata.updated_at,
                "updatedBy": metadata.updated_by,
                "count": metadata.count,
            }
        ),
        "events": [_event_to_document(event) for event in calendar.events],
    }


def _event_to_document(event: CalendarEvent) -> dict[str, Any]:
    return {
        "id": event.id,
        "name": event.name,
        "description": event.description,
        "type": _enum_value(event.type),
        "disabled": event.disabled,
        "allDay": event.all_day,
        "startDateTime": _isoformat(event.start_datetime),
        "endDateTime": _isoformat(event.end_datetime),
        "location": event.location,
        "createdAt": event.created_at,
        "createdBy": event.created_by,
        "updatedAt": event.updated_at,
        "updatedBy": event.updated_by,
    }


def page_to_document(page: Page[Calendar]) -> dict[str, Any]:
    """Render a listing window with its page metadata."""
    return {
        "items": [calendar_to_document(calendar) for calendar in page.items],
        "page": page.page,
        "size": page.size,
        "totalElements": page.total_elements,
        "totalPages": page.total_pages,
        "first": page.first,
        "last": page.last,
    }


def _enum_value(member: Enum | None) -> str | None:
    return None if member is None else member.value


def _isoformat(value: datetime | None) -> str | None:
    return None if value is None else value.isoformat()
