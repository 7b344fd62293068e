"""Enum and timestamp codec for the calendar store.

Converts between the store's flat representation and the domain's typed values.

Enums are written as their lower-case member name and decoded defensively:
null or unrecognized stored strings (legacy data, rows edited by hand, ...)
decode to the enum's default instead of failing.

| Enum                 | Default    |
|----------------------|------------|
| `CalendarState`      | `UNKNOWN`  |
| `CalendarVisibility` | `PERSONAL` |
| `EventType`          | `OTHER`    |

Event timestamps are decoded from whatever the driver returns (a `datetime`
or text). Text is accepted in ISO-8601 or the legacy ``MM/dd/yyyy HH:mm:ss``
form; anything else decodes to None.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, TypeVar

from almanac.domain.model import CalendarState, CalendarVisibility, EventType

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

ENUM_DEFAULTS: dict[type[Enum], Enum] = {
    CalendarState: CalendarState.UNKNOWN,
    CalendarVisibility: CalendarVisibility.PERSONAL,
    EventType: EventType.OTHER,
}

LEGACY_TIMESTAMP_FORMAT = "%m/%d/%Y %H:%M:%S"  # pragma: no mutate


def default_for(enum_type: type[E]) -> E:
    """Return the documented default member of a stored enum type.

    Raises:
        KeyError: if `enum_type` is not one of the stored enums.
    """
    return ENUM_DEFAULTS[enum_type]  # type: ignore[return-value]


def encode_enum(value: E | None, enum_type: type[E]) -> str:
    """Encode an enum member as its lower-case name; None encodes the default."""
    member = default_for(enum_type) if value is None else value
    return member.name.lower()


def decode_enum(raw: Any, enum_type: type[E]) -> E:
    """Decode a stored value into `enum_type`, never raising.

    Matching is case-insensitive on the member name. Null, non-string and
    unrecognized values decode to the type's default.
    """
    if isinstance(raw, str):
        member = enum_type.__members__.get(raw.strip().upper())
        if member is not None:
            return member
    if raw is not None:
        logger.warning(
            "Unrecognized %s value %r in storage; using default",
            enum_type.__name__,
            raw,
        )
    return default_for(enum_type)


def encode_timestamp(value: datetime | None) -> datetime | None:
    """Normalize an event timestamp for storage (aware values become naive UTC)."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def decode_timestamp(raw: Any) -> datetime | None:
    """Decode a stored event timestamp, never raising.

    Args:
        raw: A `datetime`, ISO-8601 text, legacy ``MM/dd/yyyy HH:mm:ss`` text,
            or None.

    Returns:
        The datetime, or None for null and unparseable values.
    """
    if raw is None or isinstance(raw, datetime):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.strptime(text, LEGACY_TIMESTAMP_FORMAT)
        except ValueError:
            pass
    logger.warning("Unparseable timestamp %r in storage; using None", raw)
    return None


def decode_flag(raw: Any) -> bool:
    """Decode a stored boolean column; null means False."""
    return bool(raw) if raw is not None else False
