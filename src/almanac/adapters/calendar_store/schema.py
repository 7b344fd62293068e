"""Calendar store schema.

Two relations back the calendar aggregate:

- ``calendars``: one row per calendar, with the embedded metadata flattened
  into columns.
- ``events``: one row per event. Ownership is the ``calendar_id`` foreign key;
  the calendar row itself knows nothing about its events.

Constraints (enforced here):

| Constraint                           | Purpose                               |
|--------------------------------------|---------------------------------------|
| PK(calendars.id)                     | calendar ids are unique               |
| PK(events.id)                        | event ids are unique store-wide       |
| FK(events.calendar_id → calendars.id)| every event belongs to one calendar   |

Enum columns hold the lower-case member name. ``created_timestamp`` is the
server-side creation time used to order listings; it is written on first
insert only.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    text,
)

from almanac.adapters.db.metadata import metadata
from almanac.adapters.db.sa_types import UTCDateTime, WallClockDateTime

__all__ = ["calendars", "events"]

ID_LENGTH = 64
NAME_LENGTH = 255
DESCRIPTION_LENGTH = 2000
ENUM_LENGTH = 32
AUDIT_LENGTH = 255

calendars = Table(
    "calendars",
    metadata,
    Column("id", String(ID_LENGTH), primary_key=True, comment="Calendar id."),
    Column("name", String(NAME_LENGTH), nullable=True),
    Column("description", String(DESCRIPTION_LENGTH), nullable=True),
    Column(
        "status",
        String(ENUM_LENGTH),
        nullable=False,
        server_default="unknown",
        comment="Lower-case CalendarState name.",
    ),
    Column(
        "visibility",
        String(ENUM_LENGTH),
        nullable=False,
        server_default="personal",
        comment="Lower-case CalendarVisibility name.",
    ),
    Column("created_at", String(AUDIT_LENGTH), nullable=True),
    Column("created_by", String(AUDIT_LENGTH), nullable=True),
    Column("updated_at", String(AUDIT_LENGTH), nullable=True),
    Column("updated_by", String(AUDIT_LENGTH), nullable=True),
    Column(
        "count",
        Integer,
        nullable=False,
        server_default=text("0"),
        comment="Denormalized event-count hint; never reconciled.",
    ),
    Column(
        "created_timestamp",
        UTCDateTime(),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When the row was first inserted (UTC). Orders listings.",
    ),
    Index(None, "created_timestamp"),
    comment="Calendar aggregate roots.",
)

events = Table(
    "events",
    metadata,
    Column("id", String(ID_LENGTH), primary_key=True, comment="Event id."),
    Column(
        "calendar_id",
        String(ID_LENGTH),
        ForeignKey("calendars.id"),
        nullable=False,
        comment="Owning calendar.",
    ),
    Column("name", String(NAME_LENGTH), nullable=True),
    Column("description", String(DESCRIPTION_LENGTH), nullable=True),
    Column(
        "type",
        String(ENUM_LENGTH),
        nullable=False,
        server_default="other",
        comment="Lower-case EventType name.",
    ),
    Column("disabled", Boolean, nullable=False, server_default=text("false")),
    Column("all_day", Boolean, nullable=False, server_default=text("false")),
    Column("start_datetime", WallClockDateTime(), nullable=True),
    Column("end_datetime", WallClockDateTime(), nullable=True),
    Column("location", String(NAME_LENGTH), nullable=True),
    Column("created_at", String(AUDIT_LENGTH), nullable=True),
    Column("created_by", String(AUDIT_LENGTH), nullable=True),
    Column("updated_at", String(AUDIT_LENGTH), nullable=True),
    Column("updated_by", String(AUDIT_LENGTH), nullable=True),
    Index(None, "calendar_id", "start_datetime"),
    comment="Events, owned by exactly one calendar each.",
)

CALENDAR_COLUMNS = (
    calendars.c.id,
    calendars.c.name,
    calendars.c.description,
    calendars.c.status,
    calendars.c.visibility,
    calendars.c.created_at,
    calendars.c.created_by,
    calendars.c.updated_at,
    calendars.c.updated_by,
    calendars.c.count,
)

EVENT_COLUMNS = (
    events.c.id,
    events.c.name,
    events.c.description,
    events.c.type,
    events.c.disabled,
    events.c.all_day,
    events.c.start_datetime,
    events.c.end_datetime,
    events.c.location,
    events.c.created_at,
    events.c.created_by,
    events.c.updated_at,
    events.c.updated_by,
)
