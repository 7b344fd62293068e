"""Create calendars and events tables

Revision ID: 3f2a9c41d7e8
Revises:
Create Date: 2026-10-19

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from almanac.adapters.db.sa_types import UTCDateTime, WallClockDateTime

# deal with alembic stuff
# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "3f2a9c41d7e8"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.String(length=255), nullable=True),
        sa.Column("created_by", sa.String(length=255), nullable=True),
        sa.Column("updated_at", sa.String(length=255), nullable=True),
        sa.Column("updated_by", sa.String(length=255), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "calendars",
        sa.Column("id", sa.String(length=64), nullable=False, comment="Calendar id."),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("description", sa.String(length=2000), nullable=True),
        sa.Column(
            "status",
            sa.String(length=32),
            nullable=False,
            server_default="unknown",
            comment="Lower-case CalendarState name.",
        ),
        sa.Column(
            "visibility",
            sa.String(length=32),
            nullable=False,
            server_default="personal",
            comment="Lower-case CalendarVisibility name.",
        ),
        *_audit_columns(),
        sa.Column(
            "count",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("0"),
            comment="Denormalized event-count hint; never reconciled.",
        ),
        sa.Column(
            "created_timestamp",
            UTCDateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
            comment="When the row was first inserted (UTC). Orders listings.",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_calendars")),
        comment="Calendar aggregate roots.",
    )
    op.create_index(
        op.f("ix_calendars_created_timestamp"),
        "calendars",
        ["created_timestamp"],
        unique=False,
    )

    op.create_table(
        "events",
        sa.Column("id", sa.String(length=64), nullable=False, comment="Event id."),
        sa.Column(
            "calendar_id",
            sa.String(length=64),
            nullable=False,
            comment="Owning calendar.",
        ),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("description", sa.String(length=2000), nullable=True),
        sa.Column(
            "type",
            sa.String(length=32),
            nullable=False,
            server_default="other",
            comment="Lower-case EventType name.",
        ),
        sa.Column(
            "disabled", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
        sa.Column(
            "all_day", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
        sa.Column("start_datetime", WallClockDateTime(), nullable=True),
        sa.Column("end_datetime", WallClockDateTime(), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(
            ["calendar_id"],
            ["calendars.id"],
            name=op.f("fk_events_calendar_id_calendars"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_events")),
        comment="Events, owned by exactly one calendar each.",
    )
    op.create_index(
        op.f("ix_events_calendar_id_start_datetime"),
        "events",
        ["calendar_id", "start_datetime"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index(op.f("ix_events_calendar_id_start_datetime"), table_name="events")
    op.drop_table("events")
    op.drop_index(op.f("ix_calendars_created_timestamp"), table_name="calendars")
    op.drop_table("calendars")
