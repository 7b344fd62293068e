"""The `MetaData` every almanac table is declared on.

Constraint and index names are derived from `NAMING_CONVENTION` rather than
left to the backend, so the names Alembic autogenerate compares against are
the same on SQLite and PostgreSQL. For the calendar tables this yields, e.g.,
``pk_calendars``, ``fk_events_calendar_id_calendars`` and
``ix_events_calendar_id_start_datetime``.
"""

from sqlalchemy import MetaData

NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "fk": "fk_%(table_name)s_%(column_0_N_name)s_%(referred_table_name)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ix": "ix_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)
