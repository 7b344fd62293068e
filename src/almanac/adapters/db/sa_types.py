"""Custom SQLAlchemy types for ALMANAC.

These types encapsulate small, backend-aware behaviors while preserving clear
Python-side types for tooling.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from sqlalchemy import String
from sqlalchemy.types import DateTime, TypeDecorator

from .dialects import DialectName

if TYPE_CHECKING:
    from sqlalchemy.engine.interfaces import Dialect
    from sqlalchemy.types import TypeEngine

__all__ = ["UTCDateTime", "WallClockDateTime"]


class UTCDateTime(TypeDecorator[datetime]):  # pylint: disable=too-many-ancestors
    """Timezone-aware UTC datetime.

    Ensures values are stored and returned as aware ``datetime`` objects in UTC.
    Naive datetimes are treated as UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> Any:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        # SQLite: store naïve UTC so it won't be reinterpreted as local
        return (
            value.replace(tzinfo=None)
            if dialect.name == DialectName.SQLITE.value
            else value
        )

    def process_result_value(self, value: Any, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc)
        return value

    def process_literal_param(self, value: datetime | None, dialect: Dialect) -> Any:
        return self.process_bind_param(value, dialect)

    @property
    def python_type(self) -> type[datetime]:
        return datetime


class WallClockDateTime(TypeDecorator[datetime]):  # pylint: disable=too-many-ancestors
    """Wall-clock (naive) datetime for event start/end times.

    - PostgreSQL: ``TIMESTAMP WITHOUT TIME ZONE``.
    - SQLite: fixed-width ISO-8601 text (``YYYY-MM-DD HH:MM:SS.ffffff``) so that
      lexical order equals chronological order.

    Aware values are converted to UTC and stored naive. Result values are
    returned exactly as the driver hands them over (``datetime`` on PostgreSQL,
    ``str`` on SQLite); turning them into datetimes is the codec's job, so a
    malformed stored value never breaks a read.
    """

    impl = String(32)
    cache_ok = True

    def load_dialect_impl(self, dialect: Dialect) -> TypeEngine[Any]:
        if dialect.name == DialectName.POSTGRES.value:
            return dialect.type_descriptor(DateTime(timezone=False))
        return dialect.type_descriptor(String(32))

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> Any:
        if value is None:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        if dialect.name == DialectName.POSTGRES.value:
            return value
        return value.isoformat(sep=" ", timespec="microseconds")

    def process_result_value(self, value: Any, dialect: Dialect) -> Any:
        return value

    def process_literal_param(self, value: datetime | None, dialect: Dialect) -> Any:
        return self.process_bind_param(value, dialect)

    @property
    def python_type(self) -> type[datetime]:
        return datetime
