"""SQLAlchemy-backed CalendarStore adapter for Almanac.

Persists calendar aggregates in the ``calendars`` and ``events`` tables (see
adapters.calendar_store.schema) over a SQLAlchemy Core `Connection`, on
PostgreSQL and SQLite.

Usage:
    Instantiate SqlAlchemyCalendarStore with a SQLAlchemy Connection. Inside a
    unit of work the connection already has a transaction open and every write
    runs in a SAVEPOINT of it; on a bare connection each write opens and
    commits its own transaction.

Classes:
    SqlAlchemyCalendarStore -- Implements CalendarStore using SQLAlchemy.

Exceptions:
    Maps SQLAlchemy errors to Almanac calendar store exceptions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime
from typing import TYPE_CHECKING, Any, NoReturn

from sqlalchemy import delete, func, insert, literal, select
from sqlalchemy.exc import (
    DataError,
    DBAPIError,
    IntegrityError,
    OperationalError,
)

from almanac.adapters.db.dialects import DialectName, upsert_insert
from almanac.interfaces.calendar_store import (
    CalendarConflictError,
    CalendarStore,
    DuplicateKeyError,
    InvalidCalendarError,
    StoreUnavailableError,
    check_window,
)
from almanac.utils.clock import utc_now

from .assembler import assemble_calendar, attach_events, calendar_to_row, event_to_row
from .schema import CALENDAR_COLUMNS, EVENT_COLUMNS, calendars, events

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection
    from sqlalchemy.sql.dml import Insert

    from almanac.domain.model import Calendar

logger = logging.getLogger(__name__)

# SQLSTATE (PostgreSQL) and extended result codes (SQLite) of a key collision
UNIQUE_VIOLATION_CODES = frozenset(
    {"23505", "SQLITE_CONSTRAINT_PRIMARYKEY", "SQLITE_CONSTRAINT_UNIQUE"}
)  # pragma: no mutate
# any flag is enough; only used when the driver exposes no code
UNIQUE_VIOLATION_KEYWORDS = ("unique", "duplicate key")  # pragma: no mutate

# SQLite (WAL): a read transaction cannot write once another one has committed
STALE_SNAPSHOT_CODE = "SQLITE_BUSY_SNAPSHOT"  # pragma: no mutate

# kept from the first insert, never overwritten by an upsert
PRESERVED_ON_UPDATE = frozenset({"id", "created_at", "created_by"})

EMPTY_STRING = ""  # pragma: no mutate


class SqlAlchemyCalendarStore(CalendarStore):
    """SQLAlchemy-backed CalendarStore.

    - Upserts the calendar row with the dialect's ``INSERT ... ON CONFLICT``.
    - Replaces the calendar's events wholesale (delete, then insert).
    - Lists newest first by ``created_timestamp``, ties broken by id.
    """

    def __init__(
        self, connection: Connection, clock: Callable[[], datetime] = utc_now
    ):
        self.connection = connection
        self.dialect = DialectName.from_sqlalchemy(connection)
        self._clock = clock

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def save(self, calendar: Calendar, *, create: bool = False) -> Calendar:
        if not calendar.id:
            raise ValueError("calendar id must be assigned before saving")

        logger.debug(
            "Saving calendar: id=%s, name=%s, events=%d",
            calendar.id,
            calendar.name,
            len(calendar.events),
        )
        event_rows = [event_to_row(event, calendar.id) for event in calendar.events]

        with self._translate_errors(), self._transaction():
            row = calendar_to_row(calendar)
            self.connection.execute(
                self._build_insert(row) if create else self._build_upsert(row)
            )
            self._delete_events_of(calendar.id)
            if event_rows:
                self.connection.execute(insert(events), event_rows)
                logger.debug(
                    "Inserted %d events for calendar %s", len(event_rows), calendar.id
                )

        logger.info(
            "Calendar saved successfully: id=%s, name=%s, events=%d",
            calendar.id,
            calendar.name,
            len(event_rows),
        )
        return calendar

    def find_by_id(self, calendar_id: str) -> Calendar | None:
        stmt = select(*CALENDAR_COLUMNS).where(calendars.c.id == calendar_id)
        with self._translate_errors(), self._read_scope():
            if not (row := self.connection.execute(stmt).mappings().first()):
                logger.debug("Calendar not found: id=%s", calendar_id)
                return None
            return self._with_events(row)

    def find_all(
        self, page: int | None = None, size: int | None = None
    ) -> list[Calendar]:
        window = check_window(page, size)

        stmt = select(*CALENDAR_COLUMNS).order_by(
            calendars.c.created_timestamp.desc(), calendars.c.id.desc()
        )
        if window is not None:
            offset, limit = window
            stmt = stmt.offset(offset).limit(limit)

        with self._translate_errors(), self._read_scope():
            rows = self.connection.execute(stmt).mappings().all()
            found = [self._with_events(row) for row in rows]

        logger.debug("Found %d calendars (page=%s, size=%s)", len(found), page, size)
        return found

    def exists_by_id(self, calendar_id: str) -> bool:
        stmt = select(literal(1)).where(calendars.c.id == calendar_id).limit(1)
        with self._translate_errors(), self._read_scope():
            return self.connection.execute(stmt).scalar_one_or_none() is not None

    def count(self) -> int:
        stmt = select(func.count()).select_from(calendars)
        with self._translate_errors(), self._read_scope():
            return int(self.connection.execute(stmt).scalar_one())

    def delete_by_id(self, calendar_id: str) -> None:
        logger.debug("Deleting calendar: id=%s", calendar_id)
        with self._translate_errors(), self._transaction():
            self._delete_events_of(calendar_id)
            deleted = self.connection.execute(
                delete(calendars).where(calendars.c.id == calendar_id)
            ).rowcount

        if deleted:
            logger.info("Calendar deleted successfully: id=%s", calendar_id)
        else:
            logger.warning("No calendar found to delete: id=%s", calendar_id)

    def delete_all(self) -> None:
        with self._translate_errors(), self._transaction():
            deleted_events = self.connection.execute(delete(events)).rowcount
            deleted_calendars = self.connection.execute(delete(calendars)).rowcount

        logger.info(
            "Deleted all calendars: calendars=%d, events=%d",
            deleted_calendars,
            deleted_events,
        )

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    def _with_events(self, row: Any) -> Calendar:
        """Assembles a calendar row and attaches its events, ordered by start time."""
        stmt = (
            select(*EVENT_COLUMNS)
            .where(events.c.calendar_id == row["id"])
            .order_by(events.c.start_datetime.asc().nulls_first(), events.c.id.asc())
        )
        event_rows = self.connection.execute(stmt).mappings().all()
        # SQLite may hold legacy text that does not sort by time; re-sort decoded
        return attach_events(assemble_calendar(row), event_rows)

    def _delete_events_of(self, calendar_id: str) -> None:
        deleted = self.connection.execute(
            delete(events).where(events.c.calendar_id == calendar_id)
        ).rowcount
        if deleted:
            logger.debug("Deleted %d events of calendar %s", deleted, calendar_id)

    def _build_insert(self, row: dict[str, Any]) -> Insert:
        """Builds a plain ``INSERT``; a taken id fails on the primary key."""
        return insert(calendars).values(**row, created_timestamp=self._clock())

    def _build_upsert(self, row: dict[str, Any]) -> Insert:
        """Builds the dialect-specific ``INSERT ... ON CONFLICT (id) DO UPDATE``.

        ``created_timestamp`` is only part of the inserted values, so a later
        save never moves a calendar in the listing order.
        """
        stmt = upsert_insert(self.dialect)(calendars).values(
            **row, created_timestamp=self._clock()
        )
        return stmt.on_conflict_do_update(
            index_elements=[calendars.c.id],
            set_={
                name: stmt.excluded[name]
                for name in row
                if name not in PRESERVED_ON_UPDATE
            },
        )

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """Runs the block atomically.

        Nested in the connection's open transaction (SAVEPOINT) when there is
        one, otherwise in a transaction of its own that commits on success.
        """
        if self.connection.in_transaction():
            with self.connection.begin_nested():
                yield
        else:
            with self.connection.begin():
                yield

    @contextmanager
    def _read_scope(self) -> Iterator[None]:
        """Reads inside the open transaction, or in a short one of their own.

        Keeps a bare connection from being left in an autobegun transaction
        that a later write would nest into and never commit.
        """
        if self.connection.in_transaction():
            yield
        else:
            with self.connection.begin():
                yield

    @contextmanager
    def _translate_errors(self) -> Iterator[None]:
        try:
            yield
        except IntegrityError as e:
            self._raise_store_error_from_integrity_error(e)
        except DataError as e:  # value too long, bad type, etc.
            raise InvalidCalendarError(str(e)) from e
        except OperationalError as e:
            if getattr(e.orig, "sqlite_errorname", None) == STALE_SNAPSHOT_CODE:
                raise CalendarConflictError(
                    f"another transaction wrote first; start a new one: {e.orig}"
                ) from e
            raise StoreUnavailableError(str(e)) from e
        except (
            DBAPIError
        ) as e:  # any DBAPIErrors (OperationalError, InterfaceError, etc.)
            raise StoreUnavailableError(str(e)) from e

    @staticmethod
    def _raise_store_error_from_integrity_error(
        integrity_error: IntegrityError,
    ) -> NoReturn:
        """Handles SQLAlchemy IntegrityError exceptions by raising appropriate store errors.

        Args:
            integrity_error (IntegrityError): The SQLAlchemy IntegrityError instance to handle.

        Raises:
            DuplicateKeyError: If the driver reports a primary key/unique violation.
            InvalidCalendarError: For any other integrity errors (NOT NULL, foreign key, ...).
        """
        orig = integrity_error.orig
        msg = str(orig) if orig not in (None, EMPTY_STRING) else str(integrity_error)

        code = getattr(orig, "sqlstate", None) or getattr(orig, "sqlite_errorname", None)
        if code is not None:
            is_duplicate = code in UNIQUE_VIOLATION_CODES
        else:
            is_duplicate = any(kw in msg.lower() for kw in UNIQUE_VIOLATION_KEYWORDS)

        if is_duplicate:
            relation = getattr(getattr(orig, "diag", None), "table_name", None)
            relation = relation or _relation_named_in(msg, (events.name, calendars.name))
            raise DuplicateKeyError(relation, msg) from integrity_error

        raise InvalidCalendarError(msg) from integrity_error


def _relation_named_in(msg: str, relations: Sequence[str]) -> str:
    """Return the first relation mentioned in a driver message (default: the last one)."""
    lowered = msg.lower()
    for relation in relations:
        if relation in lowered:
            return relation
    return relations[-1]
