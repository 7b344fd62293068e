"""Database engine factory.

Every Engine in ALMANAC is created here so that connections are configured
consistently:

- **SQLite**: connection PRAGMAs enforce foreign keys (the ``events`` →
  ``calendars`` reference), enable WAL and tune durability. The driver's own
  transaction handling is switched off and ``BEGIN`` is emitted by SQLAlchemy
  instead, so that transactions start on the first statement (reads included)
  and SAVEPOINTs nest correctly.
- **PostgreSQL**: no tuning.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url

from .dialects import DialectName

if TYPE_CHECKING:
    from sqlite3 import Connection as SQLiteConnection

    from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

SQLITE_PRAGMAS = (
    "PRAGMA foreign_keys=ON;",
    "PRAGMA journal_mode=WAL;",
    "PRAGMA synchronous=NORMAL;",
    "PRAGMA temp_store=MEMORY;",
)


def is_sqlite(url: str | URL) -> bool:
    """Return True if the given SQLAlchemy URL or string corresponds to SQLite."""
    return make_url(str(url)).get_backend_name() == DialectName.SQLITE.value


def make_engine(url: str | URL, *, echo: bool = False) -> Engine:
    """Create a SQLAlchemy Engine for the given URL.

    For SQLite, applies ``foreign_keys=ON``, ``journal_mode=WAL``,
    ``synchronous=NORMAL`` and ``temp_store=MEMORY`` on every new connection
    and makes SQLAlchemy, not pysqlite, emit ``BEGIN``.

    Args:
        url: Database connection URL (str or :class:`URL`).
        echo: If True, log SQL statements.

    Returns:
        Engine: Configured SQLAlchemy Engine.
    """
    engine = create_engine(url, echo=echo)

    if is_sqlite(url):

        @event.listens_for(engine, "connect")
        def _sqlite_pragmas(dbapi_conn: SQLiteConnection, conn_record):  # type: ignore #pylint: disable=W0613
            # autocommit mode at the driver level; BEGIN comes from _sqlite_begin
            dbapi_conn.isolation_level = None
            cur = dbapi_conn.cursor()
            for pragma in SQLITE_PRAGMAS:
                cur.execute(pragma)
            cur.close()

        @event.listens_for(engine, "begin")
        def _sqlite_begin(conn: Connection):
            conn.exec_driver_sql("BEGIN")

    logger.debug("Created engine for %s", engine.url.render_as_string(hide_password=True))
    return engine
