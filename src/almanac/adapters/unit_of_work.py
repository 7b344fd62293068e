"""Unit of Work over a single SQLAlchemy connection.

Entering the unit checks out a connection and opens a transaction that spans
the whole ``with`` block. `SqlAlchemyCalendarStore` runs each write in a
SAVEPOINT inside that transaction, so a rejected write (a duplicate key, say)
is undone on its own and the unit stays usable. Only `commit()` makes work
durable; leaving the block any other way discards it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from almanac.adapters.calendar_store import SqlAlchemyCalendarStore
from almanac.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """Unit of Work whose calendar store writes through one connection."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.connection: Connection

    def _open(self) -> None:
        self.connection = self.engine.connect()
        self.connection.begin()
        self.calendars = SqlAlchemyCalendarStore(self.connection)

    def __enter__(self):
        self._open()
        return super().__enter__()

    def __exit__(self, *args):
        try:
            super().__exit__(*args)
        finally:
            self.connection.close()

    def commit(self):
        self.connection.commit()
        # later writes in the same block join a fresh transaction
        self.connection.begin()

    def rollback(self):
        self.connection.rollback()
