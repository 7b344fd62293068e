"""Calendar store adapters.

- `SqlAlchemyCalendarStore`: durable storage in PostgreSQL or SQLite.
- `InMemoryCalendarStore`: non-durable storage for tests and prototyping.

Both pass the CalendarStore contract tests.
"""

from .memory_store import InMemoryCalendarStore
from .sqlalchemy_store import SqlAlchemyCalendarStore

__all__ = ["InMemoryCalendarStore", "SqlAlchemyCalendarStore"]
