"""Supported database dialects and dialect-specific statement builders.

Centralizes the dialect names ALMANAC runs on so that checks elsewhere compare
against an Enum instead of raw strings ("postgresql", "sqlite"), and hands out
the dialect's own `insert` construct for upserts (``ON CONFLICT``), which the
generic SQLAlchemy `insert` does not offer.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, Any

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class UnsupportedDialect(Exception):
    """Raised when an unsupported database dialect is encountered."""


class DialectName(str, Enum):
    """Supported SQLAlchemy dialect names.

    Attributes:
        POSTGRES: PostgreSQL dialect (``"postgresql"``).
        SQLITE:   SQLite dialect (``"sqlite"``).
    """

    POSTGRES = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_string(cls, dialect_str: str) -> DialectName:
        """Normalize an arbitrary dialect string to a DialectName.

        Accepts common aliases and driver-qualified names (e.g. 'postgres',
        'postgresql+psycopg', 'sqlite+pysqlite').

        Raises:
            UnsupportedDialect: if the dialect is not recognized or supported.
        """
        base = (dialect_str or "").strip().lower().split("+", 1)[0]
        if base in {"postgres", "postgresql", "pg"}:
            return cls.POSTGRES
        if base == cls.SQLITE.value:
            return cls.SQLITE
        raise UnsupportedDialect(f"Unsupported dialect: {dialect_str!r}")

    @classmethod
    def from_sqlalchemy(cls, obj: Engine | Connection) -> DialectName:
        """Extract the dialect from a SQLAlchemy Engine or Connection.

        Raises:
            UnsupportedDialect: if the object has no dialect or it is unsupported.
        """
        try:
            name = obj.dialect.name
        except AttributeError as e:
            raise UnsupportedDialect(
                f"Object {type(obj).__name__} does not expose .dialect.name"
            ) from e
        return cls.from_string(name)


_UPSERT_INSERTS: dict[DialectName, Callable[..., Any]] = {
    DialectName.POSTGRES: pg_insert,
    DialectName.SQLITE: sqlite_insert,
}


def upsert_insert(dialect: DialectName) -> Callable[..., Any]:
    """Return the dialect's `insert` construct (the one with ``on_conflict_*``)."""
    return _UPSERT_INSERTS[dialect]
