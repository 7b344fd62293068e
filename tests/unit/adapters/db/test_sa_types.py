"""Unit tests for the custom column types in almanac.adapters.db.sa_types.

These tests exercise the type decorators directly, without creating tables or
running against a real database engine.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import pytest
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import dialect as PostgresDialect
from sqlalchemy.dialects.sqlite import dialect as SQLiteDialect

from almanac.adapters.db.dialects import DialectName
from almanac.adapters.db.sa_types import UTCDateTime, WallClockDateTime

if TYPE_CHECKING:
    from sqlalchemy.engine.interfaces import Dialect

DIALECTS = pytest.mark.parametrize(
    "dialect", [SQLiteDialect(), PostgresDialect()], ids=["sqlite", "postgres"]
)
MINUS_SEVEN = timezone(timedelta(hours=-7))


@pytest.mark.parametrize("sa_type", [UTCDateTime(), WallClockDateTime()])
def test_python_type_is_datetime(sa_type):
    """Both types report datetime as their Python type."""
    assert sa_type.python_type is datetime


@DIALECTS
@pytest.mark.parametrize("sa_type", [UTCDateTime(), WallClockDateTime()])
def test_bind_none_returns_none(sa_type, dialect: Dialect):
    """Binding None should return None for any dialect."""
    assert sa_type.process_bind_param(None, dialect) is None


# --- UTCDateTime --------------------------------------------------------------


@DIALECTS
def test_utc_bind_aware_normalizes_to_utc(dialect: Dialect):
    """Aware values are converted to UTC (naive on SQLite, aware on Postgres)."""
    out = UTCDateTime().process_bind_param(
        datetime(2024, 1, 1, 5, 0, 0, tzinfo=MINUS_SEVEN), dialect
    )
    if dialect.name == DialectName.SQLITE.value:
        assert out.tzinfo is None and out == datetime(2024, 1, 1, 12, 0, 0)
    else:
        assert out == datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_utc_result_naive_is_read_as_utc():
    """Naive results (SQLite) come back aware in UTC."""
    out = UTCDateTime().process_result_value(datetime(2024, 1, 1, 12), SQLiteDialect())
    assert out == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)
    assert out.tzinfo is timezone.utc


def test_utc_literal_compiles_to_utc_wall_time():
    """Literal compilation under SQLite normalizes to UTC wall time."""
    expr = sa.literal(datetime(2024, 1, 1, 5, 0, 0, tzinfo=MINUS_SEVEN), UTCDateTime())
    sql = str(
        sa.select(expr.label("dt")).compile(
            dialect=SQLiteDialect(), compile_kwargs={"literal_binds": True}
        )
    )
    assert re.search(r"2024-01-01 12:00:00(\.\d+)?", sql)


# --- WallClockDateTime --------------------------------------------------------


def test_wall_clock_sqlite_binds_fixed_width_text():
    """SQLite stores fixed-width text so that text order is time order."""
    out = WallClockDateTime().process_bind_param(
        datetime(2025, 11, 14, 9, 0), SQLiteDialect()
    )
    assert out == "2025-11-14 09:00:00.000000"


def test_wall_clock_postgres_binds_naive_datetime():
    """PostgreSQL gets a naive datetime for TIMESTAMP WITHOUT TIME ZONE."""
    value = datetime(2025, 11, 14, 9, 0)
    assert WallClockDateTime().process_bind_param(value, PostgresDialect()) == value


@DIALECTS
def test_wall_clock_aware_values_become_naive_utc(dialect: Dialect):
    """Aware values are shifted to UTC and stored without a zone."""
    out = WallClockDateTime().process_bind_param(
        datetime(2025, 11, 14, 2, 0, tzinfo=MINUS_SEVEN), dialect
    )
    expected = datetime(2025, 11, 14, 9, 0)
    if dialect.name == DialectName.SQLITE.value:
        assert out == "2025-11-14 09:00:00.000000"
    else:
        assert out == expected and out.tzinfo is None


@pytest.mark.parametrize("raw", ["11/14/2025 09:00:00", "garbage", None])
def test_wall_clock_results_are_returned_untouched(raw):
    """Decoding is left to the codec, so odd stored values never break a read."""
    assert WallClockDateTime().process_result_value(raw, SQLiteDialect()) == raw


def test_wall_clock_column_types_per_dialect():
    """Postgres uses a real timestamp column; SQLite uses text."""
    table = sa.Table("t", sa.MetaData(), sa.Column("at", WallClockDateTime()))
    ddl = sa.schema.CreateTable(table)
    assert "TIMESTAMP WITHOUT TIME ZONE" in str(ddl.compile(dialect=PostgresDialect()))
    assert "VARCHAR(32)" in str(ddl.compile(dialect=SQLiteDialect()))
