"""Integration tests for the custom datetime column types on both backends.

1) SQL NULL round-trips to Python None for both types.
2) UTCDateTime normalizes offsets and reads back tz-aware UTC.
3) WallClockDateTime keeps the wall-clock reading and orders chronologically
   (text on SQLite, TIMESTAMP on PostgreSQL).
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import pytest
import sqlalchemy as sa

from almanac.adapters.calendar_store.codec import decode_timestamp
from almanac.adapters.db.sa_types import UTCDateTime, WallClockDateTime

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

# pylint: disable=redefined-outer-name

pytestmark = pytest.mark.parametrize(
    "engine",
    ["sqlite_engine_file", "postgres_engine"],
    indirect=True,
)

UTC_MINUS_7 = timezone(timedelta(hours=-7))


@pytest.fixture
def tmp_table(engine: Engine) -> Iterator[sa.Table]:
    """Scratch table with one column of each type; dropped after the test."""
    md = sa.MetaData()
    t = sa.Table(
        "tmp_datetime_types",
        md,
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("recorded_at", UTCDateTime(), nullable=True),
        sa.Column("starts_at", WallClockDateTime(), nullable=True),
    )
    md.create_all(engine)
    with engine.begin() as conn:
        conn.execute(
            sa.insert(t),
            [
                {"id": 1, "recorded_at": None, "starts_at": None},
                {
                    "id": 2,
                    "recorded_at": datetime(2024, 1, 1, 5, 0, tzinfo=UTC_MINUS_7),
                    "starts_at": datetime(2025, 11, 14, 9, 0),
                },
                {
                    "id": 3,
                    "recorded_at": datetime(2024, 1, 1, 12, 0),
                    "starts_at": datetime(2025, 11, 3, 17, 30, 0, 250000),
                },
            ],
        )
    yield t
    md.drop_all(engine)


def _one(engine: Engine, column: sa.Column, row_id: int):
    with engine.connect() as conn:
        return conn.execute(
            sa.select(column).where(column.table.c.id == row_id)
        ).scalar_one()


def test_nulls_round_trip(engine: Engine, tmp_table: sa.Table):
    """NULL reads back as None for both types."""
    assert _one(engine, tmp_table.c.recorded_at, 1) is None
    assert _one(engine, tmp_table.c.starts_at, 1) is None


def test_utc_values_read_back_aware(engine: Engine, tmp_table: sa.Table):
    """Offsets are normalized; naive input is taken as UTC."""
    expected = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert _one(engine, tmp_table.c.recorded_at, 2) == expected
    got = _one(engine, tmp_table.c.recorded_at, 3)
    assert got == expected
    assert got.utcoffset() == timedelta(0)


def test_wall_clock_values_keep_their_reading(engine: Engine, tmp_table: sa.Table):
    """Wall-clock values decode to the naive datetime that was written."""
    assert decode_timestamp(_one(engine, tmp_table.c.starts_at, 2)) == datetime(
        2025, 11, 14, 9, 0
    )
    assert decode_timestamp(_one(engine, tmp_table.c.starts_at, 3)) == datetime(
        2025, 11, 3, 17, 30, 0, 250000
    )


def test_wall_clock_orders_chronologically(engine: Engine, tmp_table: sa.Table):
    """ORDER BY sorts by time, not by the text's month-first reading."""
    with engine.connect() as conn:
        ids = conn.execute(
            sa.select(tmp_table.c.id)
            .where(tmp_table.c.starts_at.is_not(None))
            .order_by(tmp_table.c.starts_at)
        ).scalars().all()
    assert ids == [3, 2]


def test_null_filters(engine: Engine, tmp_table: sa.Table):
    """IS NULL / IS NOT NULL see the stored NULLs."""
    with engine.connect() as conn:
        nulls = conn.execute(
            sa.select(tmp_table.c.id).where(tmp_table.c.recorded_at.is_(None))
        ).scalars().all()
    assert nulls == [1]
