"""Pytest fixtures for CalendarStore contract tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest
import sqlalchemy as sa

from almanac.adapters.calendar_store import (
    InMemoryCalendarStore,
    SqlAlchemyCalendarStore,
)
from almanac.adapters.calendar_store.schema import events
from almanac.interfaces.calendar_store import CalendarStore

# pylint: disable=redefined-outer-name


@pytest.fixture(params=["memory", "sqlite"])
def store(
    request: pytest.FixtureRequest, sqlite_engine_memory, ticking_clock
) -> Iterator[CalendarStore]:
    """Return a fresh, empty calendar store for the requested backend.

    Current params:
      - `"memory"` → `InMemoryCalendarStore`
      - `"sqlite"` → `SqlAlchemyCalendarStore` on a bare connection to an
        in-memory SQLite database, so every write commits on its own

    Both use a ticking clock, so creation order is strict even for saves made
    within the same second.
    """
    match request.param:
        case "memory":
            yield InMemoryCalendarStore(clock=ticking_clock)
        case "sqlite":
            with sqlite_engine_memory.connect() as connection:
                yield SqlAlchemyCalendarStore(connection, clock=ticking_clock)
        case _:
            raise ValueError(f"unknown store type: {request.param}")


@pytest.fixture
def plant_event_rows(store: CalendarStore) -> Callable[..., None]:
    """Write raw ``events`` rows under the store's nose, bypassing `save`.

    Text timestamps are stored verbatim, the way older software left them.
    The owning calendar must already be saved.
    """

    def _plant(calendar_id: str, *rows: dict[str, Any]) -> None:
        full_rows = [{"calendar_id": calendar_id, **row} for row in rows]
        if isinstance(store, InMemoryCalendarStore):
            for row in full_rows:
                store.event_rows[row["id"]] = row
            return
        assert isinstance(store, SqlAlchemyCalendarStore)
        with store.connection.begin():
            for row in full_rows:
                values = {
                    name: _verbatim(value) if name.endswith("_datetime") else value
                    for name, value in row.items()
                }
                store.connection.execute(sa.insert(events).values(**values))

    return _plant


def _verbatim(value: Any) -> Any:
    """Text goes in as a SQL literal, skipping the column type's conversion."""
    return sa.literal_column(f"'{value}'") if isinstance(value, str) else value
