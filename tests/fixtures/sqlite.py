"""SQLite engines for the store and unit of work tests.

Every engine comes from `make_engine`, so the foreign-key PRAGMA and the
explicit BEGIN handling are the same as in production.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from alembic import command
from sqlalchemy.engine import URL

from almanac import config
from almanac.adapters.db.engine import make_engine
from almanac.adapters.db.metadata import metadata

# registers the calendar tables on `metadata`
from almanac.adapters.calendar_store import schema  # noqa: F401 # pylint: disable=unused-import

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


@pytest.fixture
def sqlite_engine_memory() -> Iterator[Engine]:
    """A private in-memory database with the tables created from metadata.

    Quick, but it skips the migrations; `sqlite_engine_file` runs them.
    """
    engine = make_engine("sqlite+pysqlite:///:memory:")
    metadata.create_all(engine)
    try:
        yield engine
    finally:
        metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    """URL of a database file that does not exist yet."""
    url = URL.create("sqlite+pysqlite", database=str(tmp_path / "almanac.db"))
    return url.render_as_string()


@pytest.fixture
def sqlite_engine_file(sqlite_url: str) -> Iterator[Engine]:
    """A database file brought to the head revision by Alembic.

    Each test gets its own file, so there is nothing to downgrade afterwards.
    """
    command.upgrade(config.build_alembic_config(sqlite_url), "head")
    engine = make_engine(sqlite_url)
    try:
        yield engine
    finally:
        engine.dispose()
