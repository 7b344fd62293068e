"""Fixtures shared by every almanac test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


pytest_plugins = [
    "tests.fixtures.datagen",
    "tests.fixtures.sqlite",
    "tests.fixtures.postgres",
]

ALMANAC_ENV_VARS = (
    "ALMANAC_DB_URL",
    "ALMANAC_ID_GENERATOR",
    "ALMANAC_LOG_PATH",
    "ALMANAC_FLIGHT_RECORDER",
    "ALMANAC_FLIGHT_RECORDER_CAPACITY",
    "ALMANAC_FORCE_FLUSH",
    "ALMANAC_LOGGER_LEVELS",
)


@pytest.fixture(autouse=True)
def _isolate_almanac_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Hide the developer's own ALMANAC_* settings from every test."""
    for name in ALMANAC_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def engine(request: pytest.FixtureRequest) -> Engine:
    """Resolve an engine fixture named by an indirect parameter.

    Lets one test body run against several backends:

        @pytest.mark.parametrize(
            "engine", ["sqlite_engine_file", "postgres_engine"], indirect=True
        )
        def test_round_trip(engine, make_calendar): ...
    """
    return request.getfixturevalue(request.param)
