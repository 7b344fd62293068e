"""Fixtures for the black-box CLI workflows; every test here is `functional`."""

from pathlib import Path

import pytest

from tests.helpers.markers import default_marker_hook

pytest_collection_modifyitems = default_marker_hook(__file__, "functional")


@pytest.fixture
def cli_env(tmp_path: Path) -> dict[str, str]:
    """Environment shared by CLI invocations: the flight recorder log stays in tmp."""
    return {
        "ALMANAC_LOG_PATH": str(tmp_path / "almanac.log"),
        "ALMANAC_DB_URL": "",
        "ALMANAC_ID_GENERATOR": "",
    }
