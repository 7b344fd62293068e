"""Fixtures for the end-to-end logging tests of the `almanac` CLI.

The tests drive a throwaway ``log-demo`` command that logs once per level on
``almanac.demo`` and a few times on ``some.thirdparty``, then look for those
lines on the console and in the flight recorder file.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from almanac.entrypoints.cli.main import almanac

# pylint: disable=redefined-outer-name

DEMO_COMMAND = "log-demo"
DEMO_LEVELS = ("debug", "info", "warning", "error", "critical")


@click.command()
def log_demo():
    """Log one line per level, then a little third-party noise."""
    own = logging.getLogger("almanac.demo")
    for level in DEMO_LEVELS:
        own.log(logging.getLevelName(level.upper()), "almanac.demo emitted %s", level)
    other = logging.getLogger("some.thirdparty")
    for level in ("debug", "info", "warning"):
        other.log(
            logging.getLevelName(level.upper()), "some.thirdparty emitted %s", level
        )
    own.debug("almanac.demo emitted a closing debug")


@pytest.fixture
def registered_log_demo():
    """Attach ``log-demo`` to the `almanac` group for one test."""
    almanac.add_command(log_demo, name=DEMO_COMMAND)
    try:
        yield
    finally:
        almanac.commands.pop(DEMO_COMMAND, None)
        # click-extra also files commands under help sections
        for section in [getattr(almanac, "_default_section", None)] + list(
            getattr(almanac, "_sections", [])
        ):
            getattr(section, "commands", {}).pop(DEMO_COMMAND, None)


@pytest.fixture
def runner():
    """A CliRunner; the root conftest already cleared ALMANAC_* variables."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run inside an isolated directory so flight recorder files land there."""
    with runner.isolated_filesystem():
        yield
