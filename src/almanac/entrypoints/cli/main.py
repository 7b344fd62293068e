"""The top-level ``almanac`` command.

Global options here only concern logging; the work happens in the groups:

- ``almanac db``: apply and inspect schema migrations.
- ``almanac calendars``: create, update, show, list, delete and purge.

Examples
    $ almanac --version
    $ almanac -v db upgrade
    $ almanac calendars list --page 0 --size 20
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir
from sqlalchemy.exc import ArgumentError

from almanac import __version__, config
from almanac.logging import (
    DEFAULT_FLIGHT_RECORDER_CAPACITY,
    LoggingSettings,
    configure_logging,
    log_startup,
)

from .calendars import calendars as calendars_group
from .db import db as db_group
from .helpers import sanitize_url
from .helpers.log_level_parser import parse_log_level

logger = logging.getLogger(__name__)


HELP = """ALMANAC command-line interface.

    ALMANAC stores calendars together with their events in a relational
    database (SQLite or PostgreSQL). Each calendar is saved and deleted as a
    whole, events included, and can be listed newest first, page by page.
    """


def _configured_db_url() -> str | None:
    """Sanitized database URL for the startup log, if one is configured."""
    try:
        return sanitize_url(config.get_db_url())
    except config.DatabaseUrlNotSetError:
        return None
    except ArgumentError:
        return "<invalid>"


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Show more on the console: -v for INFO, -vv for DEBUG.",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Show less on the console: -q for ERROR, -qq for CRITICAL.",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Log everything at DEBUG, with logger names and source locations.",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="File the flight recorder writes to. Truncated on every run.",
    default=Path(user_log_dir("almanac", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="ALMANAC_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=DEFAULT_FLIGHT_RECORDER_CAPACITY,
    hidden=True,
    envvar="ALMANAC_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Number of records the flight recorder holds before it writes them out.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    envvar="ALMANAC_FLIGHT_RECORDER",
    help=(
        "Buffer recent log records at every level, whatever -v/-q say, and "
        "write them to --log-path once a WARNING or worse is logged."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    envvar="ALMANAC_FORCE_FLUSH",
    help=(
        "Also write the flight recorder buffer to --log-path when the "
        "command finishes, even if nothing went wrong."
    ),
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    envvar="ALMANAC_LOGGER_LEVELS",
    help=(
        "Set a logger's own level as NAME=LEVEL, for both the console and "
        "the flight recorder. Repeat the option, or give a comma or space "
        "separated list in ALMANAC_LOGGER_LEVELS."
    ),
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def almanac(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """ALMANAC command-line interface."""
    settings = LoggingSettings(
        verbosity=verbose_count - quiet_count,
        debug=debug,
        color=ctx.color is not False,
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_recorder_capacity=flight_recorder_capacity,
        force_flush=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )
    handlers = configure_logging(settings)
    log_startup(
        logger,
        settings,
        app_version=__version__,
        handlers=handlers,
        db_url=_configured_db_url(),
    )
    # the flight recorder flushes (if asked to) when its handler closes
    ctx.call_on_close(logging.shutdown)


almanac.add_command(db_group)
almanac.add_command(calendars_group)
