"""Logging setup for the almanac CLI.

Library code only ever does ``logging.getLogger(__name__)``. The CLI calls
`configure_logging` once per invocation, which replaces the root logger's
handlers with:

- a Rich console handler on stderr, so stdout carries nothing but JSON, and
- optionally a flight recorder: a `MemoryHandler` that keeps recent records
  at every level and dumps them to a file once a WARNING arrives (or on exit,
  when force-flush is on).

Console verbosity starts at WARNING and moves one level per ``-v``/``-q``.
Per-logger overrides (``-L sqlalchemy=INFO``) set the logger's own level and
therefore apply to both sinks.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from dataclasses import dataclass, field
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import alembic
import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Handler, Logger

PROJECT_PREFIX = "almanac"

DEFAULT_FLIGHT_RECORDER_CAPACITY = 2000

FLIGHT_RECORDER_FORMAT = (
    "[%(asctime)s] [%(process)d:%(threadName)s] "
    "%(levelname)s %(name)s:%(lineno)d: %(message)s"
)

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


@dataclass(frozen=True)
class LoggingSettings:  # pylint: disable=too-many-instance-attributes
    """Everything the CLI's global options say about logging."""

    verbosity: int = 0
    """Net ``-v`` count minus ``-q`` count."""
    debug: bool = False
    color: bool = True
    log_path: Path | None = None
    flight_recorder: bool = False
    flight_recorder_capacity: int = DEFAULT_FLIGHT_RECORDER_CAPACITY
    force_flush: bool = False
    logger_levels: dict[str, int] = field(default_factory=dict)

    @property
    def console_level(self) -> int:
        """WARNING shifted by `verbosity`, kept within DEBUG..CRITICAL."""
        level = logging.WARNING - 10 * self.verbosity
        return max(logging.DEBUG, min(logging.CRITICAL, level))


class ThirdPartyPrefixFilter(logging.Filter):
    """Set `record.prefix` so other packages' records stand out.

    ``sqlalchemy.engine.Engine`` gets ``"[sqlalchemy]"``; records from the
    ``almanac`` namespace get ``""``. Every record passes.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        top = record.name.split(".", 1)[0]
        record.prefix = "" if top == PROJECT_PREFIX else f"[{top}]"
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    Debug mode lowers the level to DEBUG and adds the logger name, time and a
    clickable source path. Otherwise third-party records carry a prefix.
    """
    color_system: ColorSystem | None = "auto" if color else None
    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))
        handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = DEFAULT_FLIGHT_RECORDER_CAPACITY,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build a flight recorder that writes to `path`.

    The file is truncated when the recorder is built. The buffer is written
    out when a record at `flush_level` or above arrives, when it holds
    `capacity` records, and on close if `flush_on_close` is set.
    """
    sink = logging.FileHandler(path, mode="w", encoding="utf-8")
    sink.setLevel(logging.DEBUG)
    sink.setFormatter(logging.Formatter(FLIGHT_RECORDER_FORMAT))
    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=sink,
        flushOnClose=flush_on_close,
    )


def configure_logging(settings: LoggingSettings) -> list[Handler]:
    """Install the console (and flight recorder) on the root logger.

    The root logger is opened to DEBUG so each handler decides for itself;
    per-logger overrides are applied afterwards.

    Returns:
        The handlers now attached to the root logger.
    """
    handlers: list[Handler] = [
        config_console_handler(
            level=settings.console_level,
            debug_mode=settings.debug,
            color=settings.color,
        )
    ]
    if settings.flight_recorder and settings.log_path is not None:
        handlers.append(
            config_flight_recorder(
                settings.log_path,
                capacity=settings.flight_recorder_capacity,
                flush_on_close=settings.force_flush,
            )
        )

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, level in settings.logger_levels.items():
        logging.getLogger(name).setLevel(level)
    return handlers


def startup_diagnostics(
    settings: LoggingSettings, handlers: list[Handler], db_url: str | None
) -> list[tuple[str, object]]:
    """The (label, value) pairs logged at DEBUG when the CLI starts."""
    overrides: object = {
        name: logging.getLevelName(level)
        for name, level in settings.logger_levels.items()
    } or "<none>"
    rows: list[tuple[str, object]] = [
        ("Python", sys.version.split()[0]),
        ("Platform", f"{platform.system()} {platform.release()}"),
        ("PID", os.getpid()),
        ("CWD", Path.cwd()),
        ("SQLAlchemy", sqlalchemy.__version__),
        ("Alembic", alembic.__version__),
        ("Database", db_url or "<not configured>"),
        ("Handlers", [type(h).__name__ for h in handlers]),
    ]
    if settings.flight_recorder:
        rows.append(
            (
                "Flight recorder",
                f"path={settings.log_path or '<none>'}, "
                f"capacity={settings.flight_recorder_capacity}, "
                f"flush_on_close={settings.force_flush}",
            )
        )
    rows.append(("Per-logger overrides", overrides))
    return rows


def log_startup(
    logger: Logger,
    settings: LoggingSettings,
    *,
    app_version: str,
    handlers: list[Handler],
    db_url: str | None = None,
) -> None:
    """Log a one-line INFO summary, then the diagnostics at DEBUG.

    `db_url` must already have its password masked.
    """
    logger.info(
        "ALMANAC %s: console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(settings.console_level),
        "ON" if settings.flight_recorder else "OFF",
    )
    for label, value in startup_diagnostics(settings, handlers, db_url):
        logger.debug("%s: %s", label, value)
