"""ALMANAC calendars CLI.

Create, replace, show, list and delete calendars in the database named by
``ALMANAC_DB_URL`` (which must already be at the schema head, see
``almanac db upgrade``).

Calendars go in and come out as JSON documents (see
`helpers.documents`); results are printed to **stdout**, status lines to
**stderr**, so output can be piped::

    $ almanac calendars create work.json
    $ almanac calendars list --page 0 --size 20 | jq '.items[].name'
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO, TYPE_CHECKING, Any

import click
import click_extra as clickx

from almanac import config
from almanac.bootstrap import bootstrap
from almanac.domain.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, MIN_PAGE_SIZE
from almanac.interfaces.calendar_store import CalendarNotFoundError, CalendarStoreError
from almanac.service_layer import commands, queries

from .db import MISSING_DB_URL_MSG
from .helpers import success, warn
from .helpers.documents import (
    DocumentError,
    calendar_from_document,
    calendar_to_document,
    page_to_document,
)

if TYPE_CHECKING:
    from almanac.bootstrap import AppContainer
    from almanac.domain.model import Calendar

PURGE_WARNING = "This will permanently delete every calendar and all of their events."


def _container() -> AppContainer:
    try:
        return bootstrap()
    except config.DatabaseUrlNotSetError as e:
        raise click.ClickException(MISSING_DB_URL_MSG) from e
    except config.UnknownIdGeneratorError as e:
        raise click.ClickException(str(e)) from e


@contextmanager
def _reported_errors() -> Iterator[None]:
    """Turn store failures into a one-line CLI error (exit status 1)."""
    try:
        yield
    except CalendarStoreError as e:
        raise click.ClickException(str(e)) from e


def _read_document(source: IO[str]) -> Any:
    try:
        doc = json.load(source)
        return calendar_from_document(doc)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="FILE") from e
    except DocumentError as e:
        raise click.BadParameter(str(e), param_hint="FILE") from e


def _echo_json(doc: Any) -> None:
    click.echo(json.dumps(doc, indent=2, ensure_ascii=False))


def _echo_stored(container: AppContainer, saved: Calendar) -> None:
    """Print `saved` as `show` would: re-read, with store defaults and order."""
    with _reported_errors():
        stored = queries.get_calendar(saved.id, container.uow)
    _echo_json(calendar_to_document(stored or saved))


@click.group(cls=clickx.ExtraGroup)
def calendars() -> None:
    """Calendar management commands."""


@calendars.command()
@click.argument("source", metavar="FILE", type=click.File("r", encoding="utf-8"))
def create(source: IO[str]) -> None:
    """Create a calendar from a JSON document (use - for stdin).

    Without an "id" one is generated; with one, it must not be taken yet.
    """
    calendar = _read_document(source)
    container = _container()
    with _reported_errors():
        saved = container.message_bus.handle(commands.CreateCalendar(calendar))
    _echo_stored(container, saved)
    success(f"Created calendar {saved.id}")


@calendars.command()
@click.argument("source", metavar="FILE", type=click.File("r", encoding="utf-8"))
def update(source: IO[str]) -> None:
    """Replace an existing calendar, events included, with a JSON document."""
    calendar = _read_document(source)
    if not calendar.id:
        raise click.BadParameter('the document needs an "id"', param_hint="FILE")
    container = _container()
    with _reported_errors():
        saved = container.message_bus.handle(commands.UpdateCalendar(calendar))
    _echo_stored(container, saved)
    success(f"Updated calendar {saved.id}")


@calendars.command()
@click.argument("calendar_id", metavar="ID")
def show(calendar_id: str) -> None:
    """Print one calendar with its events."""
    container = _container()
    with _reported_errors():
        calendar = queries.get_calendar(calendar_id, container.uow)
    if calendar is None:
        raise click.ClickException(str(CalendarNotFoundError(calendar_id)))
    _echo_json(calendar_to_document(calendar))


@calendars.command(name="list")
@click.option(
    "--page",
    type=click.IntRange(min=0, clamp=True),
    default=None,
    help="Page number, starting at 0. Enables paging.",
)
@click.option(
    "--size",
    type=click.IntRange(MIN_PAGE_SIZE, MAX_PAGE_SIZE, clamp=True),
    default=None,
    help=(
        f"Page size, clamped to {MIN_PAGE_SIZE}..{MAX_PAGE_SIZE} "
        f"(default {DEFAULT_PAGE_SIZE}). Enables paging."
    ),
)
def list_(page: int | None, size: int | None) -> None:
    """List calendars, newest first.

    Without --page/--size every calendar is printed as a JSON array. With
    either, one page is printed together with its paging metadata.
    """
    container = _container()
    with _reported_errors():
        if page is None and size is None:
            found = queries.list_calendars(container.uow)
            _echo_json([calendar_to_document(calendar) for calendar in found])
            return
        result = queries.list_calendar_page(
            page or 0, size or DEFAULT_PAGE_SIZE, container.uow
        )
    _echo_json(page_to_document(result))


@calendars.command()
@click.argument("calendar_id", metavar="ID")
def delete(calendar_id: str) -> None:
    """Delete a calendar and its events (no-op when it does not exist)."""
    container = _container()
    with _reported_errors():
        container.message_bus.handle(commands.DeleteCalendar(calendar_id))
    success(f"Deleted calendar {calendar_id}")


@calendars.command()
@click.option("--force", is_flag=True, help="Delete without confirmation.")
def purge(force: bool) -> None:
    """Delete every calendar and event."""
    if not force:
        warn(PURGE_WARNING)
        click.confirm("Are you sure you want to proceed?", abort=True, err=True)
    container = _container()
    with _reported_errors():
        container.message_bus.handle(commands.DeleteAllCalendars())
    success("All calendars deleted")
