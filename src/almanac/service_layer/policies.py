"""Identity and default policy applied to calendars before their first save."""

import logging
from dataclasses import replace

from almanac.domain.model import Calendar, CalendarMetadata, CalendarState
from almanac.interfaces.id_generator import IdGenerator

logger = logging.getLogger(__name__)


def apply_identity_and_defaults(
    calendar: Calendar, id_generator: IdGenerator
) -> Calendar:
    """Return a copy of `calendar` ready to be created.

    - A missing or empty id is replaced by ``id_generator.new_id()``.
    - A missing metadata block becomes ``CalendarMetadata(status=UNKNOWN)``.
    - A metadata block without a status gets ``status=UNKNOWN``.

    Everything else, events included, is carried over untouched. Whether a
    caller-supplied id is already taken is checked by the caller beforehand.
    """
    calendar_id = calendar.id
    if not calendar_id:
        calendar_id = id_generator.new_id()
        logger.debug("Generated new calendar id: %s", calendar_id)

    metadata = calendar.metadata
    if metadata is None:
        metadata = CalendarMetadata(status=CalendarState.UNKNOWN)
        logger.debug("Created default metadata for calendar: id=%s", calendar_id)
    elif metadata.status is None:
        metadata = replace(metadata, status=CalendarState.UNKNOWN)
        logger.debug("Set default status to UNKNOWN for calendar: id=%s", calendar_id)

    return replace(calendar, id=calendar_id, metadata=metadata)
