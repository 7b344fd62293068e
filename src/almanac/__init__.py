"""ALMANAC

A small record-keeping store for calendars and their events.
Calendars and their ordered events are persisted as one aggregate across two
relations, with idempotent upsert, cascading delete and paginated listings.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
