"""Unit tests: no containers and no network.

Anything that needs a store gets `InMemoryCalendarStore` or a private SQLite
database; clocks and id generators are deterministic.
"""
