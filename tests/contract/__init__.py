"""Contract tests for the CalendarStore port.

Each test receives a ``store`` fixture parametrized over the implementations
and may rely only on the port's documented behavior, so the in-memory and SQL
stores cannot drift apart.
"""
