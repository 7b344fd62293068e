"""Almanac's test suite, one directory per kind of test.

- unit/: one module at a time, against the in-memory store and fakes.
- contract/: the CalendarStore behaviors, run against every implementation.
- integration/: the SQL store, unit of work and migrations on SQLite files
  and PostgreSQL containers.
- functional/: what a user sees from ``almanac db`` and ``almanac calendars``.
- e2e/: the global CLI options (verbosity, flight recorder).
- fixtures/: pytest plugins shared by the above; no tests.

Each directory's conftest marks its tests, so ``pytest -m unit`` or
``pytest -m "not integration"`` select by kind. Property-based tests also
carry ``property``.
"""
