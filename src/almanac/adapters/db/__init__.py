"""Database plumbing shared by the SQL adapters.

Engine factory, dialect helpers, the shared `MetaData` and custom column types,
plus the packaged Alembic migrations (``alembic/``).
"""
