"""Alembic environment for the calendar tables.

The Config is built in code (`almanac.config.build_alembic_config`); there is
no alembic.ini and no logging section to interpret.

Comparison policy (shared by both modes): column types and server defaults
are compared, so autogenerate notices drift in either. SQLite runs in batch
mode because it cannot ALTER most column properties in place.

The database URL is taken from, in order: ``-x url=...``, the Config's
``sqlalchemy.url``, then ``ALMANAC_DB_URL``.
"""

import os
from typing import Any

from alembic import context
from sqlalchemy import engine_from_config, pool

# registers the calendar tables on the shared metadata
import almanac.adapters.calendar_store.schema  # noqa: F401 # pylint: disable=unused-import
from almanac.adapters.db.dialects import DialectName
from almanac.adapters.db.metadata import metadata
from almanac.config import ALEMBIC_URL_KEY, DB_URL_ENV_VAR

# pylint: disable=no-member

COMPARISON_POLICY: dict[str, Any] = {
    "target_metadata": metadata,
    "compare_type": True,
    "compare_server_default": True,
}


def resolve_url() -> str:
    """Return the first configured database URL.

    Raises:
        RuntimeError: If none of the three sources names a URL.
    """
    candidates = (
        context.get_x_argument(as_dictionary=True).get("url"),
        context.config.get_main_option(ALEMBIC_URL_KEY),
        os.environ.get(DB_URL_ENV_VAR),
    )
    for url in candidates:
        # an uninterpolated "%(...)s" placeholder counts as unset
        if url and "%(" not in url:
            return url
    raise RuntimeError(f"Set {DB_URL_ENV_VAR} to your database URL.")


def run_offline() -> None:
    """Emit the migration SQL to the script output without connecting."""
    context.configure(
        url=resolve_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **COMPARISON_POLICY,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    """Apply the migrations over a dedicated, unpooled connection."""
    engine = engine_from_config(
        {ALEMBIC_URL_KEY: resolve_url()},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            render_as_batch=(
                DialectName.from_sqlalchemy(connection) is DialectName.SQLITE
            ),
            **COMPARISON_POLICY,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
