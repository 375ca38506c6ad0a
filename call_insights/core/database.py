"""
asyncpg pool for the Supabase Postgres store.

Every read and write against ``sales_calls`` and ``dataset_comparisons``
goes through the one process-wide pool held in ``_pool``:

- init_db(): create the pool (called from the FastAPI lifespan)
- get_db_pool(): the pool, created lazily on first use
- close_db(): release all connections on shutdown
- init_schema(): idempotent DDL for the enum types and both tables

The pool keeps 2..10 connections with a 60 s command timeout, and each
connection decodes jsonb/json columns into Python objects.

Usage:
    # lifespan startup
    await init_db()

    # In services
    pool = await get_db_pool()
    async with pool.acquire() as conn:
        rows = await conn.fetch("SELECT * FROM sales_calls")

    # lifespan shutdown
    await close_db()
"""

import json
from typing import Optional

import asyncpg
from asyncpg import Connection, Pool

from call_insights.core.config import get_settings
from call_insights.sql.schema import SCHEMA_STATEMENTS


# =============================================================================
# Pool State
# =============================================================================

# None until init_db() is called; shared across all requests
_pool: Optional[Pool] = None


async def _init_connection(conn: Connection) -> None:
    """
    Register JSON codecs on a freshly opened connection.

    Analysis bundles (key insights, demographics, rep performance, ...) live in
    jsonb columns; without a codec asyncpg hands them back as raw strings.
    """
    for type_name in ('jsonb', 'json'):
        await conn.set_type_codec(
            type_name,
            encoder=json.dumps,
            decoder=json.loads,
            schema='pg_catalog',
        )


# =============================================================================
# Lifecycle
# =============================================================================

async def init_db() -> Pool:
    """
    Create the process-wide pool from settings.database_url.

    Idempotent: if the pool already exists it is returned unchanged.

    Returns:
        The asyncpg Pool.

    Raises:
        asyncpg.PostgresError: The server refused the connection.
        OSError: Host unreachable.
    """
    global _pool

    if _pool is None:
        settings = get_settings()

        _pool = await asyncpg.create_pool(
            dsn=settings.database_url,
            min_size=2,
            max_size=10,
            command_timeout=60,
            init=_init_connection,
        )

    return _pool


async def get_db_pool() -> Pool:
    """
    The shared pool; created on first call if the lifespan has not run.

    Returns:
        The asyncpg Pool.

    Raises:
        asyncpg.PostgresError: Lazy creation could not connect.
    """
    global _pool

    if _pool is None:
        await init_db()

    assert _pool is not None, "Pool should be initialized after init_db()"

    return _pool


async def close_db() -> None:
    """
    Close the pool and forget it.

    Idempotent - calling it when the pool is not initialized has no effect.
    """
    global _pool

    if _pool is not None:
        await _pool.close()
        _pool = None


async def init_schema() -> None:
    """
    Create the enum types and tables used by the service if they are missing.

    Every statement is written to be re-runnable, so calling this on each
    startup is safe. Supabase projects that manage migrations elsewhere leave
    ``create_schema_on_startup`` disabled.
    """
    pool = await get_db_pool()

    async with pool.acquire() as conn:
        async with conn.transaction():
            for statement in SCHEMA_STATEMENTS:
                await conn.execute(statement)
