"""
Async PostgreSQL connection pool module for Supabase database connectivity.

All reads and writes against the Supabase Postgres instance (app_settings,
google_sheets_integrations) flow through the pool managed here.

Key Components:
- Global connection pool (_pool)
- init_db(): Initialize the connection pool at application startup
- get_db_pool(): Get the pool instance (initializes if needed)
- close_db(): Gracefully close the pool at application shutdown
- execute_query_one() / execute_command(): Convenience helpers

Connection Pool Configuration:
- min_size: 1
- max_size: 5
- command_timeout: 30 seconds

Usage:
    # At application startup (in FastAPI lifespan)
    await init_db()

    # In services
    row = await execute_query_one(
        "SELECT value FROM app_settings WHERE key = $1", "lead_scoring_config"
    )

    # At application shutdown
    await close_db()
"""

from typing import Any, Optional

import asyncpg
from asyncpg import Pool

from leadscoring.core.config import get_settings


# =============================================================================
# Global Pool
# =============================================================================

# None until init_db() is called; shared across all async tasks
_pool: Optional[Pool] = None


# =============================================================================
# Pool Lifecycle Functions
# =============================================================================

async def init_db() -> Pool:
    """
    Initialize the database connection pool.

    Idempotent: if the pool already exists it is returned unchanged.

    Returns:
        Pool: The asyncpg connection pool instance.

    Raises:
        asyncpg.PostgresError: If connection to the database fails.
        OSError: If the database host is unreachable.
    """
    global _pool

    if _pool is None:
        settings = get_settings()

        # The dashboard issues a handful of small queries per request,
        # so a small pool is enough
        _pool = await asyncpg.create_pool(
            dsn=settings.database_url,
            min_size=1,
            max_size=5,
            command_timeout=30,
        )

    return _pool


async def get_db_pool() -> Pool:
    """
    Get the database connection pool, initializing if needed.

    Returns:
        Pool: The asyncpg connection pool instance.
    """
    global _pool

    if _pool is None:
        await init_db()

    assert _pool is not None, "Pool should be initialized after init_db()"

    return _pool


async def close_db() -> None:
    """
    Close the database connection pool gracefully.

    Safe to call when the pool was never created.
    """
    global _pool

    if _pool is not None:
        await _pool.close()
        _pool = None


# =============================================================================
# Query Execution Helpers
# =============================================================================

async def execute_query_one(query: str, *args: Any) -> Optional[asyncpg.Record]:
    """
    Execute a query and return a single row or None.

    Example:
        row = await execute_query_one(
            "SELECT csv_url FROM google_sheets_integrations WHERE id = $1",
            integration_id,
        )
    """
    pool = await get_db_pool()

    async with pool.acquire() as conn:
        return await conn.fetchrow(query, *args)


async def execute_command(query: str, *args: Any) -> str:
    """
    Execute a command (INSERT/UPDATE/DELETE) and return the status string.

    Returns:
        str: The command status string (e.g., 'INSERT 0 1', 'UPDATE 1').
    """
    pool = await get_db_pool()

    async with pool.acquire() as conn:
        return await conn.execute(query, *args)
