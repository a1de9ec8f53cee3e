"""
Process-wide asyncpg pool shared by the table models
"""

import asyncpg
import logging
from config.settings import (
    DATABASE_URL,
    DB_POOL_MIN_SIZE,
    DB_POOL_MAX_SIZE,
    DB_COMMAND_TIMEOUT,
    DB_STATEMENT_CACHE_SIZE,
)

logger = logging.getLogger(__name__)

db_pool = None

async def init_database(database_url: str = None):
    """
    Open the shared pool and check that the server answers.

    ``database_url`` overrides the ``DATABASE_URL`` setting. Returns the pool.
    """
    global db_pool
    url = database_url or DATABASE_URL
    if not url:
        raise ValueError("DATABASE_URL environment variable is required")

    db_pool = await asyncpg.create_pool(
        url,
        min_size=DB_POOL_MIN_SIZE,
        max_size=DB_POOL_MAX_SIZE,
        command_timeout=DB_COMMAND_TIMEOUT,
        statement_cache_size=DB_STATEMENT_CACHE_SIZE,
    )

    async with db_pool.acquire() as conn:
        await conn.fetchval("SELECT 1")

    logger.info(f"Database pool ready ({DB_POOL_MIN_SIZE}-{DB_POOL_MAX_SIZE} connections)")
    return db_pool


async def close_database():
    """Close the shared pool; models then raise until init_database runs again"""
    global db_pool
    if db_pool:
        await db_pool.close()
        db_pool = None
        logger.info("Database pool closed")

def get_db_pool():
    return db_pool
