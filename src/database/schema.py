"""
Table definitions for user_info and movies
"""

import logging
import asyncpg

logger = logging.getLogger(__name__)

USER_INFO_TABLE = """
    CREATE TABLE IF NOT EXISTS user_info (
        id bigserial PRIMARY KEY,
        created_at timestamp(0) with time zone NOT NULL DEFAULT NOW(),
        updated_at timestamp(0) with time zone NOT NULL DEFAULT NOW(),
        fname text NOT NULL,
        lname text NOT NULL,
        email text NOT NULL,
        password_hash bytea NOT NULL,
        user_role text NOT NULL DEFAULT 'user',
        activated bool NOT NULL,
        version integer NOT NULL DEFAULT 1,
        CONSTRAINT user_info_email_key UNIQUE (email)
    )
"""

MOVIES_TABLE = """
    CREATE TABLE IF NOT EXISTS movies (
        id bigserial PRIMARY KEY,
        created_at timestamp(0) with time zone NOT NULL DEFAULT NOW(),
        title text NOT NULL,
        year integer NOT NULL,
        runtime integer NOT NULL,
        genres text[] NOT NULL,
        version integer NOT NULL DEFAULT 1,
        CONSTRAINT movies_runtime_check CHECK (runtime > 0),
        CONSTRAINT movies_year_check CHECK (year BETWEEN 1888 AND 2100),
        CONSTRAINT genres_length_check CHECK (array_length(genres, 1) BETWEEN 1 AND 5)
    )
"""

TABLES = {
    "user_info": USER_INFO_TABLE,
    "movies": MOVIES_TABLE,
}


async def apply_schema(conn: asyncpg.Connection) -> None:
    """Create every table that does not exist yet"""
    async with conn.transaction():
        for name, ddl in TABLES.items():
            await conn.execute(ddl)
            logger.info(f"Ensured table exists: {name}")


async def drop_schema(conn: asyncpg.Connection) -> None:
    """Drop every table owned by the data layer"""
    async with conn.transaction():
        for name in reversed(list(TABLES)):
            await conn.execute(f"DROP TABLE IF EXISTS {name}")
            logger.info(f"Dropped table: {name}")
