"""
pytest configuration and fixtures for the data layer testing suite
Mocked pools for unit tests, a real pool for integration tests
"""

import os
import pytest
import pytest_asyncio
import asyncpg
from unittest.mock import AsyncMock, MagicMock

from database.schema import apply_schema
from models.movie import Movie
from models.user import Password, User
from services.models import new_models
from services.movies_service import MovieModel
from services.user_info_service import UserInfoModel

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")


# === UNIT TEST FIXTURES ===

@pytest.fixture
def mock_conn():
    """Connection stand-in; configure fetchrow/execute per test"""
    conn = AsyncMock()
    conn.execute.return_value = "DELETE 1"
    return conn


@pytest.fixture
def mock_pool(mock_conn):
    """Pool whose acquire() context yields mock_conn"""
    pool = MagicMock()
    acquire_ctx = pool.acquire.return_value
    acquire_ctx.__aenter__ = AsyncMock(return_value=mock_conn)
    acquire_ctx.__aexit__ = AsyncMock(return_value=False)
    return pool


@pytest.fixture
def user_model(mock_pool) -> UserInfoModel:
    return UserInfoModel(mock_pool, timeout=1.0)


@pytest.fixture
def movie_model(mock_pool) -> MovieModel:
    return MovieModel(mock_pool, timeout=1.0)


@pytest.fixture
def sample_user() -> User:
    return User(
        name="Test1",
        surname="Test1",
        email="Test1@example.com",
        password=Password(hash=b"hashedpassword"),
        role="user",
        activated=True,
    )


@pytest.fixture
def sample_movie() -> Movie:
    return Movie(
        title="Test Movie 1",
        year=2024,
        runtime=120,
        genres=["Action", "Adventure"],
    )


# === INTEGRATION FIXTURES ===

@pytest_asyncio.fixture
async def integration_pool():
    """Real pool against TEST_DATABASE_URL with empty tables"""
    if not TEST_DATABASE_URL:
        pytest.skip("TEST_DATABASE_URL not set - skipping integration test")

    pool = await asyncpg.create_pool(
        TEST_DATABASE_URL,
        min_size=1,
        max_size=4,
        statement_cache_size=0
    )
    async with pool.acquire() as conn:
        await apply_schema(conn)
        await conn.execute("TRUNCATE user_info, movies RESTART IDENTITY")

    yield pool

    await pool.close()


@pytest_asyncio.fixture
async def integration_models(integration_pool):
    return new_models(integration_pool)
