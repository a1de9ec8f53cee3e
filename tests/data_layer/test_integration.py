"""
Integration tests against a real Postgres
Run with TEST_DATABASE_URL=postgres://... pytest -m integration
"""

import asyncio
import pytest

from database.errors import DuplicateEmailError, EditConflictError, RecordNotFoundError
from models.movie import Movie
from models.user import Password, User

pytestmark = pytest.mark.integration


def new_user(email: str = "Zhanassetkazy@example.com") -> User:
    return User(
        name="test1",
        surname="test1",
        email=email,
        password=Password(hash=b"hashedpassword"),
        activated=True,
    )


def new_movie() -> Movie:
    return Movie(title="Test Movie 1", year=2021, runtime=120, genres=["Action", "Adventure"])


class TestMovieIntegration:

    @pytest.mark.asyncio
    async def test_insert_then_get(self, integration_models):
        movies = integration_models.movies
        movie = new_movie()

        await movies.insert(movie)

        assert movie.id > 0
        assert movie.created_at is not None
        assert movie.version == 1

        stored = await movies.get(movie.id)
        assert stored.id == movie.id
        assert stored.title == "Test Movie 1"
        assert stored.year == 2021
        assert stored.runtime == 120
        assert stored.genres == ["Action", "Adventure"]
        assert stored.version == 1

    @pytest.mark.asyncio
    async def test_update_increments_version_once(self, integration_models):
        movies = integration_models.movies
        movie = new_movie()
        await movies.insert(movie)

        movie.genres = ["Adventure", "Action", "Comedy"]
        await movies.update(movie)

        assert movie.version == 2
        stored = await movies.get(movie.id)
        assert stored.version == 2
        assert stored.genres == ["Adventure", "Action", "Comedy"]

    @pytest.mark.asyncio
    async def test_stale_update_leaves_row_unchanged(self, integration_models):
        movies = integration_models.movies
        movie = new_movie()
        await movies.insert(movie)

        first = await movies.get(movie.id)
        second = await movies.get(movie.id)

        first.title = "First Writer"
        await movies.update(first)

        second.title = "Second Writer"
        with pytest.raises(EditConflictError):
            await movies.update(second)

        stored = await movies.get(movie.id)
        assert stored.title == "First Writer"
        assert stored.version == 2

    @pytest.mark.asyncio
    async def test_concurrent_updates_have_one_winner(self, integration_models):
        movies = integration_models.movies
        movie = new_movie()
        await movies.insert(movie)

        copies = [await movies.get(movie.id) for _ in range(4)]
        for index, copy in enumerate(copies):
            copy.runtime = 100 + index

        results = await asyncio.gather(*(movies.update(copy) for copy in copies), return_exceptions=True)

        assert sum(1 for result in results if result is None) == 1
        assert all(isinstance(result, EditConflictError) for result in results if result is not None)
        assert (await movies.get(movie.id)).version == 2

    @pytest.mark.asyncio
    async def test_delete_then_get(self, integration_models):
        movies = integration_models.movies
        movie = new_movie()
        await movies.insert(movie)

        await movies.delete(movie.id)

        with pytest.raises(RecordNotFoundError):
            await movies.get(movie.id)
        with pytest.raises(RecordNotFoundError):
            await movies.delete(movie.id)


class TestUserInfoIntegration:

    @pytest.mark.asyncio
    async def test_insert_and_lookup_by_email(self, integration_models):
        users = integration_models.users
        user = new_user()

        await users.insert(user)

        assert user.id > 0
        assert user.version == 1

        stored = await users.get_by_email("Zhanassetkazy@example.com")
        assert stored.id == user.id
        assert stored.role == "user"
        assert stored.password.hash == b"hashedpassword"

        with pytest.raises(RecordNotFoundError):
            await users.get_by_email("zhanassetkazy@example.com")

    @pytest.mark.asyncio
    async def test_duplicate_email(self, integration_models):
        users = integration_models.users
        await users.insert(new_user())

        with pytest.raises(DuplicateEmailError):
            await users.insert(new_user())

    @pytest.mark.asyncio
    async def test_update(self, integration_models):
        users = integration_models.users
        user = new_user()
        await users.insert(user)

        user.name = "updated"
        user.password = Password(hash=b"updatedhashedpassword")
        await users.update(user)

        assert user.version == 2
        stored = await users.get(user.id)
        assert stored.name == user.name
        assert stored.surname == user.surname
        assert stored.email == user.email
        assert stored.password.hash == b"updatedhashedpassword"
        assert stored.activated == user.activated
        assert stored.version == 2

    @pytest.mark.asyncio
    async def test_update_with_stale_version(self, integration_models):
        users = integration_models.users
        user = new_user()
        await users.insert(user)

        user.version = 16
        with pytest.raises(EditConflictError):
            await users.update(user)

        assert (await users.get(user.id)).version == 1

    @pytest.mark.asyncio
    async def test_delete(self, integration_models):
        users = integration_models.users
        user = new_user()
        await users.insert(user)

        await users.delete(user.id)

        with pytest.raises(RecordNotFoundError):
            await users.get(user.id)

    @pytest.mark.asyncio
    async def test_delete_missing_user(self, integration_models):
        with pytest.raises(RecordNotFoundError):
            await integration_models.users.delete(3)
