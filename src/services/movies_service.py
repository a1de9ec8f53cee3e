"""
Movies service - persistence for movie records
"""

import logging

from database.errors import EditConflictError, PersistenceError, RecordNotFoundError
from models.movie import Movie
from services.base_service import TableModel

logger = logging.getLogger(__name__)

class MovieModel(TableModel):
    """CRUD over the movies table"""

    table_name = "movies"

    async def insert(self, movie: Movie) -> None:
        """Insert a movie and write the generated id, created_at and version back into it"""
        self._revalidate(movie)
        query = """
            INSERT INTO movies (title, year, runtime, genres)
            VALUES ($1, $2, $3, $4)
            RETURNING id, created_at, version
        """
        row = await self._fetchrow(
            "insert", query,
            movie.title, movie.year, movie.runtime, list(movie.genres),
            context={"title": movie.title},
        )
        if not row:
            raise PersistenceError("Insert operation failed - no data returned")

        movie.id = row["id"]
        movie.created_at = row["created_at"]
        movie.version = row["version"]
        logger.info(f"Created movie {movie.id}: {movie.title}")

    async def get(self, movie_id: int) -> Movie:
        if movie_id < 1:
            raise RecordNotFoundError()

        query = """
            SELECT id, created_at, title, year, runtime, genres, version
            FROM movies
            WHERE id = $1
        """
        row = await self._fetchrow("get", query, movie_id, context={"id": movie_id})
        if row is None:
            raise RecordNotFoundError()

        return Movie(
            id=row["id"],
            created_at=row["created_at"],
            title=row["title"],
            year=row["year"],
            runtime=row["runtime"],
            genres=list(row["genres"]),
            version=row["version"],
        )

    async def update(self, movie: Movie) -> None:
        """Update a movie if its version is current; raises EditConflictError otherwise"""
        self._revalidate(movie)
        query = """
            UPDATE movies
            SET title = $1, year = $2, runtime = $3, genres = $4, version = version + 1
            WHERE id = $5 AND version = $6
            RETURNING version
        """
        row = await self._fetchrow(
            "update", query,
            movie.title, movie.year, movie.runtime, list(movie.genres), movie.id, movie.version,
            context={"id": movie.id, "version": movie.version},
        )
        if row is None:
            logger.warning(f"Edit conflict updating movie {movie.id} at version {movie.version}")
            raise EditConflictError()

        movie.version = row["version"]
        logger.info(f"Updated movie {movie.id} to version {movie.version}")
