"""
Container bundling every table model over one database pool
"""

from dataclasses import dataclass
from typing import Optional

import asyncpg

from config.settings import QUERY_TIMEOUT_SECONDS
from services.movies_service import MovieModel
from services.user_info_service import UserInfoModel

@dataclass
class Models:
    """Table models sharing a pool and query timeout"""
    users: UserInfoModel
    movies: MovieModel

def new_models(pool: Optional[asyncpg.Pool] = None, timeout: float = QUERY_TIMEOUT_SECONDS) -> Models:
    """
    Build the table models.

    With ``pool=None`` the models resolve the global pool from
    ``database.connection`` at call time, so they can be created before
    ``init_database`` runs.
    """
    return Models(
        users=UserInfoModel(pool, timeout),
        movies=MovieModel(pool, timeout),
    )

# Global models instance
_models: Optional[Models] = None

def get_models() -> Models:
    """Get the global models instance"""
    global _models
    if _models is None:
        _models = new_models()
    return _models
