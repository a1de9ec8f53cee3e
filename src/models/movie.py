"""
Movie Pydantic models
"""

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_MOVIE_YEAR = 1888
MAX_MOVIE_YEAR = 2100
MAX_GENRES = 5

class Movie(BaseModel):
    """Disconnected copy of a row in the movies table"""
    model_config = ConfigDict(validate_assignment=True)

    id: int = 0
    created_at: Optional[datetime] = None
    title: str = Field(..., min_length=1, max_length=500)
    year: int = Field(..., ge=MIN_MOVIE_YEAR, le=MAX_MOVIE_YEAR)
    runtime: int = Field(..., gt=0, description="Runtime in minutes")
    genres: List[str] = Field(..., min_length=1, max_length=MAX_GENRES)
    version: int = 0

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('title must be provided')
        return v

    @field_validator('genres')
    @classmethod
    def validate_genres(cls, v):
        if any(not genre.strip() for genre in v):
            raise ValueError('genres cannot contain empty values')
        if len(set(v)) != len(v):
            raise ValueError('genres must not contain duplicate values')
        return v
