from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from filmorate_api.models.base import (
    MAX_DB_INT,
    CamelModel,
    EntityId,
    NonBlankStr,
)
from filmorate_api.models.directors import DirectorItem
from filmorate_api.models.reference import GenreItem, MpaItem

# первый публичный киносеанс братьев Люмьер
CINEMA_BIRTHDAY = date(1895, 12, 28)
DESCRIPTION_MAX_LENGTH = 200


class IdRef(BaseModel):
    """`{"id": 3}` reference; a `name` sent by the client is ignored."""

    id: EntityId


class FilmCreateRequest(CamelModel):
    name: NonBlankStr
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    release_date: date
    duration: int = Field(gt=0, le=MAX_DB_INT)
    mpa: IdRef
    genres: List[IdRef] = Field(default_factory=list)
    directors: List[IdRef] = Field(default_factory=list)

    @field_validator("description", mode="before")
    @classmethod
    def description_default(cls, value: Optional[str]) -> str:
        return value or ""

    @field_validator("genres", "directors", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        return value or []

    @field_validator("release_date")
    @classmethod
    def not_before_cinema(cls, value: date) -> date:
        if value < CINEMA_BIRTHDAY:
            raise ValueError(
                f"release date must not be before {CINEMA_BIRTHDAY}")
        return value


class FilmUpdateRequest(FilmCreateRequest):
    id: EntityId


class FilmItem(CamelModel):
    id: int
    name: str
    description: str
    release_date: date
    duration: int
    mpa: MpaItem
    genres: List[GenreItem]
    directors: List[DirectorItem]
