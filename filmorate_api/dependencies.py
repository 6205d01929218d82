from typing import AsyncIterator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from filmorate_api.db.postgres import get_sessionmaker
from filmorate_api.services.films_service import FilmsService
from filmorate_api.services.reference_service import (
    DirectorsService,
    GenresService,
    MpaService,
)
from filmorate_api.services.reviews_service import ReviewsService
from filmorate_api.services.users_service import UsersService


async def get_session() -> AsyncIterator[AsyncSession]:
    # одна сессия на запрос; транзакции открывают сервисы
    async with get_sessionmaker()() as session:
        yield session


async def get_films_service(
        session: AsyncSession = Depends(get_session)) -> FilmsService:
    return FilmsService(session)


async def get_users_service(
        session: AsyncSession = Depends(get_session),
        films: FilmsService = Depends(get_films_service),
) -> UsersService:
    # рекомендации отдаются через пакетную выборку фильмов
    return UsersService(session, films)


async def get_reviews_service(
        session: AsyncSession = Depends(get_session)) -> ReviewsService:
    return ReviewsService(session)


async def get_genres_service(
        session: AsyncSession = Depends(get_session)) -> GenresService:
    return GenresService(session)


async def get_mpa_service(
        session: AsyncSession = Depends(get_session)) -> MpaService:
    return MpaService(session)


async def get_directors_service(
        session: AsyncSession = Depends(get_session)) -> DirectorsService:
    return DirectorsService(session)
