"""Read-only access to MPA ratings and genres, plus director CRUD."""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from filmorate_api.core.errors import NotFoundError, not_found_if_none
from filmorate_api.models.directors import (
    DirectorCreateRequest,
    DirectorItem,
    DirectorUpdateRequest,
)
from filmorate_api.models.reference import GenreItem, MpaItem
from filmorate_api.services.repositories.directors_repo import DirectorsRepo
from filmorate_api.services.repositories.reference_repo import (
    GenresRepo,
    MpaRepo,
)
from filmorate_api.services.transactions import transaction

logger = logging.getLogger(__name__)


class GenresService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = GenresRepo(session)

    async def find_all(self) -> List[GenreItem]:
        async with transaction(self.session, 'genre_list'):
            rows = await self.repo.list_all()
        return [GenreItem(id=row.id, name=row.name) for row in rows]

    async def find_by_id(self, genre_id: int) -> GenreItem:
        async with transaction(self.session, 'genre_get'):
            row = not_found_if_none(
                await self.repo.get_by_id(genre_id), 'genre_not_found')
        return GenreItem(id=row.id, name=row.name)


class MpaService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = MpaRepo(session)

    async def find_all(self) -> List[MpaItem]:
        async with transaction(self.session, 'mpa_list'):
            rows = await self.repo.list_all()
        return [MpaItem(id=row.id, name=row.name) for row in rows]

    async def find_by_id(self, mpa_id: int) -> MpaItem:
        async with transaction(self.session, 'mpa_get'):
            row = not_found_if_none(
                await self.repo.get_by_id(mpa_id), 'mpa_not_found')
        return MpaItem(id=row.id, name=row.name)


class DirectorsService:
    """Director CRUD; deleting one unlinks it from its films."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = DirectorsRepo(session)

    async def find_all(self) -> List[DirectorItem]:
        async with transaction(self.session, 'director_list'):
            rows = await self.repo.list_all()
        return [DirectorItem(id=row.id, name=row.name) for row in rows]

    async def find_by_id(self, director_id: int) -> DirectorItem:
        async with transaction(self.session, 'director_get'):
            row = not_found_if_none(
                await self.repo.get_by_id(director_id), 'director_not_found')
        return DirectorItem(id=row.id, name=row.name)

    async def create(self, data: DirectorCreateRequest) -> DirectorItem:
        async with transaction(self.session, 'director_create'):
            row = await self.repo.insert(data.name)
        logger.info('director_created', extra={'director_id': row.id})
        return DirectorItem(id=row.id, name=row.name)

    async def update(self, data: DirectorUpdateRequest) -> DirectorItem:
        async with transaction(self.session, 'director_update'):
            row = not_found_if_none(
                await self.repo.get_by_id(data.id), 'director_not_found')
            row.name = data.name
        return DirectorItem(id=row.id, name=row.name)

    async def delete(self, director_id: int) -> None:
        async with transaction(self.session, 'director_delete'):
            if not await self.repo.delete(director_id):
                raise NotFoundError('director_not_found')
