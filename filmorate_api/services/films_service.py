"""Service layer for films, their likes and film listings."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from filmorate_api.core.errors import NotFoundError, not_found_if_none
from filmorate_api.db.tables import Film
from filmorate_api.models.directors import DirectorItem
from filmorate_api.models.films import (
    FilmCreateRequest,
    FilmItem,
    FilmUpdateRequest,
    IdRef,
)
from filmorate_api.models.reference import GenreItem, MpaItem
from filmorate_api.services.repositories.directors_repo import DirectorsRepo
from filmorate_api.services.repositories.films_repo import (
    SORT_BY_YEAR,
    FilmsRepo,
)
from filmorate_api.services.repositories.likes_repo import LikesRepo
from filmorate_api.services.repositories.reference_repo import (
    GenresRepo,
    MpaRepo,
)
from filmorate_api.services.repositories.users_repo import UsersRepo
from filmorate_api.services.transactions import transaction

logger = logging.getLogger(__name__)

FILM_NOT_FOUND = 'film_not_found'


def to_film_item(film: Film) -> FilmItem:
    return FilmItem(
        id=film.id,
        name=film.name,
        description=film.description or '',
        release_date=film.release_date,
        duration=film.duration,
        mpa=MpaItem(id=film.mpa.id, name=film.mpa.name),
        genres=[GenreItem(id=g.id, name=g.name) for g in film.genres],
        directors=[DirectorItem(id=d.id, name=d.name)
                   for d in film.directors],
    )


class FilmsService:
    """Film CRUD, likes and the popular/common/by-director listings."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = FilmsRepo(session)
        self.likes_repo = LikesRepo(session)
        self.users_repo = UsersRepo(session)
        self.mpa_repo = MpaRepo(session)
        self.genres_repo = GenresRepo(session)
        self.directors_repo = DirectorsRepo(session)

    # ----- helpers -----

    async def _apply(self, film: Film, data: FilmCreateRequest) -> None:
        """Copy request fields onto the row, resolving mpa/genre/director
        references. Unknown ids are 404; repeated ids collapse."""
        film.mpa = not_found_if_none(
            await self.mpa_repo.get_by_id(data.mpa.id), 'mpa_not_found')
        film.genres = await self._resolve(
            data.genres, self.genres_repo, 'genre_not_found')
        film.directors = await self._resolve(
            data.directors, self.directors_repo, 'director_not_found')
        film.name = data.name
        film.description = data.description
        film.release_date = data.release_date
        film.duration = data.duration

    @staticmethod
    async def _resolve(refs: Sequence[IdRef], repo, code: str) -> list:
        wanted = {ref.id for ref in refs}
        found = await repo.get_many(wanted)
        if len(found) != len(wanted):
            raise NotFoundError(code)
        return found

    async def _load(self, film_id: int) -> Film:
        return not_found_if_none(
            await self.repo.get_by_id(film_id), FILM_NOT_FOUND)

    async def _ensure_user(self, user_id: int) -> None:
        if not await self.users_repo.exists(user_id):
            raise NotFoundError('user_not_found')

    # ----- CRUD -----

    async def find_all(self) -> List[FilmItem]:
        async with transaction(self.session, 'film_list'):
            films = await self.repo.list_all()
        return [to_film_item(film) for film in films]

    async def find_by_id(self, film_id: int) -> FilmItem:
        async with transaction(self.session, 'film_get'):
            return to_film_item(await self._load(film_id))

    async def create(self, data: FilmCreateRequest) -> FilmItem:
        async with transaction(self.session, 'film_create'):
            film = Film()
            await self._apply(film, data)
            film_id = await self.repo.insert(film)
            created = to_film_item(await self._load(film_id))
        logger.info('film_created', extra={'film_id': film_id})
        return created

    async def update(self, data: FilmUpdateRequest) -> FilmItem:
        async with transaction(self.session, 'film_update'):
            film = await self._load(data.id)
            await self._apply(film, data)
            await self.repo.flush()
            return to_film_item(await self._load(data.id))

    async def delete(self, film_id: int) -> None:
        async with transaction(self.session, 'film_delete'):
            if not await self.repo.delete(film_id):
                raise NotFoundError(FILM_NOT_FOUND)
        logger.info('film_deleted', extra={'film_id': film_id})

    # ----- LIKES -----

    async def add_like(self, film_id: int, user_id: int) -> bool:
        """Like a film; repeating the like changes nothing."""
        async with transaction(self.session, 'like_add'):
            if not await self.repo.exists(film_id):
                raise NotFoundError(FILM_NOT_FOUND)
            await self._ensure_user(user_id)
            return await self.likes_repo.add(film_id, user_id)

    async def remove_like(self, film_id: int, user_id: int) -> None:
        async with transaction(self.session, 'like_remove'):
            if not await self.repo.exists(film_id):
                raise NotFoundError(FILM_NOT_FOUND)
            await self._ensure_user(user_id)
            if not await self.likes_repo.remove(film_id, user_id):
                raise NotFoundError('like_not_found')

    # ----- LISTINGS -----

    async def find_popular(
        self,
        count: int,
        genre_id: Optional[int] = None,
        year: Optional[int] = None,
    ) -> List[FilmItem]:
        async with transaction(self.session, 'film_popular'):
            films = await self.repo.list_popular(count, genre_id, year)
        return [to_film_item(film) for film in films]

    async def find_common(
            self,
            user_id: int,
            friend_id: int) -> List[FilmItem]:
        async with transaction(self.session, 'film_common'):
            await self._ensure_user(user_id)
            await self._ensure_user(friend_id)
            films = await self.repo.list_common(user_id, friend_id)
        return [to_film_item(film) for film in films]

    async def films_by_ids(self, film_ids: Sequence[int]) -> List[FilmItem]:
        """Batch fetch; unknown ids are skipped."""
        async with transaction(self.session, 'film_batch'):
            films = await self.repo.list_by_ids(film_ids)
        return [to_film_item(film) for film in films]

    async def find_by_director(
        self,
        director_id: int,
        sort_by: str = SORT_BY_YEAR,
    ) -> List[FilmItem]:
        async with transaction(self.session, 'film_by_director'):
            if await self.directors_repo.get_by_id(director_id) is None:
                raise NotFoundError('director_not_found')
            films = await self.repo.list_by_director(director_id, sort_by)
        return [to_film_item(film) for film in films]
