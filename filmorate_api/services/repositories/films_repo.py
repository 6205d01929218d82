"""SQL repository for films and their genre/director links."""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import delete, extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from filmorate_api.db.tables import Director, Film, Genre, Like

SORT_BY_YEAR = 'year'
SORT_BY_LIKES = 'likes'


def _like_counts():
    return (
        select(Like.film_id, func.count().label('likes'))
        .group_by(Like.film_id)
        .subquery()
    )


class FilmsRepo:
    """CRUD and listing helpers for films."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _fetch(self, stmt) -> List[Film]:
        result = await self.session.scalars(stmt)
        return list(result.unique())

    def _by_popularity(self, stmt):
        counts = _like_counts()
        return (
            stmt.outerjoin(counts, counts.c.film_id == Film.id)
            .order_by(func.coalesce(counts.c.likes, 0).desc(),
                      Film.id.asc())
        )

    async def list_all(self) -> List[Film]:
        return await self._fetch(select(Film).order_by(Film.id))

    async def get_by_id(self, film_id: int) -> Optional[Film]:
        """Fresh copy of the film with mpa, genres and directors."""
        result = await self.session.scalars(
            select(Film)
            .where(Film.id == film_id)
            .execution_options(populate_existing=True)
        )
        return result.unique().one_or_none()

    async def exists(self, film_id: int) -> bool:
        found = await self.session.scalar(
            select(Film.id).where(Film.id == film_id))
        return found is not None

    async def insert(self, film: Film) -> int:
        self.session.add(film)
        await self.session.flush()
        return film.id

    async def flush(self) -> None:
        """Write pending changes of loaded films to the store."""
        await self.session.flush()

    async def delete(self, film_id: int) -> bool:
        """Delete film; likes, links and reviews cascade in the store."""
        result = await self.session.execute(
            delete(Film)
            .where(Film.id == film_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def list_popular(
        self,
        limit: int,
        genre_id: Optional[int] = None,
        year: Optional[int] = None,
    ) -> List[Film]:
        """Most liked first; equal counts keep id order."""
        stmt = select(Film)
        if genre_id is not None:
            stmt = stmt.where(Film.genres.any(Genre.id == genre_id))
        if year is not None:
            stmt = stmt.where(extract('year', Film.release_date) == year)
        return await self._fetch(self._by_popularity(stmt).limit(limit))

    async def list_common(self, user_id: int, friend_id: int) -> List[Film]:
        """Films liked by both users, most liked first."""
        liked_by_user = select(Like.film_id).where(Like.user_id == user_id)
        liked_by_friend = select(Like.film_id).where(
            Like.user_id == friend_id)
        stmt = select(Film).where(
            Film.id.in_(liked_by_user),
            Film.id.in_(liked_by_friend),
        )
        return await self._fetch(self._by_popularity(stmt))

    async def list_by_ids(self, film_ids: Iterable[int]) -> List[Film]:
        ids = list(film_ids)
        if not ids:
            return []
        return await self._fetch(
            select(Film).where(Film.id.in_(ids)).order_by(Film.id))

    async def list_by_director(
        self,
        director_id: int,
        sort_by: str = SORT_BY_YEAR,
    ) -> List[Film]:
        stmt = select(Film).where(
            Film.directors.any(Director.id == director_id))
        if sort_by == SORT_BY_LIKES:
            stmt = self._by_popularity(stmt)
        else:
            stmt = stmt.order_by(Film.release_date.asc(), Film.id.asc())
        return await self._fetch(stmt)
