"""SQL repository for film likes."""

from __future__ import annotations

from typing import List

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from filmorate_api.db.tables import Like


class LikesRepo:
    """Set-like helpers over the (film_id, user_id) likes table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists(self, film_id: int, user_id: int) -> bool:
        found = await self._session.scalar(
            select(Like.film_id).where(
                Like.film_id == film_id,
                Like.user_id == user_id,
            )
        )
        return found is not None

    async def add(self, film_id: int, user_id: int) -> bool:
        """Add like; return False when it was already there."""
        if await self.exists(film_id, user_id):
            return False
        await self._session.execute(
            insert(Like).values(film_id=film_id, user_id=user_id))
        return True

    async def remove(self, film_id: int, user_id: int) -> bool:
        result = await self._session.execute(
            delete(Like)
            .where(Like.film_id == film_id, Like.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def film_ids_liked_by_peers(self, user_id: int) -> List[int]:
        """Films liked by anyone sharing a like with user_id, minus the
        user's own likes."""
        own = select(Like.film_id).where(Like.user_id == user_id)
        peers = select(Like.user_id).where(
            Like.film_id.in_(own),
            Like.user_id != user_id,
        )
        result = await self._session.scalars(
            select(Like.film_id)
            .where(Like.user_id.in_(peers), Like.film_id.not_in(own))
            .distinct()
            .order_by(Like.film_id)
        )
        return list(result)
