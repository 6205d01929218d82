"""SQL repository for directors."""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from filmorate_api.db.tables import Director


class DirectorsRepo:
    """CRUD helpers for directors."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_all(self) -> List[Director]:
        result = await self.session.scalars(
            select(Director).order_by(Director.id))
        return list(result)

    async def get_by_id(self, director_id: int) -> Optional[Director]:
        return await self.session.get(Director, director_id)

    async def get_many(self, director_ids: Iterable[int]) -> List[Director]:
        ids = sorted(set(director_ids))
        if not ids:
            return []
        result = await self.session.scalars(
            select(Director)
            .where(Director.id.in_(ids))
            .order_by(Director.id)
        )
        return list(result)

    async def insert(self, name: str) -> Director:
        director = Director(name=name)
        self.session.add(director)
        await self.session.flush()
        return director

    async def delete(self, director_id: int) -> bool:
        """Delete director; film links cascade in the store."""
        result = await self.session.execute(
            delete(Director)
            .where(Director.id == director_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
