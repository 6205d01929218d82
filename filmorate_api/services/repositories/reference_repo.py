"""Read-only repositories for the seeded MPA and genre tables."""

from __future__ import annotations

from typing import Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from filmorate_api.db.tables import Genre, Mpa

RefT = TypeVar('RefT', Genre, Mpa)


class ReferenceRepo(Generic[RefT]):
    """Lookup helpers shared by MPA ratings and genres."""

    model: Type[RefT]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_all(self) -> List[RefT]:
        result = await self.session.scalars(
            select(self.model).order_by(self.model.id))
        return list(result)

    async def get_by_id(self, ref_id: int) -> Optional[RefT]:
        return await self.session.get(self.model, ref_id)

    async def get_many(self, ref_ids: Iterable[int]) -> List[RefT]:
        ids = sorted(set(ref_ids))
        if not ids:
            return []
        result = await self.session.scalars(
            select(self.model)
            .where(self.model.id.in_(ids))
            .order_by(self.model.id)
        )
        return list(result)


class GenresRepo(ReferenceRepo[Genre]):
    model = Genre


class MpaRepo(ReferenceRepo[Mpa]):
    model = Mpa
