"""SQL repository for users."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from filmorate_api.db.tables import User


class UsersRepo:
    """CRUD helpers for users."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_all(self) -> List[User]:
        result = await self.session.scalars(select(User).order_by(User.id))
        return list(result)

    async def get_by_id(self, user_id: int) -> Optional[User]:
        result = await self.session.scalars(
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.one_or_none()

    async def exists(self, user_id: int) -> bool:
        found = await self.session.scalar(
            select(User.id).where(User.id == user_id))
        return found is not None

    async def insert(
        self,
        email: str,
        login: str,
        name: str,
        birthday: Optional[date],
    ) -> User:
        user = User(email=email, login=login, name=name, birthday=birthday)
        self.session.add(user)
        await self.session.flush()
        return user

    async def update(
        self,
        user_id: int,
        email: str,
        login: str,
        name: str,
        birthday: Optional[date],
    ) -> bool:
        result = await self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(email=email, login=login, name=name, birthday=birthday)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def delete(self, user_id: int) -> bool:
        """Delete user; likes, friendships, reviews and marks cascade."""
        result = await self.session.execute(
            delete(User)
            .where(User.id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
