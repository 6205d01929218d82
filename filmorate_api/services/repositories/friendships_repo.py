"""SQL repository for directed friendship edges."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from filmorate_api.db.tables import Friendship, User


class FriendshipsRepo:
    """Edge user_id -> friend_id; `confirmed` is set on both edges once the
    friendship is mutual."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_edge(
        self,
        user_id: int,
        friend_id: int,
    ) -> Optional[Friendship]:
        result = await self.session.scalars(
            select(Friendship)
            .where(Friendship.user_id == user_id,
                   Friendship.friend_id == friend_id)
            .execution_options(populate_existing=True)
        )
        return result.one_or_none()

    async def _set_confirmed(
        self,
        user_id: int,
        friend_id: int,
        confirmed: bool,
    ) -> None:
        await self.session.execute(
            update(Friendship)
            .where(Friendship.user_id == user_id,
                   Friendship.friend_id == friend_id)
            .values(confirmed=confirmed)
            .execution_options(synchronize_session=False)
        )

    async def add(self, user_id: int, friend_id: int) -> bool:
        """Add edge; return False when it already existed."""
        if await self.get_edge(user_id, friend_id) is not None:
            return False
        mutual = await self.get_edge(friend_id, user_id) is not None
        await self.session.execute(
            insert(Friendship).values(
                user_id=user_id,
                friend_id=friend_id,
                confirmed=mutual,
            )
        )
        if mutual:
            await self._set_confirmed(friend_id, user_id, True)
        return True

    async def remove(self, user_id: int, friend_id: int) -> bool:
        result = await self.session.execute(
            delete(Friendship)
            .where(Friendship.user_id == user_id,
                   Friendship.friend_id == friend_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False
        # обратная связь остаётся, но уже не взаимная
        await self._set_confirmed(friend_id, user_id, False)
        return True

    async def list_friends(self, user_id: int) -> List[User]:
        result = await self.session.scalars(
            select(User)
            .join(Friendship, Friendship.friend_id == User.id)
            .where(Friendship.user_id == user_id)
            .order_by(User.id)
        )
        return list(result)

    async def list_common(self, user_id: int, other_id: int) -> List[User]:
        friends_of_other = select(Friendship.friend_id).where(
            Friendship.user_id == other_id)
        result = await self.session.scalars(
            select(User)
            .join(Friendship, Friendship.friend_id == User.id)
            .where(Friendship.user_id == user_id,
                   User.id.in_(friends_of_other))
            .order_by(User.id)
        )
        return list(result)
