"""Service layer for users, friendships and film recommendations."""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from filmorate_api.core.errors import (
    NotFoundError,
    ValidationError,
    not_found_if_none,
)
from filmorate_api.db.tables import User
from filmorate_api.models.films import FilmItem
from filmorate_api.models.users import (
    UserCreateRequest,
    UserItem,
    UserUpdateRequest,
)
from filmorate_api.services.films_service import FilmsService
from filmorate_api.services.repositories.friendships_repo import (
    FriendshipsRepo,
)
from filmorate_api.services.repositories.likes_repo import LikesRepo
from filmorate_api.services.repositories.users_repo import UsersRepo
from filmorate_api.services.transactions import transaction

logger = logging.getLogger(__name__)

USER_NOT_FOUND = 'user_not_found'


def to_user_item(user: User) -> UserItem:
    return UserItem(
        id=user.id,
        email=user.email,
        login=user.login,
        name=user.name,
        birthday=user.birthday,
    )


class UsersService:
    """User CRUD plus the friend graph."""

    def __init__(self, session: AsyncSession, films: FilmsService) -> None:
        self.session = session
        self.repo = UsersRepo(session)
        self.friends_repo = FriendshipsRepo(session)
        self.likes_repo = LikesRepo(session)
        self.films = films

    async def _ensure(self, *user_ids: int) -> None:
        for user_id in user_ids:
            if not await self.repo.exists(user_id):
                raise NotFoundError(USER_NOT_FOUND)

    # ----- CRUD -----

    async def find_all(self) -> List[UserItem]:
        async with transaction(self.session, 'user_list'):
            users = await self.repo.list_all()
        return [to_user_item(user) for user in users]

    async def find_by_id(self, user_id: int) -> UserItem:
        async with transaction(self.session, 'user_get'):
            user = not_found_if_none(
                await self.repo.get_by_id(user_id), USER_NOT_FOUND)
        return to_user_item(user)

    async def create(self, data: UserCreateRequest) -> UserItem:
        async with transaction(self.session, 'user_create'):
            user = await self.repo.insert(
                email=data.email,
                login=data.login,
                name=data.display_name(),
                birthday=data.birthday,
            )
        logger.info('user_created', extra={'user_id': user.id})
        return to_user_item(user)

    async def update(self, data: UserUpdateRequest) -> UserItem:
        async with transaction(self.session, 'user_update'):
            updated = await self.repo.update(
                data.id,
                email=data.email,
                login=data.login,
                name=data.display_name(),
                birthday=data.birthday,
            )
            if not updated:
                raise NotFoundError(USER_NOT_FOUND)
            user = await self.repo.get_by_id(data.id)
        return to_user_item(user)

    async def delete(self, user_id: int) -> None:
        async with transaction(self.session, 'user_delete'):
            if not await self.repo.delete(user_id):
                raise NotFoundError(USER_NOT_FOUND)
        logger.info('user_deleted', extra={'user_id': user_id})

    # ----- FRIENDS -----

    async def add_friend(self, user_id: int, friend_id: int) -> bool:
        """Add a directed edge; it becomes confirmed once reciprocated."""
        if user_id == friend_id:
            raise ValidationError('self_friendship')
        async with transaction(self.session, 'friend_add'):
            await self._ensure(user_id, friend_id)
            added = await self.friends_repo.add(user_id, friend_id)
        if added:
            logger.info('friend_added', extra={
                'user_id': user_id,
                'friend_id': friend_id,
            })
        return added

    async def remove_friend(self, user_id: int, friend_id: int) -> None:
        async with transaction(self.session, 'friend_remove'):
            await self._ensure(user_id, friend_id)
            if not await self.friends_repo.remove(user_id, friend_id):
                raise NotFoundError('friendship_not_found')

    async def find_friends(self, user_id: int) -> List[UserItem]:
        async with transaction(self.session, 'friend_list'):
            await self._ensure(user_id)
            friends = await self.friends_repo.list_friends(user_id)
        return [to_user_item(user) for user in friends]

    async def find_common_friends(
            self,
            user_id: int,
            other_id: int) -> List[UserItem]:
        async with transaction(self.session, 'friend_common'):
            await self._ensure(user_id, other_id)
            common = await self.friends_repo.list_common(user_id, other_id)
        return [to_user_item(user) for user in common]

    # ----- RECOMMENDATIONS -----

    async def recommendations(self, user_id: int) -> List[FilmItem]:
        """Films liked by users with overlapping likes, not yet liked by
        this user. No scoring: a plain id lookup."""
        async with transaction(self.session, 'recommendations'):
            await self._ensure(user_id)
            film_ids = await self.likes_repo.film_ids_liked_by_peers(user_id)
        return await self.films.films_by_ids(film_ids)
