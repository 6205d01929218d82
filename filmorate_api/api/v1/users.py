from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends, Response

from filmorate_api.api.http_utils import handle_runtime_errors
from filmorate_api.dependencies import get_users_service
from filmorate_api.models.base import IdPath
from filmorate_api.models.films import FilmItem
from filmorate_api.models.users import (
    UserCreateRequest,
    UserItem,
    UserUpdateRequest,
)
from filmorate_api.services.users_service import UsersService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserItem])
@handle_runtime_errors()
async def list_users(svc: UsersService = Depends(get_users_service)):
    return await svc.find_all()


@router.post("", response_model=UserItem, status_code=HTTPStatus.CREATED)
@handle_runtime_errors()
async def create_user(
    body: UserCreateRequest,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.create(body)


@router.put("", response_model=UserItem)
@handle_runtime_errors()
async def update_user(
    body: UserUpdateRequest,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.update(body)


@router.get("/{user_id}", response_model=UserItem)
@handle_runtime_errors()
async def get_user(
    user_id: IdPath,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.find_by_id(user_id)


@router.delete("/{user_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors()
async def delete_user(
    user_id: IdPath,
    svc: UsersService = Depends(get_users_service),
) -> Response:
    await svc.delete(user_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.put("/{user_id}/friends/{friend_id}",
            status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors()
async def add_friend(
    user_id: IdPath,
    friend_id: IdPath,
    svc: UsersService = Depends(get_users_service),
) -> Response:
    await svc.add_friend(user_id, friend_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.delete("/{user_id}/friends/{friend_id}",
               status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors()
async def remove_friend(
    user_id: IdPath,
    friend_id: IdPath,
    svc: UsersService = Depends(get_users_service),
) -> Response:
    await svc.remove_friend(user_id, friend_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.get("/{user_id}/friends", response_model=List[UserItem])
@handle_runtime_errors()
async def list_friends(
    user_id: IdPath,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.find_friends(user_id)


@router.get("/{user_id}/friends/common/{other_id}",
            response_model=List[UserItem])
@handle_runtime_errors()
async def common_friends(
    user_id: IdPath,
    other_id: IdPath,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.find_common_friends(user_id, other_id)


@router.get("/{user_id}/recommendations", response_model=List[FilmItem])
@handle_runtime_errors()
async def recommendations(
    user_id: IdPath,
    svc: UsersService = Depends(get_users_service),
):
    return await svc.recommendations(user_id)
