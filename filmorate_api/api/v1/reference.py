from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends, Response

from filmorate_api.api.http_utils import handle_runtime_errors
from filmorate_api.dependencies import (
    get_directors_service,
    get_genres_service,
    get_mpa_service,
)
from filmorate_api.models.base import IdPath
from filmorate_api.models.directors import (
    DirectorCreateRequest,
    DirectorItem,
    DirectorUpdateRequest,
)
from filmorate_api.models.reference import GenreItem, MpaItem
from filmorate_api.services.reference_service import (
    DirectorsService,
    GenresService,
    MpaService,
)

genres_router = APIRouter(prefix="/genres", tags=["genres"])
mpa_router = APIRouter(prefix="/mpa", tags=["mpa"])
directors_router = APIRouter(prefix="/directors", tags=["directors"])


@genres_router.get("", response_model=List[GenreItem])
@handle_runtime_errors()
async def list_genres(svc: GenresService = Depends(get_genres_service)):
    return await svc.find_all()


@genres_router.get("/{genre_id}", response_model=GenreItem)
@handle_runtime_errors()
async def get_genre(
    genre_id: IdPath,
    svc: GenresService = Depends(get_genres_service),
):
    return await svc.find_by_id(genre_id)


@mpa_router.get("", response_model=List[MpaItem])
@handle_runtime_errors()
async def list_mpa(svc: MpaService = Depends(get_mpa_service)):
    return await svc.find_all()


@mpa_router.get("/{mpa_id}", response_model=MpaItem)
@handle_runtime_errors()
async def get_mpa(
    mpa_id: IdPath,
    svc: MpaService = Depends(get_mpa_service),
):
    return await svc.find_by_id(mpa_id)


@directors_router.get("", response_model=List[DirectorItem])
@handle_runtime_errors()
async def list_directors(
        svc: DirectorsService = Depends(get_directors_service)):
    return await svc.find_all()


@directors_router.post("", response_model=DirectorItem,
                       status_code=HTTPStatus.CREATED)
@handle_runtime_errors()
async def create_director(
    body: DirectorCreateRequest,
    svc: DirectorsService = Depends(get_directors_service),
):
    return await svc.create(body)


@directors_router.put("", response_model=DirectorItem)
@handle_runtime_errors()
async def update_director(
    body: DirectorUpdateRequest,
    svc: DirectorsService = Depends(get_directors_service),
):
    return await svc.update(body)


@directors_router.get("/{director_id}", response_model=DirectorItem)
@handle_runtime_errors()
async def get_director(
    director_id: IdPath,
    svc: DirectorsService = Depends(get_directors_service),
):
    return await svc.find_by_id(director_id)


@directors_router.delete("/{director_id}",
                         status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors()
async def delete_director(
    director_id: IdPath,
    svc: DirectorsService = Depends(get_directors_service),
) -> Response:
    await svc.delete(director_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)
