from http import HTTPStatus
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from filmorate_api.api.http_utils import handle_runtime_errors
from filmorate_api.core.config import settings
from filmorate_api.dependencies import get_films_service
from filmorate_api.models.base import MAX_DB_INT, IdPath
from filmorate_api.models.films import (
    FilmCreateRequest,
    FilmItem,
    FilmUpdateRequest,
)
from filmorate_api.services.films_service import FilmsService

router = APIRouter(prefix="/films", tags=["films"])


@router.get("", response_model=List[FilmItem])
@handle_runtime_errors()
async def list_films(svc: FilmsService = Depends(get_films_service)):
    return await svc.find_all()


@router.post("", response_model=FilmItem, status_code=HTTPStatus.CREATED)
@handle_runtime_errors()
async def create_film(
    body: FilmCreateRequest,
    svc: FilmsService = Depends(get_films_service),
):
    return await svc.create(body)


@router.put("", response_model=FilmItem)
@handle_runtime_errors()
async def update_film(
    body: FilmUpdateRequest,
    svc: FilmsService = Depends(get_films_service),
):
    return await svc.update(body)


# статические пути объявлены раньше /{film_id}

@router.get("/popular", response_model=List[FilmItem])
@handle_runtime_errors()
async def popular_films(
    count: int = Query(settings.popular_default_count, ge=1,
                       le=MAX_DB_INT),
    genre_id: Optional[int] = Query(None, alias="genreId", ge=1,
                                   le=MAX_DB_INT),
    year: Optional[int] = Query(None, ge=1895, le=9999),
    svc: FilmsService = Depends(get_films_service),
):
    return await svc.find_popular(count, genre_id=genre_id, year=year)


@router.get("/common", response_model=List[FilmItem])
@handle_runtime_errors()
async def common_films(
    user_id: int = Query(..., alias="userId", ge=1, le=MAX_DB_INT),
    friend_id: int = Query(..., alias="friendId", ge=1,
                          le=MAX_DB_INT),
    svc: FilmsService = Depends(get_films_service),
):
    return await svc.find_common(user_id, friend_id)


@router.get("/director/{director_id}", response_model=List[FilmItem])
@handle_runtime_errors()
async def director_films(
    director_id: IdPath,
    sort_by: str = Query("year", alias="sortBy", pattern="^(year|likes)$"),
    svc: FilmsService = Depends(get_films_service),
):
    return await svc.find_by_director(director_id, sort_by)


@router.get("/{film_id}", response_model=FilmItem)
@handle_runtime_errors()
async def get_film(
    film_id: IdPath,
    svc: FilmsService = Depends(get_films_service),
):
    return await svc.find_by_id(film_id)


@router.delete("/{film_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors()
async def delete_film(
    film_id: IdPath,
    svc: FilmsService = Depends(get_films_service),
) -> Response:
    await svc.delete(film_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.put("/{film_id}/like/{user_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors()
async def like_film(
    film_id: IdPath,
    user_id: IdPath,
    svc: FilmsService = Depends(get_films_service),
) -> Response:
    await svc.add_like(film_id, user_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.delete("/{film_id}/like/{user_id}",
               status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors()
async def unlike_film(
    film_id: IdPath,
    user_id: IdPath,
    svc: FilmsService = Depends(get_films_service),
) -> Response:
    await svc.remove_like(film_id, user_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)
