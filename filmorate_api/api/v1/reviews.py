from http import HTTPStatus
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from filmorate_api.api.http_utils import handle_runtime_errors
from filmorate_api.dependencies import get_reviews_service
from filmorate_api.models.base import MAX_DB_INT, IdPath
from filmorate_api.models.reviews import (
    ReviewCreateRequest,
    ReviewItem,
    ReviewUpdateRequest,
)
from filmorate_api.services.reviews_service import ReviewsService

router = APIRouter(prefix="/reviews", tags=["reviews"])

ERRMAP = {
    "review_mark_exists": HTTPStatus.CONFLICT,
}


@router.post("", response_model=ReviewItem,
             status_code=HTTPStatus.CREATED)
@handle_runtime_errors(ERRMAP)
async def create_review(
    body: ReviewCreateRequest,
    svc: ReviewsService = Depends(get_reviews_service),
):
    return await svc.create_review(body)


@router.put("", response_model=ReviewItem, status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def update_review(
    body: ReviewUpdateRequest,
    svc: ReviewsService = Depends(get_reviews_service),
):
    return await svc.update_review(body)


@router.get("", response_model=List[ReviewItem], status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def list_reviews(
    film_id: Optional[int] = Query(None, alias="filmId", ge=1,
                                   le=MAX_DB_INT),
    count: Optional[int] = Query(None, ge=1, le=MAX_DB_INT),
    svc: ReviewsService = Depends(get_reviews_service),
):
    return await svc.find_all_reviews(film_id=film_id, count=count)


@router.get("/{review_id}", response_model=ReviewItem,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def get_review(
    review_id: IdPath,
    svc: ReviewsService = Depends(get_reviews_service),
):
    return await svc.find_review_by_id(review_id)


@router.delete("/{review_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors(ERRMAP)
async def delete_review(
    review_id: IdPath,
    svc: ReviewsService = Depends(get_reviews_service),
) -> Response:
    await svc.delete_review(review_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


# ----- marks: like = полезный отзыв, dislike = бесполезный -----

@router.put("/{review_id}/like/{user_id}",
            status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors(ERRMAP)
async def like_review(
    review_id: IdPath,
    user_id: IdPath,
    svc: ReviewsService = Depends(get_reviews_service),
) -> Response:
    await svc.add_review_mark(review_id, user_id, positive=True)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.put("/{review_id}/dislike/{user_id}",
            status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors(ERRMAP)
async def dislike_review(
    review_id: IdPath,
    user_id: IdPath,
    svc: ReviewsService = Depends(get_reviews_service),
) -> Response:
    await svc.add_review_mark(review_id, user_id, positive=False)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.delete("/{review_id}/like/{user_id}",
               status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors(ERRMAP)
async def remove_review_like(
    review_id: IdPath,
    user_id: IdPath,
    svc: ReviewsService = Depends(get_reviews_service),
) -> Response:
    await svc.delete_review_mark(review_id, user_id, positive=True)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.delete("/{review_id}/dislike/{user_id}",
               status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors(ERRMAP)
async def remove_review_dislike(
    review_id: IdPath,
    user_id: IdPath,
    svc: ReviewsService = Depends(get_reviews_service),
) -> Response:
    await svc.delete_review_mark(review_id, user_id, positive=False)
    return Response(status_code=HTTPStatus.NO_CONTENT)
