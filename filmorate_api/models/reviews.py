from typing import Optional

from filmorate_api.models.base import CamelModel, EntityId, NonBlankStr


class ReviewCreateRequest(CamelModel):
    content: NonBlankStr
    is_positive: bool
    user_id: EntityId
    film_id: EntityId


class ReviewUpdateRequest(CamelModel):
    review_id: EntityId
    content: NonBlankStr
    is_positive: bool
    # автор и фильм не меняются: поля принимаются, но игнорируются
    user_id: Optional[int] = None
    film_id: Optional[int] = None


class ReviewItem(CamelModel):
    review_id: int
    content: str
    is_positive: bool
    user_id: int
    film_id: int
    useful: int
