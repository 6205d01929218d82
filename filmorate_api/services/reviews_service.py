"""Reviews service: CRUD + helpfulness marks with read-time `useful`."""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from filmorate_api.core.config import settings
from filmorate_api.core.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    not_found_if_none,
)
from filmorate_api.db.tables import Review
from filmorate_api.models.reviews import (
    ReviewCreateRequest,
    ReviewItem,
    ReviewUpdateRequest,
)
from filmorate_api.services.repositories.films_repo import FilmsRepo
from filmorate_api.services.repositories.review_marks_repo import (
    ReviewMarksRepo,
)
from filmorate_api.services.repositories.reviews_repo import ReviewsRepo
from filmorate_api.services.repositories.users_repo import UsersRepo
from filmorate_api.services.transactions import transaction

logger = logging.getLogger(__name__)

REVIEW_NOT_FOUND = 'review_not_found'


class ReviewsService:  # noqa: WPS214 (methods count)
    """Business-logic for reviews and their marks.

    A mark is a single user's vote on a review. Per (review, user) the mark
    is absent, positive or negative; adding while one exists is a conflict
    and there is no in-place switch, the caller deletes first.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = ReviewsRepo(session)
        self.marks_repo = ReviewMarksRepo(session)
        self.films_repo = FilmsRepo(session)
        self.users_repo = UsersRepo(session)

    # ---------- helpers ----------

    @staticmethod
    def _to_item(review: Review, useful: int) -> ReviewItem:
        return ReviewItem(
            review_id=review.id,
            content=review.content,
            is_positive=review.is_positive,
            user_id=review.user_id,
            film_id=review.film_id,
            useful=useful,
        )

    async def _load(self, review_id: int) -> ReviewItem:
        row = not_found_if_none(
            await self.repo.get_by_id(review_id), REVIEW_NOT_FOUND)
        return self._to_item(*row)

    async def _ensure_user(self, user_id: int) -> None:
        if not await self.users_repo.exists(user_id):
            raise NotFoundError('user_not_found')

    # ---------- CREATE ----------

    async def create_review(self, data: ReviewCreateRequest) -> ReviewItem:
        """Create review for an existing film/user; useful starts at 0."""
        async with transaction(self.session, 'review_create'):
            if not await self.films_repo.exists(data.film_id):
                raise NotFoundError('film_not_found')
            await self._ensure_user(data.user_id)
            review_id = await self.repo.insert(
                film_id=data.film_id,
                user_id=data.user_id,
                content=data.content,
                is_positive=data.is_positive,
            )
            created = await self._load(review_id)
        logger.info('review_created', extra={
            'review_id': review_id,
            'film_id': data.film_id,
            'user_id': data.user_id,
        })
        return created

    # ---------- UPDATE ----------

    async def update_review(self, data: ReviewUpdateRequest) -> ReviewItem:
        """Change content and polarity; author, film and marks stay."""
        async with transaction(self.session, 'review_update'):
            updated = await self.repo.update(
                data.review_id,
                content=data.content,
                is_positive=data.is_positive,
            )
            if not updated:
                raise NotFoundError(REVIEW_NOT_FOUND)
            return await self._load(data.review_id)

    # ---------- DELETE ----------

    async def delete_review(self, review_id: int) -> None:
        """Delete review and (by cascade) its marks; unknown id is 404."""
        async with transaction(self.session, 'review_delete'):
            marks = await self.marks_repo.count_by_review(review_id)
            if not await self.repo.delete(review_id):
                raise NotFoundError(REVIEW_NOT_FOUND)
        logger.info('review_deleted', extra={
            'review_id': review_id,
            'marks_removed': marks,
        })

    # ---------- READ ----------

    async def find_review_by_id(self, review_id: int) -> ReviewItem:
        async with transaction(self.session, 'review_get'):
            return await self._load(review_id)

    async def find_all_reviews(
        self,
        film_id: Optional[int] = None,
        count: Optional[int] = None,
    ) -> List[ReviewItem]:
        """Top `count` reviews (optionally of one film) by useful desc.

        Without `count` the configured `reviews_default_count` applies.
        """
        if count is None:
            count = settings.reviews_default_count
        if count < 1:
            raise ValidationError('invalid_count')
        async with transaction(self.session, 'review_list'):
            rows = await self.repo.list_top(film_id, count)
        return [self._to_item(review, useful) for review, useful in rows]

    # ---------- MARKS ----------

    async def add_review_mark(
            self,
            review_id: int,
            user_id: int,
            positive: bool) -> None:
        """Add a like (positive) or dislike; a second mark is a conflict."""
        async with transaction(self.session, 'review_mark_add'):
            if await self.repo.get_by_id(review_id) is None:
                raise NotFoundError(REVIEW_NOT_FOUND)
            await self._ensure_user(user_id)
            try:
                await self.marks_repo.insert_mark(
                    review_id, user_id, positive)
            except IntegrityError as error:
                logger.info('review_mark_duplicate', extra={
                    'review_id': review_id,
                    'user_id': user_id,
                })
                raise ConflictError('review_mark_exists') from error
        logger.info('review_mark_added', extra={
            'review_id': review_id,
            'user_id': user_id,
            'positive': positive,
        })

    async def delete_review_mark(
            self,
            review_id: int,
            user_id: int,
            positive: Optional[bool] = None) -> None:
        """Remove the user's mark from a review.

        `positive` is accepted for symmetry with the like/dislike routes but
        is not part of the match: one (review, user) pair has one mark.
        """
        async with transaction(self.session, 'review_mark_delete'):
            if not await self.marks_repo.delete_mark(review_id, user_id):
                raise NotFoundError('review_mark_not_found')
        logger.info('review_mark_deleted', extra={
            'review_id': review_id,
            'user_id': user_id,
            'requested_positive': positive,
        })
