"""SQL repository for reviews; `useful` is aggregated from marks on read."""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import case, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from filmorate_api.db.tables import Review, ReviewMark

# +1 за положительную оценку, -1 за отрицательную, 0 если оценок нет
USEFUL = func.coalesce(
    func.sum(
        case(
            (ReviewMark.is_positive.is_(True), 1),
            (ReviewMark.is_positive.is_(False), -1),
            else_=0,
        )
    ),
    0,
).label('useful')


class ReviewsRepo:
    """CRUD helpers for reviews with read-time helpfulness score."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _with_useful(self):
        return (
            select(Review, USEFUL)
            .outerjoin(ReviewMark, ReviewMark.review_id == Review.id)
            .group_by(Review.id)
            .execution_options(populate_existing=True)
        )

    async def insert(
        self,
        film_id: int,
        user_id: int,
        content: str,
        is_positive: bool,
    ) -> int:
        """Insert a new review and return its id."""
        review = Review(
            film_id=film_id,
            user_id=user_id,
            content=content,
            is_positive=is_positive,
        )
        self.session.add(review)
        await self.session.flush()
        return review.id

    async def get_by_id(self, review_id: int) -> Optional[Tuple[Review, int]]:
        """Return (review, useful) or None."""
        result = await self.session.execute(
            self._with_useful().where(Review.id == review_id)
        )
        row = result.one_or_none()
        return None if row is None else (row[0], int(row[1]))

    async def list_top(
        self,
        film_id: Optional[int],
        limit: int,
    ) -> List[Tuple[Review, int]]:
        """Most useful first; equal scores keep creation order."""
        stmt = self._with_useful()
        if film_id is not None:
            stmt = stmt.where(Review.film_id == film_id)
        stmt = stmt.order_by(USEFUL.desc(), Review.id.asc()).limit(limit)
        result = await self.session.execute(stmt)
        return [(row[0], int(row[1])) for row in result.all()]

    async def update(
        self,
        review_id: int,
        content: str,
        is_positive: bool,
    ) -> bool:
        """Rewrite content and polarity; author and film stay as created."""
        result = await self.session.execute(
            update(Review)
            .where(Review.id == review_id)
            .values(content=content, is_positive=is_positive)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def delete(self, review_id: int) -> bool:
        """Delete review; its marks go away through ON DELETE CASCADE."""
        result = await self.session.execute(
            delete(Review)
            .where(Review.id == review_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
