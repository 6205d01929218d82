from __future__ import annotations
from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from filmorate_api.db.tables import ReviewMark


class ReviewMarksRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def count_by_review(self, review_id: int) -> int:
        count = await self.session.scalar(
            select(func.count())
            .select_from(ReviewMark)
            .where(ReviewMark.review_id == review_id)
        )
        return count or 0

    async def insert_mark(
            self,
            review_id: int,
            user_id: int,
            is_positive: bool) -> None:
        # дубликат (review_id, user_id) отсекает первичный ключ:
        # IntegrityError разбирает сервис
        await self.session.execute(
            insert(ReviewMark).values(
                review_id=review_id,
                user_id=user_id,
                is_positive=is_positive,
            )
        )

    async def delete_mark(
            self,
            review_id: int,
            user_id: int) -> bool:
        res = await self.session.execute(
            delete(ReviewMark)
            .where(ReviewMark.review_id == review_id,
                   ReviewMark.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return res.rowcount == 1
