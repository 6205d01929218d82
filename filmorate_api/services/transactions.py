"""One transaction per service operation."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession


@asynccontextmanager
async def transaction(
        session: AsyncSession,
        operation: str) -> AsyncIterator[AsyncSession]:
    """Commit on success, roll back on any error.

    Driver errors become RuntimeError('db_<operation>_error: ...'), which the
    routers report as 500; domain errors pass through untouched.
    """
    try:
        async with session.begin():
            yield session
    except SQLAlchemyError as error:
        raise RuntimeError(f'db_{operation}_error: {error}') from error
