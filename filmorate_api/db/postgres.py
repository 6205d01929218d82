import logging

from sqlalchemy import event, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from filmorate_api.core.config import settings
from filmorate_api.db.tables import Base, Genre, Mpa

logger = logging.getLogger(__name__)

MPA_RATINGS = ((1, "G"), (2, "PG"), (3, "PG-13"), (4, "R"), (5, "NC-17"))
GENRES = (
    (1, "Комедия"),
    (2, "Драма"),
    (3, "Мультфильм"),
    (4, "Триллер"),
    (5, "Документальный"),
    (6, "Боевик"),
)

_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None


def _enable_sqlite_fk(dbapi_connection, _record) -> None:
    # без этого SQLite игнорирует ON DELETE CASCADE
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine() -> AsyncEngine:
    """
    Singleton async engine. SQLite (tests) gets one shared connection so an
    in-memory database survives between sessions.
    """
    global _engine, _sessionmaker
    if _engine is None:
        dsn = settings.database_dsn
        if dsn.startswith("sqlite"):
            _engine = create_async_engine(
                dsn,
                echo=settings.db_echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
            event.listen(_engine.sync_engine, "connect", _enable_sqlite_fk)
        else:
            _engine = create_async_engine(
                dsn,
                echo=settings.db_echo,
                pool_size=settings.db_pool_size,
                pool_pre_ping=True,
            )
        _sessionmaker = async_sessionmaker(_engine, expire_on_commit=False)
        logger.info("db_engine_created",
                    extra={"dialect": _engine.dialect.name})
    return _engine


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    get_engine()
    return _sessionmaker


async def init_schema() -> None:
    """Create missing tables and seed the MPA/genre reference rows."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with get_sessionmaker()() as session, session.begin():
        known_mpa = set(await session.scalars(select(Mpa.id)))
        session.add_all(Mpa(id=mpa_id, name=name)
                        for mpa_id, name in MPA_RATINGS
                        if mpa_id not in known_mpa)
        known_genres = set(await session.scalars(select(Genre.id)))
        session.add_all(Genre(id=genre_id, name=name)
                        for genre_id, name in GENRES
                        if genre_id not in known_genres)


async def close_engine() -> None:
    global _engine, _sessionmaker
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _sessionmaker = None
