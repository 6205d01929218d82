from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from filmorate_api import main
from filmorate_api.core.config import settings
from filmorate_api.core.trace import bind_trace_id, get_trace_id
from filmorate_api.db.postgres import close_engine, get_engine, \
    get_sessionmaker
from filmorate_api.dependencies import get_session


async def test_get_session_yields_working_session():
    try:
        gen = get_session()
        session = await gen.__anext__()
        assert isinstance(session, AsyncSession)
        assert (await session.execute(text("select 1"))).scalar() == 1
        await gen.aclose()
    finally:
        await close_engine()


async def test_engine_is_singleton_until_closed():
    try:
        assert get_engine() is get_engine()
        assert get_sessionmaker() is get_sessionmaker()
        first = get_engine()
        await close_engine()
        assert get_engine() is not first
    finally:
        await close_engine()


async def test_sqlite_foreign_keys_are_enforced():
    try:
        async with get_engine().connect() as conn:
            value = (await conn.execute(
                text("PRAGMA foreign_keys"))).scalar()
        assert value == 1
    finally:
        await close_engine()


def test_bind_trace_id_reuses_or_generates():
    assert bind_trace_id("abc-123") == "abc-123"
    assert get_trace_id() == "abc-123"
    generated = bind_trace_id(None)
    assert generated and generated != "abc-123"
    assert bind_trace_id("x" * 100) != "x" * 100


async def test_health_and_request_id_header(client):
    r = await client.get("/health", headers={"X-Request-Id": "req-1"})
    assert r.status_code == 200 and r.json() == {"status": "ok"}
    assert r.headers["X-Request-Id"] == "req-1"
    r = await client.get("/health")
    assert r.headers["X-Request-Id"]


async def test_invalid_path_param_returns_400(client):
    r = await client.get("/films/not-a-number")
    assert r.status_code == 400
    assert r.json()["detail"] == "validation_error"


def test_run_starts_uvicorn_with_configured_address(monkeypatch):
    calls = []
    monkeypatch.setattr(main.uvicorn, "run",
                        lambda app, **kwargs: calls.append((app, kwargs)))
    main.run()
    assert calls == [("filmorate_api.main:app", {
        "host": settings.host,
        "port": settings.port,
        "log_config": None,
    })]
