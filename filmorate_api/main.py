from contextlib import asynccontextmanager
from http import HTTPStatus

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from filmorate_api.db.postgres import close_engine, init_schema

from filmorate_api.core.logger import setup_json_logging, shutdown_logging
from filmorate_api.core.sentry import init_sentry
from filmorate_api.core.config import settings
from filmorate_api.core.middleware import RequestContextMiddleware

from filmorate_api.api.v1.films import router as films_router
from filmorate_api.api.v1.users import router as users_router
from filmorate_api.api.v1.reviews import router as reviews_router
from filmorate_api.api.v1.reference import (
    directors_router,
    genres_router,
    mpa_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 1) логи до всего
    setup_json_logging(service=settings.app_name)
    init_sentry(settings.sentry_dsn, environment=settings.env)

    # 2) схема и справочники (MPA, жанры)
    await init_schema()

    try:
        yield
    finally:
        await close_engine()
        # корректно останавливаем лог-листенер
        shutdown_logging()


app = FastAPI(title="Filmorate", lifespan=lifespan)

# наш trace_id + access JSON
app.add_middleware(RequestContextMiddleware)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request,
                                   exc: RequestValidationError):
    # некорректное тело/параметры — 400, а не штатный 422
    return JSONResponse(
        status_code=HTTPStatus.BAD_REQUEST,
        content={"detail": "validation_error",
                 "errors": jsonable_encoder([
                     {"loc": err.get("loc"), "msg": err.get("msg"),
                      "type": err.get("type")}
                     for err in exc.errors()
                 ])},
    )


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(films_router)
app.include_router(users_router)
app.include_router(reviews_router)
app.include_router(genres_router)
app.include_router(mpa_router)
app.include_router(directors_router)


def run() -> None:
    uvicorn.run(
        "filmorate_api.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
