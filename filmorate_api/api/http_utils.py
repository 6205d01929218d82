import logging
from functools import wraps
from http import HTTPStatus

from fastapi import HTTPException

from filmorate_api.core.errors import FilmorateError

logger = logging.getLogger(__name__)


def handle_runtime_errors(mapping: dict[str, HTTPStatus] | None = None):
    """
    Переводит доменные ошибки в HTTPException с их кодом в detail.
    Статус берётся из mapping (по коду ошибки), иначе из класса ошибки.
    Любой другой RuntimeError — 500 internal_error.
    Пример mapping: {"review_mark_exists": HTTPStatus.BAD_REQUEST}
    """
    overrides = mapping or {}

    def decorator(fn):
        @wraps(fn)
        async def wrapper(*args, **kwargs):
            try:
                return await fn(*args, **kwargs)
            except FilmorateError as e:
                status = overrides.get(e.code, e.status)
                raise HTTPException(status_code=status, detail=e.code)
            except RuntimeError as e:
                logger.error("unhandled_runtime_error",
                             extra={"err": str(e)})
                raise HTTPException(
                    status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                    detail="internal_error")
        return wrapper
    return decorator
