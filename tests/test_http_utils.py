from http import HTTPStatus
import pytest
from fastapi import HTTPException

from filmorate_api.api.http_utils import handle_runtime_errors
from filmorate_api.core.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    not_found_if_none,
)


def test_not_found_if_none_raises_with_code():
    with pytest.raises(NotFoundError) as e:
        not_found_if_none(None, "x_not_found")
    assert e.value.code == "x_not_found"
    assert not_found_if_none(0, "x_not_found") == 0


@pytest.mark.parametrize("error, status", [
    (NotFoundError("film_not_found"), HTTPStatus.NOT_FOUND),
    (ConflictError("review_mark_exists"), HTTPStatus.CONFLICT),
    (ValidationError("self_friendship"), HTTPStatus.BAD_REQUEST),
])
async def test_handle_runtime_errors_uses_error_status(error, status):
    @handle_runtime_errors()
    async def fn():
        raise error
    with pytest.raises(HTTPException) as e:
        await fn()
    assert e.value.status_code == status
    assert e.value.detail == error.code


async def test_handle_runtime_errors_mapping_overrides_status():
    @handle_runtime_errors({"review_mark_exists": HTTPStatus.BAD_REQUEST})
    async def fn():
        raise ConflictError("review_mark_exists")
    with pytest.raises(HTTPException) as e:
        await fn()
    assert e.value.status_code == HTTPStatus.BAD_REQUEST


async def test_handle_runtime_errors_maps_unknown_to_500():
    @handle_runtime_errors({"known": HTTPStatus.BAD_REQUEST})
    async def fn():
        raise RuntimeError("db_film_get_error: connection refused")
    with pytest.raises(HTTPException) as e:
        await fn()
    assert e.value.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert e.value.detail == "internal_error"


async def test_handle_runtime_errors_happy_path_returns_value():
    @handle_runtime_errors()
    async def ok():
        return "ok"
    assert await ok() == "ok"
