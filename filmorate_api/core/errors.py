"""Domain error kinds raised by services and mapped to HTTP by routers."""

from __future__ import annotations

from http import HTTPStatus
from typing import Optional, TypeVar

T = TypeVar("T")


class FilmorateError(RuntimeError):
    """Base domain error: carries a short machine-readable code."""

    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, code: str, message: Optional[str] = None) -> None:
        super().__init__(message or code)
        self.code = code


class NotFoundError(FilmorateError):
    """Referenced entity id does not exist."""

    status = HTTPStatus.NOT_FOUND


class ConflictError(FilmorateError):
    """Operation clashes with existing state (e.g. a duplicate mark)."""

    status = HTTPStatus.CONFLICT


class ValidationError(FilmorateError):
    """Input is well-formed JSON but semantically invalid."""

    status = HTTPStatus.BAD_REQUEST


def not_found_if_none(value: Optional[T], code: str) -> T:
    """Return value, or raise NotFoundError(code) when it is None."""
    if value is None:
        raise NotFoundError(code)
    return value
