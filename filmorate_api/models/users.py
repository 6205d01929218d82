from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from filmorate_api.models.base import EntityId

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
LOGIN_PATTERN = r"^\S+$"


class UserCreateRequest(BaseModel):
    email: str = Field(pattern=EMAIL_PATTERN, max_length=320)
    login: str = Field(pattern=LOGIN_PATTERN, max_length=64)
    name: Optional[str] = None
    birthday: Optional[date] = None

    @field_validator("birthday")
    @classmethod
    def not_in_future(cls, value: Optional[date]) -> Optional[date]:
        if value is not None and value > date.today():
            raise ValueError("birthday must not be in the future")
        return value

    def display_name(self) -> str:
        """Blank name falls back to login."""
        name = (self.name or "").strip()
        return name or self.login


class UserUpdateRequest(UserCreateRequest):
    id: EntityId


class UserItem(BaseModel):
    id: int
    email: str
    login: str
    name: str
    birthday: Optional[date] = None
