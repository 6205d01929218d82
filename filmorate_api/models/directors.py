from pydantic import BaseModel

from filmorate_api.models.base import EntityId, NonBlankStr


class DirectorCreateRequest(BaseModel):
    name: NonBlankStr


class DirectorUpdateRequest(DirectorCreateRequest):
    id: EntityId


class DirectorItem(BaseModel):
    id: int
    name: str
