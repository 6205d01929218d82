from pydantic import BaseModel


class MpaItem(BaseModel):
    id: int
    name: str


class GenreItem(BaseModel):
    id: int
    name: str
