from typing import Annotated

from fastapi import Path
from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# колонки Integer: в Postgres это int4
MAX_DB_INT = 2 ** 31 - 1


class CamelModel(BaseModel):
    """JSON uses camelCase (releaseDate, isPositive), Python snake_case."""

    model_config = ConfigDict(alias_generator=to_camel,
                              populate_by_name=True)


def not_blank(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


NonBlankStr = Annotated[str, AfterValidator(not_blank)]

# id в теле запроса и в пути: значения вне диапазона колонки дают 400
EntityId = Annotated[int, Field(ge=1, le=MAX_DB_INT)]
IdPath = Annotated[int, Path(ge=1, le=MAX_DB_INT)]
