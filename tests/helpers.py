from typing import Optional
from httpx import AsyncClient


def film_body(name: str = "Гладиатор", **overrides) -> dict:
    body = {
        "name": name,
        "description": "Исторический художественный фильм",
        "releaseDate": "2000-05-01",
        "duration": 155,
        "mpa": {"id": 4},
        "genres": [{"id": 2}, {"id": 6}],
    }
    body.update(overrides)
    return body


def user_body(login: str = "anton", **overrides) -> dict:
    body = {
        "email": f"{login}@example.com",
        "login": login,
        "name": login.capitalize(),
        "birthday": "1990-01-01",
    }
    body.update(overrides)
    return body


async def new_film(client: AsyncClient, name: str = "Гладиатор",
                   **overrides) -> int:
    r = await client.post("/films", json=film_body(name, **overrides))
    assert r.status_code == 201, r.text
    return r.json()["id"]


async def new_user(client: AsyncClient, login: str = "anton",
                   **overrides) -> int:
    r = await client.post("/users", json=user_body(login, **overrides))
    assert r.status_code == 201, r.text
    return r.json()["id"]


async def new_review(client: AsyncClient, film_id: int, user_id: int,
                     content: str = "Вполне неплохой фильм",
                     positive: bool = True) -> int:
    r = await client.post("/reviews", json={
        "content": content,
        "isPositive": positive,
        "filmId": film_id,
        "userId": user_id,
    })
    assert r.status_code == 201, r.text
    return r.json()["reviewId"]


async def review_order(client: AsyncClient,
                       film_id: Optional[int] = None) -> list[int]:
    params = {"count": 10}
    if film_id is not None:
        params["filmId"] = film_id
    r = await client.get("/reviews", params=params)
    assert r.status_code == 200
    return [item["reviewId"] for item in r.json()]
