"""Review/mark scenarios run directly against the service layer."""

from __future__ import annotations

from datetime import date

import pytest

from filmorate_api.core.config import settings
from filmorate_api.core.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
)
from filmorate_api.models.films import FilmCreateRequest, IdRef
from filmorate_api.models.reviews import (
    ReviewCreateRequest,
    ReviewUpdateRequest,
)
from filmorate_api.models.users import UserCreateRequest
from filmorate_api.services.films_service import FilmsService
from filmorate_api.services.reviews_service import ReviewsService
from filmorate_api.services.users_service import UsersService


@pytest.fixture
async def world(session):
    films = FilmsService(session)
    users = UsersService(session, films)
    reviews = ReviewsService(session)

    film_ids = []
    for name, year in (("Гладиатор", 2000),
                       ("Братство Кольца", 2001),
                       ("Служебный роман", 1977)):
        film = await films.create(FilmCreateRequest(
            name=name,
            description="",
            release_date=date(year, 1, 1),
            duration=150,
            mpa=IdRef(id=1),
        ))
        film_ids.append(film.id)

    user_ids = []
    for login in ("anton", "dasha", "ivan"):
        user = await users.create(UserCreateRequest(
            email=f"{login}@example.com", login=login))
        user_ids.append(user.id)

    review_ids = []
    for film_id, user_id, content, positive in (
        (film_ids[0], user_ids[0], "на один раз", True),
        (film_ids[1], user_ids[1], "скучный", False),
        (film_ids[2], user_ids[2], "прекрасная комедия", True),
    ):
        review = await reviews.create_review(ReviewCreateRequest(
            content=content, film_id=film_id, user_id=user_id,
            is_positive=positive))
        review_ids.append(review.review_id)

    return reviews, film_ids, user_ids, review_ids


async def _marks_of(reviews: ReviewsService, review_id: int) -> int:
    async with reviews.session.begin():
        return await reviews.marks_repo.count_by_review(review_id)


async def _first_content(reviews: ReviewsService) -> str:
    return (await reviews.find_all_reviews(None, 10))[0].content


async def test_created_review_has_zero_useful(world):
    reviews, _, _, review_ids = world
    for review_id in review_ids:
        assert (await reviews.find_review_by_id(review_id)).useful == 0


async def test_create_adds_to_list(world):
    reviews, film_ids, user_ids, _ = world
    assert len(await reviews.find_all_reviews(None, 10)) == 3
    await reviews.create_review(ReviewCreateRequest(
        content="не посоветую", film_id=film_ids[0],
        user_id=user_ids[0], is_positive=False))
    assert len(await reviews.find_all_reviews(None, 10)) == 4


async def test_update_changes_content_only(world):
    reviews, _, _, review_ids = world
    updated = await reviews.update_review(ReviewUpdateRequest(
        review_id=review_ids[2], content="Обязательно посмотреть!",
        is_positive=True))
    assert updated.content == "Обязательно посмотреть!"
    assert len(await reviews.find_all_reviews(None, 10)) == 3
    found = await reviews.find_review_by_id(review_ids[2])
    assert found.content == "Обязательно посмотреть!"


async def test_delete_each_review(world):
    reviews, _, _, review_ids = world
    for left, review_id in zip((2, 1, 0), review_ids):
        await reviews.delete_review(review_id)
        assert len(await reviews.find_all_reviews(None, 10)) == left


async def test_repeated_delete_fails(world):
    reviews, _, _, review_ids = world
    await reviews.delete_review(review_ids[0])
    with pytest.raises(NotFoundError):
        await reviews.delete_review(review_ids[0])
    assert len(await reviews.find_all_reviews(None, 10)) == 2


async def test_delete_cascades_marks(world):
    reviews, _, user_ids, review_ids = world
    await reviews.add_review_mark(review_ids[0], user_ids[0], True)
    await reviews.add_review_mark(review_ids[0], user_ids[1], False)
    assert await _marks_of(reviews, review_ids[0]) == 2

    await reviews.delete_review(review_ids[0])
    assert len(await reviews.find_all_reviews(None, 10)) == 2
    assert await _marks_of(reviews, review_ids[0]) == 0


async def test_order_follows_marks(world):
    reviews, _, (u1, u2, _), (rev1, rev2, rev3) = world
    assert await _first_content(reviews) == "на один раз"

    await reviews.add_review_mark(rev2, u1, True)
    assert await _first_content(reviews) == "скучный"

    await reviews.add_review_mark(rev3, u1, True)
    await reviews.add_review_mark(rev3, u2, True)
    assert [r.review_id for r in await reviews.find_all_reviews(None, 10)] \
        == [rev3, rev2, rev1]

    await reviews.delete_review_mark(rev3, u2, True)
    assert await _first_content(reviews) == "скучный"

    await reviews.delete_review_mark(rev3, u1, True)
    await reviews.delete_review_mark(rev2, u1, True)
    assert await _first_content(reviews) == "на один раз"


async def test_useful_counts_current_marks(world):
    reviews, _, (u1, u2, u3), (rev1, _, _) = world
    await reviews.add_review_mark(rev1, u1, True)
    await reviews.add_review_mark(rev1, u2, True)
    assert (await reviews.find_review_by_id(rev1)).useful == 2
    await reviews.add_review_mark(rev1, u3, False)
    assert (await reviews.find_review_by_id(rev1)).useful == 1
    await reviews.delete_review_mark(rev1, u1, True)
    assert (await reviews.find_review_by_id(rev1)).useful == 0


@pytest.mark.parametrize("first, second", [(True, True), (True, False),
                                           (False, False), (False, True)])
async def test_second_mark_conflicts_regardless_of_polarity(
        world, first, second):
    reviews, _, (u1, _, _), (rev1, _, _) = world
    await reviews.add_review_mark(rev1, u1, first)
    with pytest.raises(ConflictError):
        await reviews.add_review_mark(rev1, u1, second)
    expected = 1 if first else -1
    assert (await reviews.find_review_by_id(rev1)).useful == expected


async def test_delete_missing_mark_fails(world):
    reviews, _, (u1, _, _), (rev1, _, _) = world
    with pytest.raises(NotFoundError):
        await reviews.delete_review_mark(rev1, u1, False)


async def test_list_without_count_uses_configured_default(world, monkeypatch):
    reviews, _, _, _ = world
    monkeypatch.setattr(settings, "reviews_default_count", 2)
    assert len(await reviews.find_all_reviews()) == 2


async def test_list_rejects_non_positive_count(world):
    reviews, _, _, _ = world
    for count in (0, -1):
        with pytest.raises(ValidationError):
            await reviews.find_all_reviews(None, count)


async def test_mark_count_follows_adds_and_deletes(world):
    reviews, _, (u1, u2, u3), (rev1, rev2, _) = world
    assert await _marks_of(reviews, rev1) == 0
    for user_id in (u1, u2, u3):
        await reviews.add_review_mark(rev1, user_id, user_id != u2)
    await reviews.add_review_mark(rev2, u1, True)
    assert await _marks_of(reviews, rev1) == 3

    await reviews.delete_review_mark(rev1, u2)
    assert await _marks_of(reviews, rev1) == 2
    assert await _marks_of(reviews, rev2) == 1
