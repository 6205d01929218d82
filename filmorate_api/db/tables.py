"""ORM tables. Relations are loaded eagerly: lazy loads are not allowed
under asyncio."""

from datetime import date
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(AsyncAttrs, DeclarativeBase):
    pass


film_genres = Table(
    "film_genres",
    Base.metadata,
    Column("film_id", ForeignKey("films.id", ondelete="CASCADE"),
           primary_key=True),
    Column("genre_id", ForeignKey("genres.id", ondelete="CASCADE"),
           primary_key=True),
)

film_directors = Table(
    "film_directors",
    Base.metadata,
    Column("film_id", ForeignKey("films.id", ondelete="CASCADE"),
           primary_key=True),
    Column("director_id", ForeignKey("directors.id", ondelete="CASCADE"),
           primary_key=True),
)


class Mpa(Base):
    __tablename__ = "mpa"

    id: Mapped[int] = mapped_column(Integer, primary_key=True,
                                    autoincrement=False)
    name: Mapped[str] = mapped_column(String(16), unique=True)


class Genre(Base):
    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(Integer, primary_key=True,
                                    autoincrement=False)
    name: Mapped[str] = mapped_column(String(64), unique=True)


class Director(Base):
    __tablename__ = "directors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class Film(Base):
    __tablename__ = "films"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(200))
    release_date: Mapped[date] = mapped_column(Date, nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    mpa_id: Mapped[int] = mapped_column(ForeignKey("mpa.id"),
                                        nullable=False)

    mpa: Mapped[Mpa] = relationship(lazy="joined")
    genres: Mapped[List[Genre]] = relationship(
        secondary=film_genres, lazy="selectin", order_by=Genre.id)
    directors: Mapped[List[Director]] = relationship(
        secondary=film_directors, lazy="selectin", order_by=Director.id)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    login: Mapped[str] = mapped_column(String(64), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    birthday: Mapped[Optional[date]] = mapped_column(Date)


class Friendship(Base):
    __tablename__ = "friendships"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    friend_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    # взаимная дружба: обе направленные связи confirmed=True
    confirmed: Mapped[bool] = mapped_column(Boolean, nullable=False,
                                            default=False)


class Like(Base):
    __tablename__ = "likes"

    film_id: Mapped[int] = mapped_column(
        ForeignKey("films.id", ondelete="CASCADE"), primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
        index=True)


class Review(Base):
    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_positive: Mapped[bool] = mapped_column(Boolean, nullable=False)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    film_id: Mapped[int] = mapped_column(
        ForeignKey("films.id", ondelete="CASCADE"), nullable=False,
        index=True)


class ReviewMark(Base):
    """One helpfulness vote per (review, user): the primary key forbids a
    second one."""

    __tablename__ = "review_marks"

    review_id: Mapped[int] = mapped_column(
        ForeignKey("reviews.id", ondelete="CASCADE"), primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    is_positive: Mapped[bool] = mapped_column(Boolean, nullable=False)
