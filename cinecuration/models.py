"""SQLAlchemy ORM models.

``movies`` is the local cache of TMDb records, keyed by ``tmdb_id``. The three
membership tables (``wishlists``, ``watchlists``, ``curated_list_items``) share one
shape through :class:`MembershipMixin` and only point at cached movies.
"""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Movie(Base):
    """A movie materialized from TMDb. Created once per ``tmdb_id`` and never updated."""

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tmdb_id: Mapped[int] = mapped_column(Integer, index=True)
    title: Mapped[str] = mapped_column(String(255))
    genre: Mapped[str | None] = mapped_column(Text, nullable=True)
    actors: Mapped[str | None] = mapped_column(Text, nullable=True)
    release_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (UniqueConstraint("tmdb_id", name="uq_movies_tmdb_id"),)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"Movie(id={self.id}, tmdb_id={self.tmdb_id}, title={self.title})"


class MembershipMixin:
    """Columns shared by every list membership table."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movie_id: Mapped[int | None] = mapped_column(ForeignKey("movies.id"), nullable=True, index=True)
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )


class Wishlist(MembershipMixin, Base):
    __tablename__ = "wishlists"


class Watchlist(MembershipMixin, Base):
    __tablename__ = "watchlists"


class CuratedList(Base):
    """A themed, user-named list of movies."""

    __tablename__ = "curated_lists"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(255), index=True)
    description: Mapped[str] = mapped_column(String(1024))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class CuratedListItem(MembershipMixin, Base):
    __tablename__ = "curated_list_items"

    curated_list_id: Mapped[int] = mapped_column(ForeignKey("curated_lists.id"), index=True)


class Review(Base):
    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movie_id: Mapped[int] = mapped_column(ForeignKey("movies.id"), index=True)
    rating: Mapped[float] = mapped_column(Float, index=True)
    review_text: Mapped[str] = mapped_column(Text)
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )


class ListKind(str, enum.Enum):
    """The list types a movie can be a member of."""

    WISHLIST = "wishlist"
    WATCHLIST = "watchlist"
    CURATED = "curatedlist"

    @classmethod
    def parse(cls, raw: str) -> "ListKind":
        return cls(raw.strip().lower())


MEMBERSHIP_MODELS: dict[ListKind, type[MembershipMixin]] = {
    ListKind.WISHLIST: Wishlist,
    ListKind.WATCHLIST: Watchlist,
    ListKind.CURATED: CuratedListItem,
}
