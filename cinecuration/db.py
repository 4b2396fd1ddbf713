"""Database session management and repositories."""

from __future__ import annotations

import logging
from typing import Iterator

from sqlalchemy import create_engine, event, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from cinecuration.core.config import get_settings
from cinecuration.models import (
    MEMBERSHIP_MODELS,
    Base,
    CuratedList,
    CuratedListItem,
    ListKind,
    MembershipMixin,
    Movie,
    Review,
)

logger = logging.getLogger(__name__)


def _database_url() -> str:
    """Return the SQLAlchemy URL from settings (defaults to local SQLite for dev)."""
    return get_settings().database_url


def build_engine(url: str, **kwargs) -> Engine:
    """Create an engine; SQLite connections get case-sensitive LIKE."""

    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    new_engine = create_engine(url, future=True, **kwargs)
    if new_engine.dialect.name == "sqlite":
        event.listen(new_engine, "connect", _enable_case_sensitive_like)
    return new_engine


def _enable_case_sensitive_like(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA case_sensitive_like = ON")
    cursor.close()


engine = build_engine(_database_url())
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def init_models(bind: Engine | None = None) -> None:
    """Create tables if they do not exist (handy for local dev)."""
    logger.info("Ensuring database tables exist")
    Base.metadata.create_all(bind=bind or engine)


def get_session() -> Iterator[Session]:
    """FastAPI-friendly dependency that manages commits/rollbacks."""

    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


class MovieRepository:
    """Data access helpers for the cached movie records."""

    def get_by_id(self, session: Session, movie_id: int) -> Movie | None:
        return session.get(Movie, movie_id)

    def get_by_tmdb_id(self, session: Session, tmdb_id: int) -> Movie | None:
        query = select(Movie).where(Movie.tmdb_id == tmdb_id)
        return session.execute(query).scalar_one_or_none()

    def create(
        self,
        session: Session,
        *,
        tmdb_id: int,
        title: str,
        genre: str | None,
        actors: str | None,
        release_year: int | None,
        rating: float | None,
        description: str | None,
    ) -> Movie:
        movie = Movie(
            tmdb_id=tmdb_id,
            title=title,
            genre=genre,
            actors=actors,
            release_year=release_year,
            rating=rating,
            description=description,
        )
        session.add(movie)
        session.flush()  # assign IDs before leaving scope
        session.refresh(movie)
        return movie

    def search_by_genre_and_actor(self, session: Session, genre: str, actor: str) -> list[Movie]:
        query = (
            select(Movie)
            .where(Movie.genre.contains(genre, autoescape=True))
            .where(Movie.actors.contains(actor, autoescape=True))
            .order_by(Movie.id)
        )
        return list(session.execute(query).scalars())


class MembershipRepository:
    """Generic access to the wishlist, watchlist and curated list item tables."""

    def add(
        self,
        session: Session,
        kind: ListKind,
        *,
        movie_id: int,
        curated_list_id: int | None = None,
    ) -> MembershipMixin:
        if kind is ListKind.CURATED:
            record = CuratedListItem(movie_id=movie_id, curated_list_id=curated_list_id)
        else:
            record = MEMBERSHIP_MODELS[kind](movie_id=movie_id)
        session.add(record)
        session.flush()
        session.refresh(record)
        return record

    def list_all(self, session: Session, kind: ListKind) -> list[MembershipMixin]:
        model = MEMBERSHIP_MODELS[kind]
        query = select(model).order_by(model.id)
        return list(session.execute(query).scalars())


class CuratedListRepository:
    def get(self, session: Session, curated_list_id: int) -> CuratedList | None:
        return session.get(CuratedList, curated_list_id)

    def create(self, session: Session, *, name: str, slug: str, description: str) -> CuratedList:
        curated_list = CuratedList(name=name, slug=slug, description=description)
        session.add(curated_list)
        session.flush()
        session.refresh(curated_list)
        return curated_list

    def update(
        self,
        session: Session,
        curated_list: CuratedList,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> CuratedList:
        if name:
            curated_list.name = name
        if description:
            curated_list.description = description
        session.flush()
        session.refresh(curated_list)
        return curated_list


class ReviewRepository:
    def create(self, session: Session, *, movie_id: int, rating: float, review_text: str) -> Review:
        review = Review(movie_id=movie_id, rating=rating, review_text=review_text)
        session.add(review)
        session.flush()
        session.refresh(review)
        return review

    def top_rated(self, session: Session, limit: int) -> list[Review]:
        query = select(Review).order_by(Review.rating.desc(), Review.id).limit(limit)
        return list(session.execute(query).scalars())
