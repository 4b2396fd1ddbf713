from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from cinecuration.db import build_engine, init_models
from cinecuration.main import app, get_session, get_tmdb_client
from cinecuration.models import Movie
from tests.fixtures.fake_tmdb import FakeTMDbClient


@pytest.fixture
def engine():
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    init_models(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture
def session(session_factory) -> Iterator[Session]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def fake_tmdb() -> FakeTMDbClient:
    return FakeTMDbClient()


@pytest.fixture
def client(session_factory, fake_tmdb) -> Iterator[TestClient]:
    def _session_override() -> Iterator[Session]:
        db = session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_session] = _session_override
    app.dependency_overrides[get_tmdb_client] = lambda: fake_tmdb
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_movie(session):
    def _make(tmdb_id: int, **overrides: Any) -> Movie:
        movie = Movie(
            tmdb_id=tmdb_id,
            title=overrides.pop("title", f"Movie {tmdb_id}"),
            genre=overrides.pop("genre", "Drama"),
            actors=overrides.pop("actors", "Someone"),
            release_year=overrides.pop("release_year", 2000),
            rating=overrides.pop("rating", 7.0),
            description=overrides.pop("description", "A movie."),
            **overrides,
        )
        session.add(movie)
        session.commit()
        session.refresh(movie)
        return movie

    return _make
