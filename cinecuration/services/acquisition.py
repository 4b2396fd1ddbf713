"""Cache-aside acquisition of TMDb movies into the local ``movies`` table."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from cinecuration.db import MovieRepository
from cinecuration.models import Movie
from cinecuration.services.errors import AcquisitionFailure, PersistenceError
from cinecuration.services.models import AcquisitionResult, MovieData
from cinecuration.services.tmdb import TMDbClient, TMDbError

logger = logging.getLogger(__name__)

MAX_ACTORS = 5


class KeyedLock:
    """One ``threading.Lock`` per key, dropped once no caller holds or waits on it."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[int, list] = {}  # key -> [lock, holders + waiters]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, key: int) -> Iterator[None]:
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]


def parse_release_year(raw: str | None) -> int | None:
    """Return the leading ``YYYY`` of a TMDb date string as an integer."""

    if not raw:
        return None
    return int(raw.split("-")[0], 10)


def build_movie_data(details: dict[str, Any], credits: dict[str, Any]) -> MovieData:
    """Normalize TMDb detail + credits payloads into :class:`MovieData`.

    Genres are joined by name and only the first five billed cast members are kept.
    Raises ``KeyError``/``ValueError``/``TypeError`` on malformed payloads.
    """

    cast = (credits.get("cast") or [])[:MAX_ACTORS]
    return MovieData(
        tmdb_id=int(details["id"]),
        title=details.get("original_title") or details["title"],
        genre=[genre["name"] for genre in details.get("genres") or []],
        actors=[person.get("original_name") or person["name"] for person in cast],
        release_year=parse_release_year(details.get("release_date")),
        rating=details.get("vote_average"),
        description=details.get("overview"),
    )


class MovieAcquisitionService:
    """Return the cached movie for a TMDb id, fetching and persisting it on a miss.

    The check-fetch-insert sequence for one TMDb id runs under a per-id lock and the
    insert is committed before the lock is released, so sequential and concurrent
    callers in this process never write two rows for the same id. A unique constraint
    on ``movies.tmdb_id`` covers writers in other processes.
    """

    def __init__(
        self,
        client: TMDbClient,
        movies: MovieRepository | None = None,
        locks: KeyedLock | None = None,
    ) -> None:
        self.client = client
        self.movies = movies or MovieRepository()
        self.locks = locks if locks is not None else KeyedLock()

    def find(self, session: Session, tmdb_id: int) -> Movie | None:
        """Lookup-only path: never touches the network."""

        try:
            return self.movies.get_by_tmdb_id(session, tmdb_id)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to look up movie {tmdb_id}") from exc

    def fetch(self, tmdb_id: int) -> MovieData:
        """Fetch details then credits (sequentially) and normalize them."""

        try:
            details = self.client.get_movie_detail(tmdb_id)
            credits = self.client.get_credits(tmdb_id)
        except TMDbError as exc:
            raise AcquisitionFailure(f"Failed to fetch movie and cast details for {tmdb_id}") from exc
        try:
            return build_movie_data(details, credits)
        except (KeyError, ValueError, TypeError) as exc:
            raise AcquisitionFailure(f"Malformed TMDb payload for {tmdb_id}") from exc

    def ensure(self, session: Session, tmdb_id: int) -> AcquisitionResult:
        with self.locks.hold(tmdb_id):
            existing = self.find(session, tmdb_id)
            if existing is not None:
                logger.debug("Movie cache hit for tmdb_id=%s", tmdb_id)
                return AcquisitionResult(movie=existing, created=False)

            logger.info("Movie cache miss for tmdb_id=%s, fetching from TMDb", tmdb_id)
            data = self.fetch(tmdb_id)
            try:
                movie = self.movies.create(session, **data.to_params())
                session.commit()
            except IntegrityError:
                session.rollback()
                existing = self.find(session, tmdb_id)
                if existing is None:
                    raise PersistenceError(f"Failed to create movie {tmdb_id}")
                logger.info("Movie tmdb_id=%s was created by a concurrent writer", tmdb_id)
                return AcquisitionResult(movie=existing, created=False)
            except SQLAlchemyError as exc:
                session.rollback()
                raise PersistenceError(f"Failed to create movie {tmdb_id}") from exc

        logger.info("Cached movie tmdb_id=%s as id=%s", tmdb_id, movie.id)
        return AcquisitionResult(movie=movie, created=True)
