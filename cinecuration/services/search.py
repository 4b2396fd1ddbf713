"""TMDb search projection and genre/actor lookup over the local cache."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cinecuration.db import MovieRepository
from cinecuration.models import Movie
from cinecuration.services.errors import NotFoundError, PersistenceError, ValidationError
from cinecuration.services.models import MovieSearchResult
from cinecuration.services.tmdb import TMDbClient, TMDbError

logger = logging.getLogger(__name__)


class MovieSearchService:
    """Search TMDb without persisting anything.

    Unlike acquisition, the projection keeps genre *ids* and the release year as the
    raw leading string of the date, and lists every cast member. Each result costs
    one extra credits request.
    """

    def __init__(self, client: TMDbClient, movies: MovieRepository | None = None) -> None:
        self.client = client
        self.movies = movies or MovieRepository()

    def search(self, query: str | None) -> list[MovieSearchResult]:
        if not query or not query.strip():
            raise ValidationError("query parameter is missing.")

        results = self.client.search_movies(query)
        try:
            projected = [self._project(item) for item in results]
        except (AttributeError, KeyError, TypeError) as exc:
            raise TMDbError(f"Malformed TMDb search payload for {query!r}") from exc
        if not projected:
            raise NotFoundError("No movies found for the given query.")
        logger.info("TMDb search for %r returned %d movies", query, len(projected))
        return projected

    def _actors(self, tmdb_id: int) -> str:
        credits = self.client.get_credits(tmdb_id)
        return ", ".join(person["name"] for person in credits.get("cast") or [])

    def _project(self, item: dict[str, Any]) -> MovieSearchResult:
        return MovieSearchResult(
            title=item.get("title", ""),
            tmdb_id=item["id"],
            genre=", ".join(str(genre_id) for genre_id in item.get("genre_ids") or []),
            actors=self._actors(item["id"]),
            release_year=(item.get("release_date") or "").split("-")[0],
            rating=item.get("vote_average"),
            description=item.get("overview"),
        )

    def by_genre_and_actor(self, session: Session, genre: str | None, actor: str | None) -> list[Movie]:
        """Cached movies whose genre and actors contain the given substrings (case-sensitive)."""

        if not genre or not actor:
            raise ValidationError("genre or actors not provided.")
        try:
            movies = self.movies.search_by_genre_and_actor(session, genre, actor)
        except SQLAlchemyError as exc:
            raise PersistenceError("Failed to fetch movies by genre and actor.") from exc
        if not movies:
            raise ValidationError("No movies found for this genre and actor.")
        return movies
