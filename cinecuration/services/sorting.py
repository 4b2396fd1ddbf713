"""Sorted views over the movies of a list."""

from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cinecuration.db import MembershipRepository, MovieRepository
from cinecuration.models import ListKind, Movie
from cinecuration.services.errors import PersistenceError, ValidationError
from cinecuration.services.validation import SORT_FIELDS, validate_sort_movie

logger = logging.getLogger(__name__)


def sort_movies(movies: Iterable[Movie], field: str, *, descending: bool = False) -> list[Movie]:
    """Stable numeric sort on ``field``; movies missing the value go last."""

    movies = list(movies)
    present = [movie for movie in movies if getattr(movie, field) is not None]
    missing = [movie for movie in movies if getattr(movie, field) is None]
    return sorted(present, key=lambda movie: getattr(movie, field), reverse=descending) + missing


class ListSortService:
    def __init__(
        self,
        memberships: MembershipRepository | None = None,
        movies: MovieRepository | None = None,
    ) -> None:
        self.memberships = memberships or MembershipRepository()
        self.movies = movies or MovieRepository()

    def list_movies(self, session: Session, kind: ListKind) -> list[Movie]:
        """Dereference every membership row of ``kind`` to its movie, one lookup per row."""

        resolved: list[Movie] = []
        for record in self.memberships.list_all(session, kind):
            if not record.movie_id:
                continue
            movie = self.movies.get_by_id(session, record.movie_id)
            if movie is not None:
                resolved.append(movie)
        return resolved

    def sort_list(self, session: Session, list_kind: str, sort_by: str, order: str) -> list[Movie]:
        errors = validate_sort_movie({"list": list_kind, "sortBy": sort_by, "order": order})
        if errors:
            raise ValidationError(errors[0], errors=errors)

        kind = ListKind.parse(list_kind)
        field = SORT_FIELDS[sort_by.lower()]
        try:
            movies = self.list_movies(session, kind)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to load {kind.value} movies") from exc
        logger.debug("Sorting %d %s movies by %s %s", len(movies), kind.value, field, order)
        return sort_movies(movies, field, descending=order.lower() == "desc")
