"""Adding cached movies to wishlists, watchlists and curated lists."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cinecuration.db import CuratedListRepository, MembershipRepository
from cinecuration.models import ListKind
from cinecuration.services.acquisition import MovieAcquisitionService
from cinecuration.services.errors import PersistenceError, ValidationError
from cinecuration.services.models import MembershipResult
from cinecuration.services.validation import parse_identifier

logger = logging.getLogger(__name__)


class MembershipService:
    """Attach a TMDb movie to one of the three list kinds.

    A movie already in the cache gets a membership row (status ``added``). A movie
    that is not cached yet is only fetched and cached (status ``created``); no
    membership row is written on that path.
    """

    def __init__(
        self,
        acquisition: MovieAcquisitionService,
        memberships: MembershipRepository | None = None,
        curated_lists: CuratedListRepository | None = None,
    ) -> None:
        self.acquisition = acquisition
        self.memberships = memberships or MembershipRepository()
        self.curated_lists = curated_lists or CuratedListRepository()

    def add_to_list(
        self,
        session: Session,
        kind: ListKind,
        movie_id: Any,
        curated_list_id: Any = None,
    ) -> MembershipResult:
        tmdb_id = parse_identifier(movie_id, "movieId")
        list_id = None
        if kind is ListKind.CURATED:
            list_id = parse_identifier(curated_list_id, "curatedListId")
            if self.curated_lists.get(session, list_id) is None:
                raise ValidationError("curatedListId does not reference an existing curated list.")

        movie = self.acquisition.find(session, tmdb_id)
        if movie is None:
            acquired = self.acquisition.ensure(session, tmdb_id)
            if acquired.created:
                return MembershipResult(kind=kind, status="created", movie=acquired.movie)
            # Cached by a concurrent request between the lookup and the lock.
            movie = acquired.movie

        try:
            record = self.memberships.add(
                session,
                kind,
                movie_id=movie.id,
                curated_list_id=list_id,
            )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to add movie {tmdb_id} to {kind.value}") from exc
        logger.info("Added movie id=%s to %s (membership id=%s)", movie.id, kind.value, record.id)
        return MembershipResult(kind=kind, status="added", movie=movie, record=record)
