"""Shared dataclasses for service layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cinecuration.models import ListKind, Movie


@dataclass(slots=True)
class MovieData:
    """Normalized TMDb detail + credits, ready to be persisted as a :class:`Movie`."""

    tmdb_id: int
    title: str
    genre: list[str] = field(default_factory=list)
    actors: list[str] = field(default_factory=list)
    release_year: int | None = None
    rating: float | None = None
    description: str | None = None

    def genre_as_string(self) -> str:
        return ", ".join(self.genre)

    def actors_as_string(self) -> str:
        return ", ".join(self.actors)

    def to_params(self) -> dict[str, Any]:
        return {
            "tmdb_id": self.tmdb_id,
            "title": self.title,
            "genre": self.genre_as_string(),
            "actors": self.actors_as_string(),
            "release_year": self.release_year,
            "rating": self.rating,
            "description": self.description,
        }


@dataclass(slots=True)
class MovieSearchResult:
    """Search projection. Never persisted; genre holds TMDb genre ids."""

    title: str
    tmdb_id: int
    genre: str
    actors: str
    release_year: str
    rating: float | None = None
    description: str | None = None


@dataclass(slots=True)
class AcquisitionResult:
    movie: Movie
    created: bool


@dataclass(slots=True)
class MembershipResult:
    """Outcome of adding a movie to a list.

    ``status`` is ``"added"`` when a membership row was written for an already cached
    movie, and ``"created"`` when the movie had to be fetched first; in that case only
    ``movie`` is set and no membership row exists.
    """

    kind: ListKind
    status: str
    movie: Movie
    record: Any | None = None

    @property
    def created(self) -> bool:
        return self.status == "created"


@dataclass(slots=True)
class ReviewSummary:
    title: str | None
    rating: float
    text: str
    word_count: int
