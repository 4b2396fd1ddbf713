"""Pydantic request/response models. Fields are camelCase on the wire."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MovieOut(CamelModel):
    id: int
    tmdb_id: int
    title: str
    genre: str | None = None
    actors: str | None = None
    release_year: int | None = None
    rating: float | None = None
    description: str | None = None
    created_at: datetime | None = None


class MovieSearchResultOut(CamelModel):
    title: str
    tmdb_id: int
    genre: str
    actors: str
    release_year: str
    rating: float | None = None
    description: str | None = None


class MembershipOut(CamelModel):
    id: int
    movie_id: int | None = None
    added_at: datetime | None = None


class CuratedListItemOut(MembershipOut):
    curated_list_id: int


class CuratedListOut(CamelModel):
    id: int
    name: str
    slug: str
    description: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ReviewOut(CamelModel):
    id: int
    movie_id: int
    rating: float
    review_text: str
    added_at: datetime | None = None


class ReviewBody(CamelModel):
    text: str
    word_count: int


class TopRatedMovieOut(CamelModel):
    title: str | None = None
    rating: float
    review: ReviewBody


class MovieListResponse(CamelModel):
    movies: list[MovieOut]


class SearchResponse(CamelModel):
    movies: list[MovieSearchResultOut]


class TopRatedResponse(CamelModel):
    movies: list[TopRatedMovieOut]


class CuratedListCreatedResponse(CamelModel):
    message: str
    curated_list: CuratedListOut


class MessageResponse(CamelModel):
    message: str


class ReviewCreatedResponse(CamelModel):
    message: str
    review: ReviewOut


class MembershipRequest(CamelModel):
    # Raw values; identifiers are validated by the service layer to answer 400, not 422.
    movie_id: Any = Field(default=None, description="TMDb movie id")
    curated_list_id: Any = None


class CuratedListCreateRequest(CamelModel):
    name: str | None = None
    description: str | None = None
    slug: str | None = None


class CuratedListUpdateRequest(CamelModel):
    name: str | None = None
    description: str | None = None


class ReviewCreateRequest(CamelModel):
    rating: Any = None
    review_text: Any = None
