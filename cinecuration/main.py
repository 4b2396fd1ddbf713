"""FastAPI entrypoint wiring repositories, TMDb access and curation services."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Query, status
from sqlalchemy.orm import Session

from cinecuration.core.config import get_settings
from cinecuration.db import get_session, init_models
from cinecuration.models import ListKind
from cinecuration.schemas import (
    CuratedListCreatedResponse,
    CuratedListCreateRequest,
    CuratedListItemOut,
    CuratedListOut,
    CuratedListUpdateRequest,
    MembershipOut,
    MembershipRequest,
    MessageResponse,
    MovieListResponse,
    MovieOut,
    MovieSearchResultOut,
    ReviewBody,
    ReviewCreatedResponse,
    ReviewCreateRequest,
    ReviewOut,
    SearchResponse,
    TopRatedMovieOut,
    TopRatedResponse,
)
from cinecuration.services.acquisition import KeyedLock, MovieAcquisitionService
from cinecuration.services.curated_lists import CuratedListService
from cinecuration.services.errors import CurationError, NotFoundError, ValidationError
from cinecuration.services.membership import MembershipService
from cinecuration.services.models import MembershipResult
from cinecuration.services.reviews import ReviewService
from cinecuration.services.search import MovieSearchService
from cinecuration.services.sorting import ListSortService
from cinecuration.services.tmdb import TMDbAuthError, TMDbClient, TMDbError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Configure logging + ensure database tables before serving."""

    logging.basicConfig(level=get_settings().log_level)
    init_models()
    yield


app = FastAPI(title="Cine Curation", lifespan=lifespan)

# Shared by every request so that acquisitions of one TMDb id are serialized process-wide.
_acquisition_locks = KeyedLock()

# Response keys per list kind; ``watchList`` keeps the historical casing.
_MEMBERSHIP_KEYS = {
    ListKind.WISHLIST: "wishlist",
    ListKind.WATCHLIST: "watchList",
    ListKind.CURATED: "curatedListItem",
}
_MEMBERSHIP_LABELS = {
    ListKind.WISHLIST: "wishlist",
    ListKind.WATCHLIST: "watchlist",
    ListKind.CURATED: "curated list item",
}


def get_tmdb_client() -> TMDbClient:
    return TMDbClient()


def get_acquisition_service(client: TMDbClient = Depends(get_tmdb_client)) -> MovieAcquisitionService:
    return MovieAcquisitionService(client, locks=_acquisition_locks)


def get_membership_service(
    acquisition: MovieAcquisitionService = Depends(get_acquisition_service),
) -> MembershipService:
    return MembershipService(acquisition)


def get_search_service(client: TMDbClient = Depends(get_tmdb_client)) -> MovieSearchService:
    return MovieSearchService(client)


def get_sort_service() -> ListSortService:
    return ListSortService()


def get_review_service() -> ReviewService:
    return ReviewService()


def get_curated_list_service() -> CuratedListService:
    return CuratedListService()


def _server_error(exc: Exception, message: str) -> HTTPException:
    logger.exception("%s (%s)", message, exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


def _bad_request(exc: ValidationError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@app.get("/api/movies/search", response_model=SearchResponse)
def search_movies(
    query: str | None = Query(default=None),
    service: MovieSearchService = Depends(get_search_service),
) -> SearchResponse:
    """Search TMDb; results are not cached."""

    try:
        results = service.search(query)
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except TMDbAuthError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid TMDB API key.",
        ) from exc
    except TMDbError as exc:
        raise _server_error(exc, "Failed to fetch movies.") from exc
    return SearchResponse(movies=[MovieSearchResultOut.model_validate(item) for item in results])


@app.post(
    "/api/curated-lists",
    response_model=CuratedListCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_curated_list(
    payload: CuratedListCreateRequest,
    session: Session = Depends(get_session),
    service: CuratedListService = Depends(get_curated_list_service),
) -> CuratedListCreatedResponse:
    try:
        curated_list = service.create(
            session,
            name=payload.name,
            description=payload.description,
            slug=payload.slug,
        )
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    except CurationError as exc:
        raise _server_error(exc, "Failed to create curated lists.") from exc
    return CuratedListCreatedResponse(
        message="Curated list created successfully.",
        curated_list=CuratedListOut.model_validate(curated_list),
    )


@app.put(
    "/api/curated-lists/{curated_list_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
def update_curated_list(
    curated_list_id: str,
    payload: CuratedListUpdateRequest,
    session: Session = Depends(get_session),
    service: CuratedListService = Depends(get_curated_list_service),
) -> MessageResponse:
    try:
        service.update(
            session,
            curated_list_id,
            name=payload.name,
            description=payload.description,
        )
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except CurationError as exc:
        raise _server_error(exc, "Failed to update curated lists.") from exc
    return MessageResponse(message="Curated list updated successfully.")


def _add_to_list(
    kind: ListKind,
    payload: MembershipRequest,
    session: Session,
    service: MembershipService,
) -> dict:
    try:
        result = service.add_to_list(
            session,
            kind,
            payload.movie_id,
            curated_list_id=payload.curated_list_id,
        )
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    except CurationError as exc:
        raise _server_error(
            exc,
            f"Failed to save movies in {_MEMBERSHIP_LABELS[kind]} or create movie.",
        ) from exc
    return _membership_to_response(result)


def _membership_to_response(result: MembershipResult) -> dict:
    if result.created:
        return {
            "message": "Movie created successfully.",
            "movie": MovieOut.model_validate(result.movie).model_dump(by_alias=True, mode="json"),
        }
    schema = CuratedListItemOut if result.kind is ListKind.CURATED else MembershipOut
    return {
        "message": f"Movie added to {_MEMBERSHIP_LABELS[result.kind]} successfully.",
        _MEMBERSHIP_KEYS[result.kind]: schema.model_validate(result.record).model_dump(
            by_alias=True, mode="json"
        ),
    }


@app.post("/api/movies/wishlist", status_code=status.HTTP_201_CREATED)
def add_to_wishlist(
    payload: MembershipRequest,
    session: Session = Depends(get_session),
    service: MembershipService = Depends(get_membership_service),
) -> dict:
    """Add a cached movie to the wishlist, or cache it first when unknown."""

    return _add_to_list(ListKind.WISHLIST, payload, session, service)


@app.post("/api/movies/watchlist", status_code=status.HTTP_201_CREATED)
def add_to_watchlist(
    payload: MembershipRequest,
    session: Session = Depends(get_session),
    service: MembershipService = Depends(get_membership_service),
) -> dict:
    return _add_to_list(ListKind.WATCHLIST, payload, session, service)


@app.post("/api/movies/curated-list", status_code=status.HTTP_201_CREATED)
def add_to_curated_list(
    payload: MembershipRequest,
    session: Session = Depends(get_session),
    service: MembershipService = Depends(get_membership_service),
) -> dict:
    return _add_to_list(ListKind.CURATED, payload, session, service)


@app.post(
    "/api/movies/{movie_id}/reviews",
    response_model=ReviewCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_review(
    movie_id: str,
    payload: ReviewCreateRequest,
    session: Session = Depends(get_session),
    service: ReviewService = Depends(get_review_service),
) -> ReviewCreatedResponse:
    try:
        review = service.add_review(session, movie_id, payload.rating, payload.review_text)
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    except CurationError as exc:
        raise _server_error(exc, "Failed to add review and rating.") from exc
    return ReviewCreatedResponse(
        message="Review added successfully.",
        review=ReviewOut.model_validate(review),
    )


@app.get("/api/movies/searchByGenreAndActor", response_model=MovieListResponse)
def search_by_genre_and_actor(
    genre: str | None = Query(default=None),
    actor: str | None = Query(default=None),
    session: Session = Depends(get_session),
    service: MovieSearchService = Depends(get_search_service),
) -> MovieListResponse:
    try:
        movies = service.by_genre_and_actor(session, genre, actor)
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    except CurationError as exc:
        raise _server_error(exc, "Failed to fetch movies by genre and actor.") from exc
    return MovieListResponse(movies=[MovieOut.model_validate(movie) for movie in movies])


@app.get("/api/movies/sort", response_model=MovieListResponse)
def sort_movies(
    list_kind: str | None = Query(default=None, alias="list"),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    order: str | None = Query(default=None),
    session: Session = Depends(get_session),
    service: ListSortService = Depends(get_sort_service),
) -> MovieListResponse:
    """Movies of one list, sorted by rating or releaseYear."""

    try:
        movies = service.sort_list(session, list_kind or "", sort_by or "", order or "")
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.errors) from exc
    except CurationError as exc:
        raise _server_error(exc, "Failed to sort movies.") from exc
    return MovieListResponse(movies=[MovieOut.model_validate(movie) for movie in movies])


@app.get("/api/movies/top5", response_model=TopRatedResponse)
def top_rated_movies(
    session: Session = Depends(get_session),
    service: ReviewService = Depends(get_review_service),
) -> TopRatedResponse:
    try:
        summaries = service.top_rated(session, get_settings().top_reviews_limit)
    except CurationError as exc:
        raise _server_error(exc, "Failed to fetch top 5 rated movies.") from exc
    return TopRatedResponse(
        movies=[
            TopRatedMovieOut(
                title=summary.title,
                rating=summary.rating,
                review=ReviewBody(text=summary.text, word_count=summary.word_count),
            )
            for summary in summaries
        ]
    )
