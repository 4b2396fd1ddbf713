"""Review creation and the top-rated review aggregate."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cinecuration.db import MovieRepository, ReviewRepository
from cinecuration.models import Review
from cinecuration.services.errors import PersistenceError, ValidationError
from cinecuration.services.models import ReviewSummary
from cinecuration.services.validation import (
    is_float_between_0_and_10,
    max_500_characters,
    parse_identifier,
)

logger = logging.getLogger(__name__)

DEFAULT_TOP_LIMIT = 5


def count_words(text: str) -> int:
    """Number of non-empty whitespace-separated tokens."""

    return len(text.split())


class ReviewService:
    def __init__(
        self,
        reviews: ReviewRepository | None = None,
        movies: MovieRepository | None = None,
    ) -> None:
        self.reviews = reviews or ReviewRepository()
        self.movies = movies or MovieRepository()

    def add_review(self, session: Session, movie_id: Any, rating: Any, review_text: Any) -> Review:
        """Validate and store a review for a cached movie (internal movie id)."""

        movie_pk = parse_identifier(movie_id, "movieId")
        if not is_float_between_0_and_10(rating):
            raise ValidationError("rating must be a float between 0 and 10")
        if not max_500_characters(review_text):
            raise ValidationError("reviewText can have maximum of 500 characters.")

        try:
            if self.movies.get_by_id(session, movie_pk) is None:
                raise ValidationError("movieId does not reference an existing movie.")
            review = self.reviews.create(
                session,
                movie_id=movie_pk,
                rating=rating,
                review_text=review_text,
            )
        except SQLAlchemyError as exc:
            raise PersistenceError("Failed to add review and rating.") from exc
        logger.info("Stored review id=%s for movie id=%s", review.id, movie_pk)
        return review

    def top_rated(self, session: Session, limit: int = DEFAULT_TOP_LIMIT) -> list[ReviewSummary]:
        """Highest rated reviews first, each with its movie title and word count."""

        try:
            reviews = self.reviews.top_rated(session, limit)
            summaries = []
            for review in reviews:
                movie = self.movies.get_by_id(session, review.movie_id)
                summaries.append(
                    ReviewSummary(
                        title=movie.title if movie else None,
                        rating=review.rating,
                        text=review.review_text,
                        word_count=count_words(review.review_text),
                    )
                )
        except SQLAlchemyError as exc:
            raise PersistenceError("Failed to fetch top rated reviews.") from exc
        return summaries
