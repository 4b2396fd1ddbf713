import pytest

from cinecuration.db import MembershipRepository
from cinecuration.models import ListKind, Watchlist
from cinecuration.services.errors import ValidationError
from cinecuration.services.sorting import ListSortService, sort_movies


@pytest.fixture
def service():
    return ListSortService()


@pytest.fixture
def watchlist(session, make_movie):
    memberships = MembershipRepository()
    inception = make_movie(27205, title="Inception", rating=8.369, release_year=2010)
    other = make_movie(1, title="Other", rating=6.44, release_year=2015)
    memberships.add(session, ListKind.WATCHLIST, movie_id=inception.id)
    memberships.add(session, ListKind.WATCHLIST, movie_id=other.id)
    session.commit()
    return inception, other


def test_sort_by_rating_ascending(session, service, watchlist):
    movies = service.sort_list(session, "watchlist", "rating", "asc")

    assert [movie.rating for movie in movies] == [6.44, 8.369]


def test_sort_by_rating_descending(session, service, watchlist):
    movies = service.sort_list(session, "watchlist", "rating", "desc")

    assert [movie.rating for movie in movies] == [8.369, 6.44]


def test_sort_parameters_are_case_insensitive(session, service, watchlist):
    movies = service.sort_list(session, "WatchList", "releaseYear", "DESC")

    assert [movie.release_year for movie in movies] == [2015, 2010]


def test_other_lists_are_independent(session, service, watchlist):
    assert service.sort_list(session, "wishlist", "rating", "asc") == []
    assert service.sort_list(session, "curatedlist", "rating", "asc") == []


def test_rows_without_movie_are_skipped(session, service, watchlist):
    session.add(Watchlist(movie_id=None))
    session.commit()

    movies = service.sort_list(session, "watchlist", "rating", "asc")

    assert len(movies) == 2


def test_invalid_list_short_circuits(session, service):
    with pytest.raises(ValidationError) as excinfo:
        service.sort_list(session, "invalid", "bogus", "sideways")

    assert excinfo.value.errors == [
        "list parameter can be either watchlist or wishlist or curatedlist."
    ]


def test_invalid_sort_field_then_order(session, service):
    with pytest.raises(ValidationError) as excinfo:
        service.sort_list(session, "wishlist", "title", "sideways")
    assert excinfo.value.errors == ["sortBy can be either rating or releaseYear."]

    with pytest.raises(ValidationError) as excinfo:
        service.sort_list(session, "wishlist", "rating", "sideways")
    assert excinfo.value.errors == ["order can be either asc or desc."]


def test_sort_movies_is_stable_and_puts_missing_last():
    class Row:
        def __init__(self, name, rating):
            self.name = name
            self.rating = rating

    rows = [Row("a", 7.0), Row("b", None), Row("c", 7.0), Row("d", 9.0)]

    ascending = sort_movies(rows, "rating")
    descending = sort_movies(rows, "rating", descending=True)

    assert [row.name for row in ascending] == ["a", "c", "d", "b"]
    assert [row.name for row in descending] == ["d", "a", "c", "b"]
