import pytest
from sqlalchemy import func, select

from cinecuration.db import CuratedListRepository
from cinecuration.models import CuratedListItem, ListKind, Movie, Watchlist, Wishlist
from cinecuration.services.acquisition import MovieAcquisitionService
from cinecuration.services.errors import AcquisitionFailure, ValidationError
from cinecuration.services.membership import MembershipService


@pytest.fixture
def service(fake_tmdb):
    return MembershipService(MovieAcquisitionService(fake_tmdb))


def _count(session, model) -> int:
    return session.scalar(select(func.count()).select_from(model))


def test_cached_movie_is_added_without_network(session, service, fake_tmdb, make_movie):
    movie = make_movie(27205, title="Inception")

    result = service.add_to_list(session, ListKind.WISHLIST, 27205)

    assert result.status == "added"
    assert result.record.movie_id == movie.id
    assert fake_tmdb.calls == []
    assert _count(session, Wishlist) == 1


def test_uncached_movie_is_created_without_membership(session, service, fake_tmdb):
    result = service.add_to_list(session, ListKind.WATCHLIST, "27205")

    assert result.status == "created"
    assert result.created
    assert result.record is None
    assert result.movie.tmdb_id == 27205
    assert fake_tmdb.calls == [("detail", 27205), ("credits", 27205)]
    assert _count(session, Movie) == 1
    assert _count(session, Watchlist) == 0


def test_second_add_after_creation_writes_membership(session, service, fake_tmdb):
    service.add_to_list(session, ListKind.WATCHLIST, 27205)
    result = service.add_to_list(session, ListKind.WATCHLIST, 27205)

    assert result.status == "added"
    assert len(fake_tmdb.calls) == 2
    assert _count(session, Watchlist) == 1


def test_duplicate_membership_is_allowed(session, service, make_movie):
    make_movie(27205)

    service.add_to_list(session, ListKind.WISHLIST, 27205)
    service.add_to_list(session, ListKind.WISHLIST, 27205)

    assert _count(session, Wishlist) == 2


def test_curated_item_references_list(session, service, make_movie):
    movie = make_movie(550)
    curated = CuratedListRepository().create(session, name="Noir", slug="noir", description="Dark")

    result = service.add_to_list(session, ListKind.CURATED, 550, curated_list_id=curated.id)

    assert isinstance(result.record, CuratedListItem)
    assert result.record.curated_list_id == curated.id
    assert result.record.movie_id == movie.id


@pytest.mark.parametrize("movie_id", [None, "", "abc", "²", 0, True])
def test_invalid_movie_id_is_rejected(session, service, fake_tmdb, movie_id):
    with pytest.raises(ValidationError):
        service.add_to_list(session, ListKind.WISHLIST, movie_id)
    assert fake_tmdb.calls == []


def test_curated_requires_list_id(session, service, make_movie):
    make_movie(550)

    with pytest.raises(ValidationError, match="curatedListId is missing"):
        service.add_to_list(session, ListKind.CURATED, 550)


def test_curated_requires_existing_list(session, service, fake_tmdb):
    with pytest.raises(ValidationError):
        service.add_to_list(session, ListKind.CURATED, 550, curated_list_id=42)
    assert fake_tmdb.calls == []


def test_acquisition_failure_propagates(session, service):
    with pytest.raises(AcquisitionFailure):
        service.add_to_list(session, ListKind.WISHLIST, 1)
    assert _count(session, Movie) == 0
