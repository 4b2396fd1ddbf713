import pytest

from cinecuration.services.curated_lists import create_slug
from cinecuration.services.errors import ValidationError
from cinecuration.services.validation import (
    is_float_between_0_and_10,
    max_500_characters,
    parse_identifier,
    validate_sort_movie,
)


def test_is_float_between_0_and_10():
    assert is_float_between_0_and_10(4.5)
    assert is_float_between_0_and_10(9.99)
    assert not is_float_between_0_and_10(5.0)
    assert not is_float_between_0_and_10(5)
    assert not is_float_between_0_and_10(0.0)
    assert not is_float_between_0_and_10(10.0)


def test_max_500_characters_ignores_whitespace():
    assert max_500_characters("x" * 500)
    assert max_500_characters("x " * 500)
    assert not max_500_characters("x" * 501)
    assert not max_500_characters(None)


def test_validate_sort_movie_short_circuits_on_list():
    errors = validate_sort_movie({"list": "invalid", "sortBy": "rating", "order": "asc"})

    assert errors == ["list parameter can be either watchlist or wishlist or curatedlist."]


def test_validate_sort_movie_accepts_valid_combinations():
    assert validate_sort_movie({"list": "CuratedList", "sortBy": "RELEASEYEAR", "order": "Desc"}) == []


def test_validate_sort_movie_treats_missing_as_invalid():
    assert validate_sort_movie({"list": "wishlist"}) == ["sortBy can be either rating or releaseYear."]


def test_parse_identifier():
    assert parse_identifier(27205, "movieId") == 27205
    assert parse_identifier(" 27205 ", "movieId") == 27205
    assert parse_identifier(12.0, "movieId") == 12
    with pytest.raises(ValidationError, match="movieId must be a number"):
        parse_identifier("27205abc", "movieId")
    with pytest.raises(ValidationError, match="movieId must be a number"):
        parse_identifier("²", "movieId")
    with pytest.raises(ValidationError, match="movieId is missing"):
        parse_identifier(None, "movieId")


@pytest.mark.parametrize(
    ("name", "slug"),
    [
        ("Best Noir Films", "best-noir-films"),
        ("Solo", "solo"),
        ("Two  Spaces", "two--spaces"),
    ],
)
def test_create_slug(name, slug):
    assert create_slug(name) == slug
