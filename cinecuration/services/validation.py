"""Boundary validators applied before any network or database I/O."""

from __future__ import annotations

import re
from typing import Any, Mapping

from cinecuration.models import ListKind
from cinecuration.services.errors import ValidationError

MAX_REVIEW_CHARACTERS = 500
SORT_FIELDS = {"rating": "rating", "releaseyear": "release_year"}
SORT_ORDERS = {"asc", "desc"}

_WHITESPACE = re.compile(r"\s")


def is_float_between_0_and_10(value: Any) -> bool:
    """True for a non-integral float strictly between 0 and 10.

    Integral floats such as ``5.0`` are rejected as well; see DESIGN.md.
    """

    if isinstance(value, bool) or not isinstance(value, float):
        return False
    return 0 < value < 10 and not value.is_integer()


def max_500_characters(text: Any) -> bool:
    """True when ``text`` has at most 500 non-whitespace characters."""

    if not isinstance(text, str):
        return False
    return len(_WHITESPACE.sub("", text)) <= MAX_REVIEW_CHARACTERS


def validate_sort_movie(params: Mapping[str, Any]) -> list[str]:
    """Check list, sortBy and order in that order; only the first problem is reported."""

    list_kind = str(params.get("list") or "").lower()
    sort_by = str(params.get("sortBy") or "").lower()
    order = str(params.get("order") or "").lower()

    errors: list[str] = []
    if list_kind not in {kind.value for kind in ListKind}:
        errors.append("list parameter can be either watchlist or wishlist or curatedlist.")
    elif sort_by not in SORT_FIELDS:
        errors.append("sortBy can be either rating or releaseYear.")
    elif order not in SORT_ORDERS:
        errors.append("order can be either asc or desc.")
    return errors


def parse_identifier(raw: Any, name: str) -> int:
    """Coerce a positive integer id from JSON or path input."""

    if isinstance(raw, bool) or raw is None or raw == "":
        raise ValidationError(f"{name} is missing.")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float) and raw.is_integer():
        value = int(raw)
    elif isinstance(raw, str) and raw.strip().isdecimal():
        try:
            value = int(raw.strip())
        except ValueError as exc:
            raise ValidationError(f"{name} must be a number.") from exc
    else:
        raise ValidationError(f"{name} must be a number.")
    if value <= 0:
        raise ValidationError(f"{name} is missing.")
    return value
