"""Creation and editing of curated lists."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cinecuration.db import CuratedListRepository
from cinecuration.models import CuratedList
from cinecuration.services.errors import NotFoundError, PersistenceError, ValidationError
from cinecuration.services.validation import parse_identifier

logger = logging.getLogger(__name__)


def create_slug(name: str) -> str:
    """Lowercase ``name`` and turn every single space into a hyphen. Not unique."""

    return "-".join(name.lower().split(" "))


class CuratedListService:
    def __init__(self, curated_lists: CuratedListRepository | None = None) -> None:
        self.curated_lists = curated_lists or CuratedListRepository()

    def create(
        self,
        session: Session,
        *,
        name: str | None,
        description: str | None,
        slug: str | None = None,
    ) -> CuratedList:
        if not name or not description:
            raise ValidationError("name or description not provided.")
        try:
            curated_list = self.curated_lists.create(
                session,
                name=name,
                slug=slug or create_slug(name),
                description=description,
            )
        except SQLAlchemyError as exc:
            raise PersistenceError("Failed to create curated lists.") from exc
        logger.info("Created curated list id=%s slug=%s", curated_list.id, curated_list.slug)
        return curated_list

    def update(
        self,
        session: Session,
        curated_list_id: Any,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> CuratedList:
        list_id = parse_identifier(curated_list_id, "curatedListId")
        if not name and not description:
            raise ValidationError("name and description not provided.")
        try:
            curated_list = self.curated_lists.get(session, list_id)
            if curated_list is None:
                raise NotFoundError(f"Curated list {list_id} not found.")
            return self.curated_lists.update(
                session,
                curated_list,
                name=name,
                description=description,
            )
        except SQLAlchemyError as exc:
            raise PersistenceError("Failed to update curated lists.") from exc
