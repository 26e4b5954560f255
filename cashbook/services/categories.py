"""Helpers related to category lookups and normalization."""
from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy.orm import Session, sessionmaker

from ..database import SessionLocal, session_scope
from ..models import Category
from ..repositories import CategoryRepository
from ..schemas import CategoryRead

logger = logging.getLogger(__name__)


def get_or_create_category(categories: CategoryRepository, title: str) -> Category:
    """Return the category with this exact title, creating it when missing."""

    category = categories.find_by_title(title)
    if category is not None:
        return category

    category = categories.create(title)
    categories.save(category)
    logger.info("Created category %r (id=%s)", title, category.id)
    return category


def unique_titles(titles: Iterable[str]) -> list[str]:
    """Return unique category titles while preserving order."""

    seen: dict[str, None] = {}
    for title in titles:
        if title not in seen:
            seen[title] = None
    return list(seen.keys())


class ListCategoriesService:
    def __init__(self, session_factory: sessionmaker[Session] = SessionLocal) -> None:
        self.session_factory = session_factory

    def execute(self) -> list[CategoryRead]:
        with session_scope(self.session_factory) as session:
            categories = CategoryRepository(session).list()
            return [CategoryRead.model_validate(category) for category in categories]
