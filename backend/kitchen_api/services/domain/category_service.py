"""
Category Service.

Menu categories of an outlet. Removing a category never removes recipes:
they become uncategorized first.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kitchen_api.models import Category
from kitchen_api.repositories import get_category_repository, get_outlet_repository
from kitchen_api.schemas import CategoryInput, CategoryOutput
from shared.config.constants import ErrorMessages
from shared.config.logging import get_logger
from shared.infrastructure.db import is_unique_violation, safe_commit
from shared.utils.exceptions import ConflictError, DuplicateEntityError, NotFoundError

logger = get_logger(__name__)

ENTITY_NAME = "Kategori"


class CategoryService:
    """
    Service for menu category management.

    Business rules:
    - Names are unique within an outlet
    - A new category goes to the end when no sort_order is given
    - Deleting a category leaves its recipes uncategorized
    """

    def __init__(self, db: Session):
        self._db = db
        self._repo = get_category_repository(db)
        self._outlets = get_outlet_repository(db)

    def _require_outlet(self, outlet_id: int) -> None:
        if not self._outlets.exists(outlet_id):
            raise NotFoundError("Restoran", outlet_id)

    def get_entity(self, category_id: int) -> Category:
        category = self._repo.find_by_id(category_id)
        if category is None:
            raise NotFoundError(ENTITY_NAME, category_id)
        return category

    def list_by_outlet(self, outlet_id: int) -> list[CategoryOutput]:
        """Categories of an outlet in display order."""
        self._require_outlet(outlet_id)
        return [CategoryOutput.model_validate(c) for c in self._repo.find_by_outlet(outlet_id)]

    def create(self, outlet_id: int, data: CategoryInput) -> CategoryOutput:
        self._require_outlet(outlet_id)

        if self._repo.find_by_name(outlet_id, data.name) is not None:
            raise DuplicateEntityError(ENTITY_NAME, data.name, outlet_id=outlet_id)

        sort_order = data.sort_order
        if sort_order is None:
            sort_order = self._repo.count_for_outlet(outlet_id)

        category = Category(outlet_id=outlet_id, name=data.name, sort_order=sort_order)
        self._commit_unique(category, data.name)

        logger.info("Category created", category_id=category.id, outlet_id=outlet_id)
        return CategoryOutput.model_validate(category)

    def update(self, category_id: int, data: CategoryInput) -> CategoryOutput:
        """Rename the category; sort_order changes only when given."""
        category = self.get_entity(category_id)

        existing = self._repo.find_by_name(category.outlet_id, data.name)
        if existing is not None and existing.id != category.id:
            raise DuplicateEntityError(ENTITY_NAME, data.name, outlet_id=category.outlet_id)

        category.name = data.name
        if data.sort_order is not None:
            category.sort_order = data.sort_order

        self._commit_unique(category, data.name)

        logger.info("Category updated", category_id=category.id)
        return CategoryOutput.model_validate(category)

    def delete(self, category_id: int) -> int:
        """
        Delete a category after detaching its recipes.
        Returns the number of recipes that became uncategorized.
        """
        category = self.get_entity(category_id)

        try:
            detached = self._repo.detach_recipes(category.id)
            self._repo.delete(category)
            safe_commit(self._db)
        except Exception:
            self._db.rollback()
            raise

        logger.info("Category deleted", category_id=category_id, recipes_detached=detached)
        return detached

    def _commit_unique(self, category: Category, name: str) -> None:
        """Persist and map a lost uniqueness race (or a vanished outlet) to a 409."""
        try:
            self._repo.add(category)
            safe_commit(self._db)
        except IntegrityError as exc:
            self._db.rollback()
            if is_unique_violation(exc):
                raise DuplicateEntityError(ENTITY_NAME, name) from exc
            raise ConflictError(ErrorMessages.CONCURRENT_CHANGE, category=name) from exc
        self._db.refresh(category)
