"""
Ingredient Service.

Global ingredient price library and the unit vocabulary.
Changing an ingredient's cost re-prices every recipe using it, since
recipe costs are always computed from current prices.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kitchen_api.models import Ingredient, Unit
from kitchen_api.repositories import (
    IngredientFilters,
    get_ingredient_repository,
    get_unit_repository,
)
from kitchen_api.schemas import IngredientInput, IngredientOutput, UnitInput, UnitOutput
from shared.config.constants import ErrorMessages
from shared.config.logging import get_logger
from shared.infrastructure.db import is_unique_violation, safe_commit
from shared.utils.exceptions import ConflictError, DuplicateEntityError, NotFoundError

logger = get_logger(__name__)


class IngredientService:
    """
    Service for the ingredient library.

    Business rules:
    - Listed alphabetically, searchable by name, number and category
    - An ingredient used by a recipe line cannot be deleted
    """

    ENTITY_NAME = "Malzeme"

    def __init__(self, db: Session):
        self._db = db
        self._repo = get_ingredient_repository(db)

    def get_entity(self, ingredient_id: int) -> Ingredient:
        ingredient = self._repo.find_by_id(ingredient_id)
        if ingredient is None:
            raise NotFoundError(self.ENTITY_NAME, ingredient_id)
        return ingredient

    def get(self, ingredient_id: int) -> IngredientOutput:
        return IngredientOutput.model_validate(self.get_entity(ingredient_id))

    def list_ingredients(
        self,
        *,
        search: str | None = None,
        category: str | None = None,
        limit: int | None = None,
    ) -> list[IngredientOutput]:
        filters = IngredientFilters(search=search, category=category, limit=limit)
        return [IngredientOutput.model_validate(i) for i in self._repo.find_all(filters)]

    def create(self, data: IngredientInput) -> IngredientOutput:
        ingredient = Ingredient(**data.model_dump())
        self._repo.add(ingredient)
        safe_commit(self._db)
        self._db.refresh(ingredient)

        logger.info("Ingredient created", ingredient_id=ingredient.id, name=ingredient.name)
        return IngredientOutput.model_validate(ingredient)

    def update(self, ingredient_id: int, data: IngredientInput) -> IngredientOutput:
        """Overwrite every field of the ingredient."""
        ingredient = self.get_entity(ingredient_id)
        old_cost = ingredient.cost_per_unit

        for field, value in data.model_dump().items():
            setattr(ingredient, field, value)

        safe_commit(self._db)
        self._db.refresh(ingredient)

        if old_cost != ingredient.cost_per_unit:
            logger.info(
                "Ingredient price changed",
                ingredient_id=ingredient.id,
                old_cost=old_cost,
                new_cost=ingredient.cost_per_unit,
            )
        return IngredientOutput.model_validate(ingredient)

    def delete(self, ingredient_id: int) -> None:
        ingredient = self.get_entity(ingredient_id)

        usages = self._repo.count_usages(ingredient.id)
        if usages:
            raise ConflictError(
                ErrorMessages.INGREDIENT_IN_USE.format(count=usages),
                ingredient_id=ingredient.id,
            )

        self._repo.delete(ingredient)
        safe_commit(self._db)
        logger.info("Ingredient deleted", ingredient_id=ingredient_id)


class UnitService:
    """Service for the advisory unit vocabulary."""

    ENTITY_NAME = "Birim"

    def __init__(self, db: Session):
        self._db = db
        self._repo = get_unit_repository(db)

    def list_units(self) -> list[UnitOutput]:
        return [UnitOutput.model_validate(u) for u in self._repo.find_all()]

    def create(self, data: UnitInput) -> UnitOutput:
        if self._repo.find_by_name(data.name) is not None:
            raise DuplicateEntityError(self.ENTITY_NAME, data.name)

        unit = Unit(name=data.name, abbreviation=data.abbreviation)
        try:
            self._repo.add(unit)
            safe_commit(self._db)
        except IntegrityError as exc:
            self._db.rollback()
            if is_unique_violation(exc):
                raise DuplicateEntityError(self.ENTITY_NAME, data.name) from exc
            raise ConflictError(ErrorMessages.CONCURRENT_CHANGE, unit=data.name) from exc

        self._db.refresh(unit)
        logger.info("Unit created", unit_id=unit.id, name=unit.name)
        return UnitOutput.model_validate(unit)

    def delete(self, unit_id: int) -> None:
        unit = self._repo.find_by_id(unit_id)
        if unit is None:
            raise NotFoundError(self.ENTITY_NAME, unit_id)

        self._repo.delete(unit)
        safe_commit(self._db)
        logger.info("Unit deleted", unit_id=unit_id)
