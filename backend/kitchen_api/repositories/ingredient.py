"""
Ingredient Repository - Data access for the ingredient library and units.
"""

from dataclasses import dataclass
from sqlalchemy.orm import Session
from sqlalchemy import Select, select, func

from kitchen_api.models import Ingredient, RecipeIngredient, Unit
from kitchen_api.models.ingredient import ingredient_name_key
from .base import BaseRepository, RepositoryFilters, search_condition


@dataclass
class IngredientFilters(RepositoryFilters):
    """Filters specific to ingredients."""

    category: str | None = None


class IngredientRepository(BaseRepository[Ingredient]):
    """
    Repository for the global ingredient library.
    Alphabetical by name.
    """

    @property
    def model(self) -> type[Ingredient]:
        return Ingredient

    def _base_query(self) -> Select:
        return select(Ingredient).order_by(Ingredient.name, Ingredient.id)

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        if not isinstance(filters, IngredientFilters):
            filters = IngredientFilters(**filters.__dict__)

        if filters.category:
            query = query.where(Ingredient.category == filters.category)

        if filters.search:
            query = query.where(
                search_condition(
                    filters.search,
                    Ingredient.name,
                    Ingredient.ingredient_no,
                    Ingredient.category,
                )
            )

        return query

    def find_by_name(self, name: str) -> Ingredient | None:
        """
        Case-insensitive exact-name lookup (Unicode casefold, so "ŞEKER" finds "Şeker").
        Returns the oldest match when the library holds duplicates.
        """
        query = (
            select(Ingredient)
            .where(Ingredient.name_key == ingredient_name_key(name))
            .order_by(Ingredient.id)
            .limit(1)
        )
        return self._db.scalar(query)

    def count_usages(self, ingredient_id: int) -> int:
        """Number of recipe lines referencing the ingredient."""
        query = (
            select(func.count())
            .select_from(RecipeIngredient)
            .where(RecipeIngredient.ingredient_id == ingredient_id)
        )
        return self._db.scalar(query) or 0


class UnitRepository(BaseRepository[Unit]):
    """Repository for the unit vocabulary, alphabetical by name."""

    @property
    def model(self) -> type[Unit]:
        return Unit

    def _base_query(self) -> Select:
        return select(Unit).order_by(Unit.name)

    def find_by_name(self, name: str) -> Unit | None:
        return self._db.scalar(select(Unit).where(Unit.name == name))


def get_ingredient_repository(db: Session) -> IngredientRepository:
    """Factory function for dependency injection."""
    return IngredientRepository(db)


def get_unit_repository(db: Session) -> UnitRepository:
    """Factory function for dependency injection."""
    return UnitRepository(db)
