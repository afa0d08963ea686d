"""
Recipe Repository - Data access for recipes with their ingredient lines.
"""

from dataclasses import dataclass
from typing import Sequence
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import Select, select, func, delete

from kitchen_api.models import Outlet, Recipe, RecipeIngredient
from .base import BaseRepository, RepositoryFilters, search_condition


@dataclass
class RecipeFilters(RepositoryFilters):
    """Filters specific to recipes."""

    outlet_id: int | None = None
    category_id: int | None = None
    status: str | None = None
    # Global listing also matches the outlet name
    search_outlet_name: bool = False


class RecipeRepository(BaseRepository[Recipe]):
    """
    Repository for Recipe entities.

    Guarantees eager loading of:
    - lines -> ingredient (needed for costing)
    - category
    - outlet

    Newest recipes first.
    """

    @property
    def model(self) -> type[Recipe]:
        return Recipe

    def _base_query(self) -> Select:
        return (
            select(Recipe)
            .options(
                selectinload(Recipe.lines).selectinload(RecipeIngredient.ingredient),
                selectinload(Recipe.category),
                selectinload(Recipe.outlet),
            )
            .order_by(Recipe.created_at.desc(), Recipe.id.desc())
        )

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        if not isinstance(filters, RecipeFilters):
            filters = RecipeFilters(**filters.__dict__)

        if filters.outlet_id is not None:
            query = query.where(Recipe.outlet_id == filters.outlet_id)

        if filters.category_id is not None:
            query = query.where(Recipe.category_id == filters.category_id)

        if filters.status:
            query = query.where(Recipe.status == filters.status)

        if filters.search:
            columns = [Recipe.name, Recipe.recipe_no]
            if filters.search_outlet_name:
                query = query.join(Outlet, Outlet.id == Recipe.outlet_id)
                columns.append(Outlet.name)
            query = query.where(search_condition(filters.search, *columns))

        return query

    def find_by_outlet(self, outlet_id: int) -> Sequence[Recipe]:
        """All recipes of an outlet with lines loaded, newest first."""
        return self.find_all(RecipeFilters(outlet_id=outlet_id))

    def find_by_recipe_no(self, recipe_no: str) -> Recipe | None:
        return self._db.scalar(select(Recipe).where(Recipe.recipe_no == recipe_no))

    def find_latest_recipe_no(self) -> str | None:
        """recipe_no of the most recently created recipe, if any."""
        query = (
            select(Recipe.recipe_no)
            .order_by(Recipe.created_at.desc(), Recipe.id.desc())
            .limit(1)
        )
        return self._db.scalar(query)

    def count_for_outlet(self, outlet_id: int) -> int:
        query = (
            select(func.count())
            .select_from(Recipe)
            .where(Recipe.outlet_id == outlet_id)
        )
        return self._db.scalar(query) or 0

    def delete_lines(self, recipe: Recipe) -> None:
        """Remove every ingredient line of a recipe (part of the save transaction)."""
        self._db.execute(
            delete(RecipeIngredient).where(RecipeIngredient.recipe_id == recipe.id)
        )
        # Keep the identity map in sync with the bulk delete
        self._db.expire(recipe, ["lines"])


def get_recipe_repository(db: Session) -> RecipeRepository:
    """Factory function for dependency injection."""
    return RecipeRepository(db)
