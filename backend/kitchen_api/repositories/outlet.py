"""
Outlet Repository - Data access for outlets and their categories.
"""

from dataclasses import dataclass
from typing import Sequence
from sqlalchemy.orm import Session
from sqlalchemy import Select, select, func, update

from kitchen_api.models import Outlet, Category, Recipe
from .base import BaseRepository, RepositoryFilters, search_condition


@dataclass
class OutletFilters(RepositoryFilters):
    """Filters specific to outlets."""

    status: str | None = None


class OutletRepository(BaseRepository[Outlet]):
    """
    Repository for Outlet entities.
    Newest outlets first.
    """

    @property
    def model(self) -> type[Outlet]:
        return Outlet

    def _base_query(self) -> Select:
        return select(Outlet).order_by(Outlet.created_at.desc(), Outlet.id.desc())

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        if not isinstance(filters, OutletFilters):
            filters = OutletFilters(**filters.__dict__)

        if filters.status:
            query = query.where(Outlet.status == filters.status)

        if filters.search:
            query = query.where(search_condition(filters.search, Outlet.name, Outlet.location))

        return query

    def recipe_counts(self) -> dict[int, int]:
        """Number of recipes per outlet id (outlets without recipes are absent)."""
        rows = self._db.execute(
            select(Recipe.outlet_id, func.count(Recipe.id)).group_by(Recipe.outlet_id)
        ).all()
        return {outlet_id: count for outlet_id, count in rows}

    def category_counts(self) -> dict[int, int]:
        """Number of categories per outlet id."""
        rows = self._db.execute(
            select(Category.outlet_id, func.count(Category.id)).group_by(Category.outlet_id)
        ).all()
        return {outlet_id: count for outlet_id, count in rows}


class CategoryRepository(BaseRepository[Category]):
    """
    Repository for menu categories.
    Ordered by sort_order, then name.
    """

    @property
    def model(self) -> type[Category]:
        return Category

    def _base_query(self) -> Select:
        return select(Category).order_by(Category.sort_order, Category.name)

    def find_by_outlet(self, outlet_id: int) -> Sequence[Category]:
        """Categories of an outlet in display order."""
        query = self._base_query().where(Category.outlet_id == outlet_id)
        return self._db.execute(query).scalars().all()

    def count_for_outlet(self, outlet_id: int) -> int:
        query = (
            select(func.count())
            .select_from(Category)
            .where(Category.outlet_id == outlet_id)
        )
        return self._db.scalar(query) or 0

    def find_by_name(self, outlet_id: int, name: str) -> Category | None:
        """Exact-name lookup within an outlet (names are unique per outlet)."""
        query = select(Category).where(
            Category.outlet_id == outlet_id,
            Category.name == name,
        )
        return self._db.scalar(query)

    def detach_recipes(self, category_id: int) -> int:
        """
        Make every recipe of the category uncategorized.
        Returns the number of recipes updated.
        """
        result = self._db.execute(
            update(Recipe)
            .where(Recipe.category_id == category_id)
            .values(category_id=None)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0


def get_outlet_repository(db: Session) -> OutletRepository:
    """Factory function for dependency injection."""
    return OutletRepository(db)


def get_category_repository(db: Session) -> CategoryRepository:
    """Factory function for dependency injection."""
    return CategoryRepository(db)
