"""
Dashboard Service - headline counters for the back-office home page.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from kitchen_api.repositories import (
    get_category_repository,
    get_ingredient_repository,
    get_outlet_repository,
    get_recipe_repository,
)
from kitchen_api.schemas import DashboardStats
from kitchen_api.services.costing import cost_of_recipe


class DashboardService:
    def __init__(self, db: Session):
        self._outlets = get_outlet_repository(db)
        self._recipes = get_recipe_repository(db)
        self._ingredients = get_ingredient_repository(db)
        self._categories = get_category_repository(db)

    def get_stats(self) -> DashboardStats:
        """Entity counts and the mean cost per yield unit over every recipe."""
        recipes = self._recipes.find_all()
        per_yield = [cost_of_recipe(recipe).cost_per_yield_unit for recipe in recipes]
        average = sum(per_yield) / len(per_yield) if per_yield else 0

        return DashboardStats(
            outlet_count=self._outlets.count(),
            recipe_count=len(recipes),
            ingredient_count=self._ingredients.count(),
            category_count=self._categories.count(),
            average_cost_per_yield=average,
        )
