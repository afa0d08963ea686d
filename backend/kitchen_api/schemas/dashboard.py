"""
Dashboard schemas.
"""

from pydantic import BaseModel


class DashboardStats(BaseModel):
    """Headline counters of the back-office home page."""

    outlet_count: int
    recipe_count: int
    ingredient_count: int
    category_count: int
    # Mean cost per yield unit over every recipe, 0 without recipes
    average_cost_per_yield: float
