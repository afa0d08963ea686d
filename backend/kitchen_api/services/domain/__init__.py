"""
Domain Services.

Business logic between the thin routers and the repositories.

Usage:
    from kitchen_api.services.domain import RecipeService

    service = RecipeService(db)
    detail = service.get_detail(recipe_id)
"""

from .outlet_service import OutletService
from .category_service import CategoryService
from .ingredient_service import IngredientService, UnitService
from .recipe_service import RecipeService, to_detail, to_summary
from .dashboard_service import DashboardService

__all__ = [
    "OutletService",
    "CategoryService",
    "IngredientService",
    "UnitService",
    "RecipeService",
    "to_detail",
    "to_summary",
    "DashboardService",
]
