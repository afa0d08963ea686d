"""
Repository Pattern implementation.
Centralizes data access with guaranteed eager loading.

Usage:
    from kitchen_api.repositories import get_recipe_repository, RecipeFilters

    repo = get_recipe_repository(db)
    recipes = repo.find_all(RecipeFilters(outlet_id=1, search="çorba"))
    recipe = repo.find_by_id(123)
"""

from .base import BaseRepository, RepositoryFilters
from .outlet import (
    OutletRepository,
    OutletFilters,
    CategoryRepository,
    get_outlet_repository,
    get_category_repository,
)
from .ingredient import (
    IngredientRepository,
    IngredientFilters,
    UnitRepository,
    get_ingredient_repository,
    get_unit_repository,
)
from .recipe import RecipeRepository, RecipeFilters, get_recipe_repository

__all__ = [
    # Base
    "BaseRepository",
    "RepositoryFilters",
    # Outlet / Category
    "OutletRepository",
    "OutletFilters",
    "CategoryRepository",
    "get_outlet_repository",
    "get_category_repository",
    # Ingredient / Unit
    "IngredientRepository",
    "IngredientFilters",
    "UnitRepository",
    "get_ingredient_repository",
    "get_unit_repository",
    # Recipe
    "RecipeRepository",
    "RecipeFilters",
    "get_recipe_repository",
]
