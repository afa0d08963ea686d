"""
Pydantic request/response schemas of the Kitchen OS API.
"""

from .outlet import (
    OutletInput,
    OutletOutput,
    OutletListItem,
    CategoryInput,
    CategoryOutput,
)
from .ingredient import IngredientInput, IngredientOutput, UnitInput, UnitOutput
from .recipe import (
    RecipeIngredientInput,
    RecipeInput,
    RecipeFormData,
    RecipeLineOutput,
    CostBreakdownOutput,
    RecipeSummaryOutput,
    RecipeDetailOutput,
    NextRecipeNumberOutput,
)
from .dashboard import DashboardStats

__all__ = [
    # Outlet / Category
    "OutletInput",
    "OutletOutput",
    "OutletListItem",
    "CategoryInput",
    "CategoryOutput",
    # Ingredient / Unit
    "IngredientInput",
    "IngredientOutput",
    "UnitInput",
    "UnitOutput",
    # Recipe
    "RecipeIngredientInput",
    "RecipeInput",
    "RecipeFormData",
    "RecipeLineOutput",
    "CostBreakdownOutput",
    "RecipeSummaryOutput",
    "RecipeDetailOutput",
    "NextRecipeNumberOutput",
    # Dashboard
    "DashboardStats",
]
