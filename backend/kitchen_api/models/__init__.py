"""
SQLAlchemy ORM Models Package.

Models are organized into domain-specific modules:
- base: Base class and TimestampMixin
- outlet: Outlet, Category
- ingredient: Ingredient, Unit
- recipe: Recipe, RecipeIngredient
"""

# Base classes
from .base import Base, TimestampMixin

# Outlets and their menu categories
from .outlet import Outlet, Category

# Global ingredient library and unit vocabulary
from .ingredient import Ingredient, Unit

# Recipes
from .recipe import Recipe, RecipeIngredient

__all__ = [
    "Base",
    "TimestampMixin",
    "Outlet",
    "Category",
    "Ingredient",
    "Unit",
    "Recipe",
    "RecipeIngredient",
]
