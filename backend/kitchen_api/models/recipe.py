"""
Recipe Models: Recipe, RecipeIngredient.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import Limits, RecipeStatus, empty_allergens
from .base import Base, IdType, TimestampMixin

if TYPE_CHECKING:
    from .outlet import Outlet, Category
    from .ingredient import Ingredient


class Recipe(TimestampMixin, Base):
    """
    Costed preparation belonging to an outlet.

    Costs are never stored: they are recomputed from current ingredient
    prices by kitchen_api.services.costing every time they are shown.
    """

    __tablename__ = "recipe"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    outlet_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("outlet.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_id: Mapped[Optional[int]] = mapped_column(
        IdType, ForeignKey("category.id", ondelete="SET NULL"), index=True
    )

    # RCP-<year>-<seq3>
    recipe_no: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    instructions: Mapped[Optional[str]] = mapped_column(Text)
    critical_details: Mapped[Optional[str]] = mapped_column(Text)
    image_url: Mapped[Optional[str]] = mapped_column(Text)

    prep_time: Mapped[Optional[int]] = mapped_column(Integer)  # minutes
    difficulty: Mapped[Optional[str]] = mapped_column(String(10))  # Easy, Medium, Hard

    yield_amount: Mapped[float] = mapped_column(Float, nullable=False, default=1)
    yield_unit: Mapped[str] = mapped_column(String(50), nullable=False, default="porsiyon")
    sale_price: Mapped[Optional[float]] = mapped_column(Float)
    waste_percentage: Mapped[Optional[float]] = mapped_column(
        Float, default=Limits.DEFAULT_WASTE_PERCENTAGE
    )

    # {"gluten": false, "lactose": true, ...} - always the 15 known keys
    allergens: Mapped[dict] = mapped_column(JSON, nullable=False, default=empty_allergens)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=RecipeStatus.ACTIVE.value
    )

    outlet: Mapped["Outlet"] = relationship(back_populates="recipes")
    category: Mapped[Optional["Category"]] = relationship()
    lines: Mapped[list["RecipeIngredient"]] = relationship(
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.sort_order",
    )

    __table_args__ = (
        CheckConstraint(
            "waste_percentage IS NULL OR (waste_percentage >= 0 AND waste_percentage <= 100)",
            name="chk_recipe_waste_range",
        ),
    )


class RecipeIngredient(Base):
    """
    Ordered ingredient line of a recipe.
    line_cost = quantity x ingredient.cost_per_unit, computed on read.
    """

    __tablename__ = "recipe_ingredient"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    recipe_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("recipe.id", ondelete="CASCADE"), nullable=False, index=True
    )
    ingredient_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("ingredient.id"), nullable=False, index=True
    )
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[Optional[str]] = mapped_column(String(50))  # Overrides ingredient.base_unit
    prep_detail: Mapped[Optional[str]] = mapped_column(Text)  # doğranmış, rendelenmiş ...
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    recipe: Mapped["Recipe"] = relationship(back_populates="lines")
    ingredient: Mapped["Ingredient"] = relationship()

    @property
    def display_unit(self) -> str:
        """Line unit, falling back to the ingredient's base unit."""
        if self.unit:
            return self.unit
        return self.ingredient.base_unit if self.ingredient is not None else ""
