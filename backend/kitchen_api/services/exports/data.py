"""
Plain data records consumed by the report generators.

The loader copies ORM rows into these frozen dataclasses so that PDF and
XLSX rendering never touch a database session. Each ExportRecipe computes
its cost breakdown once, through the shared cost calculator.
"""

from dataclasses import dataclass, field
from datetime import datetime
from functools import cached_property
from typing import Optional

from kitchen_api.services.costing import CostLine, RecipeCost, calculate_recipe_cost, line_cost
from shared.config.constants import EMPTY_LABEL

from .formatting import format_quantity, get_active_allergens

PDF_MEDIA_TYPE = "application/pdf"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

UNCATEGORIZED_LABEL = "Kategorisiz"


@dataclass(frozen=True)
class ExportLine:
    """Ingredient line as printed in reports."""

    ingredient_name: str
    quantity: float
    unit: str
    prep_detail: Optional[str] = None
    cost_per_unit: float = 0

    @property
    def line_cost(self) -> float:
        return line_cost(self.quantity, self.cost_per_unit)


@dataclass(frozen=True)
class ExportRecipe:
    id: int
    recipe_no: str
    name: str
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    difficulty: Optional[str] = None
    prep_time: Optional[int] = None
    yield_amount: float = 1
    yield_unit: str = "porsiyon"
    sale_price: Optional[float] = None
    waste_percentage: Optional[float] = None
    status: str = "active"
    instructions: Optional[str] = None
    critical_details: Optional[str] = None
    allergens: dict = field(default_factory=dict)
    lines: tuple[ExportLine, ...] = ()

    @cached_property
    def cost(self) -> RecipeCost:
        return calculate_recipe_cost(
            [CostLine(line.quantity, line.cost_per_unit) for line in self.lines],
            waste_percentage=self.waste_percentage,
            yield_amount=self.yield_amount,
            sale_price=self.sale_price,
        )

    @property
    def yield_label(self) -> str:
        """'4 porsiyon'"""
        return f"{format_quantity(self.yield_amount)} {self.yield_unit}"

    @property
    def waste_label(self) -> str:
        """'%5' - the effective waste percentage without padding decimals."""
        return f"%{format_quantity(self.cost.waste_percentage)}"

    @property
    def active_allergens(self) -> list[str]:
        return get_active_allergens(self.allergens)

    @property
    def category_label(self) -> str:
        return self.category_name or UNCATEGORIZED_LABEL


@dataclass(frozen=True)
class ExportCategory:
    id: int
    name: str
    sort_order: int = 0


@dataclass(frozen=True)
class ExportOutlet:
    id: int
    name: str
    type: Optional[str] = None
    location: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ExportIngredient:
    name: str
    base_unit: str
    cost_per_unit: float
    ingredient_no: Optional[str] = None
    category: Optional[str] = None
    supplier: Optional[str] = None

    @property
    def category_label(self) -> str:
        return self.category or UNCATEGORIZED_LABEL


@dataclass(frozen=True)
class OutletReport:
    """An outlet with its categories (display order) and recipes."""

    outlet: ExportOutlet
    categories: tuple[ExportCategory, ...] = ()
    recipes: tuple[ExportRecipe, ...] = ()

    def recipes_in(self, category_id: int) -> list[ExportRecipe]:
        return [r for r in self.recipes if r.category_id == category_id]

    @property
    def uncategorized(self) -> list[ExportRecipe]:
        return [r for r in self.recipes if r.category_id is None]

    def grouped(self) -> list[tuple[ExportCategory, list[ExportRecipe]]]:
        """Non-empty categories in display order with their recipes."""
        groups = []
        for category in self.categories:
            recipes = self.recipes_in(category.id)
            if recipes:
                groups.append((category, recipes))
        return groups

    @property
    def total_cost(self) -> float:
        return sum((r.cost.total_cost for r in self.recipes), 0.0)

    @property
    def total_sale(self) -> float:
        return sum((r.sale_price or 0 for r in self.recipes), 0.0)


@dataclass(frozen=True)
class RecipeReport:
    recipe: ExportRecipe
    outlet_name: Optional[str] = None

    @property
    def outlet_label(self) -> str:
        return self.outlet_name or EMPTY_LABEL

    @property
    def category_label(self) -> str:
        return self.recipe.category_name or EMPTY_LABEL


@dataclass(frozen=True)
class ExportFile:
    """A finished report, ready to be sent or written to disk."""

    content: bytes
    filename: str
    media_type: str


def group_ingredients(
    ingredients: list[ExportIngredient],
) -> list[tuple[str, list[ExportIngredient]]]:
    """Ingredients grouped by category label, in first-seen order."""
    groups: dict[str, list[ExportIngredient]] = {}
    for ingredient in ingredients:
        groups.setdefault(ingredient.category_label, []).append(ingredient)
    return list(groups.items())
