"""
Recipe cost and margin arithmetic.

Pure functions over already-loaded data. Every caller (recipe listings,
recipe detail, dashboard, PDF and XLSX reports) goes through
calculate_recipe_cost so a recipe shows the same numbers everywhere.

    ingredients_cost    = sum(quantity * cost_per_unit)
    waste_cost          = ingredients_cost * waste_percentage / 100
    total_cost          = ingredients_cost + waste_cost
    cost_per_yield_unit = total_cost / max(yield_amount or 1, 1)
    profit_margin       = (sale_price - total_cost) / sale_price * 100, 0 without a sale price

Inputs are not validated here; the API schemas reject negative values
before they reach the database.
"""

from dataclasses import dataclass
from typing import Iterable, NamedTuple, Optional

from shared.config.constants import Limits


class CostLine(NamedTuple):
    """Quantity and unit price of one ingredient line. None counts as 0."""

    quantity: Optional[float]
    cost_per_unit: Optional[float]


@dataclass(frozen=True)
class RecipeCost:
    """Cost breakdown of a recipe, all amounts in TL."""

    ingredients_cost: float
    waste_percentage: float
    waste_cost: float
    total_cost: float
    cost_per_yield_unit: float
    sale_price: Optional[float]
    profit: float
    profit_margin: float


def line_cost(quantity: Optional[float], cost_per_unit: Optional[float]) -> float:
    """Cost of a single ingredient line."""
    return (quantity or 0) * (cost_per_unit or 0)


def effective_waste_percentage(waste_percentage: Optional[float]) -> float:
    """Missing waste percentage means the 5% default; an explicit 0 is kept."""
    if waste_percentage is None:
        return Limits.DEFAULT_WASTE_PERCENTAGE
    return waste_percentage


def calculate_profit_margin(sale_price: Optional[float], total_cost: float) -> float:
    """Margin as a percentage of the sale price; 0 when there is no sale price."""
    if not sale_price:
        return 0
    return ((sale_price - total_cost) / sale_price) * 100


def calculate_recipe_cost(
    lines: Iterable[CostLine | tuple[Optional[float], Optional[float]]],
    waste_percentage: Optional[float] = None,
    yield_amount: Optional[float] = None,
    sale_price: Optional[float] = None,
) -> RecipeCost:
    """
    Compute the full cost breakdown of a recipe.

    Args:
        lines: (quantity, cost_per_unit) pairs, one per ingredient line
        waste_percentage: Preparation loss markup; None uses the default
        yield_amount: Servings/units produced; falsy or < 1 counts as 1
        sale_price: Selling price; None or 0 yields a 0 margin
    """
    ingredients_cost = sum((line_cost(quantity, cost) for quantity, cost in lines), 0.0)
    waste = effective_waste_percentage(waste_percentage)
    waste_cost = ingredients_cost * (waste / 100)
    total_cost = ingredients_cost + waste_cost
    divisor = max(yield_amount or 1, 1)

    return RecipeCost(
        ingredients_cost=ingredients_cost,
        waste_percentage=waste,
        waste_cost=waste_cost,
        total_cost=total_cost,
        cost_per_yield_unit=total_cost / divisor,
        sale_price=sale_price,
        profit=(sale_price or 0) - total_cost,
        profit_margin=calculate_profit_margin(sale_price, total_cost),
    )


def cost_lines_of(recipe) -> list[CostLine]:
    """
    Cost inputs of an ORM Recipe (lines with their ingredient loaded).
    A line whose ingredient is missing costs 0.
    """
    return [
        CostLine(
            line.quantity,
            line.ingredient.cost_per_unit if line.ingredient is not None else 0,
        )
        for line in recipe.lines
    ]


def cost_of_recipe(recipe) -> RecipeCost:
    """Cost breakdown of an ORM Recipe at current ingredient prices."""
    return calculate_recipe_cost(
        cost_lines_of(recipe),
        waste_percentage=recipe.waste_percentage,
        yield_amount=recipe.yield_amount,
        sale_price=recipe.sale_price,
    )
