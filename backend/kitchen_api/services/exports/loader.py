"""
Load report data from the database into export records.
"""

from sqlalchemy.orm import Session

from kitchen_api.models import Ingredient, Outlet, Recipe, RecipeIngredient
from kitchen_api.repositories import (
    get_category_repository,
    get_ingredient_repository,
    get_outlet_repository,
    get_recipe_repository,
)
from shared.config.constants import EMPTY_LABEL
from shared.utils.exceptions import NotFoundError

from .data import (
    ExportCategory,
    ExportIngredient,
    ExportLine,
    ExportOutlet,
    ExportRecipe,
    OutletReport,
    RecipeReport,
)


def to_export_line(line: RecipeIngredient) -> ExportLine:
    ingredient = line.ingredient
    return ExportLine(
        ingredient_name=ingredient.name if ingredient is not None else EMPTY_LABEL,
        quantity=line.quantity,
        unit=line.display_unit or EMPTY_LABEL,
        prep_detail=line.prep_detail,
        cost_per_unit=ingredient.cost_per_unit if ingredient is not None else 0,
    )


def to_export_recipe(recipe: Recipe) -> ExportRecipe:
    return ExportRecipe(
        id=recipe.id,
        recipe_no=recipe.recipe_no,
        name=recipe.name,
        category_id=recipe.category_id,
        category_name=recipe.category.name if recipe.category is not None else None,
        difficulty=recipe.difficulty,
        prep_time=recipe.prep_time,
        yield_amount=recipe.yield_amount,
        yield_unit=recipe.yield_unit,
        sale_price=recipe.sale_price,
        waste_percentage=recipe.waste_percentage,
        status=recipe.status,
        instructions=recipe.instructions,
        critical_details=recipe.critical_details,
        allergens=dict(recipe.allergens or {}),
        lines=tuple(to_export_line(line) for line in recipe.lines),
    )


def to_export_outlet(outlet: Outlet) -> ExportOutlet:
    return ExportOutlet(
        id=outlet.id,
        name=outlet.name,
        type=outlet.type,
        location=outlet.location,
        status=outlet.status,
        created_at=outlet.created_at,
    )


def to_export_ingredient(ingredient: Ingredient) -> ExportIngredient:
    return ExportIngredient(
        name=ingredient.name,
        base_unit=ingredient.base_unit,
        cost_per_unit=ingredient.cost_per_unit,
        ingredient_no=ingredient.ingredient_no,
        category=ingredient.category,
        supplier=ingredient.supplier,
    )


def load_outlet_report(db: Session, outlet_id: int) -> OutletReport:
    """Outlet, its categories in display order and its recipes (newest first)."""
    outlet = get_outlet_repository(db).find_by_id(outlet_id)
    if outlet is None:
        raise NotFoundError("Restoran", outlet_id)

    categories = get_category_repository(db).find_by_outlet(outlet_id)
    recipes = get_recipe_repository(db).find_by_outlet(outlet_id)

    return OutletReport(
        outlet=to_export_outlet(outlet),
        categories=tuple(
            ExportCategory(id=c.id, name=c.name, sort_order=c.sort_order) for c in categories
        ),
        recipes=tuple(to_export_recipe(r) for r in recipes),
    )


def load_recipe_report(db: Session, recipe_id: int) -> RecipeReport:
    recipe = get_recipe_repository(db).find_by_id(recipe_id)
    if recipe is None:
        raise NotFoundError("Tarif", recipe_id)

    return RecipeReport(
        recipe=to_export_recipe(recipe),
        outlet_name=recipe.outlet.name if recipe.outlet is not None else None,
    )


def load_ingredients(db: Session) -> list[ExportIngredient]:
    """The whole ingredient library, alphabetical."""
    return [to_export_ingredient(i) for i in get_ingredient_repository(db).find_all()]
