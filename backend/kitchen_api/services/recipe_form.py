"""
Mapping from a stored recipe to the editable form shape.

The edit screen posts back exactly what it receives here, so the mapping
is the inverse of RecipeService.save: library lines carry their
ingredient_id, and the ingredient's name and price ride along for display.
"""

from kitchen_api.models import Recipe, RecipeIngredient
from kitchen_api.schemas import RecipeFormData, RecipeIngredientInput
from shared.config.constants import ALLERGEN_KEYS, Limits


def line_to_form(line: RecipeIngredient) -> RecipeIngredientInput:
    ingredient = line.ingredient
    return RecipeIngredientInput(
        ingredient_id=line.ingredient_id,
        ingredient_name=ingredient.name if ingredient is not None else None,
        quantity=line.quantity,
        unit=line.unit,
        prep_detail=line.prep_detail,
        cost_per_unit=ingredient.cost_per_unit if ingredient is not None else 0,
    )


def recipe_to_form(recipe: Recipe) -> RecipeFormData:
    """
    Typed form payload for a recipe (lines with their ingredient loaded).

    Missing optional values come back as None; the allergen map always
    carries the 15 keys, and waste falls back to the default percentage.
    """
    stored_allergens = recipe.allergens or {}
    allergens = {key: bool(stored_allergens.get(key, False)) for key in ALLERGEN_KEYS}

    waste = recipe.waste_percentage
    if waste is None:
        waste = Limits.DEFAULT_WASTE_PERCENTAGE

    return RecipeFormData(
        id=recipe.id,
        outlet_id=recipe.outlet_id,
        recipe_no=recipe.recipe_no,
        name=recipe.name,
        category_id=recipe.category_id,
        instructions=recipe.instructions,
        critical_details=recipe.critical_details,
        image_url=recipe.image_url,
        prep_time=recipe.prep_time,
        difficulty=recipe.difficulty,
        yield_amount=recipe.yield_amount or 1,
        yield_unit=recipe.yield_unit,
        sale_price=recipe.sale_price,
        waste_percentage=waste,
        allergens=allergens,
        status=recipe.status,
        ingredients=[line_to_form(line) for line in recipe.lines],
    )
