"""
Recipe Service.

Listing, costing and the atomic recipe save.

A recipe and its ingredient lines are written in one transaction: the
header is inserted or overwritten, the old lines are deleted, each row's
ingredient is resolved (library pick, name match, or auto-created library
entry) and the new lines are inserted. Any failure rolls the whole save
back, so a reader never observes a half-written recipe.

Usage:
    from kitchen_api.services.domain import RecipeService

    service = RecipeService(db)
    detail = service.create(outlet_id, RecipeInput(name="Mercimek Çorbası", ...))
    rows = service.list_for_outlet(outlet_id, search="çorba")
"""

from __future__ import annotations

from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kitchen_api.models import Ingredient, Recipe, RecipeIngredient
from kitchen_api.repositories import (
    RecipeFilters,
    get_category_repository,
    get_ingredient_repository,
    get_outlet_repository,
    get_recipe_repository,
)
from kitchen_api.schemas import (
    CostBreakdownOutput,
    RecipeDetailOutput,
    RecipeFormData,
    RecipeIngredientInput,
    RecipeInput,
    RecipeLineOutput,
    RecipeSummaryOutput,
)
from kitchen_api.services.costing import RecipeCost, cost_of_recipe, line_cost
from kitchen_api.services.exports.formatting import get_active_allergens
from kitchen_api.services.recipe_form import recipe_to_form
from kitchen_api.services.recipe_numbers import next_recipe_no
from shared.config.constants import DEFAULT_BASE_UNIT, ErrorMessages
from shared.config.logging import get_logger
from shared.infrastructure.db import is_unique_violation, safe_commit
from shared.utils.exceptions import (
    ConflictError,
    DuplicateEntityError,
    NotFoundError,
    ValidationError,
)

logger = get_logger(__name__)

ENTITY_NAME = "Tarif"


# =============================================================================
# Output builders
# =============================================================================


def _summary_fields(recipe: Recipe, cost: RecipeCost) -> dict:
    return {
        "id": recipe.id,
        "outlet_id": recipe.outlet_id,
        "outlet_name": recipe.outlet.name if recipe.outlet is not None else None,
        "category_id": recipe.category_id,
        "category_name": recipe.category.name if recipe.category is not None else None,
        "recipe_no": recipe.recipe_no,
        "name": recipe.name,
        "image_url": recipe.image_url,
        "prep_time": recipe.prep_time,
        "difficulty": recipe.difficulty,
        "yield_amount": recipe.yield_amount,
        "yield_unit": recipe.yield_unit,
        "sale_price": recipe.sale_price,
        "waste_percentage": recipe.waste_percentage,
        "status": recipe.status,
        "ingredient_count": len(recipe.lines),
        "total_cost": cost.total_cost,
        "cost_per_yield_unit": cost.cost_per_yield_unit,
        "profit_margin": cost.profit_margin,
        "created_at": recipe.created_at,
    }


def to_summary(recipe: Recipe) -> RecipeSummaryOutput:
    """Listing row with the recipe's current cost figures."""
    return RecipeSummaryOutput(**_summary_fields(recipe, cost_of_recipe(recipe)))


def to_line_output(line: RecipeIngredient) -> RecipeLineOutput:
    ingredient = line.ingredient
    cost_per_unit = ingredient.cost_per_unit if ingredient is not None else 0
    return RecipeLineOutput(
        id=line.id,
        ingredient_id=line.ingredient_id,
        ingredient_name=ingredient.name if ingredient is not None else "",
        ingredient_no=ingredient.ingredient_no if ingredient is not None else None,
        quantity=line.quantity,
        unit=line.display_unit,
        prep_detail=line.prep_detail,
        cost_per_unit=cost_per_unit,
        line_cost=line_cost(line.quantity, cost_per_unit),
        sort_order=line.sort_order,
    )


def to_detail(recipe: Recipe) -> RecipeDetailOutput:
    """Full recipe with lines, allergens and the cost breakdown."""
    cost = cost_of_recipe(recipe)
    return RecipeDetailOutput(
        **_summary_fields(recipe, cost),
        instructions=recipe.instructions,
        critical_details=recipe.critical_details,
        allergens=recipe.allergens or {},
        active_allergens=get_active_allergens(recipe.allergens),
        lines=[to_line_output(line) for line in recipe.lines],
        cost=CostBreakdownOutput.model_validate(cost),
        updated_at=recipe.updated_at,
    )


# =============================================================================
# Service
# =============================================================================


class RecipeService:
    """
    Service for recipes.

    Business rules:
    - recipe_no is generated when the form leaves it blank
    - category_id must belong to the recipe's outlet
    - Costs are computed on read from current ingredient prices
    - Save is all-or-nothing
    """

    def __init__(self, db: Session):
        self._db = db
        self._repo = get_recipe_repository(db)
        self._outlets = get_outlet_repository(db)
        self._categories = get_category_repository(db)
        self._ingredients = get_ingredient_repository(db)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_entity(self, recipe_id: int) -> Recipe:
        recipe = self._repo.find_by_id(recipe_id)
        if recipe is None:
            raise NotFoundError(ENTITY_NAME, recipe_id)
        return recipe

    def get_detail(self, recipe_id: int) -> RecipeDetailOutput:
        return to_detail(self.get_entity(recipe_id))

    def get_form(self, recipe_id: int) -> RecipeFormData:
        return recipe_to_form(self.get_entity(recipe_id))

    def list_for_outlet(
        self,
        outlet_id: int,
        *,
        category_id: int | None = None,
        search: str | None = None,
    ) -> list[RecipeSummaryOutput]:
        """Recipes of one outlet, newest first."""
        if not self._outlets.exists(outlet_id):
            raise NotFoundError("Restoran", outlet_id)

        filters = RecipeFilters(outlet_id=outlet_id, category_id=category_id, search=search)
        return [to_summary(recipe) for recipe in self._repo.find_all(filters)]

    def search(
        self,
        *,
        search: str | None = None,
        status: str | None = None,
        limit: int | None = None,
    ) -> list[RecipeSummaryOutput]:
        """Recipes across all outlets; the term also matches the outlet name."""
        filters = RecipeFilters(
            search=search,
            status=status,
            limit=limit,
            search_outlet_name=True,
        )
        return [to_summary(recipe) for recipe in self._repo.find_all(filters)]

    def generate_recipe_no(self, year: int | None = None) -> str:
        """Next RCP-<year>-<seq> after the most recently created recipe."""
        return next_recipe_no(self._repo.find_latest_recipe_no(), year or date.today().year)

    # =========================================================================
    # Command Methods
    # =========================================================================

    def create(self, outlet_id: int, data: RecipeInput) -> RecipeDetailOutput:
        if not self._outlets.exists(outlet_id):
            raise NotFoundError("Restoran", outlet_id)
        return self.save(data, outlet_id=outlet_id)

    def update(self, recipe_id: int, data: RecipeInput) -> RecipeDetailOutput:
        recipe = self.get_entity(recipe_id)
        return self.save(data, outlet_id=recipe.outlet_id, recipe=recipe)

    def save(
        self,
        data: RecipeInput,
        *,
        outlet_id: int,
        recipe: Recipe | None = None,
    ) -> RecipeDetailOutput:
        """
        Insert or overwrite a recipe with its full ingredient list, atomically.

        Args:
            data: Validated form payload
            outlet_id: Owning outlet
            recipe: Existing recipe to overwrite; None inserts a new one

        Raises:
            ValidationError: Foreign category or unknown ingredient_id
            DuplicateEntityError: recipe_no already taken
            ConflictError: Any other integrity failure during the save
        """
        recipe_no = data.recipe_no
        if not recipe_no:
            recipe_no = recipe.recipe_no if recipe is not None else self.generate_recipe_no()

        try:
            self._check_category(outlet_id, data.category_id)
            self._check_recipe_no(recipe_no, recipe)

            if recipe is None:
                recipe = Recipe(outlet_id=outlet_id)
            else:
                self._repo.delete_lines(recipe)

            self._apply_header(recipe, data, recipe_no)
            recipe.lines = self._build_lines(data.ingredients)
            self._repo.add(recipe)
            safe_commit(self._db)
        except IntegrityError as exc:
            self._db.rollback()
            if is_unique_violation(exc):
                raise DuplicateEntityError(ENTITY_NAME, recipe_no) from exc
            raise ConflictError(ErrorMessages.CONCURRENT_CHANGE, recipe_no=recipe_no) from exc
        except Exception:
            self._db.rollback()
            raise

        logger.info(
            "Recipe saved",
            recipe_id=recipe.id,
            recipe_no=recipe_no,
            outlet_id=outlet_id,
            lines=len(data.ingredients),
        )
        return self.get_detail(recipe.id)

    def delete(self, recipe_id: int) -> None:
        recipe = self.get_entity(recipe_id)
        self._repo.delete(recipe)
        safe_commit(self._db)
        logger.info("Recipe deleted", recipe_id=recipe_id)

    # =========================================================================
    # Save helpers
    # =========================================================================

    def _check_category(self, outlet_id: int, category_id: int | None) -> None:
        if category_id is None:
            return
        category = self._categories.find_by_id(category_id)
        if category is None or category.outlet_id != outlet_id:
            raise ValidationError(
                ErrorMessages.CATEGORY_OUTLET_MISMATCH,
                category_id=category_id,
                outlet_id=outlet_id,
            )

    def _check_recipe_no(self, recipe_no: str, recipe: Recipe | None) -> None:
        existing = self._repo.find_by_recipe_no(recipe_no)
        if existing is not None and (recipe is None or existing.id != recipe.id):
            raise DuplicateEntityError(ENTITY_NAME, recipe_no)

    @staticmethod
    def _apply_header(recipe: Recipe, data: RecipeInput, recipe_no: str) -> None:
        recipe.recipe_no = recipe_no
        recipe.name = data.name
        recipe.category_id = data.category_id
        recipe.instructions = data.instructions
        recipe.critical_details = data.critical_details
        recipe.image_url = data.image_url
        recipe.prep_time = data.prep_time
        recipe.difficulty = data.difficulty.value if data.difficulty is not None else None
        recipe.yield_amount = data.yield_amount
        recipe.yield_unit = data.yield_unit
        recipe.sale_price = data.sale_price
        recipe.waste_percentage = data.waste_percentage
        recipe.allergens = dict(data.allergens)
        recipe.status = data.status.value

    def _build_lines(self, rows: list[RecipeIngredientInput]) -> list[RecipeIngredient]:
        """New lines in form order; rows with neither id nor name are dropped."""
        lines: list[RecipeIngredient] = []
        for index, row in enumerate(rows):
            if row.is_blank:
                continue
            ingredient = self._resolve_ingredient(row, index + 1)
            lines.append(
                RecipeIngredient(
                    ingredient=ingredient,
                    quantity=row.quantity,
                    unit=row.unit,
                    prep_detail=row.prep_detail,
                    sort_order=len(lines),
                )
            )
        return lines

    def _resolve_ingredient(self, row: RecipeIngredientInput, row_number: int) -> Ingredient:
        if row.ingredient_id is not None:
            ingredient = self._ingredients.find_by_id(row.ingredient_id)
            if ingredient is None:
                raise ValidationError(
                    ErrorMessages.UNKNOWN_INGREDIENT.format(
                        row=row_number, ingredient_id=row.ingredient_id
                    ),
                    ingredient_id=row.ingredient_id,
                )
            return ingredient

        ingredient = self._ingredients.find_by_name(row.ingredient_name)
        if ingredient is not None:
            return ingredient

        ingredient = Ingredient(
            name=row.ingredient_name,
            base_unit=row.unit or DEFAULT_BASE_UNIT,
            cost_per_unit=row.cost_per_unit or 0,
        )
        self._ingredients.add(ingredient)
        logger.info(
            "Ingredient auto-created from recipe line",
            ingredient_id=ingredient.id,
            name=ingredient.name,
        )
        return ingredient
