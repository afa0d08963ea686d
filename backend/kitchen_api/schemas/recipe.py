"""
Recipe schemas: the editable form payload and the costed read models.

The input models accept what the back-office form posts: '' for untouched
optional fields, numeric strings, and a partial allergen map. Validators
normalize all of that before the field constraints run.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from shared.config.constants import (
    ALLERGEN_KEYS,
    Difficulty,
    Limits,
    RecipeStatus,
    empty_allergens,
)
from shared.utils.validators import validate_image_url
from .common import blank_to_none, blank_to_zero, lenient_number


# =============================================================================
# Input
# =============================================================================


class RecipeIngredientInput(BaseModel):
    """
    One ingredient row of the recipe form.

    Either ingredient_id (library pick) or ingredient_name (free text) is
    set. A free-text name is matched against the library on save and
    created there when missing, using unit and cost_per_unit.
    """

    ingredient_id: int | None = None
    ingredient_name: str | None = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    quantity: float = Field(default=0, ge=Limits.MIN_LINE_QUANTITY, validate_default=True)
    unit: str | None = Field(default=None, max_length=50)
    prep_detail: str | None = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    cost_per_unit: float = Field(default=0, ge=0)

    class Config:
        str_strip_whitespace = True

    @field_validator("ingredient_id", "ingredient_name", "unit", "prep_detail", mode="before")
    @classmethod
    def normalize_blank(cls, value):
        return blank_to_none(value)

    @field_validator("quantity", mode="before")
    @classmethod
    def empty_quantity_is_zero(cls, value):
        return blank_to_zero(value)

    @field_validator("cost_per_unit", mode="before")
    @classmethod
    def coerce_cost(cls, value):
        # Hidden input: unparsable or negative prices fall back to 0
        return max(lenient_number(value), 0)

    @property
    def is_blank(self) -> bool:
        """Row picked no library ingredient and typed no name."""
        return self.ingredient_id is None and not self.ingredient_name


def _is_blank_row(row: Any) -> bool:
    if isinstance(row, RecipeIngredientInput):
        return row.is_blank
    if isinstance(row, dict):
        return (
            blank_to_none(row.get("ingredient_id")) is None
            and blank_to_none(row.get("ingredient_name")) is None
        )
    return False


class RecipeInput(BaseModel):
    """Create/overwrite payload for a recipe with its full ingredient list."""

    recipe_no: str | None = Field(default=None, max_length=30)
    name: str = Field(min_length=Limits.MIN_NAME_LENGTH, max_length=Limits.MAX_NAME_LENGTH)
    category_id: int | None = None
    instructions: str | None = Field(default=None, max_length=Limits.MAX_TEXT_LENGTH)
    critical_details: str | None = Field(default=None, max_length=Limits.MAX_TEXT_LENGTH)
    image_url: str | None = None
    prep_time: int | None = Field(default=None, ge=0)
    difficulty: Difficulty | None = None
    yield_amount: float = Field(default=1, ge=Limits.MIN_YIELD_AMOUNT)
    yield_unit: str = Field(default="porsiyon", min_length=1, max_length=50)
    sale_price: float | None = Field(default=None, ge=0)
    waste_percentage: float = Field(
        default=Limits.DEFAULT_WASTE_PERCENTAGE,
        ge=Limits.MIN_WASTE_PERCENTAGE,
        le=Limits.MAX_WASTE_PERCENTAGE,
    )
    allergens: dict[str, bool] = Field(default_factory=empty_allergens)
    status: RecipeStatus = RecipeStatus.ACTIVE
    ingredients: list[RecipeIngredientInput] = Field(default_factory=list)

    class Config:
        str_strip_whitespace = True

    @field_validator(
        "recipe_no",
        "category_id",
        "instructions",
        "critical_details",
        "prep_time",
        "difficulty",
        "sale_price",
        mode="before",
    )
    @classmethod
    def normalize_blank(cls, value):
        return blank_to_none(value)

    @field_validator("waste_percentage", mode="before")
    @classmethod
    def default_waste(cls, value):
        if blank_to_none(value) is None:
            return Limits.DEFAULT_WASTE_PERCENTAGE
        return value

    @field_validator("ingredients", mode="before")
    @classmethod
    def drop_blank_rows(cls, value: Any) -> Any:
        """Rows with neither a library pick nor a typed name are ignored, quantity included."""
        if not isinstance(value, list):
            return value
        return [row for row in value if not _is_blank_row(row)]

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, value: str | None) -> str | None:
        return validate_image_url(value)

    @field_validator("allergens", mode="before")
    @classmethod
    def normalize_allergens(cls, value: Any) -> Any:
        """Fill the 15 known keys; unknown keys are rejected."""
        if value is None:
            return empty_allergens()
        if not isinstance(value, dict):
            return value
        unknown = sorted(str(key) for key in value if key not in ALLERGEN_KEYS)
        if unknown:
            raise ValueError(f"Bilinmeyen alerjen: {', '.join(unknown)}")
        return {key: value.get(key) or False for key in ALLERGEN_KEYS}


class RecipeFormData(RecipeInput):
    """A stored recipe in the shape of the editable form (see recipe_to_form)."""

    id: int
    outlet_id: int
    recipe_no: str


# =============================================================================
# Output
# =============================================================================


class RecipeLineOutput(BaseModel):
    id: int
    ingredient_id: int
    ingredient_name: str
    ingredient_no: str | None = None
    quantity: float
    unit: str
    prep_detail: str | None = None
    cost_per_unit: float
    line_cost: float
    sort_order: int


class CostBreakdownOutput(BaseModel):
    """Cost breakdown at current ingredient prices (TL)."""

    ingredients_cost: float
    waste_percentage: float
    waste_cost: float
    total_cost: float
    cost_per_yield_unit: float
    sale_price: float | None = None
    profit: float
    profit_margin: float

    class Config:
        from_attributes = True


class RecipeSummaryOutput(BaseModel):
    """Recipe row of a listing, with its headline cost figures."""

    id: int
    outlet_id: int
    outlet_name: str | None = None
    category_id: int | None = None
    category_name: str | None = None
    recipe_no: str
    name: str
    image_url: str | None = None
    prep_time: int | None = None
    difficulty: Difficulty | None = None
    yield_amount: float
    yield_unit: str
    sale_price: float | None = None
    waste_percentage: float | None = None
    status: RecipeStatus
    ingredient_count: int = 0
    total_cost: float
    cost_per_yield_unit: float
    profit_margin: float
    created_at: datetime


class RecipeDetailOutput(RecipeSummaryOutput):
    """Full recipe with its lines, allergen matrix and cost breakdown."""

    instructions: str | None = None
    critical_details: str | None = None
    allergens: dict[str, bool]
    active_allergens: list[str] = []
    lines: list[RecipeLineOutput] = []
    cost: CostBreakdownOutput
    updated_at: datetime | None = None


class NextRecipeNumberOutput(BaseModel):
    recipe_no: str
