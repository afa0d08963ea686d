"""
Ingredient library and unit vocabulary schemas.
"""

from pydantic import BaseModel, Field, field_validator

from shared.config.constants import Limits
from .common import blank_to_none


class IngredientInput(BaseModel):
    """Create/overwrite payload for a library ingredient."""

    name: str = Field(min_length=Limits.MIN_NAME_LENGTH, max_length=Limits.MAX_NAME_LENGTH)
    ingredient_no: str | None = Field(default=None, max_length=50)
    category: str | None = Field(default=None, max_length=Limits.MAX_SHORT_TEXT_LENGTH)
    supplier: str | None = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    base_unit: str = Field(min_length=1, max_length=50)
    cost_per_unit: float = Field(ge=0)

    class Config:
        str_strip_whitespace = True

    @field_validator("ingredient_no", "category", "supplier", mode="before")
    @classmethod
    def normalize_blank(cls, value):
        return blank_to_none(value)


class IngredientOutput(BaseModel):
    id: int
    name: str
    ingredient_no: str | None = None
    category: str | None = None
    supplier: str | None = None
    base_unit: str
    cost_per_unit: float

    class Config:
        from_attributes = True


class UnitInput(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    abbreviation: str = Field(min_length=1, max_length=20)

    class Config:
        str_strip_whitespace = True


class UnitOutput(BaseModel):
    id: int
    name: str
    abbreviation: str

    class Config:
        from_attributes = True
