"""
Outlet and Category schemas.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from shared.config.constants import Limits, OutletStatus
from .common import blank_to_none


# =============================================================================
# Outlet
# =============================================================================


class OutletInput(BaseModel):
    """Create/overwrite payload for an outlet."""

    name: str = Field(min_length=Limits.MIN_NAME_LENGTH, max_length=Limits.MAX_NAME_LENGTH)
    type: str | None = Field(default=None, max_length=Limits.MAX_SHORT_TEXT_LENGTH)
    location: str | None = Field(default=None, max_length=Limits.MAX_TEXT_LENGTH)
    status: OutletStatus = OutletStatus.ACTIVE

    class Config:
        str_strip_whitespace = True

    @field_validator("type", "location", mode="before")
    @classmethod
    def normalize_blank(cls, value):
        return blank_to_none(value)


class OutletOutput(BaseModel):
    id: int
    name: str
    type: str | None = None
    location: str | None = None
    status: OutletStatus
    created_at: datetime
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class OutletListItem(OutletOutput):
    """Outlet card with its counters."""

    recipe_count: int = 0
    category_count: int = 0


# =============================================================================
# Category
# =============================================================================


class CategoryInput(BaseModel):
    """Create/rename payload for a menu category. sort_order defaults to the end."""

    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    sort_order: int | None = Field(default=None, ge=0)

    class Config:
        str_strip_whitespace = True


class CategoryOutput(BaseModel):
    id: int
    outlet_id: int
    name: str
    sort_order: int

    class Config:
        from_attributes = True
