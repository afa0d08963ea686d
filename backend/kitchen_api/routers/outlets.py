"""
Outlet endpoints.

Thin router that delegates to OutletService. Recipes of an outlet are
listed and created here as well, since they live under the outlet URL.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from kitchen_api.schemas import (
    OutletInput,
    OutletOutput,
    OutletListItem,
    RecipeInput,
    RecipeDetailOutput,
    RecipeSummaryOutput,
)
from kitchen_api.services.domain import OutletService, RecipeService


router = APIRouter(tags=["outlets"])


def _get_service(db: Session) -> OutletService:
    return OutletService(db)


@router.get("/outlets", response_model=list[OutletListItem])
def list_outlets(
    search: str | None = None,
    status: str | None = None,
    db: Session = Depends(get_db),
) -> list[OutletListItem]:
    """List outlets with their recipe and category counts."""
    return _get_service(db).list_outlets(search=search, status=status)


@router.get("/outlets/{outlet_id}", response_model=OutletOutput)
def get_outlet(outlet_id: int, db: Session = Depends(get_db)) -> OutletOutput:
    return _get_service(db).get(outlet_id)


@router.post("/outlets", response_model=OutletOutput, status_code=status.HTTP_201_CREATED)
def create_outlet(body: OutletInput, db: Session = Depends(get_db)) -> OutletOutput:
    return _get_service(db).create(body)


@router.put("/outlets/{outlet_id}", response_model=OutletOutput)
def update_outlet(
    outlet_id: int,
    body: OutletInput,
    db: Session = Depends(get_db),
) -> OutletOutput:
    return _get_service(db).update(outlet_id, body)


@router.delete("/outlets/{outlet_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_outlet(outlet_id: int, db: Session = Depends(get_db)) -> None:
    """Delete the outlet. Its categories and recipes go with it."""
    _get_service(db).delete(outlet_id)


# =============================================================================
# Outlet recipes
# =============================================================================


@router.get("/outlets/{outlet_id}/recipes", response_model=list[RecipeSummaryOutput])
def list_outlet_recipes(
    outlet_id: int,
    category_id: int | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
) -> list[RecipeSummaryOutput]:
    """Recipes of one outlet (newest first) with their costs."""
    return RecipeService(db).list_for_outlet(outlet_id, category_id=category_id, search=search)


@router.post(
    "/outlets/{outlet_id}/recipes",
    response_model=RecipeDetailOutput,
    status_code=status.HTTP_201_CREATED,
)
def create_outlet_recipe(
    outlet_id: int,
    body: RecipeInput,
    db: Session = Depends(get_db),
) -> RecipeDetailOutput:
    """
    Create a recipe with its ingredient lines in one transaction.

    A blank recipe_no is generated server-side.
    """
    return RecipeService(db).create(outlet_id, body)
