"""
Ingredient library and unit vocabulary endpoints.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from kitchen_api.schemas import IngredientInput, IngredientOutput, UnitInput, UnitOutput
from kitchen_api.services.domain import IngredientService, UnitService


router = APIRouter(tags=["ingredients"])


def _get_service(db: Session) -> IngredientService:
    return IngredientService(db)


@router.get("/ingredients", response_model=list[IngredientOutput])
def list_ingredients(
    search: str | None = None,
    category: str | None = None,
    limit: int | None = Query(default=None, ge=1, le=500),
    db: Session = Depends(get_db),
) -> list[IngredientOutput]:
    """
    List the library alphabetically.

    `search` matches name, ingredient number and category. The recipe
    form's autocomplete passes a small `limit`.
    """
    return _get_service(db).list_ingredients(search=search, category=category, limit=limit)


@router.get("/ingredients/{ingredient_id}", response_model=IngredientOutput)
def get_ingredient(ingredient_id: int, db: Session = Depends(get_db)) -> IngredientOutput:
    return _get_service(db).get(ingredient_id)


@router.post("/ingredients", response_model=IngredientOutput, status_code=status.HTTP_201_CREATED)
def create_ingredient(body: IngredientInput, db: Session = Depends(get_db)) -> IngredientOutput:
    return _get_service(db).create(body)


@router.put("/ingredients/{ingredient_id}", response_model=IngredientOutput)
def update_ingredient(
    ingredient_id: int,
    body: IngredientInput,
    db: Session = Depends(get_db),
) -> IngredientOutput:
    """Overwrite an ingredient. A price change reprices every recipe using it."""
    return _get_service(db).update(ingredient_id, body)


@router.delete("/ingredients/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ingredient(ingredient_id: int, db: Session = Depends(get_db)) -> None:
    """Delete an ingredient; refused with 409 while a recipe still uses it."""
    _get_service(db).delete(ingredient_id)


# =============================================================================
# Units
# =============================================================================


@router.get("/units", response_model=list[UnitOutput])
def list_units(db: Session = Depends(get_db)) -> list[UnitOutput]:
    return UnitService(db).list_units()


@router.post("/units", response_model=UnitOutput, status_code=status.HTTP_201_CREATED)
def create_unit(body: UnitInput, db: Session = Depends(get_db)) -> UnitOutput:
    return UnitService(db).create(body)


@router.delete("/units/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_unit(unit_id: int, db: Session = Depends(get_db)) -> None:
    UnitService(db).delete(unit_id)
