"""
Recipe endpoints.

Creation lives under /outlets/{id}/recipes; everything addressed by the
recipe id is here.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from kitchen_api.schemas import (
    NextRecipeNumberOutput,
    RecipeDetailOutput,
    RecipeFormData,
    RecipeInput,
    RecipeSummaryOutput,
)
from kitchen_api.services.domain import RecipeService


router = APIRouter(tags=["recipes"])


def _get_service(db: Session) -> RecipeService:
    return RecipeService(db)


@router.get("/recipes", response_model=list[RecipeSummaryOutput])
def search_recipes(
    search: str | None = None,
    status: str | None = None,
    limit: int | None = Query(default=None, ge=1, le=500),
    db: Session = Depends(get_db),
) -> list[RecipeSummaryOutput]:
    """Search recipes of every outlet by name, recipe number or outlet name."""
    return _get_service(db).search(search=search, status=status, limit=limit)


# Declared before /recipes/{recipe_id} so "next-number" is not read as an id
@router.get("/recipes/next-number", response_model=NextRecipeNumberOutput)
def next_recipe_number(db: Session = Depends(get_db)) -> NextRecipeNumberOutput:
    """Preview the number a recipe saved without one would receive."""
    return NextRecipeNumberOutput(recipe_no=_get_service(db).generate_recipe_no())


@router.get("/recipes/{recipe_id}", response_model=RecipeDetailOutput)
def get_recipe(recipe_id: int, db: Session = Depends(get_db)) -> RecipeDetailOutput:
    """Recipe with its lines and full cost breakdown."""
    return _get_service(db).get_detail(recipe_id)


@router.get("/recipes/{recipe_id}/form", response_model=RecipeFormData)
def get_recipe_form(recipe_id: int, db: Session = Depends(get_db)) -> RecipeFormData:
    """Recipe mapped into the edit form's shape."""
    return _get_service(db).get_form(recipe_id)


@router.put("/recipes/{recipe_id}", response_model=RecipeDetailOutput)
def update_recipe(
    recipe_id: int,
    body: RecipeInput,
    db: Session = Depends(get_db),
) -> RecipeDetailOutput:
    """Overwrite the recipe and replace its ingredient lines in one transaction."""
    return _get_service(db).update(recipe_id, body)


@router.delete("/recipes/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(recipe_id: int, db: Session = Depends(get_db)) -> None:
    _get_service(db).delete(recipe_id)
