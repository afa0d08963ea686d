"""
Menu category endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from kitchen_api.schemas import CategoryInput, CategoryOutput
from kitchen_api.services.domain import CategoryService


router = APIRouter(tags=["categories"])


def _get_service(db: Session) -> CategoryService:
    return CategoryService(db)


@router.get("/outlets/{outlet_id}/categories", response_model=list[CategoryOutput])
def list_categories(outlet_id: int, db: Session = Depends(get_db)) -> list[CategoryOutput]:
    """Categories of an outlet in display order."""
    return _get_service(db).list_by_outlet(outlet_id)


@router.post(
    "/outlets/{outlet_id}/categories",
    response_model=CategoryOutput,
    status_code=status.HTTP_201_CREATED,
)
def create_category(
    outlet_id: int,
    body: CategoryInput,
    db: Session = Depends(get_db),
) -> CategoryOutput:
    return _get_service(db).create(outlet_id, body)


@router.put("/categories/{category_id}", response_model=CategoryOutput)
def update_category(
    category_id: int,
    body: CategoryInput,
    db: Session = Depends(get_db),
) -> CategoryOutput:
    return _get_service(db).update(category_id, body)


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: int, db: Session = Depends(get_db)) -> None:
    """Delete the category; its recipes stay on the outlet without a category."""
    _get_service(db).delete(category_id)
