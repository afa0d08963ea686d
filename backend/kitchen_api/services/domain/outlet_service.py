"""
Outlet Service.

Handles outlet CRUD. Uses the repositories for data access.

Usage:
    from kitchen_api.services.domain import OutletService

    service = OutletService(db)
    outlets = service.list_outlets(search="kadıköy")
    outlet = service.create(OutletInput(name="Kadıköy Şube"))
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from kitchen_api.models import Outlet
from kitchen_api.repositories import (
    OutletFilters,
    get_outlet_repository,
)
from kitchen_api.schemas import OutletInput, OutletListItem, OutletOutput
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import NotFoundError

logger = get_logger(__name__)

ENTITY_NAME = "Restoran"


class OutletService:
    """
    Service for outlet management.

    Business rules:
    - Newest outlets are listed first, with recipe and category counters
    - Deleting an outlet deletes its categories and recipes
    """

    def __init__(self, db: Session):
        self._db = db
        self._repo = get_outlet_repository(db)

    # =========================================================================
    # Query Methods
    # =========================================================================

    def get_entity(self, outlet_id: int) -> Outlet:
        """Raw outlet or NotFoundError."""
        outlet = self._repo.find_by_id(outlet_id)
        if outlet is None:
            raise NotFoundError(ENTITY_NAME, outlet_id)
        return outlet

    def get(self, outlet_id: int) -> OutletOutput:
        return OutletOutput.model_validate(self.get_entity(outlet_id))

    def list_outlets(
        self,
        *,
        search: str | None = None,
        status: str | None = None,
    ) -> list[OutletListItem]:
        outlets = self._repo.find_all(OutletFilters(search=search, status=status))
        recipe_counts = self._repo.recipe_counts()
        category_counts = self._repo.category_counts()

        return [
            OutletListItem.model_validate(outlet).model_copy(
                update={
                    "recipe_count": recipe_counts.get(outlet.id, 0),
                    "category_count": category_counts.get(outlet.id, 0),
                }
            )
            for outlet in outlets
        ]

    # =========================================================================
    # Command Methods
    # =========================================================================

    def create(self, data: OutletInput) -> OutletOutput:
        outlet = Outlet(**data.model_dump(mode="json"))
        self._repo.add(outlet)
        safe_commit(self._db)
        self._db.refresh(outlet)

        logger.info("Outlet created", outlet_id=outlet.id, name=outlet.name)
        return OutletOutput.model_validate(outlet)

    def update(self, outlet_id: int, data: OutletInput) -> OutletOutput:
        """Overwrite every editable field of the outlet."""
        outlet = self.get_entity(outlet_id)
        for field, value in data.model_dump(mode="json").items():
            setattr(outlet, field, value)

        safe_commit(self._db)
        self._db.refresh(outlet)

        logger.info("Outlet updated", outlet_id=outlet.id)
        return OutletOutput.model_validate(outlet)

    def delete(self, outlet_id: int) -> None:
        """Delete the outlet together with its categories and recipes."""
        outlet = self.get_entity(outlet_id)
        recipe_count = len(outlet.recipes)

        self._repo.delete(outlet)
        safe_commit(self._db)

        logger.info("Outlet deleted", outlet_id=outlet_id, recipes_deleted=recipe_count)
