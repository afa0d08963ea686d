"""
Dashboard endpoint.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from kitchen_api.schemas import DashboardStats
from kitchen_api.services.domain import DashboardService


router = APIRouter(tags=["dashboard"])


@router.get("/dashboard/stats", response_model=DashboardStats)
def dashboard_stats(db: Session = Depends(get_db)) -> DashboardStats:
    """Entity counts and the average cost per yield unit."""
    return DashboardService(db).get_stats()
