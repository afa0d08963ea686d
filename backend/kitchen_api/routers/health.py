"""
Health check endpoints.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.config.logging import kitchen_api_logger as logger
from shared.config.settings import settings
from shared.infrastructure.db import get_db


router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Liveness plus a database round trip.

    Returns 503 with the database marked unhealthy when `SELECT 1` fails.
    """
    checks = {
        "service": "kitchen-api",
        "environment": settings.environment,
        "dependencies": {},
    }

    try:
        db.execute(text("SELECT 1"))
        checks["dependencies"]["database"] = {"status": "healthy"}
    except SQLAlchemyError as e:
        logger.error("Health check database failure", error=str(e))
        checks["dependencies"]["database"] = {"status": "unhealthy", "error": str(e)}
        checks["status"] = "degraded"
        return JSONResponse(content=checks, status_code=503)

    checks["status"] = "healthy"
    return checks
