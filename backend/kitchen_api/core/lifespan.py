"""
Application lifespan handler.
Validates configuration, creates the tables and seeds the unit vocabulary.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from shared.infrastructure.db import engine, SessionLocal
from shared.config.settings import settings
from shared.config.logging import setup_logging, kitchen_api_logger as logger
from kitchen_api.models import Base
from kitchen_api.seed import seed


def check_configuration() -> None:
    """
    Log configuration problems; refuse to start with them in production.
    """
    errors = settings.validate_production_settings()
    if not errors:
        return

    for error in errors:
        logger.error("Configuration error", error=error)
    if settings.environment == "production":
        raise RuntimeError(
            f"Production configuration errors: {'; '.join(errors)}. "
            "Server will not start with this configuration."
        )
    logger.warning("Running with development defaults")


def init_database() -> None:
    """Create missing tables and seed the default units."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    with SessionLocal() as db:
        seed(db)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    setup_logging()
    check_configuration()

    logger.info("Starting Kitchen API", port=settings.api_port, env=settings.environment)
    init_database()

    yield

    logger.info("Shutting down Kitchen API")
    engine.dispose()
