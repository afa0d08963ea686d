"""
Seed data: the default measurement unit vocabulary.
Idempotent: units that already exist (by name) are left untouched.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from kitchen_api.models import Unit
from shared.config.constants import DEFAULT_UNITS
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit

logger = get_logger(__name__)


def seed_units(db: Session) -> int:
    """Insert the missing default units. Returns how many were added."""
    existing = set(db.scalars(select(Unit.name)))

    added = 0
    for name, abbreviation in DEFAULT_UNITS:
        if name in existing:
            continue
        db.add(Unit(name=name, abbreviation=abbreviation))
        added += 1

    if added:
        safe_commit(db)
        logger.info("Default units seeded", added=added)
    else:
        logger.info("Units already seeded, skipping")
    return added


def seed(db: Session) -> None:
    """Seed everything the application needs on first start."""
    seed_units(db)
