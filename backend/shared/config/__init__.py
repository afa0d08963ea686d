"""
Configuration module: Settings, logging, constants.
"""

from shared.config.settings import settings, DATABASE_URL
from shared.config.logging import get_logger, setup_logging
from shared.config.constants import (
    Allergen,
    OutletStatus,
    RecipeStatus,
    Difficulty,
    Limits,
    ErrorMessages,
)

__all__ = [
    # settings
    "settings",
    "DATABASE_URL",
    # logging
    "get_logger",
    "setup_logging",
    # constants
    "Allergen",
    "OutletStatus",
    "RecipeStatus",
    "Difficulty",
    "Limits",
    "ErrorMessages",
]
