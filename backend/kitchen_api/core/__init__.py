"""
Application wiring: lifespan and CORS.
"""

from .lifespan import lifespan, init_database
from .cors import configure_cors, get_cors_origins

__all__ = ["lifespan", "init_database", "configure_cors", "get_cors_origins"]
