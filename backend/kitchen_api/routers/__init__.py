"""
API routers. Each one is thin and delegates to a domain service.
"""

from fastapi import APIRouter

from .health import router as health_router
from .outlets import router as outlets_router
from .categories import router as categories_router
from .ingredients import router as ingredients_router
from .recipes import router as recipes_router
from .dashboard import router as dashboard_router
from .exports import router as exports_router


api_router = APIRouter(prefix="/api")
api_router.include_router(health_router)
api_router.include_router(outlets_router)
api_router.include_router(categories_router)
api_router.include_router(ingredients_router)
api_router.include_router(recipes_router)
api_router.include_router(dashboard_router)
api_router.include_router(exports_router)

__all__ = ["api_router"]
