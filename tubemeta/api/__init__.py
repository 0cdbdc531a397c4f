"""API routes for TubeMeta"""

from fastapi import APIRouter

from .health import router as health_router
from .media import router as media_router

# Routes live at the root, not under /api
api_router = APIRouter()

api_router.include_router(media_router)
api_router.include_router(health_router)

__all__ = ["api_router"]
