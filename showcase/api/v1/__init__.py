"""API v1 module.

Contains all v1 API routes.
"""

from fastapi import APIRouter

from showcase.api.v1.storage import router as storage_router
from showcase.api.v1.websites import router as websites_router

router = APIRouter(prefix="/api/v1")
router.include_router(websites_router)
router.include_router(storage_router)

__all__ = ["router"]
