"""API module for the showcase catalog.

Contains versioned API routers.
"""

from showcase.api.v1 import router as v1_router

__all__ = ["v1_router"]
