"""API routers for the REST API."""

from drawerzen.web.routers.layout import router as layout_router
from drawerzen.web.routers.placement import router as placement_router

__all__ = [
    "layout_router",
    "placement_router",
]
