"""FastAPI application factory."""

from typing import Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from drawerzen import __version__
from drawerzen.web.exceptions import register_exception_handlers
from drawerzen.web.routers import layout_router, placement_router

API_PREFIX = "/api/v1"


def create_app(cors_origins: Sequence[str] = ("*",)) -> FastAPI:
    """Build the layout API.

    Args:
        cors_origins: Origins allowed to call the API from a browser.
    """
    app = FastAPI(
        title="DrawerZen Layout API",
        description="Validate, sort and gap-fill gridded drawer bin layouts",
        version=__version__,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    for router in (layout_router, placement_router):
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()
