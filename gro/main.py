"""
GRO Locator: FastAPI Application
================================
Survey point lookup in a local planar grid with on-demand WGS-84
conversion and proximity queries.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gro import __version__
from gro.config import get_settings
from gro.geodesy.transform import get_coordinate_transformer
from gro.routers import points, records, transform

logger = logging.getLogger(__name__)
settings = get_settings()


# ── Lifespan (startup / shutdown) ─────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
        - Build the zone transformer so a bad zone / datum shift aborts
          startup instead of the first request.
    Shutdown:
        - Log cache statistics.
    """
    logger.info("GRO Locator starting up...")
    transformer = get_coordinate_transformer()
    logger.info(
        "SK-42 zone %d ready (central meridian %g°E, zone offset %d)",
        transformer.zone,
        transformer.central_meridian,
        transformer.zone_offset,
    )

    yield

    logger.info("Transform cache at shutdown: %s", transformer.cache_stats())
    logger.info("GRO Locator shut down.")


# ── App factory ───────────────────────────────────────────────────
def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        description=(
            "Survey point lookup with MSK / SK-42 / WGS-84 coordinate "
            "transforms, name search and proximity queries."
        ),
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(records.router, prefix="/api")
    app.include_router(points.router, prefix="/api")
    app.include_router(transform.router, prefix="/api")

    @app.get("/health")
    async def health():
        return {"status": "ok", "service": settings.app_name}

    return app


# ── Module-level app instance (for `uvicorn gro.main:app`) ───────
app = create_app()  # pragma: no cover
