"""ScrapMap — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scrapmap.adapters.persistence.database import engine
from scrapmap.config import settings
from scrapmap.infrastructure.api.routes_geocode import router as geocode_router
from scrapmap.infrastructure.api.routes_health import router as health_router
from scrapmap.infrastructure.api.routes_locations import router as locations_router
from scrapmap.infrastructure.api.routes_map import router as map_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )

    app = FastAPI(
        title="ScrapMap — pickup location service",
        description="Pickup-location resolution and map synchronization for scrap listings",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS for the Vite front end
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
            "http://127.0.0.1:8080",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(map_router, prefix="/api")
    app.include_router(locations_router, prefix="/api")
    app.include_router(geocode_router, prefix="/api")

    return app


app = create_app()
