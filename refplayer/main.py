"""
Cast Reference Player Catalog - FastAPI Backend

Serves the channel catalog and the playback descriptors derived from it.
"""
import logging
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from refplayer.config import Settings, get_settings
from refplayer.routers import catalog
from refplayer.services.byte_source import AssetByteSource, HttpByteSource
from refplayer.services.catalog_cache import CatalogCache
from refplayer.services.channel_loader import ChannelLoader

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_catalog(settings: Settings) -> tuple[CatalogCache, ChannelLoader]:
    """Wire the catalog cache and loader from settings."""
    cache = CatalogCache(
        url_source=HttpByteSource(timeout=settings.fetch_timeout_seconds),
        asset_source=AssetByteSource(settings.asset_root),
    )
    loader = ChannelLoader(cache, asset_prefix=settings.asset_url_prefix)
    return cache, loader


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown events."""
    settings = app.state.settings
    logger.info("Starting catalog backend...")

    if settings.load_on_startup:
        descriptors = await app.state.channel_loader.load(settings.catalog_url)
        logger.info(f"Startup catalog load complete: {len(descriptors)} playback items")
    else:
        logger.info("Startup catalog load disabled")

    yield

    app.state.catalog_cache.reset()
    logger.info("Shutting down catalog backend...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create the FastAPI application with its own catalog cache."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Channel catalog and playback descriptors for cast players",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.catalog_cache, app.state.channel_loader = create_catalog(settings)

    # Add rate limiter
    app.state.limiter = catalog.limiter
    app.state.rate_limit_scope = uuid.uuid4().hex
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(catalog.router)

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        cache = app.state.catalog_cache
        return {
            "status": "healthy",
            "version": settings.app_version,
            "catalog_loaded": cache.populated,
            "stats": cache.stats,
        }

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"}
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "refplayer.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
