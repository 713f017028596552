"""
Channel catalog API endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from refplayer.config import Settings, get_settings
from refplayer.services.catalog_cache import CatalogCache
from refplayer.services.channel_loader import ChannelLoader

import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def _rate_limit_key(request: Request) -> str:
    """Client address, scoped to the app instance so each app keeps its own buckets."""
    scope = getattr(request.app.state, "rate_limit_scope", "")
    return f"{scope}:{get_remote_address(request)}"


# Rate limiter
limiter = Limiter(key_func=_rate_limit_key)


def _load_rate_limit() -> str:
    """
    Limit for /load. slowapi resolves limits without the request, so the
    value comes from process-wide settings (REFPLAYER_LOAD_RATE_LIMIT_PER_MINUTE),
    not from settings passed to create_app().
    """
    return f"{get_settings().load_rate_limit_per_minute}/minute"


def get_catalog_cache(request: Request) -> CatalogCache:
    return request.app.state.catalog_cache


def get_channel_loader(request: Request) -> ChannelLoader:
    return request.app.state.channel_loader


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_admin_key(
    x_admin_key: Optional[str] = Query(None, alias="X-Admin-Key"),
    settings: Settings = Depends(get_app_settings),
):
    """Reject requests without the configured admin API key."""
    if x_admin_key != settings.admin_api_key:
        raise HTTPException(status_code=401, detail="Invalid or missing admin API key")


@router.get("/channels")
async def list_channels(cache: CatalogCache = Depends(get_catalog_cache)):
    """
    List the channels with playable sources from the cached catalog.
    """
    channels = cache.current_channels()
    return {
        "channels": [channel.model_dump() for channel in channels],
        "total": len(channels),
    }


@router.get("/playback")
async def list_playback_items(cache: CatalogCache = Depends(get_catalog_cache)):
    """
    List playback descriptors ready to hand to a player or cast session.
    """
    descriptors = cache.current_descriptors()
    return {
        "items": [descriptor.model_dump() for descriptor in descriptors],
        "total": len(descriptors),
        "origin": cache.origin,
    }


@router.post("/load", dependencies=[Depends(require_admin_key)])
@limiter.limit(_load_rate_limit)
async def load_catalog(
    request: Request,
    location: Optional[str] = Query(None, description="Catalog URL or file:///android_asset/ path"),
    loader: ChannelLoader = Depends(get_channel_loader),
    settings: Settings = Depends(get_app_settings),
):
    """
    Build the catalog from a location. Returns the cached catalog when one
    is already loaded; call /reset first to switch catalogs.
    Requires X-Admin-Key query parameter.
    """
    location = location or settings.catalog_url
    logger.info(f"Catalog load requested for {location}")
    descriptors = await loader.load(location)
    return {
        "status": "completed",
        "total": len(descriptors),
        "items": [descriptor.model_dump() for descriptor in descriptors],
        "error": loader.cache.last_error,
    }


@router.post("/reset", dependencies=[Depends(require_admin_key)])
async def reset_catalog(cache: CatalogCache = Depends(get_catalog_cache)):
    """
    Clear the cached catalog. Requires X-Admin-Key query parameter.
    """
    cache.reset()
    return {"status": "cleared"}
