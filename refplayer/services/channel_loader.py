"""
Channel loader.
Routes a catalog location to the asset or URL build entry point.
"""
import logging

from refplayer.models.playback import PlaybackDescriptor
from refplayer.services.catalog_cache import CatalogCache

logger = logging.getLogger(__name__)

ASSET_URL_PREFIX = "file:///android_asset/"


class ChannelLoader:
    """Load the catalog for a location string through the shared cache."""

    def __init__(self, cache: CatalogCache, asset_prefix: str = ASSET_URL_PREFIX):
        self.cache = cache
        self.asset_prefix = asset_prefix

    def is_asset(self, location: str) -> bool:
        return location.startswith(self.asset_prefix)

    async def load(self, location: str) -> list[PlaybackDescriptor]:
        """
        Load playback descriptors for a catalog location.

        Locations starting with the asset prefix are read from the bundled
        assets; anything else is fetched as a URL.
        """
        logger.debug(f"Loading channels from {location}")

        if self.is_asset(location):
            descriptors = await self.cache.build_from_asset(location[len(self.asset_prefix):])
        else:
            descriptors = await self.cache.build_from_url(location)

        logger.info(
            f"Loaded {len(descriptors)} playback items, "
            f"{len(self.cache.current_channels())} channels cached"
        )
        return descriptors
