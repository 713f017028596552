"""
In-memory catalog cache.
Holds the valid channels and their playback descriptors from the last
successful build until reset.
"""
import asyncio
import logging
from typing import Callable, Optional

from refplayer.models.catalog import Channel
from refplayer.models.playback import PlaybackDescriptor
from refplayer.services.byte_source import ByteSource
from refplayer.services.catalog_parser import CatalogParser
from refplayer.services.projection import project

logger = logging.getLogger(__name__)

ErrorHook = Callable[[str, str], None]
Projector = Callable[[Channel], Optional[PlaybackDescriptor]]


class CatalogCache:
    """
    Single-slot cache for the channel catalog.

    The slot is not keyed by location: once populated, every build call
    returns the cached descriptors until reset() is called.
    """

    def __init__(
        self,
        url_source: ByteSource,
        asset_source: ByteSource,
        parser: Optional[CatalogParser] = None,
        projector: Projector = project,
        on_error: Optional[ErrorHook] = None,
    ):
        self.url_source = url_source
        self.asset_source = asset_source
        self.parser = parser or CatalogParser()
        self.projector = projector
        self.on_error = on_error
        self.last_error: Optional[str] = None

        self._channels: list[Channel] = []
        self._descriptors: list[PlaybackDescriptor] = []
        self._populated = False
        self._origin: Optional[str] = None
        self._lock = asyncio.Lock()
        self._stats = {
            "builds": 0,
            "fetches": 0,
            "cache_hits": 0,
            "dropped_channels": 0,
        }

    @property
    def populated(self) -> bool:
        return self._populated

    @property
    def origin(self) -> Optional[str]:
        """Location that populated the slot, e.g. 'url:https://...'."""
        return self._origin

    @property
    def stats(self) -> dict:
        return dict(self._stats)

    async def build_from_url(self, url: str) -> list[PlaybackDescriptor]:
        """Build (or return the cached) catalog from a network URL."""
        return await self._build(self.url_source, f"url:{url}", url)

    async def build_from_asset(self, path: str) -> list[PlaybackDescriptor]:
        """Build (or return the cached) catalog from a bundled asset."""
        return await self._build(self.asset_source, f"asset:{path}", path)

    def current_channels(self) -> list[Channel]:
        """Valid channels from the cached build; empty before a build."""
        return list(self._channels)

    def current_descriptors(self) -> list[PlaybackDescriptor]:
        return list(self._descriptors)

    def reset(self):
        """Clear the slot so the next build fetches again."""
        logger.info("Clearing catalog cache")
        self._channels = []
        self._descriptors = []
        self._populated = False
        self._origin = None

    def _report(self, stage: str, reason: str):
        self.last_error = reason
        logger.warning(f"Catalog {stage} failed: {reason}")
        if self.on_error is not None:
            try:
                self.on_error(stage, reason)
            except Exception as e:
                logger.error(f"Catalog error hook raised: {e}", exc_info=True)

    def _cached(self, origin: str) -> list[PlaybackDescriptor]:
        if origin != self._origin:
            logger.warning(
                f"Catalog cache populated from {self._origin}; returning it for {origin}. "
                "Call reset() to load a different catalog."
            )
        self._stats["cache_hits"] += 1
        return list(self._descriptors)

    async def _build(self, source: ByteSource, origin: str, location: str) -> list[PlaybackDescriptor]:
        if self._populated:
            return self._cached(origin)

        async with self._lock:
            # Another build may have completed while we waited
            if self._populated:
                return self._cached(origin)

            self._stats["builds"] += 1
            self._stats["fetches"] += 1

            result = await source.fetch(location)
            if not result.ok:
                self._report("fetch", result.error or f"No data from {origin}")
                return []

            parsed = self.parser.parse(result.data)
            if not parsed.ok:
                self._report("parse", parsed.error)
                return []

            channels = []
            descriptors = []
            for channel in parsed.channels:
                if not channel.has_valid_sources():
                    logger.debug(f"Dropping channel without playable sources: {channel.id}")
                    self._stats["dropped_channels"] += 1
                    continue
                channels.append(channel)
                descriptor = self.projector(channel)
                if descriptor is not None:
                    descriptors.append(descriptor)

            logger.info(
                f"Built catalog from {origin}: {len(parsed.channels)} parsed, "
                f"{len(channels)} valid, {len(descriptors)} playable"
            )

            if not descriptors:
                return []

            self._channels = channels
            self._descriptors = descriptors
            self._populated = True
            self._origin = origin
            self.last_error = None
            return list(descriptors)
