"""
Byte sources for catalog documents.
Fetches raw catalog bytes over HTTP or from the bundled asset directory.
"""
import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a fetch: either data or an error reason."""
    data: Optional[bytes] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None and self.error is None

    @classmethod
    def success(cls, data: bytes) -> "FetchResult":
        return cls(data=data)

    @classmethod
    def failure(cls, error: str) -> "FetchResult":
        return cls(error=error)


@runtime_checkable
class ByteSource(Protocol):
    """Returns the full contents behind a location string."""

    async def fetch(self, location: str) -> FetchResult:
        """Fetch all bytes. Must not raise for I/O errors."""
        ...


class HttpByteSource:
    """Fetch catalog documents over HTTP(S)."""

    def __init__(self, timeout: float = 30.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self._transport = transport

    async def fetch(self, location: str) -> FetchResult:
        logger.info(f"Fetching catalog from {location}")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(location)
                response.raise_for_status()
                logger.info(f"Fetched {len(response.content)} bytes from {location}")
                return FetchResult.success(response.content)
        except httpx.HTTPStatusError as e:
            logger.error(f"Catalog request failed with status {e.response.status_code}: {location}")
            return FetchResult.failure(f"HTTP {e.response.status_code} from {location}")
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch {location}: {e}")
            return FetchResult.failure(f"{type(e).__name__}: {e}")
        except (httpx.InvalidURL, ValueError) as e:
            logger.error(f"Invalid catalog URL {location!r}: {e}")
            return FetchResult.failure(f"Invalid URL: {e}")


class AssetByteSource:
    """Read catalog documents bundled under a local asset directory."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _resolve(self, location: str) -> Optional[Path]:
        """Resolve an asset path, refusing anything outside the root."""
        root = self.root.resolve()
        path = (root / location.lstrip("/")).resolve()
        if path != root and root not in path.parents:
            return None
        return path

    async def fetch(self, location: str) -> FetchResult:
        try:
            path = self._resolve(location)
        except (OSError, ValueError) as e:
            logger.warning(f"Invalid asset path {location!r}: {e}")
            return FetchResult.failure(f"Invalid asset path: {e}")

        if path is None:
            logger.warning(f"Rejected asset path outside {self.root}: {location}")
            return FetchResult.failure(f"Asset path escapes asset root: {location}")

        logger.info(f"Reading catalog asset: {path}")

        try:
            data = await asyncio.to_thread(path.read_bytes)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read asset {path}: {e}")
            return FetchResult.failure(f"{type(e).__name__}: {e}")

        return FetchResult.success(data)
