"""
Player hand-off.
Passes playback descriptors to local players or cast sessions, carrying
request headers where the player supports them.
"""
import logging
from typing import Any, Protocol, runtime_checkable

from refplayer.models.playback import PlaybackDescriptor

logger = logging.getLogger(__name__)


@runtime_checkable
class Player(Protocol):
    """A player that can open a media URL."""

    def load(self, url: str) -> None:
        ...


@runtime_checkable
class HeaderAwarePlayer(Protocol):
    """A player that can also send custom request headers."""

    def load(self, url: str) -> None:
        ...

    def load_with_headers(self, url: str, headers: dict[str, str]) -> None:
        ...


def extract_headers(descriptor: PlaybackDescriptor) -> dict[str, str]:
    """Read request headers out of the descriptor's custom data."""
    custom_data = descriptor.custom_data
    if not isinstance(custom_data, dict):
        return {}

    headers = custom_data.get("headers")
    if not isinstance(headers, dict):
        if headers is not None:
            logger.warning(f"Ignoring malformed headers payload: {headers!r}")
        return {}

    return {str(key): str(value) for key, value in headers.items()}


def hand_off(player: Player, descriptor: PlaybackDescriptor) -> bool:
    """
    Load a descriptor into a player.

    Returns True when request headers were passed to the player.
    """
    headers = extract_headers(descriptor)

    if headers and isinstance(player, HeaderAwarePlayer):
        logger.debug(f"Loading {descriptor.url} with headers: {sorted(headers)}")
        player.load_with_headers(descriptor.url, headers)
        return True

    if headers:
        logger.warning(
            f"{type(player).__name__} does not support request headers; "
            f"loading {descriptor.url} without them"
        )
    player.load(descriptor.url)
    return False


def build_load_request(
    descriptor: PlaybackDescriptor,
    autoplay: bool = True,
    position_ms: int = 0,
) -> dict[str, Any]:
    """Build a cast LOAD request body for a descriptor."""
    metadata: dict[str, Any] = {
        "metadataType": descriptor.metadata_type,
        "title": descriptor.title,
        "subtitle": descriptor.subtitle,
        "images": [{"url": descriptor.image_url}] if descriptor.image_url else [],
    }
    if descriptor.studio:
        metadata["studio"] = descriptor.studio

    request: dict[str, Any] = {
        "media": {
            "contentId": descriptor.url,
            "contentType": descriptor.content_type,
            "streamType": descriptor.stream_type,
            "metadata": metadata,
        },
        "autoplay": autoplay,
        "currentTime": position_ms / 1000.0,
    }
    if descriptor.custom_data is not None:
        request["customData"] = descriptor.custom_data
    return request
