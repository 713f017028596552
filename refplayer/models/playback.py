"""
Playback descriptor model.
Player-ready projection of a catalog Channel.
"""
from pydantic import BaseModel, ConfigDict
from typing import Any, Optional


class PlaybackDescriptor(BaseModel):
    """Media item handed to a local player or a cast session."""
    model_config = ConfigDict(frozen=True)

    url: str
    content_type: str
    stream_type: str = "BUFFERED"
    metadata_type: str = "MOVIE"
    title: str = ""
    subtitle: str = ""
    image_url: Optional[str] = None
    studio: Optional[str] = None
    # Opaque extension slot: {"headers": {...}, "channelId": "..."}
    custom_data: Optional[dict[str, Any]] = None

    @property
    def has_headers(self) -> bool:
        return bool(self.custom_data and self.custom_data.get("headers"))
