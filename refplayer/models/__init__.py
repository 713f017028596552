"""Catalog and playback data models."""
from refplayer.models.catalog import (
    Channel,
    ChannelDisplay,
    ChannelType,
    Content,
    Image,
    ImageDisplay,
    ImageShape,
    Label,
    LabelPosition,
    RequestHeader,
    Source,
    Stream,
    StreamLink,
    StreamType,
)
from refplayer.models.playback import PlaybackDescriptor

__all__ = [
    "Channel",
    "ChannelDisplay",
    "ChannelType",
    "Content",
    "Image",
    "ImageDisplay",
    "ImageShape",
    "Label",
    "LabelPosition",
    "PlaybackDescriptor",
    "RequestHeader",
    "Source",
    "Stream",
    "StreamLink",
    "StreamType",
]
