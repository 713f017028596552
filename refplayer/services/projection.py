"""
Playable projection.
Maps a catalog Channel to a PlaybackDescriptor for local or cast playback.
"""
from typing import Optional

from refplayer.models.catalog import Channel, StreamLink, StreamType
from refplayer.models.playback import PlaybackDescriptor

# MIME types by stream link type; unknown types are treated as HLS
CONTENT_TYPES = {
    StreamType.HLS.value: "application/x-mpegURL",
    StreamType.DASH.value: "application/dash+xml",
    StreamType.MP4.value: "video/mp4",
}
DEFAULT_CONTENT_TYPE = CONTENT_TYPES[StreamType.HLS.value]


def content_type_for(link_type: str) -> str:
    """Get the MIME type for a stream link type."""
    return CONTENT_TYPES.get(link_type, DEFAULT_CONTENT_TYPE)


def _custom_data(channel: Channel, link: StreamLink) -> Optional[dict]:
    """Fold request headers into the opaque custom data payload."""
    if not link.request_headers:
        return None

    headers = {}
    for header in link.request_headers:
        if header.key:
            headers[header.key] = header.value

    return {"headers": headers, "channelId": channel.id}


def project(channel: Channel) -> Optional[PlaybackDescriptor]:
    """
    Build the playback descriptor for a channel.

    Returns None when the channel's primary stream link is missing or has
    no URL.
    """
    link = channel.primary_stream_link
    if link is None or not link.url:
        return None

    studio = channel.sources[0].name if channel.sources else None

    return PlaybackDescriptor(
        url=link.url,
        content_type=content_type_for(link.type),
        title=channel.display_title,
        subtitle=channel.display_description,
        image_url=channel.image_url or None,
        studio=studio or None,
        custom_data=_custom_data(channel, link),
    )
