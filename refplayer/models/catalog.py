"""
Channel catalog data models.
Channel -> Source -> Content -> Stream -> StreamLink -> RequestHeader,
plus Label and Image display metadata.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ChannelType(str, Enum):
    """Known values for Channel.type."""
    SINGLE = "single"
    PLAYLIST = "playlist"
    LIVE = "live"


class ChannelDisplay(str, Enum):
    """Known values for Channel.display."""
    THUMBNAIL_ONLY = "thumbnail-only"
    FULL = "full"
    COMPACT = "compact"


class ImageDisplay(str, Enum):
    """Known values for Image.display."""
    COVER = "cover"
    CONTAIN = "contain"
    FILL = "fill"


class ImageShape(str, Enum):
    """Known values for Image.shape."""
    SQUARE = "square"
    RECTANGLE = "rectangle"
    CIRCLE = "circle"


class LabelPosition(str, Enum):
    """Known values for Label.position."""
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    CENTER = "center"


class StreamType(str, Enum):
    """Known values for StreamLink.type."""
    HLS = "hls"
    DASH = "dash"
    MP4 = "mp4"


class CatalogModel(BaseModel):
    """Base for catalog entities. Read-only once parsed."""
    model_config = ConfigDict(frozen=True)


class Image(CatalogModel):
    """Thumbnail image metadata."""
    url: str = ""
    height: int = Field(default=0, ge=0)
    width: int = Field(default=0, ge=0)
    display: str = ""
    shape: str = ""


class Label(CatalogModel):
    """Overlay text label drawn on a channel thumbnail."""
    position: str = ""
    text: str = ""
    color: str = ""
    text_color: str = ""


class RequestHeader(CatalogModel):
    """A single HTTP header pair required to play a stream link."""
    key: str = ""
    value: str = ""


class StreamLink(CatalogModel):
    """A concrete playable URL plus transport metadata."""
    id: str = ""
    name: str = ""
    type: str = ""
    is_default: bool = False
    url: str = ""
    request_headers: list[RequestHeader] = Field(default_factory=list)


class Stream(CatalogModel):
    """Group of stream links, e.g. protocol variants of one rendition."""
    id: str = ""
    name: str = ""
    stream_links: list[StreamLink] = Field(default_factory=list)

    @property
    def first_stream_link(self) -> Optional[StreamLink]:
        return self.stream_links[0] if self.stream_links else None


class Content(CatalogModel):
    """Group of streams, e.g. quality variants."""
    id: str = ""
    name: str = ""
    streams: list[Stream] = Field(default_factory=list)

    @property
    def first_stream(self) -> Optional[Stream]:
        return self.streams[0] if self.streams else None


class Source(CatalogModel):
    """A named provider grouping of contents within a channel."""
    id: str = ""
    name: str = ""
    contents: list[Content] = Field(default_factory=list)

    @property
    def first_content(self) -> Optional[Content]:
        """Get the first available content."""
        return self.contents[0] if self.contents else None

    def content_by_name(self, name: str) -> Optional[Content]:
        """Get the first content whose name matches exactly."""
        return next((c for c in self.contents if c.name == name), None)


class Channel(CatalogModel):
    """A playable catalog entry with display metadata and sources."""
    id: str = ""
    name: str = ""
    subtitle: str = ""
    labels: list[Label] = Field(default_factory=list)
    image: Optional[Image] = None
    type: str = ""
    display: str = ""
    sources: list[Source] = Field(default_factory=list)

    @property
    def primary_stream_link(self) -> Optional[StreamLink]:
        """
        Stream link used for playback.

        Always the first link of the first stream of the first content of
        the first source. The is_default flag is not consulted.
        """
        if not self.sources:
            return None
        content = self.sources[0].first_content
        if content is None:
            return None
        stream = content.first_stream
        if stream is None:
            return None
        return stream.first_stream_link

    @property
    def primary_video_url(self) -> Optional[str]:
        link = self.primary_stream_link
        return link.url if link is not None else None

    @property
    def image_url(self) -> Optional[str]:
        return self.image.url if self.image is not None else None

    @property
    def display_title(self) -> str:
        return self.name

    @property
    def display_description(self) -> str:
        return self.subtitle

    @property
    def is_live(self) -> bool:
        return self.type == ChannelType.LIVE.value

    def has_valid_sources(self) -> bool:
        """Check if any source reaches at least one stream link."""
        return any(
            stream.stream_links
            for source in self.sources
            for content in source.contents
            for stream in content.streams
        )

    def __str__(self) -> str:
        return (
            f"Channel{{id='{self.id}', name='{self.name}', "
            f"subtitle='{self.subtitle}', type='{self.type}', "
            f"display='{self.display}', imageUrl='{self.image_url}', "
            f"primaryVideoUrl='{self.primary_video_url}'}}"
        )
