"""
Catalog Parser Service.
Parses the channel catalog JSON document into catalog models.
"""
import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Optional

from refplayer.models.catalog import (
    Channel,
    Content,
    Image,
    Label,
    RequestHeader,
    Source,
    Stream,
    StreamLink,
)

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """Parsed channels, or an empty list plus the reason parsing failed."""
    channels: list[Channel] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _opt_str(obj: dict, key: str) -> str:
    """Read a string field, stringifying scalars; anything else is ''."""
    value = obj.get(key)
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _opt_int(obj: dict, key: str) -> int:
    """Read an integer field from a number or numeric string; else 0."""
    value = obj.get(key)
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return 0


def _opt_bool(obj: dict, key: str, default: bool = False) -> bool:
    value = obj.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return default


def _opt_objects(obj: dict, key: str) -> list[dict]:
    """Read an array of objects. Non-arrays become []; non-object items are skipped."""
    value = obj.get(key)
    if not isinstance(value, list):
        return []
    items = []
    for index, item in enumerate(value):
        if isinstance(item, dict):
            items.append(item)
        else:
            logger.debug(f"Skipping non-object entry {index} in '{key}'")
    return items


class CatalogParser:
    """Parse catalog JSON into Channel models."""

    def parse(self, data: bytes | str | None) -> ParseResult:
        """
        Parse a complete catalog document.

        Args:
            data: UTF-8 encoded JSON (bytes or already decoded text)

        Returns:
            ParseResult with channels in document order. Malformed input
            yields an empty channel list and an error reason; never raises.
        """
        if not data:
            return ParseResult(error="Empty catalog document")

        if isinstance(data, bytes):
            try:
                data = data.decode("utf-8-sig")
            except UnicodeDecodeError as e:
                logger.warning(f"Catalog is not valid UTF-8: {e}")
                return ParseResult(error=f"Invalid UTF-8: {e}")

        try:
            document = json.loads(data)
        except (ValueError, RecursionError) as e:
            logger.warning(f"Failed to parse catalog JSON: {e}")
            return ParseResult(error=f"Invalid JSON: {e}")

        if not isinstance(document, dict):
            return ParseResult(error="Catalog document is not a JSON object")

        if not isinstance(document.get("channels"), list):
            return ParseResult(error="Catalog document has no 'channels' array")

        channels = [self.parse_channel(item) for item in _opt_objects(document, "channels")]
        logger.info(f"Parsed {len(channels)} channels")
        return ParseResult(channels=channels)

    def parse_channel(self, obj: dict[str, Any]) -> Channel:
        image_obj = obj.get("image")
        return Channel(
            id=_opt_str(obj, "id"),
            name=_opt_str(obj, "name"),
            subtitle=_opt_str(obj, "subtitle"),
            type=_opt_str(obj, "type"),
            display=_opt_str(obj, "display"),
            labels=[self.parse_label(item) for item in _opt_objects(obj, "labels")],
            image=self.parse_image(image_obj) if isinstance(image_obj, dict) else None,
            sources=[self.parse_source(item) for item in _opt_objects(obj, "sources")],
        )

    def parse_label(self, obj: dict[str, Any]) -> Label:
        return Label(
            position=_opt_str(obj, "position"),
            text=_opt_str(obj, "text"),
            color=_opt_str(obj, "color"),
            text_color=_opt_str(obj, "text_color"),
        )

    def parse_image(self, obj: dict[str, Any]) -> Image:
        return Image(
            url=_opt_str(obj, "url"),
            height=max(0, _opt_int(obj, "height")),
            width=max(0, _opt_int(obj, "width")),
            display=_opt_str(obj, "display"),
            shape=_opt_str(obj, "shape"),
        )

    def parse_source(self, obj: dict[str, Any]) -> Source:
        return Source(
            id=_opt_str(obj, "id"),
            name=_opt_str(obj, "name"),
            contents=[self.parse_content(item) for item in _opt_objects(obj, "contents")],
        )

    def parse_content(self, obj: dict[str, Any]) -> Content:
        return Content(
            id=_opt_str(obj, "id"),
            name=_opt_str(obj, "name"),
            streams=[self.parse_stream(item) for item in _opt_objects(obj, "streams")],
        )

    def parse_stream(self, obj: dict[str, Any]) -> Stream:
        return Stream(
            id=_opt_str(obj, "id"),
            name=_opt_str(obj, "name"),
            stream_links=[
                self.parse_stream_link(item) for item in _opt_objects(obj, "stream_links")
            ],
        )

    def parse_stream_link(self, obj: dict[str, Any]) -> StreamLink:
        return StreamLink(
            id=_opt_str(obj, "id"),
            name=_opt_str(obj, "name"),
            type=_opt_str(obj, "type"),
            is_default=_opt_bool(obj, "default"),
            url=_opt_str(obj, "url"),
            request_headers=[
                self.parse_request_header(item) for item in _opt_objects(obj, "request_headers")
            ],
        )

    def parse_request_header(self, obj: dict[str, Any]) -> RequestHeader:
        return RequestHeader(
            key=_opt_str(obj, "key"),
            value=_opt_str(obj, "value"),
        )
