"""
Tests for the catalog parser.
"""
import json

import pytest

from refplayer.models.catalog import (
    ChannelDisplay,
    ChannelType,
    ImageDisplay,
    ImageShape,
    LabelPosition,
)
from refplayer.services.catalog_parser import CatalogParser


class TestCatalogParser:
    """Test suite for catalog JSON parsing."""

    def test_parse_full_document(self, sample_catalog_bytes):
        """Parsing keeps every channel in document order, valid or not."""
        result = CatalogParser().parse(sample_catalog_bytes)

        assert result.ok
        assert [c.id for c in result.channels] == ["news", "movies", "broken"]

        news = result.channels[0]
        assert news.name == "Channel news"
        assert news.image.width == 160
        assert news.sources[0].name == "Provider"
        link = news.primary_stream_link
        assert link.url == "https://example.com/news.m3u8"
        assert link.request_headers[0].key == "Authorization"
        assert link.request_headers[0].value == "Bearer X"

    def test_missing_fields_use_defaults(self):
        """A bare channel object yields empty strings, zeros and empty lists."""
        parser = CatalogParser()
        channel = parser.parse_channel({})

        assert channel.id == ""
        assert channel.name == ""
        assert channel.subtitle == ""
        assert channel.type == ""
        assert channel.display == ""
        assert channel.labels == []
        assert channel.sources == []
        assert channel.image is None

        image = parser.parse_image({})
        assert image.url == ""
        assert image.height == 0
        assert image.width == 0

        link = parser.parse_stream_link({})
        assert link.is_default is False
        assert link.url == ""
        assert link.request_headers == []

        header = parser.parse_request_header({})
        assert header.key == ""
        assert header.value == ""

    def test_labels_and_image_fields(self):
        channel = CatalogParser().parse_channel({
            "labels": [{"position": "top-left", "text": "LIVE", "color": "#f00", "text_color": "#fff"}],
            "image": {"url": "u", "height": "120", "width": 240.0, "display": "cover", "shape": "circle"},
        })

        label = channel.labels[0]
        assert (label.position, label.text, label.color, label.text_color) == ("top-left", "LIVE", "#f00", "#fff")
        assert channel.image.height == 120
        assert channel.image.width == 240
        assert channel.image.shape == "circle"

    def test_scalar_coercion(self):
        parser = CatalogParser()

        channel = parser.parse_channel({"id": 42, "name": None, "subtitle": ["x"]})
        assert channel.id == "42"
        assert channel.name == ""
        assert channel.subtitle == ""

        assert parser.parse_stream_link({"default": "true"}).is_default is True
        assert parser.parse_stream_link({"default": 1}).is_default is False

        image = parser.parse_image({"height": -5, "width": "wide"})
        assert image.height == 0
        assert image.width == 0

    def test_wrong_container_types_become_empty(self):
        channel = CatalogParser().parse_channel({
            "sources": {"not": "a list"},
            "labels": "nope",
            "image": "https://example.com/img.png",
        })

        assert channel.sources == []
        assert channel.labels == []
        assert channel.image is None

    def test_non_object_array_items_are_skipped(self):
        document = {"channels": ["junk", 7, {"id": "real"}, None]}
        result = CatalogParser().parse(json.dumps(document))

        assert [c.id for c in result.channels] == ["real"]

    def test_unknown_fields_ignored(self):
        document = {"version": 3, "channels": [{"id": "a", "rating": "PG", "extra": {"x": 1}}]}
        result = CatalogParser().parse(json.dumps(document).encode())

        assert result.ok
        assert result.channels[0].id == "a"

    def test_default_flag_is_parsed_from_default_key(self):
        link = CatalogParser().parse_stream_link({"default": True, "isDefault": False})
        assert link.is_default is True

    @pytest.mark.parametrize("data", [
        b"",
        None,
        b"not json",
        b"[1, 2, 3]",
        b'{"items": []}',
        b'{"channels": {"id": "a"}}',
        b"\xff\xfe\x00garbage",
    ])
    def test_malformed_documents_yield_no_channels(self, data):
        """Malformed input never raises; it reports an error and no channels."""
        result = CatalogParser().parse(data)

        assert result.channels == []
        assert result.ok is False
        assert result.error

    def test_empty_channels_array_is_not_an_error(self):
        result = CatalogParser().parse(b'{"channels": []}')

        assert result.ok
        assert result.channels == []

    def test_utf8_bom_and_non_ascii(self):
        data = '\ufeff{"channels": [{"id": "tv", "name": "Télé 1"}]}'.encode("utf-8")
        result = CatalogParser().parse(data)

        assert result.channels[0].name == "Télé 1"

    def test_known_vocabulary_matches_enums(self):
        channel = CatalogParser().parse_channel({
            "type": "playlist",
            "display": "thumbnail-only",
            "labels": [{"position": "bottom-right"}, {"position": "center"}],
            "image": {"display": "contain", "shape": "rectangle"},
        })

        assert ChannelType(channel.type) is ChannelType.PLAYLIST
        assert ChannelDisplay(channel.display) is ChannelDisplay.THUMBNAIL_ONLY
        assert [LabelPosition(label.position) for label in channel.labels] == [
            LabelPosition.BOTTOM_RIGHT,
            LabelPosition.CENTER,
        ]
        assert ImageDisplay(channel.image.display) is ImageDisplay.CONTAIN
        assert ImageShape(channel.image.shape) is ImageShape.RECTANGLE
        assert channel.is_live is False

    def test_unknown_vocabulary_is_kept_verbatim(self):
        channel = CatalogParser().parse_channel({"type": "vod-series", "display": "hero"})

        assert channel.type == "vod-series"
        assert channel.display == "hero"
        with pytest.raises(ValueError):
            ChannelType(channel.type)
