"""
Pytest configuration and fixtures for catalog tests.
"""
import json

import pytest

from refplayer.services.byte_source import FetchResult


class FakeByteSource:
    """Byte source returning canned results and counting fetches."""

    def __init__(self, data=None, error=None):
        self.data = data
        self.error = error
        self.calls = []

    async def fetch(self, location):
        self.calls.append(location)
        if self.error is not None:
            return FetchResult.failure(self.error)
        return FetchResult.success(self.data)


def stream_link(url="https://example.com/live.m3u8", **extra):
    return {"id": "link", "name": "Link", "type": "hls", "url": url, **extra}


def channel_with_links(channel_id, links, source_name="Provider", **extra):
    """Build a channel dict with one source/content/stream holding `links`."""
    return {
        "id": channel_id,
        "name": f"Channel {channel_id}",
        "subtitle": f"Subtitle {channel_id}",
        "sources": [{
            "id": f"{channel_id}-src",
            "name": source_name,
            "contents": [{
                "id": "content",
                "name": "Main",
                "streams": [{"id": "stream", "name": "Auto", "stream_links": links}],
            }],
        }],
        **extra,
    }


@pytest.fixture
def sample_catalog():
    """Catalog with two playable channels and one without stream links."""
    return {
        "channels": [
            channel_with_links(
                "news",
                [stream_link(
                    "https://example.com/news.m3u8",
                    request_headers=[{"key": "Authorization", "value": "Bearer X"}],
                )],
                image={"url": "https://example.com/news.png", "height": 90, "width": 160},
            ),
            channel_with_links("movies", [stream_link("https://example.com/movie.mp4", type="mp4")]),
            {
                "id": "broken",
                "name": "Broken",
                "sources": [{"id": "s", "name": "S", "contents": [{"id": "c", "streams": []}]}],
            },
        ]
    }


@pytest.fixture
def sample_catalog_bytes(sample_catalog):
    return json.dumps(sample_catalog).encode("utf-8")


@pytest.fixture
def asset_dir(tmp_path, sample_catalog_bytes):
    """Asset directory holding channels.json."""
    (tmp_path / "channels.json").write_bytes(sample_catalog_bytes)
    return tmp_path
